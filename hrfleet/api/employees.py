from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.core.db import get_db
from hrfleet.core.security import get_current_user
from hrfleet.schemas.employee import (
    Employee as EmployeeSchema,
    EmployeeCreate,
    EmployeeUpdate,
    LeaveBalance,
)
from hrfleet.services.employees import EmployeeLedger
from hrfleet.services.leaves import LeaveLedger
from hrfleet.services.stats import leave_balance

router = APIRouter(
    prefix="/api/employees",
    tags=["employees"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[EmployeeSchema])
async def list_employees(db: AsyncSession = Depends(get_db)):
    return await EmployeeLedger(db).list_employees()


@router.post("", response_model=EmployeeSchema, status_code=status.HTTP_201_CREATED)
async def create_employee(payload: EmployeeCreate, db: AsyncSession = Depends(get_db)):
    return await EmployeeLedger(db).create_employee(payload.model_dump())


@router.get("/{employee_id}", response_model=EmployeeSchema)
async def get_employee(employee_id: int, db: AsyncSession = Depends(get_db)):
    return await EmployeeLedger(db).get_employee(employee_id)


@router.put("/{employee_id}", response_model=EmployeeSchema)
async def update_employee(
    employee_id: int,
    payload: EmployeeUpdate,
    db: AsyncSession = Depends(get_db),
):
    # only the keys present in the body are written
    return await EmployeeLedger(db).update_employee(
        employee_id, payload.model_dump(exclude_unset=True)
    )


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(employee_id: int, db: AsyncSession = Depends(get_db)):
    await EmployeeLedger(db).delete_employee(employee_id)


@router.get("/{employee_id}/leave-balance", response_model=LeaveBalance)
async def get_leave_balance(
    employee_id: int,
    year: int | None = Query(None, ge=1900, le=9999),
    db: AsyncSession = Depends(get_db),
):
    year = year or date.today().year
    employee = await EmployeeLedger(db).get_employee(employee_id)
    leaves = await LeaveLedger(db).leaves_for_employee(employee_id)
    balance = leave_balance(employee, leaves, year)
    return LeaveBalance(
        employee_id=employee_id,
        year=year,
        allowance=balance.allowance,
        used_days=balance.used_days,
        remaining=balance.remaining,
    )
