from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.core.db import get_db
from hrfleet.core.security import get_current_user
from hrfleet.schemas.leave import BulkLeaveCreate, LeaveCreate, LeaveRead
from hrfleet.services.leaves import LeaveLedger

router = APIRouter(
    prefix="/api/leaves",
    tags=["leaves"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[LeaveRead])
async def list_leaves(
    employee_id: Optional[int] = Query(None, alias="employeeId"),
    db: AsyncSession = Depends(get_db),
):
    """
    All leaves, newest start date first.

    GET /api/leaves
    GET /api/leaves?employeeId=1
    """
    return await LeaveLedger(db).list_leaves(employee_id)


@router.post("", response_model=LeaveRead, status_code=status.HTTP_201_CREATED)
async def create_leave(payload: LeaveCreate, db: AsyncSession = Depends(get_db)):
    return await LeaveLedger(db).create_leave(
        employee_id=payload.employee_id,
        start=payload.start_date,
        end=payload.end_date,
        type=payload.type,
        status=payload.status,
        reason=payload.reason,
    )


@router.post("/bulk", response_model=List[LeaveRead], status_code=status.HTTP_201_CREATED)
async def create_bulk_leave(payload: BulkLeaveCreate, db: AsyncSession = Depends(get_db)):
    """
    One approved annual leave per selected employee. Either every row is
    created or none is.
    """
    return await LeaveLedger(db).create_bulk_leave(
        payload.employee_ids,
        payload.start_date,
        payload.end_date,
        payload.reason,
    )


@router.delete("/{leave_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_leave(leave_id: int, db: AsyncSession = Depends(get_db)):
    await LeaveLedger(db).delete_leave(leave_id)
