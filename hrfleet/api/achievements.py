from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.core.dates import month_window
from hrfleet.core.db import get_db
from hrfleet.core.errors import NotFoundError, ValidationError
from hrfleet.core.security import get_current_user
from hrfleet.reports.excel import XLSX_MEDIA_TYPE, write_workbook
from hrfleet.reports.renderer import (
    ReportSheet,
    render_achievement_detail,
    render_achievement_summary,
    sheet_to_dict,
)
from hrfleet.schemas.achievement import AchievementCreate, AchievementRead, AchievementUpdate
from hrfleet.services.achievements import AchievementLedger
from hrfleet.services.employees import EmployeeLedger

router = APIRouter(
    prefix="/api/achievements",
    tags=["achievements"],
    dependencies=[Depends(get_current_user)],
)


async def build_achievement_report(
    db: AsyncSession, employee_id: Optional[int], month: Optional[str]
) -> ReportSheet:
    month_start, month_end = month_window(month)
    ledger = AchievementLedger(db)
    employees = EmployeeLedger(db)

    if employee_id is not None:
        try:
            employee = await employees.get_employee(employee_id)
        except NotFoundError:
            raise ValidationError(f"Employee {employee_id} does not exist") from None
        achievements = await ledger.achievements_for_employee_in_range(
            employee_id, month_start, month_end
        )
        return render_achievement_detail(employee, achievements, month_start)

    by_employee: Dict[int, list] = {}
    for achievement in await ledger.achievements_in_range(month_start, month_end):
        by_employee.setdefault(achievement.employee_id, []).append(achievement)
    return render_achievement_summary(
        await employees.list_employees(), by_employee, month_start
    )


@router.get("", response_model=List[AchievementRead])
async def list_achievements(
    employee_id: Optional[int] = Query(None, alias="employeeId"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: AsyncSession = Depends(get_db),
):
    return await AchievementLedger(db).list_achievements(employee_id, start_date, end_date)


@router.get("/excel")
async def achievements_excel(
    employee_id: Optional[int] = Query(None, alias="employeeId"),
    month: Optional[str] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
):
    sheet = await build_achievement_report(db, employee_id, month)
    return Response(
        content=write_workbook(sheet),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={sheet.filename}"},
    )


@router.get("/report")
async def achievements_report(
    employee_id: Optional[int] = Query(None, alias="employeeId"),
    month: Optional[str] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
):
    return sheet_to_dict(await build_achievement_report(db, employee_id, month))


@router.post("", response_model=AchievementRead, status_code=status.HTTP_201_CREATED)
async def create_achievement(payload: AchievementCreate, db: AsyncSession = Depends(get_db)):
    return await AchievementLedger(db).create_achievement(
        payload.employee_id, payload.date, payload.type, payload.notes
    )


@router.put("/{achievement_id}", response_model=AchievementRead)
async def update_achievement(
    achievement_id: int,
    payload: AchievementUpdate,
    db: AsyncSession = Depends(get_db),
):
    return await AchievementLedger(db).update_achievement(
        achievement_id, payload.model_dump(exclude_unset=True)
    )


@router.delete("/{achievement_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_achievement(achievement_id: int, db: AsyncSession = Depends(get_db)):
    await AchievementLedger(db).delete_achievement(achievement_id)
