from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.core.dates import month_window
from hrfleet.core.db import get_db
from hrfleet.core.security import get_current_user
from hrfleet.schemas.stats import MonthlyStats, OnLeaveEntry, TopPerformers
from hrfleet.services import stats
from hrfleet.services.achievements import AchievementLedger
from hrfleet.services.employees import EmployeeLedger
from hrfleet.services.leaves import LeaveLedger

router = APIRouter(
    prefix="/api/stats",
    tags=["stats"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/on-leave", response_model=List[OnLeaveEntry])
async def on_leave(
    day: Optional[date] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
):
    """Who is on leave on ``date`` (today by default)."""
    day = day or date.today()
    employees = await EmployeeLedger(db).list_employees()
    leaves = await LeaveLedger(db).leaves_on_date(day)
    entries = stats.employees_on_leave_today(employees, leaves, day)
    return [OnLeaveEntry.model_validate(entry) for entry in entries]


@router.get("/top-performers", response_model=TopPerformers)
async def top_performers(
    month: Optional[str] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
):
    """
    Best STAR / CHEF scorer and the most damage records, for one month
    (``date=YYYY-MM``) or over all time.
    """
    ledger = AchievementLedger(db)
    if month:
        month_start, month_end = month_window(month)
        achievements = await ledger.achievements_in_range(month_start, month_end)
    else:
        achievements = await ledger.list_achievements()
    employees = await EmployeeLedger(db).list_employees()
    return TopPerformers.model_validate(stats.top_performers(employees, achievements))


@router.get("/monthly", response_model=MonthlyStats)
async def monthly(
    employee_id: int = Query(..., alias="employeeId"),
    month: Optional[str] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
):
    month_start, month_end = month_window(month)
    await EmployeeLedger(db).get_employee(employee_id)

    leaves = await LeaveLedger(db).leaves_overlapping_month(employee_id, month_start, month_end)
    achievements = await AchievementLedger(db).achievements_for_employee_in_range(
        employee_id, month_start, month_end
    )
    return MonthlyStats(
        employee_id=employee_id,
        month=f"{month_start:%Y-%m}",
        leave_days=stats.monthly_leave_total(employee_id, leaves, month_start, month_end),
        achievements=stats.monthly_achievement_stats(
            employee_id, achievements, month_start, month_end
        ),
    )
