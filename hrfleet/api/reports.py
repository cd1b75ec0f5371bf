from typing import Dict, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.core.dates import month_window
from hrfleet.core.db import get_db
from hrfleet.core.errors import NotFoundError, ValidationError
from hrfleet.core.security import get_current_user
from hrfleet.reports.excel import XLSX_MEDIA_TYPE, write_workbook
from hrfleet.reports.renderer import (
    ReportSheet,
    render_leave_detail,
    render_leave_summary,
    sheet_to_dict,
)
from hrfleet.services.employees import EmployeeLedger
from hrfleet.services.leaves import LeaveLedger

router = APIRouter(
    prefix="/api/reports",
    tags=["reports"],
    dependencies=[Depends(get_current_user)],
)


async def build_leave_report(
    db: AsyncSession, employee_id: Optional[int], month: Optional[str]
) -> ReportSheet:
    """
    Single-employee detail report when ``employee_id`` is given, otherwise
    the roster summary. Inputs are checked before anything is rendered.
    """
    month_start, month_end = month_window(month)
    leaves = LeaveLedger(db)
    employees = EmployeeLedger(db)

    if employee_id is not None:
        try:
            employee = await employees.get_employee(employee_id)
        except NotFoundError:
            raise ValidationError(f"Employee {employee_id} does not exist") from None
        rows = await leaves.leaves_overlapping_month(employee_id, month_start, month_end)
        return render_leave_detail(employee, rows, month_start)

    by_employee: Dict[int, list] = {}
    for leave in await leaves.leaves_in_month(month_start, month_end):
        by_employee.setdefault(leave.employee_id, []).append(leave)
    return render_leave_summary(await employees.list_employees(), by_employee, month_start)


@router.get("/excel")
async def leave_report_excel(
    employee_id: Optional[int] = Query(None, alias="employeeId"),
    month: Optional[str] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
):
    sheet = await build_leave_report(db, employee_id, month)
    return Response(
        content=write_workbook(sheet),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={sheet.filename}"},
    )


@router.get("")
async def leave_report(
    employee_id: Optional[int] = Query(None, alias="employeeId"),
    month: Optional[str] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
):
    return sheet_to_dict(await build_leave_report(db, employee_id, month))
