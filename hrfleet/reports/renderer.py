"""
Turns ledger reads into report rows. The renderer only shapes data; writing
to a workbook or to JSON is done by the sinks in ``excel.py`` and
``sheet_to_dict`` below.
"""
import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from hrfleet.core.dates import days_between_inclusive, to_date
from hrfleet.models.achievement import Achievement, AchievementKind
from hrfleet.models.employee import Employee
from hrfleet.models.leave import Leave
from hrfleet.services.achievements import count_by_kind

DATE_FORMAT = "%d.%m.%Y"
NO_LEAVE = "No leave"

KIND_LABELS = {
    AchievementKind.STAR.value: "Star",
    AchievementKind.CHEF.value: "Chef",
    AchievementKind.X.value: "Damage",
}


@dataclass
class ColumnTotal:
    """Sum of one data column; the xlsx sink writes it as a SUM formula."""

    column: int
    value: Any


@dataclass
class Placeholder:
    """A single merged cell standing in for ``span`` empty columns."""

    text: str
    span: int


@dataclass
class ReportSheet:
    title: str
    title_span: int
    header: List[str]
    filename: str
    meta: List[Tuple[str, Any]] = field(default_factory=list)
    rows: List[List[Any]] = field(default_factory=list)
    totals: Optional[List[Any]] = None
    summary_title: Optional[str] = None
    summary: List[Tuple[str, Any]] = field(default_factory=list)
    column_widths: List[int] = field(default_factory=list)


def period_label(month_start: date) -> str:
    return f"{calendar.month_name[month_start.month]} {month_start.year}"


def _fmt(value) -> str:
    return to_date(value).strftime(DATE_FORMAT)


def _column_total(rows: Sequence[Sequence[Any]], column: int) -> ColumnTotal:
    total = sum(
        row[column]
        for row in rows
        if len(row) > column and isinstance(row[column], (int, float))
    )
    return ColumnTotal(column=column, value=total)


def render_leave_detail(
    employee: Employee, leaves: Sequence[Leave], month_start: date
) -> ReportSheet:
    rows = [
        [
            _fmt(leave.start_date),
            _fmt(leave.end_date),
            days_between_inclusive(leave.start_date, leave.end_date),
            leave.reason or "-",
        ]
        for leave in sorted(leaves, key=lambda l: (l.start_date, l.id or 0))
    ]
    return ReportSheet(
        title="EMPLOYEE LEAVE REPORT",
        title_span=4,
        meta=[
            ("Employee:", employee.full_name),
            ("Position:", employee.position or "-"),
            ("Period:", period_label(month_start)),
        ],
        header=["Start", "End", "Days", "Note"],
        rows=rows,
        totals=["TOTAL", None, _column_total(rows, 2), None],
        column_widths=[15, 15, 10, 40],
        filename=f"leave-report-{month_start:%Y-%m}.xlsx",
    )


def render_leave_summary(
    employees: Sequence[Employee],
    leaves_by_employee: Mapping[int, Sequence[Leave]],
    month_start: date,
) -> ReportSheet:
    rows: List[List[Any]] = []
    for employee in employees:
        leaves = sorted(
            leaves_by_employee.get(employee.id, []),
            key=lambda l: (l.start_date, l.id or 0),
        )
        if not leaves:
            rows.append(
                [employee.full_name, employee.position or "-", Placeholder(NO_LEAVE, span=4)]
            )
            continue
        for leave in leaves:
            rows.append(
                [
                    employee.full_name,
                    employee.position or "-",
                    _fmt(leave.start_date),
                    _fmt(leave.end_date),
                    days_between_inclusive(leave.start_date, leave.end_date),
                    leave.reason or "-",
                ]
            )

    return ReportSheet(
        title="EMPLOYEE LEAVE SUMMARY",
        title_span=6,
        meta=[("Period:", period_label(month_start))],
        header=["Full name", "Position", "Leave start", "Leave end", "Total days", "Note"],
        rows=rows,
        column_widths=[25, 20, 15, 15, 12, 30],
        filename=f"leave-report-{month_start:%Y-%m}.xlsx",
    )


def render_achievement_detail(
    employee: Employee, achievements: Sequence[Achievement], month_start: date
) -> ReportSheet:
    ordered = sorted(achievements, key=lambda a: (a.date, a.id or 0))
    stats = count_by_kind(ordered)
    return ReportSheet(
        title="EMPLOYEE PERFORMANCE REPORT",
        title_span=3,
        meta=[
            ("Employee:", employee.full_name),
            ("Position:", employee.position or "-"),
            ("Period:", period_label(month_start)),
        ],
        header=["Date", "Type", "Note"],
        rows=[
            [_fmt(a.date), KIND_LABELS.get(a.type, a.type), a.notes or "-"]
            for a in ordered
        ],
        summary_title="MONTHLY SUMMARY",
        summary=[(f"{KIND_LABELS[kind]}:", stats[kind]) for kind in stats],
        column_widths=[15, 15, 40],
        filename=f"performance-report-{month_start:%Y-%m}.xlsx",
    )


def render_achievement_summary(
    employees: Sequence[Employee],
    achievements_by_employee: Mapping[int, Sequence[Achievement]],
    month_start: date,
) -> ReportSheet:
    rows = []
    for employee in employees:
        stats = count_by_kind(achievements_by_employee.get(employee.id, []))
        star = stats[AchievementKind.STAR.value]
        chef = stats[AchievementKind.CHEF.value]
        damage = stats[AchievementKind.X.value]
        rows.append(
            [employee.full_name, employee.position or "-", star, chef, damage, star + chef + damage]
        )

    return ReportSheet(
        title="MONTHLY PERFORMANCE REPORT",
        title_span=6,
        meta=[("Period:", period_label(month_start))],
        header=["Full name", "Position", "Star", "Chef", "Damage", "Total"],
        rows=rows,
        totals=["TOTAL", None] + [_column_total(rows, column) for column in range(2, 6)],
        column_widths=[30, 20, 15, 15, 15, 15],
        filename=f"performance-report-{month_start:%Y-%m}.xlsx",
    )


def _plain(value):
    if isinstance(value, ColumnTotal):
        return value.value
    if isinstance(value, Placeholder):
        return value.text
    return value


def sheet_to_dict(sheet: ReportSheet) -> Dict[str, Any]:
    return {
        "title": sheet.title,
        "meta": [{"label": label, "value": value} for label, value in sheet.meta],
        "header": list(sheet.header),
        "rows": [[_plain(cell) for cell in row] for row in sheet.rows],
        "totals": [_plain(cell) for cell in sheet.totals] if sheet.totals else None,
        "summary": [{"label": label, "value": value} for label, value in sheet.summary],
        "filename": sheet.filename,
    }
