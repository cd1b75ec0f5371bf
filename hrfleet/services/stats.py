"""
Derived statistics over ledger reads. Nothing here touches the database;
callers pass in the employees, leaves and achievements they already loaded.
"""
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from hrfleet.core.dates import (
    DateLike,
    days_between_inclusive,
    intervals_overlap,
    is_within,
    to_date,
)
from hrfleet.models.achievement import Achievement, AchievementKind
from hrfleet.models.employee import Employee
from hrfleet.models.leave import Leave, LeaveStatus, LeaveType
from hrfleet.services.achievements import count_by_kind


@dataclass
class OnLeaveEntry:
    employee: Employee
    leave: Leave
    duration_days: int


@dataclass
class Performer:
    employee: Employee
    count: int


@dataclass
class TopPerformers:
    top_star: Optional[Performer]
    top_chef: Optional[Performer]
    most_damage: Optional[Performer]


@dataclass
class LeaveBalance:
    allowance: int
    used_days: int
    remaining: int


def leave_in_month(leave: Leave, month_start: DateLike, month_end: DateLike) -> bool:
    # endpoint-in-window, not true intersection: a leave covering the whole
    # month with both ends outside it does not count
    return is_within(leave.start_date, month_start, month_end) or is_within(
        leave.end_date, month_start, month_end
    )


def employees_on_leave_today(
    employees: Sequence[Employee], leaves: Iterable[Leave], today: DateLike
) -> List[OnLeaveEntry]:
    today = to_date(today)
    by_employee: Dict[int, List[Leave]] = defaultdict(list)
    for leave in leaves:
        if is_within(today, leave.start_date, leave.end_date):
            by_employee[leave.employee_id].append(leave)

    entries = []
    for employee in employees:
        for leave in by_employee.get(employee.id, []):
            entries.append(
                OnLeaveEntry(
                    employee=employee,
                    leave=leave,
                    duration_days=days_between_inclusive(leave.start_date, leave.end_date),
                )
            )
    return entries


def monthly_leave_total(
    employee_id: int, leaves: Iterable[Leave], month_start: DateLike, month_end: DateLike
) -> int:
    """Full day count of every qualifying leave, including days outside the month."""
    return sum(
        days_between_inclusive(leave.start_date, leave.end_date)
        for leave in leaves
        if leave.employee_id == employee_id and leave_in_month(leave, month_start, month_end)
    )


def _pick_top(employees: Sequence[Employee], counts: Dict[int, Dict[str, int]], kind: str):
    best: Optional[Performer] = None
    for employee in employees:
        count = counts.get(employee.id, {}).get(kind, 0)
        # strict '>' keeps the first employee on ties
        if count > 0 and (best is None or count > best.count):
            best = Performer(employee=employee, count=count)
    return best


def top_performers(
    employees: Sequence[Employee], achievements: Iterable[Achievement]
) -> TopPerformers:
    grouped: Dict[int, List[Achievement]] = defaultdict(list)
    for achievement in achievements:
        grouped[achievement.employee_id].append(achievement)
    counts = {employee_id: count_by_kind(items) for employee_id, items in grouped.items()}

    return TopPerformers(
        top_star=_pick_top(employees, counts, AchievementKind.STAR.value),
        top_chef=_pick_top(employees, counts, AchievementKind.CHEF.value),
        most_damage=_pick_top(employees, counts, AchievementKind.X.value),
    )


def monthly_achievement_stats(
    employee_id: int,
    achievements: Iterable[Achievement],
    month_start: DateLike,
    month_end: DateLike,
) -> Dict[str, int]:
    return count_by_kind(
        a
        for a in achievements
        if a.employee_id == employee_id and is_within(a.date, month_start, month_end)
    )


def leave_balance(employee: Employee, leaves: Iterable[Leave], year: int) -> LeaveBalance:
    year_start, year_end = date(year, 1, 1), date(year, 12, 31)
    used = sum(
        days_between_inclusive(leave.start_date, leave.end_date)
        for leave in leaves
        if leave.employee_id == employee.id
        and leave.type == LeaveType.ANNUAL.value
        and leave.status != LeaveStatus.REJECTED.value
        and intervals_overlap(leave.start_date, leave.end_date, year_start, year_end)
    )
    allowance = int(employee.total_leave_allowance or 0)
    return LeaveBalance(allowance=allowance, used_days=used, remaining=allowance - used)
