from typing import Dict, Optional

from hrfleet.schemas.base import CamelModel
from hrfleet.schemas.leave import LeaveRead


class EmployeeRef(CamelModel):
    id: int
    first_name: str
    last_name: str
    position: str | None = None


class OnLeaveEntry(CamelModel):
    employee: EmployeeRef
    leave: LeaveRead
    duration_days: int


class Performer(CamelModel):
    employee: EmployeeRef
    count: int


class TopPerformers(CamelModel):
    top_star: Optional[Performer] = None
    top_chef: Optional[Performer] = None
    most_damage: Optional[Performer] = None


class MonthlyStats(CamelModel):
    employee_id: int
    month: str
    leave_days: int
    achievements: Dict[str, int]
