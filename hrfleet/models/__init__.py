from hrfleet.models.achievement import Achievement, AchievementKind
from hrfleet.models.employee import Employee
from hrfleet.models.inventory import InventoryItem
from hrfleet.models.leave import Leave, LeaveStatus, LeaveType
from hrfleet.models.user import AuthSession, User
from hrfleet.models.vehicle import Vehicle

__all__ = [
    "Achievement",
    "AchievementKind",
    "AuthSession",
    "Employee",
    "InventoryItem",
    "Leave",
    "LeaveStatus",
    "LeaveType",
    "User",
    "Vehicle",
]
