from datetime import date, datetime
from decimal import Decimal
from typing import List

from pydantic import ConfigDict, Field, field_validator

from hrfleet.schemas.base import CamelModel


class EmergencyContact(CamelModel):
    relationship: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)


class EmployeeBase(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str | None = Field(None, max_length=255)
    phone: str = Field(..., min_length=1, max_length=50)
    address: str | None = Field(None, max_length=255)
    position: str | None = Field(None, max_length=100)
    department: str | None = Field(None, max_length=100)
    salary: Decimal = Field(..., ge=0)
    join_date: date | None = None
    emergency_contacts: List[EmergencyContact] = Field(default_factory=list)
    total_leave_allowance: int = Field(30, ge=0)


class EmployeeCreate(EmployeeBase):
    """POST /api/employees body"""
    pass


class EmployeeUpdate(CamelModel):
    """PUT /api/employees/{id} body; only the fields sent are changed."""

    model_config = ConfigDict(extra="forbid")

    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, min_length=1, max_length=50)
    address: str | None = Field(None, max_length=255)
    position: str | None = Field(None, max_length=100)
    department: str | None = Field(None, max_length=100)
    salary: Decimal | None = Field(None, ge=0)
    join_date: date | None = None
    emergency_contacts: List[EmergencyContact] | None = None
    total_leave_allowance: int | None = Field(None, ge=0)

    @field_validator(
        "first_name",
        "last_name",
        "phone",
        "salary",
        "emergency_contacts",
        "total_leave_allowance",
    )
    @classmethod
    def not_null(cls, value):
        # omit the key to leave a required column unchanged
        if value is None:
            raise ValueError("must not be null")
        return value


class Employee(EmployeeBase):
    id: int
    created_at: datetime
    updated_at: datetime


class LeaveBalance(CamelModel):
    employee_id: int
    year: int
    allowance: int
    used_days: int
    remaining: int
