from datetime import date, datetime
from typing import List

from pydantic import Field, model_validator

from hrfleet.models.leave import LeaveStatus, LeaveType
from hrfleet.schemas.base import CamelModel


class LeaveCreate(CamelModel):
    employee_id: int
    start_date: date
    end_date: date
    type: LeaveType = LeaveType.ANNUAL
    status: LeaveStatus = LeaveStatus.APPROVED
    reason: str | None = Field(None, max_length=255)


class BulkLeaveCreate(CamelModel):
    employee_ids: List[int] = Field(..., min_length=1)
    start_date: date
    end_date: date
    reason: str | None = Field(None, max_length=255)

    @model_validator(mode="after")
    def check_range(self) -> "BulkLeaveCreate":
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class LeaveRead(CamelModel):
    id: int
    employee_id: int
    start_date: date
    end_date: date
    type: str
    status: str
    reason: str | None = None
    created_at: datetime
