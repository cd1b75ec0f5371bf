from datetime import date as date_cls, datetime

from pydantic import ConfigDict, Field

from hrfleet.models.achievement import AchievementKind
from hrfleet.schemas.base import CamelModel


class AchievementCreate(CamelModel):
    employee_id: int
    date: date_cls
    type: AchievementKind
    notes: str | None = Field(None, max_length=500)


class AchievementUpdate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    date: date_cls | None = None
    type: AchievementKind | None = None
    notes: str | None = Field(None, max_length=500)


class AchievementRead(CamelModel):
    id: int
    employee_id: int
    date: date_cls
    type: str
    notes: str | None = None
    created_at: datetime
    updated_at: datetime
