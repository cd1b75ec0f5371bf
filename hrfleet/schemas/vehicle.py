from datetime import date, datetime

from pydantic import ConfigDict, Field, field_validator

from hrfleet.schemas.base import CamelModel


class VehicleBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    plate: str = Field(..., min_length=1, max_length=20)
    mileage: int = Field(0, ge=0)
    inspection_date: date
    notes: str | None = Field(None, max_length=500)


class VehicleCreate(VehicleBase):
    pass


class VehicleUpdate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=1, max_length=100)
    plate: str | None = Field(None, min_length=1, max_length=20)
    mileage: int | None = Field(None, ge=0)
    inspection_date: date | None = None
    notes: str | None = Field(None, max_length=500)

    @field_validator("name", "plate", "mileage", "inspection_date")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value


class VehicleRead(VehicleBase):
    id: int
    created_at: datetime
    updated_at: datetime
