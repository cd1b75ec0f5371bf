from datetime import datetime

from pydantic import Field

from hrfleet.schemas.base import CamelModel


class InventoryItemCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    notes: str | None = Field(None, max_length=500)
    type: str = Field("other", max_length=50)
    condition: str = Field("new", max_length=50)
    assigned_to: int | None = None


class InventoryItemUpdate(CamelModel):
    """Only name and notes can change after creation."""

    name: str = Field(..., min_length=1, max_length=200)
    notes: str | None = Field(None, max_length=500)


class InventoryItemRead(CamelModel):
    id: int
    name: str
    type: str
    condition: str
    notes: str | None = None
    assigned_to: int | None = None
    assigned_at: datetime | None = None
    returned_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
