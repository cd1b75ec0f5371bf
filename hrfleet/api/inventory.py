from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.core.db import get_db
from hrfleet.core.security import get_current_user
from hrfleet.schemas.inventory import InventoryItemCreate, InventoryItemRead, InventoryItemUpdate
from hrfleet.services.inventory import InventoryLedger

router = APIRouter(
    prefix="/api/inventory",
    tags=["inventory"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[InventoryItemRead])
async def list_items(
    employee_id: Optional[int] = Query(None, alias="employeeId"),
    db: AsyncSession = Depends(get_db),
):
    return await InventoryLedger(db).list_items(employee_id)


@router.post("", response_model=InventoryItemRead, status_code=status.HTTP_201_CREATED)
async def create_item(payload: InventoryItemCreate, db: AsyncSession = Depends(get_db)):
    return await InventoryLedger(db).create_item(
        name=payload.name,
        notes=payload.notes,
        type=payload.type,
        condition=payload.condition,
        assigned_to=payload.assigned_to,
    )


@router.put("/{item_id}", response_model=InventoryItemRead)
async def update_item(
    item_id: int,
    payload: InventoryItemUpdate,
    db: AsyncSession = Depends(get_db),
):
    return await InventoryLedger(db).update_item(item_id, payload.name, payload.notes)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(item_id: int, db: AsyncSession = Depends(get_db)):
    await InventoryLedger(db).delete_item(item_id)
