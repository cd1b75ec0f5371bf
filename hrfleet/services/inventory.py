from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.core.errors import NotFoundError, ValidationError
from hrfleet.models.inventory import InventoryItem
from hrfleet.services.employees import EmployeeLedger


class InventoryLedger:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_items(self, employee_id: Optional[int] = None) -> List[InventoryItem]:
        stmt = select(InventoryItem)
        if employee_id is not None:
            stmt = stmt.where(InventoryItem.assigned_to == employee_id)
        stmt = stmt.order_by(InventoryItem.created_at.desc(), InventoryItem.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_item(self, item_id: int) -> InventoryItem:
        item = await self.session.get(InventoryItem, item_id)
        if item is None:
            raise NotFoundError("Inventory item not found")
        return item

    async def create_item(
        self,
        name: str,
        notes: Optional[str] = None,
        type: str = "other",
        condition: str = "new",
        assigned_to: Optional[int] = None,
    ) -> InventoryItem:
        if not name or not name.strip():
            raise ValidationError("Item name is required")
        if assigned_to is not None and not await EmployeeLedger(self.session).existing_ids([assigned_to]):
            raise ValidationError(f"Employee {assigned_to} does not exist")

        item = InventoryItem(
            name=name.strip(),
            notes=notes or None,
            type=type,
            condition=condition,
            assigned_to=assigned_to,
            assigned_at=datetime.utcnow() if assigned_to is not None else None,
        )
        self.session.add(item)
        await self.session.commit()
        await self.session.refresh(item)
        return item

    async def update_item(self, item_id: int, name: str, notes: Optional[str] = None) -> InventoryItem:
        if not name or not name.strip():
            raise ValidationError("Item name is required")
        item = await self.get_item(item_id)
        item.name = name.strip()
        item.notes = notes or None
        await self.session.commit()
        await self.session.refresh(item)
        return item

    async def delete_item(self, item_id: int) -> InventoryItem:
        item = await self.get_item(item_id)
        await self.session.delete(item)
        await self.session.commit()
        return item
