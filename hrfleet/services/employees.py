import logging
from typing import Any, Dict, List

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.core.errors import NotFoundError, ValidationError
from hrfleet.models.achievement import Achievement
from hrfleet.models.employee import Employee
from hrfleet.models.inventory import InventoryItem
from hrfleet.models.leave import Leave

logger = logging.getLogger(__name__)


class EmployeeLedger:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_employees(self) -> List[Employee]:
        result = await self.session.execute(
            select(Employee).order_by(Employee.first_name, Employee.last_name, Employee.id)
        )
        return list(result.scalars().all())

    async def get_employee(self, employee_id: int) -> Employee:
        employee = await self.session.get(Employee, employee_id)
        if employee is None:
            raise NotFoundError("Employee not found")
        return employee

    async def create_employee(self, fields: Dict[str, Any]) -> Employee:
        employee = Employee(**fields)
        self.session.add(employee)
        await self.session.commit()
        await self.session.refresh(employee)
        logger.info("Employee %s created (%s)", employee.id, employee.full_name)
        return employee

    async def update_employee(self, employee_id: int, fields: Dict[str, Any]) -> Employee:
        employee = await self.get_employee(employee_id)
        if not fields:
            raise ValidationError("Nothing to update")

        for name, value in fields.items():
            setattr(employee, name, value)

        await self.session.commit()
        await self.session.refresh(employee)
        return employee

    async def delete_employee(self, employee_id: int) -> Employee:
        """
        Remove an employee together with their leaves and achievements.
        Assigned inventory items are kept and only unassigned.
        All of it happens in one transaction.
        """
        employee = await self.get_employee(employee_id)

        try:
            await self.session.execute(
                delete(Leave).where(Leave.employee_id == employee_id)
            )
            await self.session.execute(
                delete(Achievement).where(Achievement.employee_id == employee_id)
            )
            await self.session.execute(
                update(InventoryItem)
                .where(InventoryItem.assigned_to == employee_id)
                .values(assigned_to=None, assigned_at=None)
            )
            await self.session.delete(employee)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Employee %s deleted with leaves and achievements", employee_id)
        return employee

    async def existing_ids(self, employee_ids) -> set:
        ids = set(employee_ids)
        if not ids:
            return set()
        result = await self.session.execute(
            select(Employee.id).where(Employee.id.in_(ids))
        )
        return set(result.scalars().all())
