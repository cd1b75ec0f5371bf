"""
Leave ledger: the authoritative set of leave records.

Leaves are never edited in place; they are created one at a time or in an
atomic bulk batch, and deleted explicitly.
"""
import logging
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.core.dates import DateLike, days_between_inclusive, to_date
from hrfleet.core.errors import NotFoundError, ValidationError
from hrfleet.models.leave import Leave, LeaveStatus, LeaveType
from hrfleet.services.employees import EmployeeLedger

logger = logging.getLogger(__name__)

BULK_LEAVE_TYPE = LeaveType.ANNUAL
BULK_LEAVE_STATUS = LeaveStatus.APPROVED


def _enum_value(enum_cls, value, label: str) -> str:
    try:
        return enum_cls(value).value
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid leave {label} {value!r}; expected one of {allowed}") from None


def month_overlap_clause(month_start: date, month_end: date):
    """A leave belongs to the month when either endpoint lies inside it."""
    return or_(
        and_(Leave.start_date >= month_start, Leave.start_date <= month_end),
        and_(Leave.end_date >= month_start, Leave.end_date <= month_end),
    )


class LeaveLedger:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_leave(
        self,
        employee_id: int,
        start: DateLike,
        end: DateLike,
        type: str = LeaveType.ANNUAL,
        status: str = LeaveStatus.APPROVED,
        reason: Optional[str] = None,
    ) -> Leave:
        start, end = to_date(start), to_date(end)
        days_between_inclusive(start, end)
        leave_type = _enum_value(LeaveType, type, "type")
        leave_status = _enum_value(LeaveStatus, status, "status")

        if not await EmployeeLedger(self.session).existing_ids([employee_id]):
            raise ValidationError(f"Employee {employee_id} does not exist")

        leave = Leave(
            employee_id=employee_id,
            start_date=start,
            end_date=end,
            type=leave_type,
            status=leave_status,
            reason=reason,
        )
        self.session.add(leave)
        await self.session.commit()
        await self.session.refresh(leave)
        return leave

    async def create_bulk_leave(
        self,
        employee_ids: Iterable[int],
        start: DateLike,
        end: DateLike,
        reason: Optional[str] = None,
    ) -> List[Leave]:
        """
        One ANNUAL/APPROVED leave per employee, committed as a single
        transaction. Any unknown employee id or storage failure leaves the
        ledger untouched.
        """
        ids = list(dict.fromkeys(employee_ids))
        if not ids:
            raise ValidationError("At least one employee must be selected")

        start, end = to_date(start), to_date(end)
        days_between_inclusive(start, end)

        found = await EmployeeLedger(self.session).existing_ids(ids)
        missing = [employee_id for employee_id in ids if employee_id not in found]
        if missing:
            raise ValidationError(
                "Unknown employee id(s): " + ", ".join(str(i) for i in missing)
            )

        leaves = [
            Leave(
                employee_id=employee_id,
                start_date=start,
                end_date=end,
                type=BULK_LEAVE_TYPE.value,
                status=BULK_LEAVE_STATUS.value,
                reason=reason,
            )
            for employee_id in ids
        ]

        try:
            self.session.add_all(leaves)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("Bulk leave rolled back: %s", exc)
            raise ValidationError(f"Leaves could not be created: {exc}") from exc

        for leave in leaves:
            await self.session.refresh(leave)
        logger.info("Bulk leave created for %s employee(s) %s..%s", len(leaves), start, end)
        return leaves

    async def delete_leave(self, leave_id: int) -> Leave:
        leave = await self.session.get(Leave, leave_id)
        if leave is None:
            raise NotFoundError("Leave not found")
        await self.session.delete(leave)
        await self.session.commit()
        return leave

    async def list_leaves(self, employee_id: Optional[int] = None) -> List[Leave]:
        stmt = select(Leave)
        if employee_id is not None:
            stmt = stmt.where(Leave.employee_id == employee_id)
        stmt = stmt.order_by(Leave.start_date.desc(), Leave.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def leaves_for_employee(self, employee_id: int) -> List[Leave]:
        return await self.list_leaves(employee_id)

    async def leaves_on_date(self, day: DateLike) -> List[Leave]:
        day = to_date(day)
        result = await self.session.execute(
            select(Leave)
            .where(Leave.start_date <= day, Leave.end_date >= day)
            .order_by(Leave.start_date, Leave.id)
        )
        return list(result.scalars().all())

    async def leaves_overlapping_month(
        self, employee_id: int, month_start: DateLike, month_end: DateLike
    ) -> List[Leave]:
        result = await self.session.execute(
            select(Leave)
            .where(
                Leave.employee_id == employee_id,
                month_overlap_clause(to_date(month_start), to_date(month_end)),
            )
            .order_by(Leave.start_date, Leave.id)
        )
        return list(result.scalars().all())

    async def leaves_in_month(self, month_start: DateLike, month_end: DateLike) -> List[Leave]:
        result = await self.session.execute(
            select(Leave)
            .where(month_overlap_clause(to_date(month_start), to_date(month_end)))
            .order_by(Leave.employee_id, Leave.start_date, Leave.id)
        )
        return list(result.scalars().all())
