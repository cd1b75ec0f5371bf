import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.core.dates import DateLike, to_date
from hrfleet.core.errors import NotFoundError, ValidationError
from hrfleet.models.achievement import Achievement, AchievementKind
from hrfleet.services.employees import EmployeeLedger

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("type", "notes", "date")


def _kind(value) -> str:
    try:
        return AchievementKind(value).value
    except ValueError:
        allowed = ", ".join(k.value for k in AchievementKind)
        raise ValidationError(f"Invalid achievement type {value!r}; expected one of {allowed}") from None


def count_by_kind(achievements: Iterable[Achievement]) -> Dict[str, int]:
    """Count per kind; every kind is present, even at zero."""
    counts = {kind.value: 0 for kind in AchievementKind}
    for achievement in achievements:
        if achievement.type in counts:
            counts[achievement.type] += 1
    return counts


class AchievementLedger:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _get(self, achievement_id: int) -> Achievement:
        achievement = await self.session.get(Achievement, achievement_id)
        if achievement is None:
            raise NotFoundError("Achievement not found")
        return achievement

    async def create_achievement(
        self,
        employee_id: int,
        day: DateLike,
        kind,
        notes: Optional[str] = None,
    ) -> Achievement:
        kind = _kind(kind)
        day = to_date(day)
        if not await EmployeeLedger(self.session).existing_ids([employee_id]):
            raise ValidationError(f"Employee {employee_id} does not exist")

        achievement = Achievement(employee_id=employee_id, date=day, type=kind, notes=notes)
        self.session.add(achievement)
        await self.session.commit()
        await self.session.refresh(achievement)
        return achievement

    async def update_achievement(self, achievement_id: int, fields: Dict[str, Any]) -> Achievement:
        achievement = await self._get(achievement_id)

        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError("Cannot update field(s): " + ", ".join(sorted(unknown)))

        if "type" in fields:
            achievement.type = _kind(fields["type"])
        if "notes" in fields:
            achievement.notes = fields["notes"]
        if fields.get("date") is not None:
            achievement.date = to_date(fields["date"])

        await self.session.commit()
        await self.session.refresh(achievement)
        return achievement

    async def delete_achievement(self, achievement_id: int) -> None:
        achievement = await self._get(achievement_id)
        await self.session.delete(achievement)
        await self.session.commit()

    async def list_achievements(
        self,
        employee_id: Optional[int] = None,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
    ) -> List[Achievement]:
        stmt = select(Achievement)
        if employee_id is not None:
            stmt = stmt.where(Achievement.employee_id == employee_id)
        if start is not None and end is not None:
            stmt = stmt.where(
                Achievement.date >= to_date(start), Achievement.date <= to_date(end)
            )
        stmt = stmt.order_by(Achievement.date.desc(), Achievement.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def achievements_for_employee_in_range(
        self, employee_id: int, start: DateLike, end: DateLike
    ) -> List[Achievement]:
        result = await self.session.execute(
            select(Achievement)
            .where(
                Achievement.employee_id == employee_id,
                Achievement.date >= to_date(start),
                Achievement.date <= to_date(end),
            )
            .order_by(Achievement.date, Achievement.id)
        )
        return list(result.scalars().all())

    async def achievements_in_range(self, start: DateLike, end: DateLike) -> List[Achievement]:
        result = await self.session.execute(
            select(Achievement)
            .where(Achievement.date >= to_date(start), Achievement.date <= to_date(end))
            .order_by(Achievement.date, Achievement.id)
        )
        return list(result.scalars().all())
