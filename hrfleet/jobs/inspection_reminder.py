import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.core.dates import days_until
from hrfleet.core.mailer import Mailer
from hrfleet.models.vehicle import Vehicle

REMINDER_DAYS = (20, 10, 3)


@dataclass
class ReminderRunResult:
    sent: int = 0
    skipped: int = 0
    failed: int = 0


def seconds_until_next_run(now: datetime, hour: int) -> float:
    next_run = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    if next_run <= now:
        next_run += timedelta(days=1)
    return (next_run - now).total_seconds()


class InspectionReminderJob:
    """
    Daily check of every vehicle's inspection date.

    A reminder goes out when the remaining day count is exactly one of the
    thresholds. Nothing is persisted, so a second run on the same day sends
    the same reminders again.
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        mailer: Mailer,
        logger: Optional[logging.Logger] = None,
        thresholds: Sequence[int] = REMINDER_DAYS,
        hour: int = 9,
    ) -> None:
        self.session_factory = session_factory
        self.mailer = mailer
        self.logger = logger or logging.getLogger(__name__)
        self.thresholds = frozenset(thresholds)
        self.hour = hour

    async def _load_vehicles(self):
        async with self.session_factory() as session:
            result = await session.execute(select(Vehicle).order_by(Vehicle.id))
            return list(result.scalars().all())

    async def run_once(self, today: Optional[date] = None) -> ReminderRunResult:
        today = today or date.today()
        result = ReminderRunResult()
        self.logger.info("Starting vehicle inspection reminder check for %s", today.isoformat())

        if not self.mailer.configured:
            self.logger.error("Mail credentials missing, inspection reminders will not be sent")
            return result

        vehicles = await self._load_vehicles()
        self.logger.info("Found %s vehicles to check", len(vehicles))

        for vehicle in vehicles:
            try:
                remaining = days_until(vehicle.inspection_date, today)
                if remaining not in self.thresholds:
                    result.skipped += 1
                    continue

                await self.mailer.send_inspection_reminder(
                    vehicle.name, vehicle.plate, vehicle.inspection_date, remaining
                )
                result.sent += 1
                self.logger.info("Reminder sent for %s - %s days remaining", vehicle.plate, remaining)
            except Exception:
                result.failed += 1
                self.logger.exception("Error processing vehicle %s", vehicle.plate)

        self.logger.info(
            "Inspection reminder check done: %s sent, %s skipped, %s failed",
            result.sent,
            result.skipped,
            result.failed,
        )
        return result

    async def run_forever(self) -> None:
        self.logger.info("Vehicle inspection reminder scheduled daily at %02d:00", self.hour)
        while True:
            await asyncio.sleep(seconds_until_next_run(datetime.now(), self.hour))
            try:
                await self.run_once()
            except Exception:
                # a failed run (e.g. database down) waits for the next tick
                self.logger.exception("Inspection reminder run failed")
