import logging
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.core.errors import NotFoundError, ValidationError
from hrfleet.models.vehicle import Vehicle

logger = logging.getLogger(__name__)


class VehicleRegistry:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_vehicles(self) -> List[Vehicle]:
        result = await self.session.execute(
            select(Vehicle).order_by(Vehicle.created_at.desc(), Vehicle.id.desc())
        )
        return list(result.scalars().all())

    async def get_vehicle(self, vehicle_id: int) -> Vehicle:
        vehicle = await self.session.get(Vehicle, vehicle_id)
        if vehicle is None:
            raise NotFoundError("Vehicle not found")
        return vehicle

    async def _commit(self, plate: str) -> None:
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ValidationError(f"A vehicle with plate {plate!r} already exists") from None

    async def create_vehicle(self, fields: Dict[str, Any]) -> Vehicle:
        vehicle = Vehicle(**fields)
        self.session.add(vehicle)
        await self._commit(vehicle.plate)
        await self.session.refresh(vehicle)
        return vehicle

    async def update_vehicle(self, vehicle_id: int, fields: Dict[str, Any]) -> Vehicle:
        vehicle = await self.get_vehicle(vehicle_id)
        if not fields:
            raise ValidationError("Nothing to update")
        for name, value in fields.items():
            setattr(vehicle, name, value)
        await self._commit(vehicle.plate)
        await self.session.refresh(vehicle)
        return vehicle

    async def delete_vehicle(self, vehicle_id: int) -> Vehicle:
        vehicle = await self.get_vehicle(vehicle_id)
        await self.session.delete(vehicle)
        await self.session.commit()
        return vehicle
