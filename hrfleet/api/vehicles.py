from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.core.db import get_db
from hrfleet.core.security import get_current_user
from hrfleet.schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate
from hrfleet.services.vehicles import VehicleRegistry

router = APIRouter(
    prefix="/api/vehicles",
    tags=["vehicles"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[VehicleRead])
async def list_vehicles(db: AsyncSession = Depends(get_db)):
    return await VehicleRegistry(db).list_vehicles()


@router.post("", response_model=VehicleRead, status_code=status.HTTP_201_CREATED)
async def create_vehicle(payload: VehicleCreate, db: AsyncSession = Depends(get_db)):
    return await VehicleRegistry(db).create_vehicle(payload.model_dump())


@router.get("/{vehicle_id}", response_model=VehicleRead)
async def get_vehicle(vehicle_id: int, db: AsyncSession = Depends(get_db)):
    return await VehicleRegistry(db).get_vehicle(vehicle_id)


@router.put("/{vehicle_id}", response_model=VehicleRead)
async def update_vehicle(
    vehicle_id: int,
    payload: VehicleUpdate,
    db: AsyncSession = Depends(get_db),
):
    return await VehicleRegistry(db).update_vehicle(
        vehicle_id, payload.model_dump(exclude_unset=True)
    )


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle(vehicle_id: int, db: AsyncSession = Depends(get_db)):
    await VehicleRegistry(db).delete_vehicle(vehicle_id)
