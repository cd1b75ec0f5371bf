from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Integer, String

from hrfleet.core.db import Base, IdType


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    plate = Column(String(20), nullable=False, unique=True)
    mileage = Column(Integer, nullable=False, default=0)
    inspection_date = Column(Date, nullable=False)
    notes = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
