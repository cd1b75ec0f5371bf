import enum
from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, String

from hrfleet.core.db import Base, IdType


class AchievementKind(str, enum.Enum):
    STAR = "STAR"
    CHEF = "CHEF"
    X = "X"  # damage


class Achievement(Base):
    __tablename__ = "daily_achievements"

    id = Column(IdType, primary_key=True, autoincrement=True)
    employee_id = Column(IdType, ForeignKey("employees.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    type = Column(String(10), nullable=False)
    notes = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
