from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String

from hrfleet.core.db import Base, IdType


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    type = Column(String(50), nullable=False, default="other")
    condition = Column(String(50), nullable=False, default="new")
    notes = Column(String(500), nullable=True)
    assigned_to = Column(
        IdType,
        ForeignKey("employees.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    assigned_at = Column(DateTime, nullable=True)
    returned_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
