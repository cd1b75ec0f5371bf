from sqlalchemy import JSON, Column, Date, DateTime, Integer, Numeric, String, func

from hrfleet.core.db import Base, IdType


class Employee(Base):
    __tablename__ = "employees"

    id = Column(IdType, primary_key=True, index=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=False)
    address = Column(String(255), nullable=True)
    position = Column(String(100), nullable=True)
    department = Column(String(100), nullable=True)
    salary = Column(Numeric(12, 2), nullable=False)
    join_date = Column(Date, nullable=True)
    emergency_contacts = Column(JSON, nullable=False, default=list)
    total_leave_allowance = Column(Integer, nullable=False, default=30)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime,
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
