from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String

from hrfleet.core.db import Base, IdType


class User(Base):
    __tablename__ = "users"

    id = Column(IdType, primary_key=True, autoincrement=True)
    username = Column(String(100), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class AuthSession(Base):
    """Bearer token issued by ``POST /api/login``."""

    __tablename__ = "auth_sessions"

    id = Column(IdType, primary_key=True, autoincrement=True)
    token = Column(String(64), nullable=False, unique=True, index=True)
    user_id = Column(IdType, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
