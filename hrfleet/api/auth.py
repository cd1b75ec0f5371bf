import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.core.config import settings
from hrfleet.core.db import get_db
from hrfleet.core.errors import ValidationError
from hrfleet.core.security import (
    get_current_user,
    get_token,
    hash_password,
    issue_token,
    revoke_token,
    verify_password,
)
from hrfleet.models.user import User
from hrfleet.schemas.auth import LoginRequest, LoginResponse, UserRead
from hrfleet.schemas.base import Message

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["auth"],
)


@router.post("/init", response_model=Message)
async def init_admin(db: AsyncSession = Depends(get_db)):
    """Create the admin user on first run; a no-op afterwards."""
    result = await db.execute(select(User).where(User.username == settings.ADMIN_USERNAME))
    if result.scalar_one_or_none() is None:
        db.add(
            User(
                username=settings.ADMIN_USERNAME,
                password_hash=hash_password(settings.ADMIN_PASSWORD),
            )
        )
        await db.commit()
        logger.info("Admin user %s created", settings.ADMIN_USERNAME)
    return {"message": "Admin user is ready"}


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, db: AsyncSession = Depends(get_db)):
    username = payload.username or settings.ADMIN_USERNAME
    result = await db.execute(select(User).where(User.username == username))
    user = result.scalar_one_or_none()

    if user is None or not verify_password(payload.password, user.password_hash):
        logger.warning("Failed login for %s", username)
        raise ValidationError("Wrong username or password")

    token = await issue_token(db, user)
    return {
        "message": "Login successful",
        "token": token,
        "user": UserRead.model_validate(user),
    }


@router.post("/logout", response_model=Message)
async def logout(
    token: str = Depends(get_token),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await revoke_token(db, token)
    logger.info("User %s logged out", user.username)
    return {"message": "Logged out"}


@router.get("/user", response_model=UserRead)
async def current_user(user: User = Depends(get_current_user)):
    return user
