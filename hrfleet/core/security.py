import hashlib
import hmac
import secrets
from datetime import datetime, timedelta

from fastapi import Depends, Header
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.core.config import settings
from hrfleet.core.db import get_db
from hrfleet.core.errors import AuthError
from hrfleet.models.user import AuthSession, User


def hash_password(password: str, salt: str | None = None) -> str:
    salt = salt or secrets.token_hex(16)
    digest = hashlib.scrypt(password.encode(), salt=salt.encode(), n=16384, r=8, p=1, dklen=64)
    return f"{digest.hex()}.{salt}"


def verify_password(password: str, stored: str) -> bool:
    try:
        digest, salt = stored.split(".")
    except ValueError:
        return False
    candidate = hash_password(password, salt).split(".")[0]
    return hmac.compare_digest(candidate, digest)


async def issue_token(db: AsyncSession, user: User) -> str:
    token = secrets.token_hex(32)
    db.add(
        AuthSession(
            token=token,
            user_id=user.id,
            expires_at=datetime.utcnow() + timedelta(hours=settings.SESSION_TTL_HOURS),
        )
    )
    await db.commit()
    return token


async def revoke_token(db: AsyncSession, token: str) -> None:
    await db.execute(delete(AuthSession).where(AuthSession.token == token))
    await db.commit()


def _bearer(authorization: str | None) -> str:
    if not authorization:
        raise AuthError("Not authenticated")
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthError("Not authenticated")
    return parts[1]


async def get_current_user(
    authorization: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
) -> User:
    token = _bearer(authorization)
    result = await db.execute(select(AuthSession).where(AuthSession.token == token))
    session = result.scalar_one_or_none()
    if session is None:
        raise AuthError("Invalid or expired session")
    if session.expires_at < datetime.utcnow():
        await db.delete(session)
        await db.commit()
        raise AuthError("Invalid or expired session")

    user = await db.get(User, session.user_id)
    if user is None:
        raise AuthError("User not found")
    return user


async def get_token(authorization: str | None = Header(None)) -> str:
    return _bearer(authorization)
