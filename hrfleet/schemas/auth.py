from pydantic import Field

from hrfleet.schemas.base import CamelModel


class LoginRequest(CamelModel):
    password: str = Field(..., min_length=1)
    username: str | None = None


class UserRead(CamelModel):
    id: int
    username: str


class LoginResponse(CamelModel):
    message: str
    token: str
    user: UserRead
