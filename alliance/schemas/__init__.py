"""Pydantic request/response schemas."""

from alliance.schemas.accounts import AccountBalance, AccountsResponse
from alliance.schemas.auth import (
    CurrentUser,
    MeResponse,
    NavLink,
    PasswordSetRequest,
    UserCreate,
    UserDetail,
    UserUpdate,
)
from alliance.schemas.health import HealthResponse

__all__ = [
    "AccountBalance",
    "AccountsResponse",
    "CurrentUser",
    "HealthResponse",
    "MeResponse",
    "NavLink",
    "PasswordSetRequest",
    "UserCreate",
    "UserDetail",
    "UserUpdate",
]
