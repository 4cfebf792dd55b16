"""Request/response schemas for the signed-in user and user management."""

from pydantic import BaseModel, Field

from alliance.auth.roles import UserRole
from alliance.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class CurrentUser(BaseModel):
    """Authenticated user (id, username, role) plus profile names."""

    id: int
    username: str
    role: UserRole
    first_name: str
    last_name: str | None = None


class NavLink(BaseModel):
    """Navigation entry shown to the current user."""

    name: str
    href: str


class MeResponse(BaseModel):
    """Response for GET /me: who is signed in and which links they see."""

    user: CurrentUser
    links: list[NavLink]


class UserDetail(CurrentUser):
    """User entry for the user page (never includes the password hash)."""

    email: str | None = None
    has_password: bool


class UserCreate(BaseModel):
    """Body for POST /users."""

    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    role: UserRole = UserRole.USER
    password: str | None = Field(default=None, min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class UserUpdate(BaseModel):
    """Body for PATCH /users/{id}; omitted fields are left unchanged."""

    first_name: str | None = Field(default=None, min_length=1, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    username: str | None = Field(default=None, min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    role: UserRole | None = None


class PasswordSetRequest(BaseModel):
    """Body for PUT /users/{id}/password."""

    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
