"""FastAPI dependencies: per-request services and the current-user guards."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from alliance.auth.authenticator import Authenticator
from alliance.auth.authorizer import Authorizer
from alliance.auth.roles import UserRole
from alliance.auth.session import SessionCodec
from alliance.core.config import Settings
from alliance.core.database import get_db
from alliance.models import User
from alliance.services.users import UserService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_codec(request: Request) -> SessionCodec:
    return request.app.state.session_codec


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> UserService:
    return UserService(db, settings)


def get_authenticator(
    codec: Annotated[SessionCodec, Depends(get_session_codec)],
    users: Annotated[UserService, Depends(get_user_service)],
) -> Authenticator:
    return Authenticator(codec, users)


def get_authorizer(
    codec: Annotated[SessionCodec, Depends(get_session_codec)],
    users: Annotated[UserService, Depends(get_user_service)],
) -> Authorizer:
    return Authorizer(codec, users)


def current_user_optional(
    request: Request,
    authorizer: Annotated[Authorizer, Depends(get_authorizer)],
) -> User | None:
    """Dependency: the signed-in user or None. Never redirects."""
    return authorizer.resolve_user(request)


def require_user_id(
    request: Request,
    authorizer: Annotated[Authorizer, Depends(get_authorizer)],
) -> int:
    """Dependency: the session's user id without loading the user. Redirects to login if absent."""
    return authorizer.require_user_id(request)


def require_user(*allowed_roles: UserRole) -> Callable[..., User]:
    """
    Build a dependency returning the signed-in user if the role policy allows it.

    With no roles the default allow-list applies; SUPERADMIN always passes.
    """
    roles = frozenset(allowed_roles) if allowed_roles else None

    def _dep(
        request: Request,
        authorizer: Annotated[Authorizer, Depends(get_authorizer)],
    ) -> User:
        return authorizer.require_user(request, roles)

    return _dep
