"""Resolve the current user from the session cookie and enforce role policy."""

import logging
from collections.abc import Collection

from fastapi import Request

from alliance.auth.errors import Forbidden, NotFound, Unauthenticated, Unauthorized
from alliance.auth.roles import UserRole, is_role_allowed
from alliance.auth.session import SessionCodec
from alliance.models import User
from alliance.services.users import UserService

logger = logging.getLogger(__name__)

# request.state flag read by the app middleware, which clears the cookie on the way out.
CLEAR_SESSION_FLAG = "clear_session"


def authorize(user: User, allowed_roles: Collection[UserRole] | None = None) -> User:
    """
    Return user if the role policy grants access, else raise.

    Unauthorized means an explicit allow-list was not met; Forbidden means the default
    allow-list rejected the user.
    """
    if is_role_allowed(user.role, allowed_roles):
        return user
    if allowed_roles is not None:
        raise Unauthorized(user)
    raise Forbidden(user)


class Authorizer:
    """Per-request access checks; does at most one user lookup per call."""

    def __init__(self, codec: SessionCodec, users: UserService) -> None:
        self.codec = codec
        self.users = users

    def _load_user(self, user_id: int) -> User:
        user = self.users.get_user_by_id(user_id)
        if user is None:
            raise NotFound(user_id)
        return user

    def _drop_stale_session(self, request: Request, exc: NotFound) -> None:
        logger.warning("Session references missing user_id=%s; clearing it", exc.user_id)
        setattr(request.state, CLEAR_SESSION_FLAG, True)

    def resolve_user(self, request: Request) -> User | None:
        """The signed-in user, or None when there is no usable session."""
        user_id = self.codec.read(request)
        if user_id is None:
            return None
        try:
            return self._load_user(user_id)
        except NotFound as e:
            self._drop_stale_session(request, e)
            return None

    def require_user_id(self, request: Request, redirect_to: str | None = None) -> int:
        user_id = self.codec.read(request)
        if user_id is None:
            raise Unauthenticated(redirect_to or request.url.path)
        return user_id

    def require_user(
        self,
        request: Request,
        allowed_roles: Collection[UserRole] | None = None,
    ) -> User:
        user_id = self.require_user_id(request)
        try:
            user = self._load_user(user_id)
        except NotFound as e:
            self._drop_stale_session(request, e)
            raise Unauthenticated(request.url.path) from e
        return authorize(user, allowed_roles)
