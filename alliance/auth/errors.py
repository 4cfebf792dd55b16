"""Authentication and authorization failures, converted to responses at the request boundary."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from alliance.models import User


class AuthError(Exception):
    """Base class for every auth failure."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidCredentials(AuthError):
    """Raised by login for an unknown username or a wrong password (same message for both)."""

    def __init__(self) -> None:
        super().__init__("Invalid username or password.")


class Unauthenticated(AuthError):
    """Raised when a protected action is requested without a usable session."""

    def __init__(self, redirect_to: str = "/") -> None:
        self.redirect_to = redirect_to
        super().__init__("Not authenticated")


class NotFound(AuthError):
    """Raised when a session references a user that no longer exists."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class Unauthorized(AuthError):
    """Raised when the user's role is not in an action's explicit allow-list."""

    def __init__(self, user: User) -> None:
        self.user = user
        super().__init__("You are not allowed to perform this action.")


class Forbidden(AuthError):
    """Raised when the default allow-list rejects the user."""

    def __init__(self, user: User) -> None:
        self.user = user
        super().__init__("You do not have access to this page.")
