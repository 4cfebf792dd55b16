"""Signed session cookie: encode a user id into a JWT and read it back."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import jwt
from fastapi import Request, Response
from jwt.utils import base64url_decode, base64url_encode

if TYPE_CHECKING:
    from alliance.core.config import Settings

logger = logging.getLogger(__name__)

COOKIE_NAME = "__session"
USER_SESSION_KEY = "userId"
REMEMBER_MAX_AGE_SECONDS = 60 * 60 * 24 * 7


def _is_canonical(token: str) -> bool:
    """True when every segment is exactly what re-encoding its bytes yields."""
    segments = token.split(".")
    if len(segments) != 3:
        return False
    try:
        return all(
            base64url_encode(base64url_decode(segment)) == segment.encode("ascii")
            for segment in segments
        )
    except (ValueError, TypeError):
        return False


class SessionCodec:
    """
    Stateless session stored client-side in a signed cookie.

    The cookie holds a JWT whose payload carries the user id under ``userId``. A
    "remember me" session gets an ``exp`` claim and a matching cookie Max-Age; any other
    session has neither and lasts as long as the browser keeps it.
    """

    def __init__(
        self,
        secret: str,
        *,
        cookie_name: str = COOKIE_NAME,
        algorithm: str = "HS256",
        remember_max_age: int = REMEMBER_MAX_AGE_SECONDS,
        secure: bool = False,
    ) -> None:
        if not secret:
            raise ValueError("Session secret must not be empty")
        self._secret = secret
        self.cookie_name = cookie_name
        self.algorithm = algorithm
        self.remember_max_age = remember_max_age
        self.secure = secure

    @classmethod
    def from_settings(cls, settings: Settings) -> SessionCodec:
        return cls(
            settings.SESSION_SECRET.get_secret_value(),
            cookie_name=settings.SESSION_COOKIE_NAME,
            algorithm=settings.SESSION_ALGORITHM,
            remember_max_age=settings.SESSION_REMEMBER_DAYS * 24 * 60 * 60,
            secure=settings.cookie_secure,
        )

    def encode(self, user_id: int, *, remember: bool = False) -> str:
        now = datetime.now(UTC)
        payload: dict[str, Any] = {USER_SESSION_KEY: user_id, "iat": now}
        if remember:
            payload["exp"] = now + timedelta(seconds=self.remember_max_age)
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def decode(self, token: str | None) -> int | None:
        """Return the user id in a token, or None for a missing, expired or tampered one."""
        if not token:
            return None
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except (jwt.PyJWTError, ValueError) as e:
            logger.debug("Rejected session cookie: %s", e)
            return None
        if not _is_canonical(token):
            return None
        user_id = payload.get(USER_SESSION_KEY)
        if isinstance(user_id, bool) or not isinstance(user_id, int) or user_id < 1:
            return None
        return user_id

    def cookie_settings(self) -> dict[str, Any]:
        return {"path": "/", "httponly": True, "samesite": "lax", "secure": self.secure}

    def read(self, request: Request) -> int | None:
        return self.decode(request.cookies.get(self.cookie_name))

    def commit(self, response: Response, user_id: int, *, remember: bool = False) -> None:
        response.set_cookie(
            self.cookie_name,
            self.encode(user_id, remember=remember),
            max_age=self.remember_max_age if remember else None,
            **self.cookie_settings(),
        )

    def destroy(self, response: Response) -> None:
        response.delete_cookie(self.cookie_name, **self.cookie_settings())
