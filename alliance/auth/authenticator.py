"""Login and logout: turn credentials into a session cookie and back."""

import logging

from fastapi import Response

from alliance.auth.errors import InvalidCredentials
from alliance.auth.session import SessionCodec
from alliance.core.security import dummy_hash, verify_password
from alliance.models import User
from alliance.services.users import UserService

logger = logging.getLogger(__name__)


class Authenticator:
    """Verifies username/password pairs and issues or destroys sessions."""

    def __init__(self, codec: SessionCodec, users: UserService) -> None:
        self.codec = codec
        self.users = users

    def login(self, username: str, password: str) -> User:
        """
        Return the user owning these credentials or raise InvalidCredentials.

        Unknown usernames, users without a password and wrong passwords fail identically,
        and an unknown username still pays for one bcrypt check.
        """
        credential = self.users.get_credential_by_username(username)
        if credential is None:
            verify_password(password, dummy_hash(self.users.settings.BCRYPT_ROUNDS))
            logger.warning("Failed login for username=%r", username)
            raise InvalidCredentials()
        if not verify_password(password, credential.hash):
            logger.warning("Failed login for username=%r", username)
            raise InvalidCredentials()
        user = credential.user
        logger.info("Login succeeded for user_id=%s", user.id)
        return user

    def create_session(self, response: Response, user: User, *, remember: bool = False) -> None:
        self.codec.commit(response, user.id, remember=remember)

    def logout(self, response: Response) -> None:
        """Clear the session cookie; safe to call without an active session."""
        self.codec.destroy(response)

    def set_password(self, user: User, password: str) -> None:
        self.users.reset_or_setup_password(user, password)
