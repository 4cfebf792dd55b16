"""User and credential store over SQLAlchemy."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from alliance.auth.roles import UserRole
from alliance.core.config import Settings
from alliance.core.security import hash_password
from alliance.models import Contact, Password, User

logger = logging.getLogger(__name__)


class UserService:
    """
    Reads and writes users and their credentials.

    Username matching follows settings.USERNAME_CASE_SENSITIVE instead of whatever the
    database collation happens to do. Store errors are not caught here.
    """

    def __init__(self, db: Session, settings: Settings) -> None:
        self.db = db
        self.settings = settings

    def _username_filter(self, username: str):
        if self.settings.USERNAME_CASE_SENSITIVE:
            return User.username == username
        return func.lower(User.username) == username.lower()

    def get_user_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        username = (username or "").strip()
        if not username:
            return None
        return self.db.query(User).filter(self._username_filter(username)).first()

    def get_credential_by_username(self, username: str) -> Password | None:
        user = self.get_user_by_username(username)
        if user is None:
            return None
        return user.password

    def upsert_credential(self, user_id: int, password_hash: str) -> Password:
        """Create or replace a user's password hash; the last write wins."""
        credential = self.db.query(Password).filter(Password.user_id == user_id).first()
        if credential is None:
            credential = Password(user_id=user_id, hash=password_hash)
            self.db.add(credential)
        else:
            credential.hash = password_hash
        self.db.commit()
        self.db.refresh(credential)
        return credential

    def reset_or_setup_password(self, user: User, password: str) -> Password:
        credential = self.upsert_credential(
            user.id, hash_password(password, rounds=self.settings.BCRYPT_ROUNDS)
        )
        logger.info("Password set for user_id=%s", user.id)
        return credential

    def create_user(
        self,
        *,
        username: str,
        first_name: str,
        last_name: str | None = None,
        role: UserRole = UserRole.USER,
        password: str | None = None,
    ) -> User:
        """Create a user with its contact profile and, when given, a password."""
        user = User(
            username=username.strip(),
            role=role,
            contact=Contact(first_name=first_name, last_name=last_name, email=username.strip()),
        )
        if password:
            user.password = Password(
                hash=hash_password(password, rounds=self.settings.BCRYPT_ROUNDS)
            )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info("Created user_id=%s role=%s", user.id, user.role.value)
        return user

    def update_user(
        self,
        user: User,
        *,
        first_name: str | None = None,
        last_name: str | None = None,
        username: str | None = None,
        role: UserRole | None = None,
    ) -> User:
        if first_name is not None:
            user.contact.first_name = first_name
        if last_name is not None:
            user.contact.last_name = last_name
        if username is not None:
            user.username = username.strip()
        if role is not None:
            user.role = role
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete_user(self, user: User) -> None:
        user_id = user.id
        self.db.delete(user)
        self.db.commit()
        logger.info("Deleted user_id=%s", user_id)
