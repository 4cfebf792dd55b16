"""Shared test builders: settings, an in-memory database and an app wired to both."""

import unittest
from typing import Any

from fastapi.testclient import TestClient

from alliance.auth.roles import UserRole
from alliance.auth.session import SessionCodec
from alliance.core.config import Settings
from alliance.core.database import Database
from alliance.main import create_app
from alliance.models import Account, Transaction, TransactionItem, User
from alliance.services.users import UserService

PASSWORD = "correct-horse-battery"
TEST_SECRET = "test-session-secret"


def make_settings(**overrides: Any) -> Settings:
    """Settings for tests: in-memory SQLite, fixed secret, cheap bcrypt, no .env file."""
    values: dict[str, Any] = {
        "DATABASE_URL": "sqlite://",
        "SESSION_SECRET": TEST_SECRET,
        "BCRYPT_ROUNDS": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_database(settings: Settings | None = None) -> Database:
    database = Database(settings or make_settings())
    database.create_all()
    return database


def add_user(
    database: Database,
    username: str,
    role: UserRole = UserRole.USER,
    password: str | None = PASSWORD,
    first_name: str = "Test",
) -> int:
    """Insert a user (with contact and optional password) and return its id."""
    db = database.session()
    try:
        user = UserService(db, database.settings).create_user(
            username=username,
            first_name=first_name,
            last_name="User",
            role=role,
            password=password,
        )
        return user.id
    finally:
        db.close()


def delete_user(database: Database, user_id: int) -> None:
    db = database.session()
    try:
        users = UserService(db, database.settings)
        users.delete_user(users.get_user_by_id(user_id))
    finally:
        db.close()


def get_user(database: Database, user_id: int) -> User | None:
    db = database.session()
    try:
        user = db.get(User, user_id)
        if user is not None:
            # Touch relationships before the session closes.
            _ = user.contact, user.password
        return user
    finally:
        db.close()


def count_users(database: Database) -> int:
    db = database.session()
    try:
        return db.query(User).count()
    finally:
        db.close()


def add_account(database: Database, code: str, amounts: list[list[int]] | None = None) -> int:
    """Insert an account with one transaction per inner list of line-item amounts."""
    db = database.session()
    try:
        account = Account(code=code, description=f"{code} fund")
        for item_amounts in amounts or []:
            account.transactions.append(
                Transaction(items=[TransactionItem(amount_in_cents=a) for a in item_amounts])
            )
        db.add(account)
        db.commit()
        return account.id
    finally:
        db.close()


class AppTestCase(unittest.TestCase):
    """Builds a fresh app, database and client per test."""

    settings_overrides: dict[str, Any] = {}

    def setUp(self) -> None:
        self.settings = make_settings(**self.settings_overrides)
        self.database = make_database(self.settings)
        self.app = create_app(self.settings, database=self.database)
        self.codec: SessionCodec = self.app.state.session_codec
        self.client = TestClient(self.app)

    def tearDown(self) -> None:
        self.client.close()
        self.database.dispose()

    def sign_in(self, user_id: int, *, remember: bool = False) -> None:
        """Put a valid session cookie for user_id in the client's jar."""
        self.client.cookies.set(self.codec.cookie_name, self.codec.encode(user_id, remember=remember))

    def add_user(self, username: str, role: UserRole = UserRole.USER, **kwargs: Any) -> int:
        return add_user(self.database, username, role, **kwargs)
