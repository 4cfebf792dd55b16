"""Unit tests for alliance.auth.authenticator against an in-memory database."""

import unittest
from unittest.mock import patch

from sqlalchemy.exc import OperationalError
from fastapi import Response

from alliance.auth.authenticator import Authenticator
from alliance.auth.errors import InvalidCredentials
from alliance.auth.roles import UserRole
from alliance.auth.session import SessionCodec
from alliance.core import security
from alliance.services.users import UserService
from tests.support import PASSWORD, TEST_SECRET, add_user, make_database, make_settings


class AuthenticatorTestCase(unittest.TestCase):
    settings_overrides: dict = {}

    def setUp(self) -> None:
        self.database = make_database(make_settings(**self.settings_overrides))
        self.db = self.database.session()
        self.codec = SessionCodec(TEST_SECRET)
        self.users = UserService(self.db, self.database.settings)
        self.authenticator = Authenticator(self.codec, self.users)
        self.user_id = add_user(self.database, "paul@example.org", UserRole.SUPERADMIN)

    def tearDown(self) -> None:
        self.db.close()
        self.database.dispose()


class TestLogin(AuthenticatorTestCase):
    """Valid credentials produce a session for that user."""

    def test_valid_credentials_return_user(self) -> None:
        user = self.authenticator.login("paul@example.org", PASSWORD)
        self.assertEqual(user.id, self.user_id)
        self.assertEqual(user.role, UserRole.SUPERADMIN)

    def test_session_decodes_to_user_id(self) -> None:
        for remember in (False, True):
            with self.subTest(remember=remember):
                user = self.authenticator.login("paul@example.org", PASSWORD)
                response = Response()
                self.authenticator.create_session(response, user, remember=remember)
                cookie = response.headers["set-cookie"].split(";")[0]
                name, token = cookie.split("=", 1)
                self.assertEqual(name, "__session")
                self.assertEqual(self.codec.decode(token), self.user_id)

    def test_login_does_not_change_role(self) -> None:
        self.authenticator.login("paul@example.org", PASSWORD)
        self.db.expire_all()
        self.assertEqual(self.users.get_user_by_id(self.user_id).role, UserRole.SUPERADMIN)


class TestInvalidCredentials(AuthenticatorTestCase):
    """Unknown users, wrong passwords and missing passwords fail the same way."""

    def _failure(self, username: str, password: str) -> InvalidCredentials:
        with self.assertRaises(InvalidCredentials) as ctx:
            self.authenticator.login(username, password)
        return ctx.exception

    def test_failures_are_indistinguishable(self) -> None:
        add_user(self.database, "nopassword@example.org", password=None)
        failures = [
            self._failure("nobody@example.org", PASSWORD),
            self._failure("paul@example.org", "wrong-password"),
            self._failure("nopassword@example.org", PASSWORD),
            self._failure("", PASSWORD),
        ]
        self.assertEqual({(type(f), f.message) for f in failures}, {(InvalidCredentials, "Invalid username or password.")})

    def test_unknown_user_still_verifies_a_hash(self) -> None:
        with patch(
            "alliance.auth.authenticator.verify_password",
            wraps=security.verify_password,
        ) as verify:
            self._failure("nobody@example.org", PASSWORD)
            self._failure("paul@example.org", "wrong-password")
        self.assertEqual(verify.call_count, 2)

    def test_login_reads_the_credential_store(self) -> None:
        with patch.object(self.users, "get_credential_by_username", return_value=None) as lookup:
            self._failure("paul@example.org", PASSWORD)
        lookup.assert_called_once_with("paul@example.org")

    def test_store_failure_propagates(self) -> None:
        with patch.object(
            self.users,
            "get_user_by_username",
            side_effect=OperationalError("SELECT", {}, Exception("db down")),
        ):
            with self.assertRaises(OperationalError):
                self.authenticator.login("paul@example.org", PASSWORD)


class TestCaseSensitiveUsernames(AuthenticatorTestCase):
    """Default: usernames match exactly."""

    def test_different_case_is_rejected(self) -> None:
        with self.assertRaises(InvalidCredentials):
            self.authenticator.login("Paul@Example.org", PASSWORD)


class TestCaseInsensitiveUsernames(AuthenticatorTestCase):
    """USERNAME_CASE_SENSITIVE=False: usernames match ignoring case."""

    settings_overrides = {"USERNAME_CASE_SENSITIVE": False}

    def test_different_case_is_accepted(self) -> None:
        user = self.authenticator.login("Paul@Example.org", PASSWORD)
        self.assertEqual(user.id, self.user_id)


class TestPasswordReset(AuthenticatorTestCase):
    """set_password replaces the stored hash; the last write wins."""

    def test_new_password_replaces_old(self) -> None:
        user = self.users.get_user_by_id(self.user_id)
        self.authenticator.set_password(user, "first-new-password")
        self.authenticator.set_password(user, "second-new-password")
        with self.assertRaises(InvalidCredentials):
            self.authenticator.login("paul@example.org", PASSWORD)
        with self.assertRaises(InvalidCredentials):
            self.authenticator.login("paul@example.org", "first-new-password")
        self.assertEqual(self.authenticator.login("paul@example.org", "second-new-password").id, self.user_id)

    def test_setup_for_user_without_password(self) -> None:
        user_id = add_user(self.database, "new@example.org", password=None)
        user = self.users.get_user_by_id(user_id)
        self.assertIsNone(self.users.get_credential_by_username("new@example.org"))
        self.authenticator.set_password(user, "brand-new-password")
        self.assertIsNotNone(self.users.get_credential_by_username("new@example.org"))
        self.assertEqual(self.authenticator.login("new@example.org", "brand-new-password").id, user_id)

    def test_stored_hash_is_not_plaintext(self) -> None:
        credential = self.users.get_credential_by_username("paul@example.org")
        self.assertNotEqual(credential.hash, PASSWORD)
        self.assertTrue(security.verify_password(PASSWORD, credential.hash))


class TestLogout(AuthenticatorTestCase):
    """logout clears the cookie whether or not a session exists."""

    def test_logout_is_idempotent(self) -> None:
        for _ in range(2):
            response = Response()
            self.authenticator.logout(response)
            self.assertIn("Max-Age=0", response.headers["set-cookie"])
