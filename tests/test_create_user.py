"""Tests for the create_user command-line script."""

import contextlib
import io
import unittest

from alliance.auth.roles import UserRole
from alliance.scripts.create_user import main
from alliance.services.users import UserService
from tests.support import make_database


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        self.database = make_database()

    def tearDown(self) -> None:
        self.database.dispose()

    def _run(self, *argv: str) -> int:
        with contextlib.redirect_stdout(io.StringIO()), contextlib.redirect_stderr(io.StringIO()):
            return main(list(argv), database=self.database)

    def test_creates_superadmin(self) -> None:
        code = self._run("paul@example.org", "a-good-password", "SUPERADMIN", "--first-name", "Paul")
        self.assertEqual(code, 0)
        db = self.database.session()
        try:
            user = UserService(db, self.database.settings).get_user_by_username("paul@example.org")
            self.assertEqual(user.role, UserRole.SUPERADMIN)
            self.assertEqual(user.contact.first_name, "Paul")
            self.assertIsNotNone(user.password)
        finally:
            db.close()

    def test_duplicate_is_refused(self) -> None:
        self.assertEqual(self._run("paul@example.org", "a-good-password"), 0)
        self.assertEqual(self._run("paul@example.org", "a-good-password"), 1)

    def test_short_password_is_refused(self) -> None:
        self.assertEqual(self._run("paul@example.org", "short"), 1)
