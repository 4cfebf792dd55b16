"""
Create a user (e.g. the first superadmin). Run from project root:
  python -m alliance.scripts.create_user USERNAME PASSWORD [role] --first-name NAME
Example:
  python -m alliance.scripts.create_user paul@example.org your-secure-password SUPERADMIN --first-name Paul
"""
import argparse
import logging
import sys

from alliance.auth.roles import UserRole
from alliance.core.config import get_settings
from alliance.core.database import Database
from alliance.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
)
from alliance.services.users import UserService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create an Alliance user with a password.")
    parser.add_argument("username", help=f"Username, usually an email address (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=UserRole.USER.value,
        choices=[r.value for r in UserRole],
    )
    parser.add_argument("--first-name", default="Admin")
    parser.add_argument("--last-name", default=None)
    return parser


def main(argv: list[str] | None = None, database: Database | None = None) -> int:
    args = build_parser().parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if len(args.password) < PASSWORD_MIN_LEN or len(args.password) > PASSWORD_MAX_LEN:
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    database = database or Database(get_settings())
    db = database.session()
    try:
        users = UserService(db, database.settings)
        if users.get_user_by_username(username) is not None:
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        users.create_user(
            username=username,
            first_name=args.first_name,
            last_name=args.last_name,
            role=UserRole(args.role),
            password=args.password,
        )
        print(f"Created user '{username}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
