"""Core app configuration and database."""

from alliance.core.config import Settings, get_settings
from alliance.core.database import Database, get_db

__all__ = ["Database", "Settings", "get_db", "get_settings"]
