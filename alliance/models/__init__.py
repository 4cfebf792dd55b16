"""SQLAlchemy ORM models."""

from alliance.models.account import Account, Transaction, TransactionItem
from alliance.models.base import Base
from alliance.models.contact import Contact
from alliance.models.user import Password, User

__all__ = ["Account", "Base", "Contact", "Password", "Transaction", "TransactionItem", "User"]
