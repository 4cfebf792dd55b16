"""ORM models for fund accounts and the transactions posted to them."""

from datetime import date

from sqlalchemy import Column, Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from alliance.models.base import Base


class Account(Base):
    """A fund account; its balance is the sum of its transaction line items."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(64), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=False, default="")
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    transactions = relationship("Transaction", back_populates="account")


class Transaction(Base):
    """A dated posting against one account, made of one or more line items."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, default=date.today)
    description = Column(Text, nullable=True)

    account = relationship("Account", back_populates="transactions")
    items = relationship("TransactionItem", back_populates="transaction", cascade="all, delete-orphan")


class TransactionItem(Base):
    """One line item; amounts are integer cents, negative for expenses."""

    __tablename__ = "transaction_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    transaction_id = Column(
        Integer,
        ForeignKey("transactions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount_in_cents = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)

    transaction = relationship("Transaction", back_populates="items")
