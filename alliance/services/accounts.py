"""Account balances: the sum of transaction line items per account."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from alliance.models import Account, Transaction, TransactionItem


def _balances_query(db: Session):
    balance = func.coalesce(func.sum(TransactionItem.amount_in_cents), 0)
    return (
        db.query(Account, balance.label("balance_in_cents"))
        .outerjoin(Transaction, Transaction.account_id == Account.id)
        .outerjoin(TransactionItem, TransactionItem.transaction_id == Transaction.id)
        .group_by(Account.id)
    )


def list_account_balances(db: Session) -> list[tuple[Account, int]]:
    """Every account with its balance in cents, ordered by code. Empty accounts have 0."""
    rows = _balances_query(db).order_by(Account.code).all()
    return [(account, int(balance)) for account, balance in rows]


def get_account_balance(db: Session, account_id: int) -> tuple[Account, int] | None:
    row = _balances_query(db).filter(Account.id == account_id).first()
    if row is None:
        return None
    account, balance = row
    return account, int(balance)
