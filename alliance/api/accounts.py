"""Account listing with balances (admins only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from alliance.api.deps import require_user
from alliance.auth.roles import UserRole
from alliance.core.database import get_db
from alliance.models import Account, User
from alliance.schemas.accounts import AccountBalance, AccountsResponse
from alliance.services.accounts import get_account_balance, list_account_balances

router = APIRouter()


def _account_balance(account: Account, balance_in_cents: int) -> AccountBalance:
    return AccountBalance(
        id=account.id,
        code=account.code,
        description=account.description or "",
        balance_in_cents=balance_in_cents,
    )


@router.get("", response_model=AccountsResponse)
def list_accounts(
    _admin: Annotated[User, Depends(require_user(UserRole.ADMIN))],
    db: Annotated[Session, Depends(get_db)],
) -> AccountsResponse:
    """All accounts ordered by code, each with the sum of its transaction line items."""
    rows = list_account_balances(db)
    return AccountsResponse(accounts=[_account_balance(a, b) for a, b in rows])


@router.get("/{account_id}", response_model=AccountBalance)
def get_account(
    account_id: int,
    _admin: Annotated[User, Depends(require_user(UserRole.ADMIN))],
    db: Annotated[Session, Depends(get_db)],
) -> AccountBalance:
    row = get_account_balance(db, account_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found")
    return _account_balance(*row)
