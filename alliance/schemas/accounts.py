"""Response schemas for account listings."""

from pydantic import BaseModel, Field


class AccountBalance(BaseModel):
    """One account and the sum of its transaction line items."""

    id: int
    code: str
    description: str
    balance_in_cents: int = Field(..., description="Sum of all line items, in cents")


class AccountsResponse(BaseModel):
    """Response for GET /accounts (admin only)."""

    accounts: list[AccountBalance]
