"""
Pydantic schemas for accounts and balance operations.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from scrooge_bank.models.enums import AccountType, AccountStatus
from scrooge_bank.schemas.transaction import TransactionResponse

# Largest integer a JSON client can represent exactly
MAX_AMOUNT = 2**53 - 1


class AccountOpen(BaseModel):
    """Request to open a new account."""
    type: AccountType


class AmountRequest(BaseModel):
    """Body of a deposit, withdrawal, loan application or loan payment."""
    amount: int = Field(ge=1, le=MAX_AMOUNT)

    @field_validator("amount", mode="before")
    @classmethod
    def amount_must_not_be_bool(cls, v):
        # bool is an int subclass and would be coerced to 0 or 1
        if isinstance(v, bool):
            raise ValueError("amount must be an integer")
        return v


class AccountResponse(BaseModel):
    id: int
    user_id: int
    type: AccountType
    balance: int
    currency: str
    status: AccountStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class AccountOperationResponse(BaseModel):
    """The account after a deposit or withdrawal, and the ledger row it produced."""
    account: AccountResponse
    transaction: TransactionResponse


class CloseAccountResponse(BaseModel):
    ok: bool = True
