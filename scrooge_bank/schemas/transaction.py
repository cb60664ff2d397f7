"""
Pydantic schemas for ledger rows.
"""

from datetime import datetime

from pydantic import BaseModel

from scrooge_bank.models.enums import TransactionType


class TransactionResponse(BaseModel):
    id: int
    account_id: int | None
    loan_id: int | None
    type: TransactionType
    amount: int
    balance_after: int | None
    description: str
    created_at: datetime

    model_config = {"from_attributes": True}
