"""
Pydantic schemas for loans and the admin status view.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from scrooge_bank.models.enums import LoanStatus


class LoanResponse(BaseModel):
    id: int
    user_id: int
    principal: int
    outstanding: int
    interest_rate: float
    status: LoanStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class BankStatusResponse(BaseModel):
    """Admin solvency view. Field names on the wire are camelCase."""
    bank_on_hand: int = Field(serialization_alias="bankOnHand")
    total_loans: int = Field(serialization_alias="totalLoans")
    total_deposits: int = Field(serialization_alias="totalDeposits")

    model_config = {"from_attributes": True}
