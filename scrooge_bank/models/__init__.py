"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from scrooge_bank.models.base import Base
from scrooge_bank.models.enums import (
    Role,
    AccountType,
    AccountStatus,
    LoanStatus,
    TransactionType,
)
from scrooge_bank.models.user import User
from scrooge_bank.models.account import Account
from scrooge_bank.models.loan import Loan
from scrooge_bank.models.transaction import Transaction

__all__ = [
    "Base",
    "Role",
    "AccountType",
    "AccountStatus",
    "LoanStatus",
    "TransactionType",
    "User",
    "Account",
    "Loan",
    "Transaction",
]
