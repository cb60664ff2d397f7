"""Business logic services."""

from scrooge_bank.services.ledger_store import LedgerStore
from scrooge_bank.services.balance_engine import BalanceEngine, ReservePolicy
from scrooge_bank.services.auth_service import AuthService
from scrooge_bank.services.account_service import AccountService
from scrooge_bank.services.loan_service import LoanService

__all__ = [
    "LedgerStore",
    "BalanceEngine",
    "ReservePolicy",
    "AuthService",
    "AccountService",
    "LoanService",
]
