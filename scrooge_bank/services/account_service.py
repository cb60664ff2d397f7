"""
Account service: opening, closing, deposits and withdrawals.

Ownership is settled here before the balance engine is asked
anything. Each successful balance change writes exactly one
ledger row, after the balance itself has been updated.
"""

from scrooge_bank.exceptions import (
    AccountAlreadyOpen,
    AccountClosed,
    Forbidden,
    InsufficientFunds,
    NotFound,
)
from scrooge_bank.logging_config import get_logger
from scrooge_bank.models.account import Account
from scrooge_bank.models.enums import AccountType, TransactionType
from scrooge_bank.models.transaction import Transaction
from scrooge_bank.models.user import User
from scrooge_bank.services.balance_engine import BalanceEngine
from scrooge_bank.services.ledger_store import LedgerStore

logger = get_logger("accounts")


class AccountService:

    def __init__(self, store: LedgerStore, engine: BalanceEngine | None = None):
        self.store = store
        self.engine = engine or BalanceEngine()

    def open_account(self, user: User, account_type: AccountType) -> Account:
        """Open an account. A user may hold only one open account."""
        if self.store.get_open_account_for_user(user.id):
            raise AccountAlreadyOpen("User already has an open account")

        account = self.store.create_account(user.id, account_type)
        logger.info(
            "Account opened",
            extra={
                "user_id": user.id,
                "action": "open_account",
                "resource": f"account:{account.id}",
            },
        )
        return account

    def list_accounts(self, user: User) -> list[Account]:
        return self.store.list_accounts_for_user(user.id)

    def get_account(self, user: User, account_id: int) -> Account:
        """Accounts of other users are reported as not found."""
        account = self.store.get_account(account_id)
        if not account or account.user_id != user.id:
            raise NotFound("Account not found")
        return account

    def close_account(self, user: User, account_id: int) -> Account:
        account = self.store.get_account(account_id, for_update=True)
        if not account or account.user_id != user.id:
            raise NotFound("Account not found")
        if not account.is_open:
            raise AccountClosed("Account is already closed")

        self.store.close_account(account)
        logger.info(
            "Account closed",
            extra={
                "user_id": user.id,
                "action": "close_account",
                "resource": f"account:{account.id}",
            },
        )
        return account

    def _load_for_mutation(self, user: User, account_id: int, verb: str) -> Account:
        # Unlike reads, a mutation on someone else's account is a 403
        account = self.store.get_account(account_id, for_update=True)
        if not account:
            raise NotFound("Account not found")
        if account.user_id != user.id:
            raise Forbidden(f"Cannot {verb} others accounts")
        if not account.is_open:
            raise AccountClosed("Account is closed")
        return account

    def deposit(self, user: User, account_id: int, amount: int) -> tuple[Account, Transaction]:
        account = self._load_for_mutation(user, account_id, "deposit to")

        new_balance = self.engine.deposit(account.balance, amount)
        self.store.update_account_balance(account, new_balance)
        txn = self.store.insert_transaction(
            type=TransactionType.DEPOSIT,
            amount=amount,
            account_id=account.id,
            balance_after=new_balance,
            description="deposit",
        )
        logger.info(
            "Deposit posted",
            extra={
                "user_id": user.id,
                "action": "deposit",
                "resource": f"account:{account.id}",
                "extra": {"amount": amount, "balance_after": new_balance},
            },
        )
        return account, txn

    def withdraw(self, user: User, account_id: int, amount: int) -> tuple[Account, Transaction]:
        account = self._load_for_mutation(user, account_id, "withdraw from")

        try:
            new_balance = self.engine.withdraw(account.balance, amount)
        except InsufficientFunds:
            logger.warning(
                "Withdrawal rejected",
                extra={
                    "user_id": user.id,
                    "action": "withdraw",
                    "resource": f"account:{account.id}",
                    "extra": {"amount": amount, "balance": account.balance},
                },
            )
            raise

        self.store.update_account_balance(account, new_balance)
        txn = self.store.insert_transaction(
            type=TransactionType.WITHDRAWAL,
            amount=amount,
            account_id=account.id,
            balance_after=new_balance,
            description="withdrawal",
        )
        logger.info(
            "Withdrawal posted",
            extra={
                "user_id": user.id,
                "action": "withdraw",
                "resource": f"account:{account.id}",
                "extra": {"amount": amount, "balance_after": new_balance},
            },
        )
        return account, txn
