"""
Ledger store: the only code that reads or writes bank records.

The store wraps a single SQLAlchemy session. It never commits
on its own; callers group their writes inside atomic(), which
serializes every mutating operation in the process behind one
lock and commits or rolls back as a unit.
"""

import threading
from contextlib import contextmanager

from sqlalchemy import select, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from scrooge_bank.exceptions import DuplicateIdentity
from scrooge_bank.models.account import Account
from scrooge_bank.models.enums import (
    AccountStatus,
    AccountType,
    LoanStatus,
    Role,
    TransactionType,
)
from scrooge_bank.models.loan import Loan
from scrooge_bank.models.transaction import Transaction
from scrooge_bank.models.user import User

# Serializes units of work within one process only; the row
# locks taken by for_update reads cover other processes on PostgreSQL.
_write_lock = threading.Lock()


class LedgerStore:

    def __init__(self, db: Session):
        self.db = db

    # --- Unit of work ---

    @contextmanager
    def atomic(self):
        """
        Run a read-decide-write sequence as one serialized unit.

        Commits when the block finishes, rolls back if it raises.
        """
        with _write_lock:
            try:
                yield self
                self.db.commit()
            except BaseException:
                self.db.rollback()
                raise

    # --- Users ---

    def create_user(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: Role = Role.USER,
    ) -> User:
        """Insert a user. Email must be unique."""
        if self.get_user_by_email(email):
            raise DuplicateIdentity("Email already in use")

        user = User(
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
        )
        self.db.add(user)
        try:
            self.db.flush()
        except IntegrityError:
            raise DuplicateIdentity("Email already in use")
        return user

    def get_user(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def get_user_by_email(self, email: str) -> User | None:
        return self.db.execute(
            select(User).where(User.email == email)
        ).scalar_one_or_none()

    # --- Accounts ---

    def create_account(
        self, user_id: int, account_type: AccountType, currency: str = "USD"
    ) -> Account:
        account = Account(
            user_id=user_id,
            type=account_type,
            balance=0,
            currency=currency,
            status=AccountStatus.OPEN,
        )
        self.db.add(account)
        self.db.flush()
        return account

    def get_account(self, account_id: int, for_update: bool = False) -> Account | None:
        """Fetch an account; for_update takes a row lock where supported."""
        query = select(Account).where(Account.id == account_id)
        if for_update:
            query = query.with_for_update()
        return self.db.execute(query).scalar_one_or_none()

    def get_open_account_for_user(self, user_id: int) -> Account | None:
        return self.db.execute(
            select(Account).where(
                Account.user_id == user_id,
                Account.status == AccountStatus.OPEN,
            )
        ).scalars().first()

    def list_accounts_for_user(self, user_id: int) -> list[Account]:
        accounts = self.db.execute(
            select(Account)
            .where(Account.user_id == user_id)
            .order_by(Account.id)
        ).scalars().all()
        return list(accounts)

    def update_account_balance(self, account: Account, new_balance: int) -> Account:
        account.balance = new_balance
        self.db.flush()
        return account

    def close_account(self, account: Account) -> Account:
        account.status = AccountStatus.CLOSED
        self.db.flush()
        return account

    # --- Loans ---

    def create_loan(self, user_id: int, amount: int) -> Loan:
        loan = Loan(
            user_id=user_id,
            principal=amount,
            outstanding=amount,
            interest_rate=0,
            status=LoanStatus.OPEN,
        )
        self.db.add(loan)
        self.db.flush()
        return loan

    def get_loan(self, loan_id: int, for_update: bool = False) -> Loan | None:
        query = select(Loan).where(Loan.id == loan_id)
        if for_update:
            query = query.with_for_update()
        return self.db.execute(query).scalar_one_or_none()

    def list_loans_for_user(self, user_id: int) -> list[Loan]:
        loans = self.db.execute(
            select(Loan).where(Loan.user_id == user_id).order_by(Loan.id)
        ).scalars().all()
        return list(loans)

    def update_loan_outstanding(
        self, loan: Loan, new_outstanding: int, status: LoanStatus
    ) -> Loan:
        loan.outstanding = new_outstanding
        loan.status = status
        self.db.flush()
        return loan

    # --- Transactions ---

    def insert_transaction(
        self,
        type: TransactionType,
        amount: int,
        account_id: int | None = None,
        loan_id: int | None = None,
        balance_after: int | None = None,
        description: str = "",
    ) -> Transaction:
        """Append one row to the ledger. Rows are never updated."""
        txn = Transaction(
            account_id=account_id,
            loan_id=loan_id,
            type=type,
            amount=amount,
            balance_after=balance_after,
            description=description,
        )
        self.db.add(txn)
        self.db.flush()
        return txn

    def list_transactions_for_user(self, user_id: int) -> list[Transaction]:
        """All ledger rows tied to the user's accounts or loans, oldest first."""
        rows = self.db.execute(
            select(Transaction)
            .outerjoin(Account, Transaction.account_id == Account.id)
            .outerjoin(Loan, Transaction.loan_id == Loan.id)
            .where(or_(Account.user_id == user_id, Loan.user_id == user_id))
            .order_by(Transaction.id)
        ).scalars().all()
        return list(rows)

    # --- Aggregates ---

    def sum_account_balances(self) -> int:
        """Sum of balances over every account, open or closed."""
        total = self.db.execute(
            select(func.coalesce(func.sum(Account.balance), 0))
        ).scalar()
        return int(total)

    def sum_loan_outstanding(self) -> int:
        total = self.db.execute(
            select(func.coalesce(func.sum(Loan.outstanding), 0))
        ).scalar()
        return int(total)
