"""
Loan service: applications, payments, and the bank's solvency view.

A loan application reads two aggregates (all deposits, all
outstanding loans), decides, and inserts. That sequence must
run inside LedgerStore.atomic() so no other application can
slip in between the read and the write.
"""

from dataclasses import dataclass

from scrooge_bank.exceptions import BankInsufficientCapacity, NotFound, ValidationError
from scrooge_bank.logging_config import get_logger
from scrooge_bank.models.enums import TransactionType
from scrooge_bank.models.loan import Loan
from scrooge_bank.models.user import User
from scrooge_bank.services.balance_engine import BalanceEngine
from scrooge_bank.services.ledger_store import LedgerStore

logger = get_logger("loans")


@dataclass(frozen=True)
class BankStatus:
    bank_on_hand: int
    total_loans: int
    total_deposits: int


class LoanService:

    def __init__(self, store: LedgerStore, engine: BalanceEngine | None = None):
        self.store = store
        self.engine = engine or BalanceEngine()

    def bank_status(self) -> BankStatus:
        """Current capacity figures, as the admin dashboard shows them."""
        total_deposits = self.store.sum_account_balances()
        return BankStatus(
            bank_on_hand=self.engine.bank_on_hand(total_deposits),
            total_loans=self.store.sum_loan_outstanding(),
            total_deposits=total_deposits,
        )

    def apply(self, user: User, amount: int) -> Loan:
        """Disburse a loan if the bank's reserve can cover it."""
        total_deposits = self.store.sum_account_balances()
        total_outstanding = self.store.sum_loan_outstanding()

        try:
            principal = self.engine.approve_loan(
                amount, total_deposits, total_outstanding
            )
        except BankInsufficientCapacity:
            logger.warning(
                "Loan application rejected",
                extra={
                    "user_id": user.id,
                    "action": "apply_loan",
                    "extra": {
                        "amount": amount,
                        "available": self.engine.available_for_loans(
                            total_deposits, total_outstanding
                        ),
                    },
                },
            )
            raise

        loan = self.store.create_loan(user.id, principal)
        self.store.insert_transaction(
            type=TransactionType.LOAN_DISBURSEMENT,
            amount=principal,
            loan_id=loan.id,
            description="loan disbursed",
        )
        logger.info(
            "Loan disbursed",
            extra={
                "user_id": user.id,
                "action": "apply_loan",
                "resource": f"loan:{loan.id}",
                "extra": {"amount": principal},
            },
        )
        return loan

    def list_loans(self, user: User) -> list[Loan]:
        return self.store.list_loans_for_user(user.id)

    def get_loan(self, user: User, loan_id: int, for_update: bool = False) -> Loan:
        """Loans of other users are reported as not found."""
        loan = self.store.get_loan(loan_id, for_update=for_update)
        if not loan or loan.user_id != user.id:
            raise NotFound("Loan not found")
        return loan

    def pay(self, user: User, loan_id: int, amount: int) -> Loan:
        """
        Apply a payment to one of the caller's loans.

        Paying more than is outstanding closes the loan; the
        excess is kept by the bank, not refunded.
        """
        loan = self.get_loan(user, loan_id, for_update=True)
        if not loan.is_open:
            raise ValidationError("Loan is already closed")

        result = self.engine.pay_loan(loan.outstanding, amount)
        self.store.update_loan_outstanding(loan, result.outstanding, result.status)
        self.store.insert_transaction(
            type=TransactionType.LOAN_PAYMENT,
            amount=amount,
            loan_id=loan.id,
            description="loan payment",
        )
        logger.info(
            "Loan payment posted",
            extra={
                "user_id": user.id,
                "action": "pay_loan",
                "resource": f"loan:{loan.id}",
                "extra": {"amount": amount, "outstanding": result.outstanding},
            },
        )
        return loan
