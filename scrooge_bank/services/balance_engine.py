"""
Balance engine: the money rules, with no I/O.

Every method takes plain integers (minor units) and either
returns the new state or raises the business error that
forbids the operation. Services load the records, ask the
engine, then persist what it decided.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_FLOOR

from scrooge_bank.config import get_settings
from scrooge_bank.exceptions import (
    BankInsufficientCapacity,
    InsufficientFunds,
    ValidationError,
)
from scrooge_bank.models.enums import LoanStatus


@dataclass(frozen=True)
class ReservePolicy:
    """
    Fractional-reserve policy.

    The bank holds a fixed seed reserve plus a fraction of all
    customer deposits; only that much may be lent out at once.
    """
    starting_reserve: int = 250_000
    deposit_ratio: Decimal = Decimal("0.25")

    @classmethod
    def from_settings(cls) -> "ReservePolicy":
        settings = get_settings()
        return cls(
            starting_reserve=settings.BANK_STARTING_RESERVE,
            deposit_ratio=settings.BANK_DEPOSIT_RESERVE_RATIO,
        )


@dataclass(frozen=True)
class LoanPaymentResult:
    outstanding: int
    status: LoanStatus


class BalanceEngine:

    def __init__(self, policy: ReservePolicy | None = None):
        self.policy = policy or ReservePolicy.from_settings()

    @staticmethod
    def require_positive_amount(amount: int) -> int:
        # bool is an int subclass; True is not an amount
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 1:
            raise ValidationError("amount must be a positive integer")
        return amount

    def deposit(self, balance: int, amount: int) -> int:
        """New balance after a deposit. Always permitted."""
        self.require_positive_amount(amount)
        return balance + amount

    def withdraw(self, balance: int, amount: int) -> int:
        """New balance after a withdrawal; never goes below zero."""
        self.require_positive_amount(amount)
        if amount > balance:
            raise InsufficientFunds("Insufficient funds")
        return balance - amount

    def bank_on_hand(self, total_deposits: int) -> int:
        """Seed reserve plus the floored share of deposits kept on hand."""
        share = (Decimal(total_deposits) * self.policy.deposit_ratio).to_integral_value(
            rounding=ROUND_FLOOR
        )
        return self.policy.starting_reserve + int(share)

    def available_for_loans(self, total_deposits: int, total_outstanding: int) -> int:
        return self.bank_on_hand(total_deposits) - total_outstanding

    def approve_loan(
        self, requested: int, total_deposits: int, total_outstanding: int
    ) -> int:
        """
        Decide a loan application.

        Returns the principal to disburse, or raises
        BankInsufficientCapacity if the bank cannot cover it.
        """
        self.require_positive_amount(requested)
        available = self.available_for_loans(total_deposits, total_outstanding)
        if requested > available:
            raise BankInsufficientCapacity("Bank cannot cover this loan")
        return requested

    def pay_loan(self, outstanding: int, amount: int) -> LoanPaymentResult:
        """
        Apply a payment to a loan balance.

        Overpayment is capped at zero outstanding; the excess is
        not refunded.
        """
        self.require_positive_amount(amount)
        new_outstanding = max(0, outstanding - amount)
        status = LoanStatus.CLOSED if new_outstanding == 0 else LoanStatus.OPEN
        return LoanPaymentResult(outstanding=new_outstanding, status=status)
