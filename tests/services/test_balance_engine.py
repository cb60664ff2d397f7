"""
Tests for the BalanceEngine money rules.

No database: the engine only does arithmetic and decisions.
"""

from decimal import Decimal

import pytest

from scrooge_bank.exceptions import (
    BankInsufficientCapacity,
    InsufficientFunds,
    ValidationError,
)
from scrooge_bank.models.enums import LoanStatus
from scrooge_bank.services.balance_engine import BalanceEngine, ReservePolicy


@pytest.fixture
def engine():
    return BalanceEngine(ReservePolicy(starting_reserve=250_000, deposit_ratio=Decimal("0.25")))


class TestAmounts:

    @pytest.mark.parametrize("amount", [0, -1, True, 1.5, "10"])
    def test_rejects_non_positive_or_non_integer(self, engine, amount):
        with pytest.raises(ValidationError):
            engine.require_positive_amount(amount)

    def test_accepts_one(self, engine):
        assert engine.require_positive_amount(1) == 1


class TestDepositWithdraw:

    def test_deposit_adds(self, engine):
        assert engine.deposit(100, 50) == 150

    def test_withdraw_subtracts(self, engine):
        assert engine.withdraw(800, 200) == 600

    def test_withdraw_entire_balance(self, engine):
        assert engine.withdraw(800, 800) == 0

    def test_withdraw_more_than_balance_rejected(self, engine):
        with pytest.raises(InsufficientFunds):
            engine.withdraw(800, 999_999)

    def test_deposit_then_withdraw_round_trips(self, engine):
        for start, amount in [(0, 1), (800, 200), (12_345, 99_999)]:
            assert engine.withdraw(engine.deposit(start, amount), amount) == start

    def test_no_sequence_goes_negative(self, engine):
        balance = 0
        for op, amount in [("d", 500), ("w", 200), ("w", 400), ("w", 300), ("d", 1), ("w", 1)]:
            try:
                if op == "d":
                    balance = engine.deposit(balance, amount)
                else:
                    balance = engine.withdraw(balance, amount)
            except InsufficientFunds:
                pass
            assert balance >= 0
        assert balance == 0


class TestBankCapacity:

    def test_no_deposits_is_starting_reserve(self, engine):
        assert engine.bank_on_hand(0) == 250_000

    def test_quarter_of_deposits_is_added(self, engine):
        assert engine.bank_on_hand(1000) == 250_250

    def test_share_is_floored(self, engine):
        # 0.25 * 803 = 200.75
        assert engine.bank_on_hand(803) == 250_200

    def test_policy_is_overridable(self):
        engine = BalanceEngine(ReservePolicy(starting_reserve=0, deposit_ratio=Decimal("0.1")))
        assert engine.bank_on_hand(1_000) == 100

    def test_policy_defaults_from_settings(self):
        policy = ReservePolicy.from_settings()
        assert policy.starting_reserve == 250_000
        assert policy.deposit_ratio == Decimal("0.25")


class TestLoanDecision:

    def test_approves_within_capacity(self, engine):
        assert engine.approve_loan(50_000, total_deposits=800, total_outstanding=0) == 50_000

    def test_approves_exactly_available(self, engine):
        assert engine.approve_loan(250_000, total_deposits=0, total_outstanding=0) == 250_000

    def test_rejects_over_capacity(self, engine):
        with pytest.raises(BankInsufficientCapacity):
            engine.approve_loan(250_001, total_deposits=0, total_outstanding=0)

    def test_outstanding_loans_reduce_availability(self, engine):
        assert engine.available_for_loans(4_000, 200_000) == 51_000
        with pytest.raises(BankInsufficientCapacity):
            engine.approve_loan(51_001, total_deposits=4_000, total_outstanding=200_000)


class TestLoanPayment:

    def test_partial_payment(self, engine):
        result = engine.pay_loan(50_000, 10_000)
        assert result.outstanding == 40_000
        assert result.status == LoanStatus.OPEN

    def test_exact_payment_closes(self, engine):
        result = engine.pay_loan(40_000, 40_000)
        assert result.outstanding == 0
        assert result.status == LoanStatus.CLOSED

    def test_overpayment_is_capped(self, engine):
        result = engine.pay_loan(100, 5_000)
        assert result.outstanding == 0
        assert result.status == LoanStatus.CLOSED
