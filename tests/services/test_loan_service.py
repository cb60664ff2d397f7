"""
Tests for the LoanService: capacity decisions and repayments.
"""

from decimal import Decimal

import pytest

from scrooge_bank.exceptions import BankInsufficientCapacity, NotFound, ValidationError
from scrooge_bank.models.enums import AccountType, LoanStatus, TransactionType
from scrooge_bank.services.account_service import AccountService
from scrooge_bank.services.balance_engine import BalanceEngine, ReservePolicy
from scrooge_bank.services.loan_service import LoanService


@pytest.fixture
def service(store):
    return LoanService(store)


@pytest.fixture
def borrower(store, db_session):
    user = store.create_user(name="Fay", email="fay@example.com", password_hash="x")
    db_session.commit()
    return user


def apply(service, store, user, amount):
    with store.atomic():
        return service.apply(user, amount)


class TestApply:

    def test_loan_within_capacity_is_disbursed(self, service, store, borrower):
        loan = apply(service, store, borrower, 50_000)

        assert loan.principal == 50_000
        assert loan.outstanding == 50_000
        assert loan.status == LoanStatus.OPEN

        rows = store.list_transactions_for_user(borrower.id)
        assert len(rows) == 1
        assert rows[0].type == TransactionType.LOAN_DISBURSEMENT
        assert rows[0].loan_id == loan.id
        assert rows[0].balance_after is None

    def test_loan_over_capacity_is_rejected(self, service, store, borrower):
        with pytest.raises(BankInsufficientCapacity, match="Bank cannot cover this loan"):
            apply(service, store, borrower, 250_001)

        assert store.list_loans_for_user(borrower.id) == []
        assert store.list_transactions_for_user(borrower.id) == []

    def test_existing_loans_consume_capacity(self, service, store, borrower):
        apply(service, store, borrower, 200_000)
        apply(service, store, borrower, 50_000)

        with pytest.raises(BankInsufficientCapacity):
            apply(service, store, borrower, 1)

    def test_deposits_raise_capacity(self, service, store, borrower):
        accounts = AccountService(store)
        with store.atomic():
            account = accounts.open_account(borrower, AccountType.CHECKING)
            accounts.deposit(borrower, account.id, 4_000)

        apply(service, store, borrower, 251_000)

        with pytest.raises(BankInsufficientCapacity):
            apply(service, store, borrower, 1)

    def test_outstanding_never_exceeds_bank_on_hand(self, service, store, borrower):
        for amount in [100_000, 100_000, 40_000, 20_000, 10_000, 5_000]:
            try:
                apply(service, store, borrower, amount)
            except BankInsufficientCapacity:
                pass
            status = service.bank_status()
            assert status.total_loans <= status.bank_on_hand

    def test_custom_reserve_policy(self, store, borrower):
        engine = BalanceEngine(ReservePolicy(starting_reserve=1_000, deposit_ratio=Decimal("0.5")))
        service = LoanService(store, engine)

        with pytest.raises(BankInsufficientCapacity):
            apply(service, store, borrower, 1_001)
        assert apply(service, store, borrower, 1_000).principal == 1_000


class TestPay:

    def test_partial_payment(self, service, store, borrower):
        loan = apply(service, store, borrower, 50_000)

        with store.atomic():
            loan = service.pay(borrower, loan.id, 10_000)

        assert loan.outstanding == 40_000
        assert loan.status == LoanStatus.OPEN
        payment = store.list_transactions_for_user(borrower.id)[-1]
        assert payment.type == TransactionType.LOAN_PAYMENT
        assert payment.amount == 10_000

    def test_overpayment_closes_loan_at_zero(self, service, store, borrower):
        loan = apply(service, store, borrower, 1_000)

        with store.atomic():
            loan = service.pay(borrower, loan.id, 5_000)

        assert loan.outstanding == 0
        assert loan.principal == 1_000
        assert loan.status == LoanStatus.CLOSED

    def test_paying_closed_loan_rejected(self, service, store, borrower):
        loan = apply(service, store, borrower, 1_000)
        with store.atomic():
            service.pay(borrower, loan.id, 1_000)

        with pytest.raises(ValidationError, match="already closed"):
            service.pay(borrower, loan.id, 1)

    def test_other_users_loan_is_not_found(self, service, store, borrower, db_session):
        other = store.create_user(name="Gus", email="gus@example.com", password_hash="x")
        db_session.commit()
        loan = apply(service, store, borrower, 1_000)

        with pytest.raises(NotFound):
            service.pay(other, loan.id, 10)
        with pytest.raises(NotFound):
            service.get_loan(other, loan.id)

    def test_repayment_frees_capacity(self, service, store, borrower):
        loan = apply(service, store, borrower, 250_000)
        with store.atomic():
            service.pay(borrower, loan.id, 10_000)

        assert apply(service, store, borrower, 10_000).principal == 10_000


class TestBankStatus:

    def test_empty_bank(self, service):
        status = service.bank_status()

        assert status.bank_on_hand == 250_000
        assert status.total_loans == 0
        assert status.total_deposits == 0
