"""
Loan endpoints: apply, pay, list, inspect.

Another user's loan is always reported as not found.
"""

from fastapi import APIRouter, Depends

from scrooge_bank.api.deps import get_current_user, get_store, http_error
from scrooge_bank.exceptions import BankError
from scrooge_bank.models.user import User
from scrooge_bank.schemas.account import AmountRequest
from scrooge_bank.schemas.loan import LoanResponse
from scrooge_bank.services.ledger_store import LedgerStore
from scrooge_bank.services.loan_service import LoanService

router = APIRouter(prefix="/loans", tags=["Loans"])


@router.post("", response_model=LoanResponse, status_code=201)
def apply_for_loan(
    request: AmountRequest,
    user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store),
):
    """
    Apply for a loan.

    Approved only if the bank's on-hand reserve, less what is
    already lent out, covers the requested amount.
    """
    service = LoanService(store)
    try:
        with store.atomic():
            loan = service.apply(user, request.amount)
        return loan
    except BankError as e:
        raise http_error(e)


@router.post("/{loan_id}/payments", response_model=LoanResponse)
def pay_loan(
    loan_id: int,
    request: AmountRequest,
    user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store),
):
    """Pay down a loan. Overpayment closes the loan without refund."""
    service = LoanService(store)
    try:
        with store.atomic():
            loan = service.pay(user, loan_id, request.amount)
        return loan
    except BankError as e:
        raise http_error(e)


@router.get("", response_model=list[LoanResponse])
def list_loans(
    user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store),
):
    return LoanService(store).list_loans(user)


@router.get("/{loan_id}", response_model=LoanResponse)
def get_loan(
    loan_id: int,
    user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store),
):
    service = LoanService(store)
    try:
        return service.get_loan(user, loan_id)
    except BankError as e:
        raise http_error(e)
