"""
Account endpoints: open, list, inspect, close, deposit, withdraw.

Reads and closes treat other users' accounts as invisible (404).
Deposits and withdrawals distinguish a missing account (404)
from one that belongs to someone else (403).
"""

from fastapi import APIRouter, Depends

from scrooge_bank.api.deps import get_current_user, get_store, http_error
from scrooge_bank.exceptions import BankError
from scrooge_bank.models.user import User
from scrooge_bank.schemas.account import (
    AccountOpen,
    AccountOperationResponse,
    AccountResponse,
    AmountRequest,
    CloseAccountResponse,
)
from scrooge_bank.schemas.transaction import TransactionResponse
from scrooge_bank.services.account_service import AccountService
from scrooge_bank.services.ledger_store import LedgerStore

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.post("", response_model=AccountResponse, status_code=201)
def open_account(
    request: AccountOpen,
    user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store),
):
    """Open an account. Only one open account per user."""
    service = AccountService(store)
    try:
        with store.atomic():
            account = service.open_account(user, request.type)
        return account
    except BankError as e:
        raise http_error(e)


@router.get("", response_model=list[AccountResponse])
def list_accounts(
    user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store),
):
    """All of the caller's accounts, open and closed."""
    return AccountService(store).list_accounts(user)


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store),
):
    service = AccountService(store)
    try:
        return service.get_account(user, account_id)
    except BankError as e:
        raise http_error(e)


@router.delete("/{account_id}", response_model=CloseAccountResponse)
def close_account(
    account_id: int,
    user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store),
):
    """Close an account. Closing is permanent."""
    service = AccountService(store)
    try:
        with store.atomic():
            service.close_account(user, account_id)
        return CloseAccountResponse(ok=True)
    except BankError as e:
        raise http_error(e)


@router.post("/{account_id}/deposits", response_model=AccountOperationResponse)
def deposit(
    account_id: int,
    request: AmountRequest,
    user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store),
):
    """Deposit money into one of the caller's accounts."""
    service = AccountService(store)
    try:
        with store.atomic():
            account, txn = service.deposit(user, account_id, request.amount)
        return AccountOperationResponse(
            account=AccountResponse.model_validate(account),
            transaction=TransactionResponse.model_validate(txn),
        )
    except BankError as e:
        raise http_error(e)


@router.post("/{account_id}/withdrawals", response_model=AccountOperationResponse)
def withdraw(
    account_id: int,
    request: AmountRequest,
    user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store),
):
    """Withdraw money; rejected if it would overdraw the account."""
    service = AccountService(store)
    try:
        with store.atomic():
            account, txn = service.withdraw(user, account_id, request.amount)
        return AccountOperationResponse(
            account=AccountResponse.model_validate(account),
            transaction=TransactionResponse.model_validate(txn),
        )
    except BankError as e:
        raise http_error(e)
