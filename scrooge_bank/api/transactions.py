"""
Transaction history endpoint.
"""

from fastapi import APIRouter, Depends

from scrooge_bank.api.deps import get_current_user, get_store
from scrooge_bank.models.user import User
from scrooge_bank.schemas.transaction import TransactionResponse
from scrooge_bank.services.ledger_store import LedgerStore

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.get("", response_model=list[TransactionResponse])
def list_transactions(
    user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store),
):
    """Every ledger row for the caller's accounts and loans, oldest first."""
    return store.list_transactions_for_user(user.id)
