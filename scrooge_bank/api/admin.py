"""
Administrative endpoints.
"""

from fastapi import APIRouter, Depends

from scrooge_bank.api.deps import get_store, require_admin
from scrooge_bank.models.user import User
from scrooge_bank.schemas.loan import BankStatusResponse
from scrooge_bank.services.ledger_store import LedgerStore
from scrooge_bank.services.loan_service import LoanService

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/status", response_model=BankStatusResponse)
def bank_status(
    admin: User = Depends(require_admin),
    store: LedgerStore = Depends(get_store),
):
    """
    Solvency view: reserve on hand, total lent out, total deposits.

    bankOnHand is lending capacity under the reserve policy,
    not literal cash.
    """
    return LoanService(store).bank_status()
