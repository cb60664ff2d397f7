"""
Shared FastAPI dependencies: storage and the authenticated caller.
"""

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from scrooge_bank.exceptions import BankError
from scrooge_bank.models.base import get_db
from scrooge_bank.models.user import User
from scrooge_bank.services.auth_service import AuthService
from scrooge_bank.services.ledger_store import LedgerStore


def get_store(db: Session = Depends(get_db)) -> LedgerStore:
    """One ledger store per request, over the request's session."""
    return LedgerStore(db)


def http_error(error: BankError) -> HTTPException:
    """Translate a domain error into the matching HTTP response."""
    headers = {"WWW-Authenticate": "Bearer"} if error.status_code == 401 else None
    return HTTPException(
        status_code=error.status_code, detail=error.message, headers=headers
    )


def get_current_user(
    authorization: str | None = Header(default=None),
    store: LedgerStore = Depends(get_store),
) -> User:
    """
    Resolve the caller from the Authorization header.

    The token only names the user; the record is re-read on
    every request so its current role is what counts.
    """
    try:
        return AuthService(store).authenticate(authorization)
    except BankError as e:
        raise http_error(e)


def require_admin(user: User = Depends(get_current_user)) -> User:
    try:
        return AuthService.require_admin(user)
    except BankError as e:
        raise http_error(e)
