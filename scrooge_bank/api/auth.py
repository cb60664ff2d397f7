"""
Registration and login endpoints.
"""

from fastapi import APIRouter, Depends

from scrooge_bank.api.deps import get_store, http_error
from scrooge_bank.exceptions import BankError
from scrooge_bank.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from scrooge_bank.services.auth_service import AuthService
from scrooge_bank.services.ledger_store import LedgerStore

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    request: RegisterRequest,
    store: LedgerStore = Depends(get_store),
):
    """Create a user and return it with a bearer token."""
    service = AuthService(store)
    try:
        with store.atomic():
            user, token = service.register(request)
        return AuthResponse(user=UserResponse.model_validate(user), token=token)
    except BankError as e:
        raise http_error(e)


@router.post("/login", response_model=AuthResponse)
def login(
    request: LoginRequest,
    store: LedgerStore = Depends(get_store),
):
    """Exchange email and password for a bearer token."""
    service = AuthService(store)
    try:
        user, token = service.login(request)
        return AuthResponse(user=UserResponse.model_validate(user), token=token)
    except BankError as e:
        raise http_error(e)
