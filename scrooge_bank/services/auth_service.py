"""
Auth service: registration, login, and resolving the caller.

Tokens are never trusted as the source of truth for the user.
Every request re-loads the user record by the id in the token,
so a deleted user or a changed role takes effect immediately.
"""

from scrooge_bank.exceptions import Forbidden, Unauthorized, ValidationError
from scrooge_bank.logging_config import get_logger
from scrooge_bank.models.user import User
from scrooge_bank.schemas.auth import RegisterRequest, LoginRequest
from scrooge_bank.security import (
    hash_secret,
    issue_credential,
    parse_authorization_header,
    verify_credential,
    verify_secret,
)
from scrooge_bank.services.ledger_store import LedgerStore

logger = get_logger("auth")


class AuthService:

    def __init__(self, store: LedgerStore):
        self.store = store

    def register(self, request: RegisterRequest) -> tuple[User, str]:
        """Create a user and return it with a fresh token."""
        user = self.store.create_user(
            name=request.name,
            email=request.email,
            password_hash=hash_secret(request.password),
        )
        logger.info(
            "User registered",
            extra={"user_id": user.id, "action": "register"},
        )
        return user, issue_credential(user.id, user.role.value)

    def login(self, request: LoginRequest) -> tuple[User, str]:
        """
        Check credentials and issue a token.

        Unknown email and wrong password fail identically so the
        response does not reveal which emails are registered.
        """
        user = self.store.get_user_by_email(request.email)
        if not user or not verify_secret(request.password, user.password_hash):
            logger.warning("Login failed", extra={"action": "login"})
            raise ValidationError("Invalid credentials")

        logger.info("User logged in", extra={"user_id": user.id, "action": "login"})
        return user, issue_credential(user.id, user.role.value)

    def authenticate(self, authorization: str | None) -> User:
        """Resolve the live user behind an Authorization header."""
        token = parse_authorization_header(authorization)
        claims = verify_credential(token)
        user = self.store.get_user(claims["id"])
        if not user:
            raise Unauthorized("User not found")
        return user

    @staticmethod
    def require_admin(user: User) -> User:
        if not user.is_admin:
            raise Forbidden("Forbidden")
        return user
