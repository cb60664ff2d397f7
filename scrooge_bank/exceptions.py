"""
Domain errors raised by the services.

Each error carries the HTTP status the API layer should answer
with. Services never import FastAPI; routers translate these
into HTTPException.
"""


class BankError(Exception):
    """Base class for every error the API reports to the caller."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BankError):
    """Malformed or out-of-range input."""
    status_code = 400


class Unauthorized(BankError):
    """Missing, malformed, mis-signed or expired credential."""
    status_code = 401


class Forbidden(BankError):
    """Authenticated, but not allowed to perform the operation."""
    status_code = 403


class NotFound(BankError):
    """Resource absent or invisible to the caller."""
    status_code = 404


class InsufficientFunds(BankError):
    status_code = 400


class BankInsufficientCapacity(BankError):
    status_code = 400


class DuplicateIdentity(BankError):
    status_code = 400


class AccountAlreadyOpen(ValidationError):
    pass


class AccountClosed(ValidationError):
    pass
