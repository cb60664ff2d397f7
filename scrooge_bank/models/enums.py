"""
Shared enumerations for database models.

Values are the lowercase strings used on the wire, and the
database columns store those same values.
"""

import enum


class Role(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class AccountType(str, enum.Enum):
    """Kinds of customer account the bank offers."""
    CHECKING = "checking"


class AccountStatus(str, enum.Enum):
    OPEN = "open"
    CLOSED = "closed"


class LoanStatus(str, enum.Enum):
    OPEN = "open"
    CLOSED = "closed"


class TransactionType(str, enum.Enum):
    """What a ledger row records."""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    LOAN_DISBURSEMENT = "loan_disbursement"
    LOAN_PAYMENT = "loan_payment"


def enum_values(enum_cls) -> list[str]:
    """Persist enum values rather than member names."""
    return [member.value for member in enum_cls]
