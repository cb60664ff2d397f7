"""
Transaction model.

One immutable ledger row per balance-affecting operation.
Rows are append-only: an UPDATE on an existing row is refused
before it reaches the database.
"""

from datetime import datetime

from sqlalchemy import (
    String, DateTime, BigInteger, ForeignKey, CheckConstraint,
    Enum as SAEnum, event,
)
from sqlalchemy.orm import Mapped, mapped_column

from scrooge_bank.models.base import Base
from scrooge_bank.models.enums import TransactionType, enum_values


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int | None] = mapped_column(
        ForeignKey("accounts.id"), nullable=True, index=True
    )
    loan_id: Mapped[int | None] = mapped_column(
        ForeignKey("loans.id"), nullable=True, index=True
    )
    type: Mapped[TransactionType] = mapped_column(
        SAEnum(
            TransactionType,
            name="transaction_type_enum",
            values_callable=enum_values,
            create_constraint=True,
        ),
        nullable=False,
    )
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    balance_after: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    description: Mapped[str] = mapped_column(
        String(255), nullable=False, default=""
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<Transaction {self.id} {self.type.value} {self.amount}>"


@event.listens_for(Transaction, "before_update")
def _refuse_ledger_update(mapper, connection, target):
    raise ValueError(f"Transaction {target.id} is immutable")
