"""
Loan model.

Principal is fixed when the loan is disbursed. Outstanding only
moves down, through payments, and the loan closes when it
reaches zero. interest_rate is recorded but never applied.
"""

from datetime import datetime

from sqlalchemy import (
    DateTime, BigInteger, Float, ForeignKey, CheckConstraint,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scrooge_bank.models.base import Base
from scrooge_bank.models.enums import LoanStatus, enum_values


class Loan(Base):
    __tablename__ = "loans"
    __table_args__ = (
        CheckConstraint("principal > 0", name="ck_loans_principal_positive"),
        CheckConstraint(
            "outstanding >= 0 AND outstanding <= principal",
            name="ck_loans_outstanding_within_principal",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, index=True
    )
    principal: Mapped[int] = mapped_column(BigInteger, nullable=False)
    outstanding: Mapped[int] = mapped_column(BigInteger, nullable=False)
    interest_rate: Mapped[float] = mapped_column(
        Float, nullable=False, default=0
    )
    status: Mapped[LoanStatus] = mapped_column(
        SAEnum(
            LoanStatus,
            name="loan_status_enum",
            values_callable=enum_values,
            create_constraint=True,
        ),
        nullable=False,
        default=LoanStatus.OPEN,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    user: Mapped["User"] = relationship(back_populates="loans")

    @property
    def is_open(self) -> bool:
        return self.status == LoanStatus.OPEN

    def __repr__(self) -> str:
        return (
            f"<Loan {self.id} {self.outstanding}/{self.principal} "
            f"({self.status.value})>"
        )
