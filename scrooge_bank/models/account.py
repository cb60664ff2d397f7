"""
Customer account model.

The balance is stored directly on the account in integer minor
units and is only ever changed by a deposit or a withdrawal.
Once closed, an account is terminal.
"""

from datetime import datetime

from sqlalchemy import (
    String, DateTime, BigInteger, ForeignKey, CheckConstraint,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scrooge_bank.models.base import Base
from scrooge_bank.models.enums import AccountType, AccountStatus, enum_values


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_accounts_balance_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, index=True
    )
    type: Mapped[AccountType] = mapped_column(
        SAEnum(
            AccountType,
            name="account_type_enum",
            values_callable=enum_values,
            create_constraint=True,
        ),
        nullable=False,
    )
    balance: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    currency: Mapped[str] = mapped_column(
        String(3), nullable=False, default="USD"
    )
    status: Mapped[AccountStatus] = mapped_column(
        SAEnum(
            AccountStatus,
            name="account_status_enum",
            values_callable=enum_values,
            create_constraint=True,
        ),
        nullable=False,
        default=AccountStatus.OPEN,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    user: Mapped["User"] = relationship(back_populates="accounts")

    @property
    def is_open(self) -> bool:
        return self.status == AccountStatus.OPEN

    def __repr__(self) -> str:
        return (
            f"<Account {self.id} "
            f"{self.type.value} ({self.status.value}) balance={self.balance}>"
        )
