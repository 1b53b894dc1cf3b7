"""Declaration/invoice currency transaction."""
from datetime import date, datetime
from decimal import Decimal
from enum import Enum as PyEnum

from sqlalchemy import Date, DateTime, Enum, ForeignKey, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from customs_fx.database import Base


class RateSource(str, PyEnum):
    BOT = "BOT"
    MANUAL = "MANUAL"
    # Local currency, rate fixed at 1
    SYSTEM = "SYSTEM"


class Transaction(Base):
    """One customs declaration / invoice amount converted to THB.

    thb_amount is derived from foreign_amount and exchange_rate on every save.
    """

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    declaration_number: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    declaration_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    invoice_number: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    invoice_date: Mapped[date] = mapped_column(Date, nullable=False)
    currency_code: Mapped[str] = mapped_column(ForeignKey("currencies.code"), nullable=False)
    foreign_amount: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False)
    exchange_rate: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    thb_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    rate_date: Mapped[date] = mapped_column(Date, nullable=False)
    rate_source: Mapped[RateSource] = mapped_column(
        Enum(RateSource, name="rate_source"),
        nullable=False,
        default=RateSource.BOT,
    )
    created_by: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user: Mapped["User"] = relationship("User", back_populates="transactions")
    currency: Mapped["Currency"] = relationship("Currency")
