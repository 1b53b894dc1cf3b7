"""Transaction schemas.

Amounts travel as strings in both directions so that no value passes
through a binary float.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from customs_fx.engine.currency import (
    EXCHANGE_RATE_SCALE,
    FOREIGN_AMOUNT_SCALE,
    THB_AMOUNT_SCALE,
    parse_decimal,
)
from customs_fx.models.transaction import RateSource
from customs_fx.schemas.currency import CurrencyResponse


class TransactionCreate(BaseModel):
    declaration_number: str = Field(..., min_length=1, max_length=100)
    declaration_date: date
    invoice_number: str = Field(..., min_length=1, max_length=100)
    invoice_date: date
    currency_code: str = Field(..., min_length=3, max_length=3)
    foreign_amount: str = Field(..., min_length=1)
    exchange_rate: str = Field(..., min_length=1)
    rate_date: date
    rate_source: Literal["BOT", "MANUAL"] = "BOT"
    notes: str | None = None

    @field_validator("declaration_number", "invoice_number")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("currency_code")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("notes")
    @classmethod
    def empty_notes_to_none(cls, v: str | None) -> str | None:
        return v or None


class UserSummary(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


def _fixed(value: Decimal | str, scale: int) -> str:
    return parse_decimal(str(value), scale)


class TransactionResponse(BaseModel):
    id: int
    declaration_number: str
    declaration_date: date
    invoice_number: str
    invoice_date: date
    currency_code: str
    foreign_amount: str
    exchange_rate: str
    thb_amount: str
    rate_date: date
    rate_source: RateSource
    created_by: int
    notes: str | None
    created_at: datetime | None
    updated_at: datetime | None
    user: UserSummary | None = None
    currency: CurrencyResponse | None = None

    @field_validator("foreign_amount", mode="before")
    @classmethod
    def format_foreign_amount(cls, v: Decimal | str) -> str:
        return _fixed(v, FOREIGN_AMOUNT_SCALE)

    @field_validator("exchange_rate", mode="before")
    @classmethod
    def format_exchange_rate(cls, v: Decimal | str) -> str:
        return _fixed(v, EXCHANGE_RATE_SCALE)

    @field_validator("thb_amount", mode="before")
    @classmethod
    def format_thb_amount(cls, v: Decimal | str) -> str:
        return _fixed(v, THB_AMOUNT_SCALE)

    class Config:
        from_attributes = True


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class TransactionPage(BaseModel):
    data: list[TransactionResponse]
    pagination: Pagination


class TransactionFilters(BaseModel):
    """List query: free-text search, currency and declaration date range."""

    search: str | None = None
    currency: str | None = None
    date_from: date | None = None
    date_to: date | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
