"""Pydantic schemas."""
from customs_fx.schemas.auth import Token, UserCreate, UserLogin, UserResponse
from customs_fx.schemas.currency import CurrencyResponse, ExchangeRateResponse
from customs_fx.schemas.transaction import (
    Pagination,
    TransactionCreate,
    TransactionFilters,
    TransactionPage,
    TransactionResponse,
    UserSummary,
)
from customs_fx.schemas.user import AdminUserCreate, AdminUserResponse, AdminUserUpdate

__all__ = [
    "Token",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "CurrencyResponse",
    "ExchangeRateResponse",
    "Pagination",
    "TransactionCreate",
    "TransactionFilters",
    "TransactionPage",
    "TransactionResponse",
    "UserSummary",
    "AdminUserCreate",
    "AdminUserResponse",
    "AdminUserUpdate",
]
