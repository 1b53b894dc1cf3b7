"""SQLAlchemy models."""
from customs_fx.models.currency import Currency
from customs_fx.models.transaction import RateSource, Transaction
from customs_fx.models.user import Role, User

__all__ = [
    "Currency",
    "RateSource",
    "Role",
    "Transaction",
    "User",
]
