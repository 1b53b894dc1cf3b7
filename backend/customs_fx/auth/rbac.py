"""Role-based access control for transactions."""
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy import Select

from customs_fx.errors import Forbidden
from customs_fx.models.transaction import Transaction
from customs_fx.models.user import Role, User


@dataclass(frozen=True)
class Principal:
    """The authenticated caller."""

    id: int
    role: Role

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(id=user.id, role=Role(user.role))

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


class Owned(Protocol):
    created_by: int


def can_access(principal: Principal, record: Owned) -> bool:
    """View/update/delete rule: admins see everything, users only their own rows."""
    if principal.role is Role.ADMIN:
        return True
    if principal.role is Role.USER:
        return record.created_by == principal.id
    raise ValueError(f"Unhandled role: {principal.role!r}")


def ensure_can_access(principal: Principal, record: Owned) -> None:
    if not can_access(principal, record):
        raise Forbidden()


def scope_transactions(query: Select, principal: Principal) -> Select:
    """Restrict a transaction query to the rows the principal may list."""
    if principal.role is Role.ADMIN:
        return query
    if principal.role is Role.USER:
        return query.where(Transaction.created_by == principal.id)
    raise ValueError(f"Unhandled role: {principal.role!r}")
