"""Owner-or-admin access rule."""
from types import SimpleNamespace

import pytest
from sqlalchemy import select

from customs_fx.auth.rbac import Principal, can_access, ensure_can_access, scope_transactions
from customs_fx.errors import Forbidden
from customs_fx.models.transaction import Transaction
from customs_fx.models.user import Role

record = SimpleNamespace(created_by=7)


def test_owner_can_access():
    assert can_access(Principal(id=7, role=Role.USER), record)


def test_other_user_cannot_access():
    principal = Principal(id=8, role=Role.USER)
    assert not can_access(principal, record)
    with pytest.raises(Forbidden):
        ensure_can_access(principal, record)


def test_admin_can_access_anything():
    assert can_access(Principal(id=1, role=Role.ADMIN), record)


def test_principal_from_user():
    user = SimpleNamespace(id=3, role="admin")
    principal = Principal.from_user(user)
    assert principal == Principal(id=3, role=Role.ADMIN)
    assert principal.is_admin


def test_scope_restricts_non_admin():
    query = scope_transactions(select(Transaction), Principal(id=5, role=Role.USER))
    assert "created_by" in str(query.whereclause)


def test_scope_leaves_admin_unrestricted():
    query = scope_transactions(select(Transaction), Principal(id=1, role=Role.ADMIN))
    assert query.whereclause is None
