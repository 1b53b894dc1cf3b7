"""Auth dependencies for FastAPI."""
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from customs_fx.auth.jwt import decode_token
from customs_fx.auth.rbac import Principal
from customs_fx.database import get_db
from customs_fx.errors import Forbidden, Unauthenticated
from customs_fx.models.user import User

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    if not credentials:
        raise Unauthenticated("Not authenticated")
    payload = decode_token(credentials.credentials)
    if not payload:
        raise Unauthenticated("Invalid or expired token")
    user_id = payload.get("sub")
    if not user_id or not str(user_id).isdigit():
        raise Unauthenticated("Invalid token")

    user = await db.get(User, int(user_id))
    if not user:
        raise Unauthenticated("User not found")
    return user


async def get_principal(user: Annotated[User, Depends(get_current_user)]) -> Principal:
    return Principal.from_user(user)


async def require_admin(principal: Annotated[Principal, Depends(get_principal)]) -> Principal:
    if not principal.is_admin:
        raise Forbidden("Forbidden: Admin access required")
    return principal
