"""Admin user management."""
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from customs_fx.errors import Conflict, NotFound
from customs_fx.logging_config import get_logger
from customs_fx.models.transaction import Transaction
from customs_fx.models.user import User
from customs_fx.schemas.user import AdminUserCreate, AdminUserResponse, AdminUserUpdate
from customs_fx.services.auth_service import create_user, email_taken

logger = get_logger("user_service")


async def count_transactions(db: AsyncSession, user_id: int) -> int:
    result = await db.execute(
        select(func.count()).select_from(Transaction).where(Transaction.created_by == user_id)
    )
    return result.scalar_one()


def _response(user: User, transaction_count: int) -> AdminUserResponse:
    return AdminUserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        created_at=user.created_at,
        transaction_count=transaction_count,
    )


async def list_users(db: AsyncSession) -> list[AdminUserResponse]:
    counts = (
        select(Transaction.created_by, func.count(Transaction.id).label("n"))
        .group_by(Transaction.created_by)
        .subquery()
    )
    result = await db.execute(
        select(User, func.coalesce(counts.c.n, 0))
        .outerjoin(counts, counts.c.created_by == User.id)
        .order_by(User.created_at.desc(), User.id.desc())
    )
    return [_response(user, n) for user, n in result.all()]


async def get_user(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise NotFound("User not found")
    return user


async def admin_create_user(db: AsyncSession, data: AdminUserCreate) -> AdminUserResponse:
    user = await create_user(db, data, role=data.role)
    return _response(user, 0)


async def update_user(db: AsyncSession, user_id: int, data: AdminUserUpdate) -> AdminUserResponse:
    user = await get_user(db, user_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in changes:
        changes["email"] = changes["email"].lower()
        if await email_taken(db, changes["email"], exclude_user_id=user_id):
            raise Conflict("Email already in use", {"email": ["Email already in use"]})
    for key, value in changes.items():
        setattr(user, key, value)
    await db.flush()
    await db.refresh(user)
    logger.info("Updated user id=%s fields=%s", user_id, sorted(changes))
    return _response(user, await count_transactions(db, user_id))


async def delete_user(db: AsyncSession, user_id: int) -> None:
    """Users who own transactions cannot be deleted."""
    user = await get_user(db, user_id)
    owned = await count_transactions(db, user_id)
    if owned:
        raise Conflict(
            "Cannot delete a user who has recorded transactions",
            {"transaction_count": [str(owned)]},
        )
    await db.delete(user)
    await db.flush()
    logger.info("Deleted user id=%s", user_id)
