"""Authentication service."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from customs_fx.auth.jwt import create_access_token, get_password_hash, verify_password
from customs_fx.errors import Conflict
from customs_fx.logging_config import get_logger
from customs_fx.models.user import Role, User
from customs_fx.schemas.auth import Token, UserCreate, UserLogin, UserResponse

logger = get_logger("auth_service")


async def email_taken(db: AsyncSession, email: str, exclude_user_id: int | None = None) -> bool:
    query = select(User.id).where(User.email == email.lower())
    if exclude_user_id is not None:
        query = query.where(User.id != exclude_user_id)
    result = await db.execute(query)
    return result.first() is not None


async def create_user(db: AsyncSession, data: UserCreate, role: Role = Role.USER) -> User:
    """Create a user; emails are unique case-insensitively."""
    if await email_taken(db, data.email):
        raise Conflict("Email already registered", {"email": ["Email already registered"]})
    user = User(
        name=data.name,
        email=data.email.lower(),
        hashed_password=get_password_hash(data.password),
        role=role,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    logger.info("Created user id=%s role=%s", user.id, role.value)
    return user


async def authenticate_user(db: AsyncSession, data: UserLogin) -> User | None:
    """Authenticate user by email and password."""
    result = await db.execute(select(User).where(User.email == data.email.strip().lower()))
    user = result.scalar_one_or_none()
    if not user or not verify_password(data.password, user.hashed_password):
        return None
    return user


def issue_token(user: User) -> Token:
    role = Role(user.role)
    return Token(
        access_token=create_access_token(user.id, role.value),
        user=UserResponse.model_validate(user),
    )
