"""Admin user management schemas."""
from pydantic import BaseModel, EmailStr, Field

from customs_fx.models.user import Role
from customs_fx.schemas.auth import UserCreate, UserResponse


class AdminUserCreate(UserCreate):
    role: Role = Role.USER


class AdminUserUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    role: Role | None = None


class AdminUserResponse(UserResponse):
    transaction_count: int = 0
