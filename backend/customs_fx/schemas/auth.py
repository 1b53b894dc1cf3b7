"""Auth schemas."""
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from customs_fx.auth.jwt import MAX_PASSWORD_BYTES
from customs_fx.models.user import Role


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class UserLogin(BaseModel):
    email: str  # str to allow dev/internal emails like admin@currency.local
    password: str


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
