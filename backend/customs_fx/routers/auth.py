"""Auth API routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from customs_fx.auth.deps import get_current_user
from customs_fx.database import get_db
from customs_fx.errors import Unauthenticated
from customs_fx.models.user import User
from customs_fx.schemas.auth import Token, UserCreate, UserLogin, UserResponse
from customs_fx.services.auth_service import authenticate_user, create_user, issue_token

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(
    data: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    user = await create_user(db, data)
    return issue_token(user)


@router.post("/login", response_model=Token)
async def login(
    data: UserLogin,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    user = await authenticate_user(db, data)
    if not user:
        raise Unauthenticated("Invalid email or password")
    return issue_token(user)


@router.get("/me", response_model=UserResponse)
async def me(user: Annotated[User, Depends(get_current_user)]):
    return UserResponse.model_validate(user)
