"""Admin-only user management routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from customs_fx.auth.deps import require_admin
from customs_fx.database import get_db
from customs_fx.schemas.user import AdminUserCreate, AdminUserResponse, AdminUserUpdate
from customs_fx.services import user_service

router = APIRouter(prefix="/admin/users", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("", response_model=list[AdminUserResponse])
async def list_users(db: Annotated[AsyncSession, Depends(get_db)]):
    return await user_service.list_users(db)


@router.post("", response_model=AdminUserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: AdminUserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await user_service.admin_create_user(db, data)


@router.put("/{user_id}", response_model=AdminUserResponse)
async def update_user(
    user_id: int,
    data: AdminUserUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await user_service.update_user(db, user_id, data)


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await user_service.delete_user(db, user_id)
    return None
