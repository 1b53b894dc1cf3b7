"""Transaction API routes."""
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from customs_fx.auth.deps import get_principal
from customs_fx.auth.rbac import Principal
from customs_fx.config import Settings, get_settings
from customs_fx.database import get_db
from customs_fx.schemas.transaction import (
    TransactionCreate,
    TransactionFilters,
    TransactionPage,
    TransactionResponse,
)
from customs_fx.services import transaction_service

router = APIRouter(prefix="/transactions", tags=["transactions"])


def get_filters(
    settings: Annotated[Settings, Depends(get_settings)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int | None, Query(ge=1)] = None,
    search: str | None = None,
    currency: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> TransactionFilters:
    limit = min(limit or settings.default_page_size, settings.max_page_size)
    return TransactionFilters(
        search=search or None,
        currency=currency or None,
        date_from=date_from,
        date_to=date_to,
        page=page,
        limit=limit,
    )


@router.get("", response_model=TransactionPage)
async def list_transactions(
    filters: Annotated[TransactionFilters, Depends(get_filters)],
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    return await transaction_service.list_transactions(db, principal, filters)


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    transaction = await transaction_service.get_transaction(db, principal, transaction_id)
    return TransactionResponse.model_validate(transaction)


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    data: TransactionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    transaction = await transaction_service.create_transaction(db, principal, data)
    return TransactionResponse.model_validate(transaction)


@router.put("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: int,
    data: TransactionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    transaction = await transaction_service.update_transaction(db, principal, transaction_id, data)
    return TransactionResponse.model_validate(transaction)


@router.delete("/{transaction_id}", status_code=204)
async def delete_transaction(
    transaction_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    await transaction_service.delete_transaction(db, principal, transaction_id)
    return None
