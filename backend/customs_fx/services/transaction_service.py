"""Transaction persistence: listing, ownership checks and THB recomputation."""
import math
from decimal import Decimal

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from customs_fx.auth.rbac import Principal, ensure_can_access, scope_transactions
from customs_fx.engine.currency import (
    EXCHANGE_RATE_INTEGER_DIGITS,
    FOREIGN_AMOUNT_INTEGER_DIGITS,
    FOREIGN_AMOUNT_SCALE,
    THB_AMOUNT_INTEGER_DIGITS,
    calculate_thb_amount,
    ensure_integer_digits,
    parse_decimal,
)
from customs_fx.engine.rates import resolve_rate
from customs_fx.errors import NotFound, ValidationFailed
from customs_fx.logging_config import get_logger
from customs_fx.models.currency import Currency
from customs_fx.models.transaction import RateSource, Transaction
from customs_fx.schemas.transaction import (
    Pagination,
    TransactionCreate,
    TransactionFilters,
    TransactionPage,
    TransactionResponse,
)

logger = get_logger("transaction_service")


def _with_relations(query: Select) -> Select:
    return query.options(selectinload(Transaction.user), selectinload(Transaction.currency))


def _apply_filters(query: Select, filters: TransactionFilters) -> Select:
    if filters.search:
        term = filters.search.strip()
        query = query.where(
            or_(
                Transaction.declaration_number.icontains(term, autoescape=True),
                Transaction.invoice_number.icontains(term, autoescape=True),
            )
        )
    if filters.currency:
        query = query.where(Transaction.currency_code == filters.currency.strip().upper())
    if filters.date_from:
        query = query.where(Transaction.declaration_date >= filters.date_from)
    if filters.date_to:
        query = query.where(Transaction.declaration_date <= filters.date_to)
    return query


async def list_transactions(
    db: AsyncSession,
    principal: Principal,
    filters: TransactionFilters,
) -> TransactionPage:
    """Newest first. Non-admins only ever see their own rows."""
    base = _apply_filters(scope_transactions(select(Transaction), principal), filters)

    total = (await db.execute(select(func.count()).select_from(base.subquery()))).scalar_one()
    result = await db.execute(
        _with_relations(base)
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
        .offset(filters.offset)
        .limit(filters.limit)
    )
    rows = result.scalars().all()
    return TransactionPage(
        data=[TransactionResponse.model_validate(t) for t in rows],
        pagination=Pagination(
            page=filters.page,
            limit=filters.limit,
            total=total,
            total_pages=math.ceil(total / filters.limit),
        ),
    )


async def _load(db: AsyncSession, transaction_id: int) -> Transaction | None:
    result = await db.execute(
        _with_relations(select(Transaction).where(Transaction.id == transaction_id))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_transaction(db: AsyncSession, principal: Principal, transaction_id: int) -> Transaction:
    """Existence is checked before ownership: missing is 404 for everyone."""
    transaction = await _load(db, transaction_id)
    if transaction is None:
        raise NotFound("Transaction not found")
    ensure_can_access(principal, transaction)
    return transaction


async def _computed_fields(db: AsyncSession, data: TransactionCreate) -> dict:
    """Validated column values for a create or full update, THB amount included."""
    if await db.get(Currency, data.currency_code) is None:
        raise ValidationFailed(
            "Validation failed",
            {"currency_code": [f"Unknown currency: {data.currency_code}"]},
        )
    foreign_amount = parse_decimal(data.foreign_amount, FOREIGN_AMOUNT_SCALE, field="foreign_amount")
    ensure_integer_digits(foreign_amount, FOREIGN_AMOUNT_INTEGER_DIGITS, "foreign_amount")
    exchange_rate, rate_source = resolve_rate(
        data.currency_code, data.exchange_rate, RateSource(data.rate_source)
    )
    ensure_integer_digits(exchange_rate, EXCHANGE_RATE_INTEGER_DIGITS, "exchange_rate")
    thb_amount = ensure_integer_digits(
        calculate_thb_amount(foreign_amount, exchange_rate), THB_AMOUNT_INTEGER_DIGITS, "thb_amount"
    )
    return {
        "declaration_number": data.declaration_number,
        "declaration_date": data.declaration_date,
        "invoice_number": data.invoice_number,
        "invoice_date": data.invoice_date,
        "currency_code": data.currency_code,
        "foreign_amount": Decimal(foreign_amount),
        "exchange_rate": Decimal(exchange_rate),
        "thb_amount": Decimal(thb_amount),
        "rate_date": data.rate_date,
        "rate_source": rate_source,
        "notes": data.notes,
    }


async def create_transaction(db: AsyncSession, principal: Principal, data: TransactionCreate) -> Transaction:
    values = await _computed_fields(db, data)
    transaction = Transaction(created_by=principal.id, **values)
    db.add(transaction)
    await db.flush()
    logger.info(
        "Created transaction id=%s by user=%s: %s %s -> %s THB (%s)",
        transaction.id,
        principal.id,
        values["foreign_amount"],
        values["currency_code"],
        values["thb_amount"],
        values["rate_source"].value,
    )
    return await _load(db, transaction.id)


async def update_transaction(
    db: AsyncSession,
    principal: Principal,
    transaction_id: int,
    data: TransactionCreate,
) -> Transaction:
    """Full replacement of the editable fields; created_by never changes."""
    transaction = await get_transaction(db, principal, transaction_id)
    values = await _computed_fields(db, data)
    # onupdate only fires for columns that changed
    values["updated_at"] = func.now()
    for key, value in values.items():
        setattr(transaction, key, value)
    await db.flush()
    logger.info("Updated transaction id=%s by user=%s", transaction_id, principal.id)
    updated = await _load(db, transaction_id)
    if updated is None:
        raise NotFound("Transaction not found")
    return updated


async def delete_transaction(db: AsyncSession, principal: Principal, transaction_id: int) -> None:
    transaction = await get_transaction(db, principal, transaction_id)
    await db.delete(transaction)
    await db.flush()
    logger.info("Deleted transaction id=%s by user=%s", transaction_id, principal.id)
