"""Currency reference data and exchange rate lookup."""
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from customs_fx.auth.deps import get_current_user
from customs_fx.config import Settings, get_settings
from customs_fx.database import get_db
from customs_fx.engine.rates import LOCAL_CURRENCY, attempt_fetch
from customs_fx.errors import ValidationFailed
from customs_fx.models.currency import Currency
from customs_fx.models.user import User
from customs_fx.schemas.currency import CurrencyResponse, ExchangeRateResponse
from customs_fx.services.bot_client import BotRateClient, get_rate_client

router = APIRouter(tags=["currencies"])

RATE_UNAVAILABLE = "Exchange rate not available. You can enter the rate manually."


@router.get("/currencies", response_model=list[CurrencyResponse])
async def list_currencies(
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
):
    result = await db.execute(select(Currency).order_by(Currency.code))
    return [CurrencyResponse.model_validate(c) for c in result.scalars().all()]


def _parse_rate_date(value: str) -> date:
    # Strict YYYY-MM-DD; date.fromisoformat also accepts other ISO forms.
    if len(value) != 10 or value[4] != "-" or value[7] != "-":
        raise ValidationFailed("Invalid date format. Use YYYY-MM-DD", {"date": ["Use YYYY-MM-DD"]})
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValidationFailed("Invalid date format. Use YYYY-MM-DD", {"date": [str(exc)]}) from exc


@router.get(
    "/rates/{currency}/{rate_date}",
    response_model=ExchangeRateResponse,
    responses={404: {"description": RATE_UNAVAILABLE}},
)
async def get_exchange_rate(
    currency: str,
    rate_date: str,
    user: Annotated[User, Depends(get_current_user)],
    client: Annotated[BotRateClient, Depends(get_rate_client)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    on = _parse_rate_date(rate_date)
    code = currency.upper()
    supported = settings.supported_rate_currencies_list
    if code != LOCAL_CURRENCY and code not in supported:
        raise ValidationFailed(
            f"Invalid currency. Supported: {', '.join(supported)}",
            {"currency": [f"Unsupported currency: {code}"]},
        )
    rate = await attempt_fetch(client, code, on)
    if rate is None:
        return JSONResponse(status_code=404, content={"error": RATE_UNAVAILABLE, "data": None})
    return ExchangeRateResponse.model_validate(rate)
