"""Exchange rate resolution for transactions."""
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from customs_fx.engine.currency import EXCHANGE_RATE_SCALE, parse_decimal
from customs_fx.models.transaction import RateSource

LOCAL_CURRENCY = "THB"
LOCAL_RATE = "1.000000"


@dataclass(frozen=True)
class RateResult:
    currency_id: str
    period: str
    buying_transfer: str
    source: RateSource


class RateProvider(Protocol):
    async def fetch_rate(self, currency: str, on: date) -> RateResult | None: ...


async def attempt_fetch(provider: RateProvider, currency: str, on: date) -> RateResult | None:
    """Rate for ``currency`` on ``on``, or None when the caller must enter it manually.

    The local currency never goes to the provider. No retries.
    """
    code = currency.upper()
    if code == LOCAL_CURRENCY:
        return RateResult(
            currency_id=LOCAL_CURRENCY,
            period=on.isoformat(),
            buying_transfer=LOCAL_RATE,
            source=RateSource.SYSTEM,
        )
    return await provider.fetch_rate(code, on)


def resolve_rate(currency_code: str, exchange_rate: str, rate_source: RateSource) -> tuple[str, RateSource]:
    """(normalized rate, source) to persist for a transaction being saved.

    THB is pinned to 1.000000/SYSTEM whatever the client sent. Otherwise the
    submitted source is stored as-is; it is not checked against the value.
    """
    if currency_code.upper() == LOCAL_CURRENCY:
        return LOCAL_RATE, RateSource.SYSTEM
    return parse_decimal(exchange_rate, EXCHANGE_RATE_SCALE, field="exchange_rate"), rate_source
