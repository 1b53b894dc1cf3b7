"""Bank of Thailand daily average exchange rate client.

Only the ``buying_transfer`` rate is used. Every failure (missing key,
transport error, timeout, non-2xx, empty or malformed body) is logged and
reported as ``None`` so the caller can fall back to a manual rate.
"""
from datetime import date

import httpx

from customs_fx.config import Settings, get_settings
from customs_fx.engine.rates import RateResult
from customs_fx.logging_config import get_logger
from customs_fx.models.transaction import RateSource

logger = get_logger("bot_client")

_PLACEHOLDER_KEYS = {"", "your_bot_api_key_here"}


class BotRateClient:
    def __init__(self, settings: Settings | None = None, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._settings = settings or get_settings()
        self._transport = transport

    @property
    def configured(self) -> bool:
        return self._settings.bot_api_key not in _PLACEHOLDER_KEYS

    async def fetch_rate(self, currency: str, on: date) -> RateResult | None:
        if not self.configured:
            logger.warning("BOT_API_KEY not configured, no rate for %s on %s", currency, on)
            return None

        period = on.isoformat()
        params = {"start_period": period, "end_period": period, "currency": currency}
        headers = {"Accept": "*/*", "Authorization": self._settings.bot_api_key}
        try:
            async with httpx.AsyncClient(
                timeout=self._settings.bot_api_timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.get(self._settings.bot_api_url, params=params, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("BOT API request failed for %s on %s: %s", currency, period, exc)
            return None

        if response.is_error:
            logger.error("BOT API error for %s on %s: %s", currency, period, response.status_code)
            return None

        try:
            detail = _first_detail(response.json())
        except ValueError as exc:
            logger.warning("Malformed BOT API response for %s on %s: %s", currency, period, exc)
            return None

        if not detail or not detail.get("buying_transfer"):
            logger.warning("No exchange rate data for %s on %s", currency, period)
            return None

        return RateResult(
            currency_id=str(detail.get("currency_id") or currency),
            period=str(detail.get("period") or period),
            buying_transfer=str(detail["buying_transfer"]),
            source=RateSource.BOT,
        )


def _first_detail(body: object) -> dict | None:
    try:
        rows = body["result"]["data"]["data_detail"]  # type: ignore[index]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"unexpected shape: {exc!r}") from exc
    if not rows:
        return None
    if not isinstance(rows, list) or not isinstance(rows[0], dict):
        raise ValueError("data_detail is not a list of objects")
    return rows[0]


def get_rate_client() -> BotRateClient:
    return BotRateClient()
