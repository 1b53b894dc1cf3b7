"""Currency and exchange rate schemas."""
from pydantic import BaseModel

from customs_fx.models.transaction import RateSource


class CurrencyResponse(BaseModel):
    code: str
    name_th: str
    name_en: str
    symbol: str

    class Config:
        from_attributes = True


class ExchangeRateResponse(BaseModel):
    currency_id: str
    period: str
    buying_transfer: str
    source: RateSource

    class Config:
        from_attributes = True
