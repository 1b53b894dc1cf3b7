"""Monetary arithmetic - Decimal only, half-up rounding, plain-string output."""
import re
from decimal import Context, Decimal, InvalidOperation, ROUND_HALF_UP

from customs_fx.errors import InvalidDecimal, ValidationFailed

FOREIGN_AMOUNT_SCALE = 4
EXCHANGE_RATE_SCALE = 6
THB_AMOUNT_SCALE = 2

# Integer digits each stored column can hold: NUMERIC(18, scale).
FOREIGN_AMOUNT_INTEGER_DIGITS = 14
EXCHANGE_RATE_INTEGER_DIGITS = 12
THB_AMOUNT_INTEGER_DIGITS = 16

_MIN_PRECISION = 28
_MAX_INTEGER_DIGITS = 100
_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$", re.ASCII)


def _to_decimal(value: str, field: str | None = None) -> Decimal:
    """Exact Decimal from a base-10 string. Floats and other types are rejected."""
    if not isinstance(value, str):
        raise InvalidDecimal(value, field)
    text = value.strip()
    if not _DECIMAL_RE.match(text):
        raise InvalidDecimal(value, field)
    try:
        number = Decimal(text)
    except InvalidOperation as exc:
        raise InvalidDecimal(value, field) from exc
    if number.adjusted() >= _MAX_INTEGER_DIGITS:
        raise InvalidDecimal(value, field)
    return number


def _round(value: Decimal, places: int) -> Decimal:
    """Quantize half-up with enough precision that only the last place is rounded."""
    precision = max(_MIN_PRECISION, value.adjusted() + places + 2)
    ctx = Context(prec=precision, rounding=ROUND_HALF_UP)
    rounded = value.quantize(Decimal(1).scaleb(-places), context=ctx)
    if rounded.is_zero():
        rounded = rounded.copy_abs()
    return rounded


def parse_decimal(value: str, scale: int, field: str | None = None) -> str:
    """Normalize a numeric string to exactly ``scale`` fractional digits.

    ``parse_decimal("10", 4) == "10.0000"``; ``"1.23455"`` at scale 4 gives
    ``"1.2346"``. Raises ``InvalidDecimal`` for anything that is not a finite
    base-10 number; ``field`` is carried on the error for the response body.
    """
    return format(_round(_to_decimal(value, field), scale), "f")


def ensure_integer_digits(value: str, integer_digits: int, field: str) -> str:
    """Return ``value`` unchanged if its integer part fits in ``integer_digits``."""
    number = Decimal(value)
    if not number.is_zero() and number.adjusted() >= integer_digits:
        raise ValidationFailed(
            f"Value out of range for {field}",
            {field: [f"Must have at most {integer_digits} digits before the decimal point"]},
        )
    return value


def calculate_thb_amount(foreign_amount: str, exchange_rate: str) -> str:
    """THB equivalent of ``foreign_amount`` at ``exchange_rate``, 2 places half-up.

    The product is computed exactly and rounded once.
    """
    amount = _to_decimal(foreign_amount, "foreign_amount")
    rate = _to_decimal(exchange_rate, "exchange_rate")
    digits = len(amount.as_tuple().digits) + len(rate.as_tuple().digits)
    product = Context(prec=max(_MIN_PRECISION, digits)).multiply(amount, rate)
    return format(_round(product, THB_AMOUNT_SCALE), "f")
