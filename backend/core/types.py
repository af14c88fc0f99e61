# backend/core/types.py

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Annotated, Union

from pydantic import AfterValidator, PlainSerializer

CENTS = Decimal("0.01")


def to_money(value: Union[Decimal, int, float, str, None]) -> Decimal:
    """Normalize any numeric value to a two-place Decimal"""
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _money_str(value: Decimal) -> str:
    return str(to_money(value))


def _assume_utc(value: datetime) -> datetime:
    # Columns hold naive UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# Decimal in Python, exact "12345.00" string on the wire
Money = Annotated[
    Decimal,
    PlainSerializer(_money_str, return_type=str, when_used="json"),
]

UtcDateTime = Annotated[datetime, AfterValidator(_assume_utc)]
