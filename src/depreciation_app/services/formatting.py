from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from ..models.common import CurrencySettings, DigitGrouping

Number = Union[Decimal, int, float]


def quantum(places: int) -> Decimal:
    return Decimal(1).scaleb(-places)


def round_amount(value: Number, places: int = 0) -> Decimal:
    """Round half away from zero to ``places`` decimals."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(quantum(places), rounding=ROUND_HALF_UP)


def _group_indian(digits: str) -> str:
    # 12,34,56,789: last three digits, then pairs
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def _group_international(digits: str) -> str:
    return f"{int(digits):,}"


def format_number(value: Number, decimal_places: int = 0, grouping: DigitGrouping = DigitGrouping.INDIAN) -> str:
    rounded = round_amount(value, decimal_places)
    sign = "-" if rounded < 0 else ""
    text = f"{abs(rounded):.{decimal_places}f}"
    integer, _, fraction = text.partition(".")
    if grouping == DigitGrouping.INDIAN:
        integer = _group_indian(integer)
    else:
        integer = _group_international(integer)
    return f"{sign}{integer}.{fraction}" if fraction else f"{sign}{integer}"


def format_currency(value: Number, currency: CurrencySettings | None = None, decimal_places: int | None = None) -> str:
    """Render an amount as e.g. ``₹12,34,567`` using the currency preferences."""
    currency = currency or CurrencySettings()
    places = currency.decimal_places if decimal_places is None else decimal_places
    formatted = format_number(value, places, currency.grouping)
    if formatted.startswith("-"):
        return f"-{currency.symbol}{formatted[1:]}"
    return f"{currency.symbol}{formatted}"


def csv_amount(value: Number, decimal_places: int = 2) -> str:
    return f"{round_amount(value, decimal_places):.{decimal_places}f}"
