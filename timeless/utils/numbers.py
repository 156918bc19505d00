"""Numeric coercion for operator-entered prices and percentages."""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional


def to_number(raw: Any) -> Optional[Decimal]:
    """
    Coerce a price/percent value into a finite Decimal.

    Floats go through their shortest decimal text so 1000.125 stays
    1000.125 rather than its binary expansion. Booleans, NaN, infinities,
    blanks and garbage give None.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, (int, float)):
        value = Decimal(str(raw))
    elif isinstance(raw, str):
        text = raw.strip().replace(",", "")
        if not text:
            return None
        try:
            value = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if not value.is_finite():
        return None
    return value
