"""Decimal helpers for monetary values.

Prices arrive as JSON numbers or user-typed strings. They are converted to
``Decimal`` once, at the edge, and rounded half-up to two places only where
they are displayed.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
ONE = Decimal("1")
HUNDRED = Decimal("100")


def to_decimal(value: object) -> Decimal | None:
    """Convert a number or numeric string to a finite Decimal.

    Floats go through ``str`` so 0.1 becomes Decimal("0.1") rather than its
    binary expansion. Booleans, NaN, infinities and anything unparsable
    return None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            result = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    if not result.is_finite():
        return None
    return result


def round2(value: Decimal) -> Decimal:
    """Round half-up to cents."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def round_int(value: Decimal) -> int:
    """Round half-up to the nearest integer."""
    return int(value.quantize(ONE, rounding=ROUND_HALF_UP))


def format_price(value: Decimal) -> str:
    """Render a price the way the input field shows it, e.g. ``"49.90"``."""
    return f"{round2(value):.2f}"
