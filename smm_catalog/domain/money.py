from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation


def _decimal_rate(value: str | int | float) -> Decimal:
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Invalid rate: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Invalid rate: {value!r}")
    return amount


def rate_to_cents(value: str | int | float) -> int:
    """Convert a provider rate such as ``"10.80"`` to integer cents, rounding half up."""
    amount = _decimal_rate(value)
    try:
        return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except InvalidOperation as exc:
        raise ValueError(f"Invalid rate: {value!r}") from exc


def parse_rate(value: str | int | float) -> float:
    rate = float(_decimal_rate(value))
    if math.isinf(rate):
        raise ValueError(f"Invalid rate: {value!r}")
    return rate
