"""Money helpers: tolerant amount parsing and whole-unit rounding"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

ZERO = Decimal("0")


def to_amount(value: Any) -> Decimal:
    """
    Parse an invoice amount into a finite Decimal.

    Missing, non-numeric, NaN and infinite values become 0 so they can never
    poison a running balance.
    """
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            return ZERO
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            return ZERO
    else:
        return ZERO

    return amount if amount.is_finite() else ZERO


def round_to_unit(value: Decimal) -> int:
    """Round to the nearest whole currency unit (halves away from zero)"""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
