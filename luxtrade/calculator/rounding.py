"""Decimal rounding for displayed calculator values.

Halfway values round away from zero, applied to the float's exact
binary value: 2.125 becomes 2.13, while 2.675 (stored as
2.67499999...) becomes 2.67.  Python's ``round`` and ``format`` round
halves to even instead.
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal

# Enough digits to hold any finite float at full scale
_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


def to_fixed(value: float, places: int) -> str:
    """Format *value* with exactly *places* decimals."""
    if not math.isfinite(value):
        return str(value)
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(quantum, context=_CONTEXT))


def round_half_up(value: float, places: int) -> float:
    """Round *value* to *places* decimals, halves away from zero."""
    if not math.isfinite(value):
        return value
    return float(to_fixed(value, places))
