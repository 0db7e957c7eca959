"""Fixed-decimal rounding used inside indicator arithmetic.

Rounding here is part of the algorithm, not presentation: each step
feeds the rounded value into the next one.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext


def round_to(value: float, decimals: int) -> float:
    """Round to `decimals` fractional digits, ties away from zero.

    Operates on the exact binary value of the float, so 1.005 (stored as
    1.00499999...) rounds down to 1.0 at two decimals.

    Args:
        value: Number to round.
        decimals: Fractional digits to keep (>= 0).

    Returns:
        Rounded float. NaN and infinities are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    exact = Decimal(float(value))
    quantum = Decimal(1).scaleb(-decimals)
    with localcontext() as ctx:
        # Room for every integer digit plus the kept fraction
        ctx.prec = max(ctx.prec, exact.adjusted() + decimals + 2)
        return float(exact.quantize(quantum, rounding=ROUND_HALF_UP))
