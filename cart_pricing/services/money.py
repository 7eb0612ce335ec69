"""
Money rounding utilities.

Every public calculator rounds its result with round_money as the last step.
Intermediate per-line values are left unrounded so tax on many small lines
does not drift (10 x 9.99 at 19% is 18.98, not the sum of ten rounded lines).
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

MONEY_QUANT = Decimal("0.01")


def round_money(amount: float) -> float:
    """Round to 2 decimal places for currency, half-up."""
    # repr() gives the shortest string that round-trips, so 0.125 stays 0.125
    # instead of the binary 0.12499999...
    return float(Decimal(repr(float(amount))).quantize(MONEY_QUANT, rounding=ROUND_HALF_UP))


def sum_money(amounts: Iterable[float]) -> float:
    """Sum raw amounts and round the total once."""
    return round_money(sum(amounts, 0.0))
