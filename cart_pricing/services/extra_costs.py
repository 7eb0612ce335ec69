"""Extra cost totals. Tax on extra costs lives in tax.py."""

import logging
from typing import Iterator, Tuple

from ..schemas.cart import CartSnapshot
from ..schemas.extra_costs import ExtraCostSpec
from .money import sum_money

logger = logging.getLogger(__name__)


class ExtraCostCalculator:
    """Fixed or percentage-of-subtotal costs added to the cart."""

    def amounts(self, snapshot: CartSnapshot, subtotal: float) -> Iterator[Tuple[ExtraCostSpec, float]]:
        """Yield (cost, unrounded amount) for each extra cost in order."""
        for cost in snapshot.extra_costs:
            yield cost, cost.amount_for(subtotal)

    def total(self, snapshot: CartSnapshot, subtotal: float) -> float:
        total = sum_money(amount for _, amount in self.amounts(snapshot, subtotal))
        if snapshot.extra_costs:
            logger.debug("Extra costs: %d cost(s), total %.2f", len(snapshot.extra_costs), total)
        return total
