"""
Discount Calculation
====================

Discounts are evaluated in the cart's insertion order. Each discount first
has its conditions checked against the cart; a discount whose conditions
fail contributes nothing and evaluation moves on to the next one.

Selection:
----------
- Stacking disabled: the first discount that passes its conditions and has
  an effect wins; the rest are ignored.
- Stacking enabled: discounts keep applying until max_discount_codes of
  them have been selected.

Amounts:
--------
Each DiscountType has a strategy. Selected fixed discounts are applied
before percentage discounts, so a cart-wide percentage is taken from the
subtotal left after fixed discounts.

- fixed: min(value, target subtotal)
- percentage: target subtotal * value / 100
- shipping: min(value, shipping amount), or a percentage of shipping when
  applies_to == "percentage"
- free_shipping: 0 here; ShippingCalculator zeroes the shipping amount

The target subtotal is the line total of the item named by item_id, else of
the items in the discount's category, else of the whole cart.

Caps:
-----
Item discounts never exceed the subtotal and shipping discounts never
exceed the shipping amount.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..schemas.cart import CartSnapshot
from ..schemas.configuration import ConfigurationProvider
from ..schemas.discounts import DiscountConditions, DiscountSpec, DiscountType
from ..schemas.items import LineItem
from .money import round_money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiscountContext:
    """Cart values a discount strategy needs."""
    snapshot: CartSnapshot
    subtotal: float
    shipping_amount: float


# =============================================================================
# Conditions
# =============================================================================

def target_items(snapshot: CartSnapshot, conditions: DiscountConditions) -> List[LineItem]:
    """Items a discount applies to: by item_id, else category, else all."""
    if conditions.item_id is not None:
        return [item for item in snapshot.items if item.id == conditions.item_id]
    if conditions.category is not None:
        return [item for item in snapshot.items if item.category == conditions.category]
    return list(snapshot.items)


def conditions_met(discount: DiscountSpec, snapshot: CartSnapshot, subtotal: float) -> bool:
    """Check a discount's conditions against the current cart."""
    conditions = discount.conditions

    if conditions.minimum_amount is not None and subtotal < conditions.minimum_amount:
        return False

    if conditions.min_items is not None and snapshot.item_count < conditions.min_items:
        return False

    if conditions.item_id is not None or conditions.category is not None:
        scoped = target_items(snapshot, conditions)
        if not scoped:
            return False
        if conditions.min_quantity is not None:
            return sum(item.quantity for item in scoped) >= conditions.min_quantity
        return True

    if conditions.min_quantity is not None:
        return snapshot.item_count >= conditions.min_quantity

    return True


# =============================================================================
# Strategies
# =============================================================================

class DiscountStrategy(ABC):
    """Computes the amount for one discount type."""

    @abstractmethod
    def has_effect(self, discount: DiscountSpec, context: DiscountContext) -> bool:
        """Whether the discount would change the cart's price."""

    @abstractmethod
    def amount(self, discount: DiscountSpec, context: DiscountContext, fixed_applied: float) -> float:
        """Unrounded discount amount."""

    def target_subtotal(self, discount: DiscountSpec, context: DiscountContext) -> float:
        return sum((item.line_total for item in target_items(context.snapshot, discount.conditions)), 0.0)


class FixedDiscount(DiscountStrategy):

    def has_effect(self, discount, context):
        return discount.value > 0 and self.target_subtotal(discount, context) > 0

    def amount(self, discount, context, fixed_applied):
        return min(discount.value, self.target_subtotal(discount, context))


class PercentageDiscount(DiscountStrategy):

    def has_effect(self, discount, context):
        return discount.value > 0 and self.target_subtotal(discount, context) > 0

    def amount(self, discount, context, fixed_applied):
        base = self.target_subtotal(discount, context)
        conditions = discount.conditions
        if conditions.item_id is None and conditions.category is None:
            base = max(0.0, base - fixed_applied)
        return base * discount.value / 100


class ShippingDiscount(DiscountStrategy):

    def has_effect(self, discount, context):
        return discount.value > 0 and context.shipping_amount > 0

    def amount(self, discount, context, fixed_applied):
        if discount.is_percentage_of_shipping:
            return context.shipping_amount * discount.value / 100
        return min(discount.value, context.shipping_amount)


class FreeShippingDiscount(DiscountStrategy):
    """Realised by ShippingCalculator; has an effect once a method is selected, never an amount."""

    def has_effect(self, discount, context):
        return context.snapshot.shipping is not None

    def amount(self, discount, context, fixed_applied):
        return 0.0


STRATEGIES: Dict[DiscountType, DiscountStrategy] = {
    DiscountType.FIXED: FixedDiscount(),
    DiscountType.PERCENTAGE: PercentageDiscount(),
    DiscountType.SHIPPING: ShippingDiscount(),
    DiscountType.FREE_SHIPPING: FreeShippingDiscount(),
}

# Fixed amounts come off before percentages are taken
_APPLY_ORDER = (
    DiscountType.FIXED,
    DiscountType.PERCENTAGE,
    DiscountType.SHIPPING,
    DiscountType.FREE_SHIPPING,
)


# =============================================================================
# Calculator
# =============================================================================

class DiscountCalculator:
    """Applies the cart's discounts under the configured stacking policy."""

    def __init__(self, config: ConfigurationProvider):
        self._config = config

    def select(self, snapshot: CartSnapshot, subtotal: float, shipping_amount: float) -> List[DiscountSpec]:
        """
        Discounts that apply to the cart, in evaluation order.

        Args:
            snapshot: Cart snapshot
            subtotal: Items subtotal
            shipping_amount: Shipping amount after free-shipping rules

        Returns:
            Selected discounts, honouring the stacking policy
        """
        policy = self._config.get_discount_policy()
        context = DiscountContext(snapshot, subtotal, shipping_amount)
        selected: List[DiscountSpec] = []

        for code, discount in snapshot.discounts.items():
            if policy.allow_stacking and len(selected) >= policy.max_discount_codes:
                logger.info("Discount limit of %d reached, ignoring remaining codes", policy.max_discount_codes)
                break

            if not conditions_met(discount, snapshot, subtotal):
                logger.info("Discount %s skipped: conditions not met", code)
                continue

            if not STRATEGIES[discount.type].has_effect(discount, context):
                logger.debug("Discount %s skipped: no effect on this cart", code)
                continue

            selected.append(discount)
            if not policy.allow_stacking:
                break

        return selected

    def applied_codes(self, snapshot: CartSnapshot, subtotal: float, shipping_amount: float) -> List[str]:
        return [d.code for d in self.select(snapshot, subtotal, shipping_amount)]

    def _portions(self, snapshot: CartSnapshot, subtotal: float, shipping_amount: float) -> Tuple[float, float]:
        context = DiscountContext(snapshot, subtotal, shipping_amount)
        selected = self.select(snapshot, subtotal, shipping_amount)

        items_portion = 0.0
        shipping_portion = 0.0
        fixed_applied = 0.0
        for discount_type in _APPLY_ORDER:
            strategy = STRATEGIES[discount_type]
            for discount in selected:
                if discount.type != discount_type:
                    continue
                amount = strategy.amount(discount, context, fixed_applied)
                logger.debug("Discount %s (%s): %.4f", discount.code, discount_type.label, amount)
                if discount_type.affects_shipping:
                    shipping_portion += amount
                else:
                    items_portion += amount
                if discount_type == DiscountType.FIXED:
                    fixed_applied += amount

        return (
            min(items_portion, subtotal),
            min(shipping_portion, max(0.0, shipping_amount)),
        )

    def calculate(self, snapshot: CartSnapshot, subtotal: float, shipping_amount: float = 0.0) -> float:
        """Total discount, rounded, never above subtotal plus shipping."""
        if not snapshot.discounts:
            return 0.0
        items_portion, shipping_portion = self._portions(snapshot, subtotal, shipping_amount)
        return round_money(items_portion + shipping_portion)
