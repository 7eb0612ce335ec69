"""
Cart Pricing Engine.

This module composes the tax, shipping, discount and extra-cost calculators
into a cart's subtotal, tax, shipping, discount, extra costs and total.

Evaluation order:

    subtotal
      -> shipping amount (threshold needs the subtotal)
      -> tax (items + shipping + extra costs)
      -> extra costs total
      -> discount (needs subtotal and shipping amount)
      -> total = subtotal + shipping + tax + extra costs - discount

Every getter recomputes from the snapshot, so each one agrees with what
get_total() uses. Getters that depend on shipping resolve it through
get_shipping_info(), so an invalid shipping VAT rate raises InvalidVatRate
from them exactly as it does from get_total(). Nothing is cached between calls.
"""

import logging

from ..schemas.cart import CartSnapshot
from ..schemas.configuration import ConfigurationProvider
from ..schemas.pricing import PricingResult
from ..schemas.shipping import ShippingRate
from .discounts import DiscountCalculator
from .extra_costs import ExtraCostCalculator
from .money import round_money, sum_money
from .shipping import ShippingCalculator
from .tax import TaxCalculator

logger = logging.getLogger(__name__)


class CartPricingEngine:
    """
    Prices cart snapshots against a configuration.

    The engine holds no per-cart state; one instance can price many carts,
    from several threads at once.
    """

    def __init__(self, config: ConfigurationProvider):
        """
        Initialize the pricing engine.

        Args:
            config: Configuration provider (zones, shipping methods,
                    free shipping threshold, discount policy)
        """
        self._config = config
        self._extra_costs = ExtraCostCalculator()
        self._shipping = ShippingCalculator(config)
        self._tax = TaxCalculator(config, self._extra_costs)
        self._discounts = DiscountCalculator(config)

    @property
    def config(self) -> ConfigurationProvider:
        return self._config

    @property
    def shipping(self) -> ShippingCalculator:
        return self._shipping

    @property
    def tax(self) -> TaxCalculator:
        return self._tax

    @property
    def discounts(self) -> DiscountCalculator:
        return self._discounts

    # =========================================================================
    # Individual amounts
    # =========================================================================

    def get_subtotal(self, snapshot: CartSnapshot) -> float:
        """Sum of line totals, rounded once."""
        return sum_money(item.line_total for item in snapshot.items)

    def get_item_count(self, snapshot: CartSnapshot) -> int:
        return snapshot.item_count

    def get_shipping_amount(self, snapshot: CartSnapshot) -> float:
        shipping_info = self.get_shipping_info(snapshot)
        return shipping_info.amount if shipping_info else 0.0

    def get_shipping_info(self, snapshot: CartSnapshot) -> ShippingRate | None:
        return self._shipping.get_shipping_info(snapshot, self.get_subtotal(snapshot))

    def is_free_shipping_applied(self, snapshot: CartSnapshot) -> bool:
        shipping_info = self.get_shipping_info(snapshot)
        return shipping_info is not None and shipping_info.amount == 0.0

    def get_tax_amount(self, snapshot: CartSnapshot) -> float:
        subtotal = self.get_subtotal(snapshot)
        shipping_info = self._shipping.get_shipping_info(snapshot, subtotal)
        shipping_amount = shipping_info.amount if shipping_info else 0.0
        return self._tax.calculate(snapshot, subtotal, shipping_amount, shipping_info)

    def get_extra_costs_total(self, snapshot: CartSnapshot) -> float:
        return self._extra_costs.total(snapshot, self.get_subtotal(snapshot))

    def get_discount_amount(self, snapshot: CartSnapshot) -> float:
        subtotal = self.get_subtotal(snapshot)
        shipping_info = self._shipping.get_shipping_info(snapshot, subtotal)
        shipping_amount = shipping_info.amount if shipping_info else 0.0
        return self._discounts.calculate(snapshot, subtotal, shipping_amount)

    def get_total(self, snapshot: CartSnapshot) -> float:
        return self.price(snapshot).total

    # =========================================================================
    # Full breakdown
    # =========================================================================

    def price(self, snapshot: CartSnapshot) -> PricingResult:
        """
        Compute the full pricing breakdown in one pass.

        Args:
            snapshot: Cart snapshot to price

        Returns:
            PricingResult with every amount rounded to 2 decimals

        Raises:
            InvalidVatRate: If a shipping or extra-cost VAT rate is outside [0, 1]
        """
        subtotal = self.get_subtotal(snapshot)

        shipping_info = self._shipping.get_shipping_info(snapshot, subtotal)
        shipping_amount = shipping_info.amount if shipping_info else 0.0

        tax_amount = self._tax.calculate(snapshot, subtotal, shipping_amount, shipping_info)

        extra_costs_total = self._extra_costs.total(snapshot, subtotal)
        discount_amount = self._discounts.calculate(snapshot, subtotal, shipping_amount)

        total = round_money(subtotal + shipping_amount + tax_amount + extra_costs_total - discount_amount)

        logger.debug(
            "Priced cart: subtotal=%.2f shipping=%.2f tax=%.2f extra=%.2f discount=%.2f total=%.2f",
            subtotal, shipping_amount, tax_amount, extra_costs_total, discount_amount, total,
        )

        return PricingResult(
            subtotal=subtotal,
            shipping_amount=shipping_amount,
            tax_amount=tax_amount,
            discount_amount=discount_amount,
            extra_costs_total=extra_costs_total,
            total=total,
            item_count=snapshot.item_count,
            is_free_shipping_applied=shipping_info is not None and shipping_amount == 0.0,
        )
