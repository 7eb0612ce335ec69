"""
Shipping cost calculation.

Resolution order for the selected method:

1. No method selected -> 0
2. A free_shipping discount is on the cart -> 0
3. Subtotal at or above the free shipping threshold -> 0
4. The method's configured cost (0 for an unknown method)

Free-shipping discounts zero the cost regardless of their conditions. The
discount calculator counts them as 0 so the saving is never applied twice.
"""

import logging
from typing import Dict

from ..schemas.cart import CartSnapshot
from ..schemas.configuration import ConfigurationProvider, ShippingMethodConfig, ShippingMethodType
from ..schemas.discounts import DiscountType
from ..schemas.shipping import ShippingRate
from ..schemas.tax import check_rate
from .money import round_money

logger = logging.getLogger(__name__)


class ShippingCalculator:
    """Resolves the shipping amount and its VAT metadata for a cart."""

    def __init__(self, config: ConfigurationProvider):
        self._config = config

    def available_methods(self) -> Dict[str, ShippingMethodConfig]:
        """All configured shipping methods keyed by id."""
        return self._config.get_shipping_methods()

    def _method_cost(self, snapshot: CartSnapshot, subtotal: float, method: ShippingMethodConfig) -> float:
        if method.type == ShippingMethodType.PERCENTAGE:
            return subtotal * method.rate
        if method.type == ShippingMethodType.WEIGHT:
            total_weight = sum(item.weight * item.quantity for item in snapshot.items)
            return total_weight * method.rate_per_kg
        return method.cost

    def is_threshold_met(self, subtotal: float) -> bool:
        """True when the subtotal reaches the free shipping threshold (inclusive)."""
        threshold = self._config.get_free_shipping_threshold()
        return threshold is not None and subtotal >= threshold

    def calculate(self, snapshot: CartSnapshot, subtotal: float) -> float:
        """
        Shipping amount for the cart's selected method.

        Args:
            snapshot: Cart snapshot
            subtotal: Items subtotal, used for the free shipping threshold

        Returns:
            Rounded shipping amount
        """
        method_id = snapshot.shipping_method
        if not method_id:
            return 0.0

        if snapshot.has_discount_type(DiscountType.FREE_SHIPPING):
            logger.debug("Free shipping discount applied, shipping for %s is 0", method_id)
            return 0.0

        if self.is_threshold_met(subtotal):
            logger.debug("Subtotal %.2f meets free shipping threshold", subtotal)
            return 0.0

        method = self._config.get_shipping_method_config(method_id)
        if method is None:
            logger.warning("Unknown shipping method '%s', charging 0", method_id)
            return 0.0

        return round_money(self._method_cost(snapshot, subtotal, method))

    def is_free_shipping_applied(self, snapshot: CartSnapshot, subtotal: float) -> bool:
        """True if a method is selected and it costs exactly 0."""
        return snapshot.shipping is not None and self.calculate(snapshot, subtotal) == 0.0

    def get_shipping_info(self, snapshot: CartSnapshot, subtotal: float) -> ShippingRate | None:
        """
        Shipping amount and VAT metadata for the selected method.

        Values set on the cart's selection override the method's configured
        ones. A VAT-exempt cart always reports vat_rate=0, vat_included=False.

        Returns:
            ShippingRate, or None when no method is selected

        Raises:
            InvalidVatRate: If the resolved VAT rate is outside [0, 1]
        """
        selection = snapshot.shipping
        if selection is None:
            return None

        method = self._config.get_shipping_method_config(selection.method_id)
        vat_rate = selection.vat_rate
        if vat_rate is None and method is not None:
            vat_rate = method.vat_rate
        vat_included = selection.vat_included
        if vat_included is None:
            vat_included = method is not None and method.vat_included

        check_rate(f"shipping method '{selection.method_id}'", vat_rate)

        if snapshot.vat_exempt:
            vat_rate, vat_included = 0.0, False

        return ShippingRate(
            amount=self.calculate(snapshot, subtotal),
            vat_rate=vat_rate,
            vat_included=vat_included,
        )
