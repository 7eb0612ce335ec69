"""
Tax calculation.

This module computes the three tax components of a cart and their sum:

- Items tax: per-item rate from the resolver, summed and rounded once
- Shipping tax: only when shipping is selected and its VAT is not included
- Extra-costs tax: per cost, with the cost's own rate or the zone default

A VAT-exempt cart, or a cart without a tax zone, pays no tax at all.
"""

import logging
from typing import Optional

from ..schemas.cart import CartSnapshot
from ..schemas.configuration import ConfigurationProvider, ZoneTaxConfig
from ..schemas.shipping import ShippingRate
from ..schemas.tax import check_rate
from .extra_costs import ExtraCostCalculator
from .money import round_money
from .tax_rates import default_rate, resolve_rate

logger = logging.getLogger(__name__)


class TaxCalculator:
    """
    Calculates tax amounts for a cart snapshot.

    Stateless apart from the configuration provider; every method is a pure
    function of its arguments.
    """

    def __init__(self, config: ConfigurationProvider, extra_costs: ExtraCostCalculator | None = None):
        """
        Initialize the tax calculator.

        Args:
            config: Configuration provider for zone tax settings
            extra_costs: Extra-cost calculator used to price each cost
        """
        self._config = config
        self._extra_costs = extra_costs or ExtraCostCalculator()

    def _zone(self, snapshot: CartSnapshot) -> ZoneTaxConfig | None:
        return self._config.get_zone_tax_config(snapshot.tax_zone)

    def _is_taxable(self, snapshot: CartSnapshot) -> bool:
        return not snapshot.vat_exempt and bool(snapshot.tax_zone)

    def default_rate(self, snapshot: CartSnapshot) -> float:
        """Cart-wide default rate (override, else zone default, else 0)."""
        if not snapshot.tax_zone:
            return 0.0
        return default_rate(self._zone(snapshot), snapshot.tax_overrides)

    def effective_rate(self, snapshot: CartSnapshot, category: Optional[str] = None) -> float:
        """Rate an item of the given category would be taxed at."""
        if not snapshot.tax_zone:
            return 0.0
        return resolve_rate(self._zone(snapshot), category=category, overrides=snapshot.tax_overrides)

    def calculate_items_tax(self, snapshot: CartSnapshot) -> float:
        """Sum of unit_price * quantity * rate over all items, rounded once."""
        if not self._is_taxable(snapshot):
            return 0.0

        zone = self._zone(snapshot)
        item_tax = 0.0
        for item in snapshot.items:
            rate = resolve_rate(
                zone,
                category=item.category,
                product_id=item.id,
                item_type=item.item_type,
                overrides=snapshot.tax_overrides,
            )
            item_tax += item.line_total * rate
        return round_money(item_tax)

    def calculate_shipping_tax(
        self,
        snapshot: CartSnapshot,
        shipping_amount: float,
        shipping_info: ShippingRate | None = None,
    ) -> float:
        """
        Tax on the shipping amount.

        The rate is the shipping VAT rate (from shipping_info, else the
        cart's selection), else the cart's shipping override, else the zone
        default when the zone taxes shipping.

        Args:
            snapshot: Cart snapshot
            shipping_amount: Shipping amount already computed for the cart
            shipping_info: VAT metadata from ShippingCalculator.get_shipping_info

        Returns:
            Rounded shipping tax, 0 when shipping VAT is included
        """
        if not self._is_taxable(snapshot) or snapshot.shipping is None:
            return 0.0

        if shipping_info is not None:
            vat_rate, vat_included = shipping_info.vat_rate, shipping_info.vat_included
        else:
            vat_rate, vat_included = snapshot.shipping.vat_rate, snapshot.shipping.vat_included
        if vat_included:
            return 0.0

        rate = check_rate("shipping", vat_rate)
        if rate is None and snapshot.tax_overrides is not None:
            rate = snapshot.tax_overrides.shipping_rate
        if rate is None:
            zone = self._zone(snapshot)
            rate = self.default_rate(snapshot) if zone is not None and zone.apply_to_shipping else 0.0

        if rate <= 0:
            return 0.0
        return round_money(shipping_amount * rate)

    def calculate_extra_costs_tax(self, snapshot: CartSnapshot, subtotal: float) -> float:
        """
        Tax on extra costs, one rate per cost.

        Costs with vat_included contribute nothing. Other costs use their
        own vat_rate, falling back to the cart's default rate.

        Raises:
            InvalidVatRate: If a cost's vat_rate is outside [0, 1]
        """
        if not self._is_taxable(snapshot):
            return 0.0

        fallback = self.default_rate(snapshot)
        extra_tax = 0.0
        for cost, amount in self._extra_costs.amounts(snapshot, subtotal):
            if not cost.is_taxable:
                continue
            rate = check_rate(f"extra cost {cost.name!r}", cost.vat_rate)
            if rate is None:
                rate = fallback
            extra_tax += amount * rate
        return round_money(extra_tax)

    def calculate(
        self,
        snapshot: CartSnapshot,
        subtotal: float,
        shipping_amount: float = 0.0,
        shipping_info: ShippingRate | None = None,
    ) -> float:
        """Items tax + shipping tax + extra-costs tax, rounded once more."""
        if not self._is_taxable(snapshot):
            return 0.0

        items_tax = self.calculate_items_tax(snapshot)
        shipping_tax = self.calculate_shipping_tax(snapshot, shipping_amount, shipping_info)
        extra_costs_tax = self.calculate_extra_costs_tax(snapshot, subtotal)
        logger.debug(
            "Tax for zone %s: items=%.2f shipping=%.2f extra_costs=%.2f",
            snapshot.tax_zone, items_tax, shipping_tax, extra_costs_tax,
        )
        return round_money(items_tax + shipping_tax + extra_costs_tax)
