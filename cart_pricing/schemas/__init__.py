"""
Schemas Package for Cart Pricing
================================

This package contains the Pydantic models that describe the pricing inputs
(cart snapshot, line items, discounts, extra costs, shipping selection,
configuration) and the pricing output.

Schema Organization:
--------------------
- **items.py**: LineItem
- **discounts.py**: DiscountType, DiscountConditions, DiscountSpec
- **extra_costs.py**: ExtraCostType, ExtraCostSpec
- **shipping.py**: ShippingSelection, ShippingRate
- **tax.py**: TaxConditions, TaxOverrides
- **configuration.py**: Zone/shipping/discount settings and the
  ConfigurationProvider protocol
- **cart.py**: CartSnapshot
- **pricing.py**: PricingResult

Pydantic Configuration:
-----------------------
Every model uses `model_config = ConfigDict(frozen=True)`: calculators get
read-only inputs and return read-only results. Domain validation failures
raise the errors in cart_pricing.exceptions; type coercion failures raise
pydantic's ValidationError.
"""

from .cart import CartSnapshot
from .configuration import (
    ConfigurationProvider,
    DiscountPolicy,
    PricingConfiguration,
    ShippingMethodConfig,
    ShippingMethodType,
    ZoneTaxConfig,
)
from .discounts import DiscountConditions, DiscountSpec, DiscountType
from .extra_costs import ExtraCostSpec, ExtraCostType
from .items import LineItem, MAX_UNIT_PRICE
from .pricing import PricingResult
from .shipping import ShippingRate, ShippingSelection
from .tax import TaxConditions, TaxOverrides

__all__ = [
    "CartSnapshot",
    "ConfigurationProvider",
    "DiscountConditions",
    "DiscountPolicy",
    "DiscountSpec",
    "DiscountType",
    "ExtraCostSpec",
    "ExtraCostType",
    "LineItem",
    "MAX_UNIT_PRICE",
    "PricingConfiguration",
    "PricingResult",
    "ShippingMethodConfig",
    "ShippingMethodType",
    "ShippingRate",
    "ShippingSelection",
    "TaxConditions",
    "TaxOverrides",
    "ZoneTaxConfig",
]
