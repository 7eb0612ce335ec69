"""
cart_pricing: shopping-cart pricing calculations.

Computes subtotal, tax, shipping, discounts, extra costs and total for an
immutable cart snapshot against an explicit configuration.

    from cart_pricing import CartPricingEngine, CartSnapshot, LineItem
    from cart_pricing.config import get_pricing_configuration

    engine = CartPricingEngine(get_pricing_configuration())
    snapshot = CartSnapshot(tax_zone="RO").with_item(
        LineItem(id="sku-1", name="Mug", unit_price=100.0)
    )
    engine.price(snapshot).total  # 119.0
"""

from .exceptions import (
    DiscountLimitExceeded,
    InvalidDiscount,
    InvalidExtraCost,
    InvalidLineItem,
    InvalidVatRate,
    PricingError,
)
from .schemas import (
    CartSnapshot,
    DiscountConditions,
    DiscountPolicy,
    DiscountSpec,
    DiscountType,
    ExtraCostSpec,
    ExtraCostType,
    LineItem,
    PricingConfiguration,
    PricingResult,
    ShippingMethodConfig,
    ShippingRate,
    ShippingSelection,
    TaxConditions,
    TaxOverrides,
    ZoneTaxConfig,
)
from .services.money import round_money
from .services.pricing import CartPricingEngine

__version__ = "0.1.0"

__all__ = [
    "CartPricingEngine",
    "CartSnapshot",
    "DiscountConditions",
    "DiscountLimitExceeded",
    "DiscountPolicy",
    "DiscountSpec",
    "DiscountType",
    "ExtraCostSpec",
    "ExtraCostType",
    "InvalidDiscount",
    "InvalidExtraCost",
    "InvalidLineItem",
    "InvalidVatRate",
    "LineItem",
    "PricingConfiguration",
    "PricingError",
    "PricingResult",
    "ShippingMethodConfig",
    "ShippingRate",
    "ShippingSelection",
    "TaxConditions",
    "TaxOverrides",
    "ZoneTaxConfig",
    "round_money",
]
