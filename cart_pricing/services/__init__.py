"""
Services Package for Cart Pricing
=================================

This package contains the pricing calculators. Every calculator is a
stateless component that receives its configuration provider at
construction and computes amounts from a CartSnapshot.

Available Services:
-------------------
- **money**: round_money, the 2-decimal half-up rounding used everywhere
- **tax_rates**: Per-item tax rate resolution with override priority
- **tax**: TaxCalculator (items, shipping and extra-costs tax)
- **shipping**: ShippingCalculator (method cost, free shipping, VAT info)
- **discounts**: DiscountCalculator (conditions, strategies, stacking)
- **extra_costs**: ExtraCostCalculator
- **pricing**: CartPricingEngine, which composes all of the above

Usage:
------
    from cart_pricing.services.pricing import CartPricingEngine

    engine = CartPricingEngine(configuration)
    result = engine.price(snapshot)
"""

from . import money
from . import tax_rates
from . import tax
from . import shipping
from . import discounts
from . import extra_costs
from . import pricing

__all__ = ["money", "tax_rates", "tax", "shipping", "discounts", "extra_costs", "pricing"]
