"""
Configuration Module for Cart Pricing
=====================================

This module centralizes the default pricing settings and the environment
variables that override them. The pricing calculators never read this module
directly: callers build a PricingConfiguration from these settings and pass
it to CartPricingEngine.

Configuration Categories:
-------------------------
- **Tax Zones**: Default rate, shipping taxation and reduced category rates
  per zone (US, RO).

- **Shipping**: Flat costs per method and the free shipping threshold.

- **Discounts**: Whether discount codes stack and how many may apply.

Environment Variables:
----------------------
- CART_DEFAULT_TAX_ZONE: Zone used for new carts (default: "US")
- CART_US_TAX_RATE: US default rate (default: 0.0725)
- CART_RO_TAX_RATE: RO default rate (default: 0.19)
- CART_FREE_SHIPPING_THRESHOLD: Subtotal for free shipping (default: 100.00,
  0 disables it)
- CART_STANDARD_SHIPPING_COST: Standard shipping cost (default: 5.99)
- CART_EXPRESS_SHIPPING_COST: Express shipping cost (default: 15.99)
- CART_DISCOUNT_STACKING: Allow several discount codes (default: "false")
- CART_MAX_DISCOUNT_CODES: Maximum stacked codes (default: 3)

Values are read from the process environment, after loading a .env file
if one exists.

Usage:
------
    from cart_pricing.config import get_pricing_configuration

    engine = CartPricingEngine(get_pricing_configuration())
"""

import os
from typing import Any, Dict

from dotenv import load_dotenv

from .schemas.configuration import PricingConfiguration

load_dotenv()


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


# =============================================================================
# Tax Configuration
# =============================================================================
# Rates are fractions (0.19 = 19%). Category rates override the zone default
# for items in that category.

DEFAULT_TAX_ZONE: str = os.getenv("CART_DEFAULT_TAX_ZONE", "US")
US_TAX_RATE: float = _env_float("CART_US_TAX_RATE", 0.0725)
RO_TAX_RATE: float = _env_float("CART_RO_TAX_RATE", 0.19)


# =============================================================================
# Shipping Configuration
# =============================================================================
# A threshold of 0 disables free shipping by subtotal.

FREE_SHIPPING_THRESHOLD: float = _env_float("CART_FREE_SHIPPING_THRESHOLD", 100.00)
STANDARD_SHIPPING_COST: float = _env_float("CART_STANDARD_SHIPPING_COST", 5.99)
EXPRESS_SHIPPING_COST: float = _env_float("CART_EXPRESS_SHIPPING_COST", 15.99)


# =============================================================================
# Discount Configuration
# =============================================================================

DISCOUNT_STACKING: bool = os.getenv("CART_DISCOUNT_STACKING", "false").lower() == "true"
MAX_DISCOUNT_CODES: int = int(os.getenv("CART_MAX_DISCOUNT_CODES", "3"))


def get_default_settings() -> Dict[str, Any]:
    """
    Return the default settings dict.

    Built on each call so tests can patch the module-level values.

    Returns:
        Settings in the layout PricingConfiguration.from_settings expects
    """
    return {
        "tax": {
            "default_zone": DEFAULT_TAX_ZONE,
            "settings": {
                "zones": {
                    "US": {
                        "name": "United States",
                        "default_rate": US_TAX_RATE,
                        "apply_to_shipping": False,
                        "rates_by_category": {
                            "digital": 0.0,
                            "food": 0.03,
                        },
                    },
                    "RO": {
                        "name": "Romania",
                        "default_rate": RO_TAX_RATE,
                        "apply_to_shipping": True,
                        "rates_by_category": {
                            "books": 0.05,
                            "food": 0.09,
                        },
                    },
                },
            },
        },
        "shipping": {
            "settings": {
                "free_shipping_threshold": FREE_SHIPPING_THRESHOLD,
                "methods": {
                    "standard": {
                        "name": "Standard Shipping",
                        "cost": STANDARD_SHIPPING_COST,
                        "vat_included": False,
                        "vat_rate": None,  # None = use the cart's rate
                    },
                    "express": {
                        "name": "Express Shipping",
                        "cost": EXPRESS_SHIPPING_COST,
                        "vat_included": False,
                        "vat_rate": None,
                    },
                },
            },
        },
        "discounts": {
            "allow_stacking": DISCOUNT_STACKING,
            "max_discount_codes": MAX_DISCOUNT_CODES,
        },
    }


def get_pricing_configuration() -> PricingConfiguration:
    """Build the default PricingConfiguration from the current settings."""
    return PricingConfiguration.from_settings(get_default_settings())
