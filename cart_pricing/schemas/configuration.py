"""
Configuration Schemas
=====================

The pricing core reads its configuration through the ConfigurationProvider
protocol and never from ambient global state. PricingConfiguration is the
in-memory implementation; it is immutable for the duration of a calculation.

Settings Layout:
----------------
PricingConfiguration.from_settings accepts the nested settings dict produced
by cart_pricing.config.get_default_settings():

    {
        "tax": {
            "default_zone": "US",
            "settings": {"zones": {"RO": {"default_rate": 0.19, ...}}},
        },
        "shipping": {
            "settings": {
                "free_shipping_threshold": 100.0,
                "methods": {"standard": {"cost": 5.99, ...}},
            },
        },
        "discounts": {"allow_stacking": False, "max_discount_codes": 3},
    }

A free shipping threshold of 0 (or a missing one) means "no threshold".

Shipping Method Types:
----------------------
- **flat**: the configured cost
- **percentage**: subtotal * rate
- **weight**: total item weight (metadata "weight" * quantity) * rate_per_kg
"""

from enum import Enum
from typing import Any, Dict, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ZoneTaxConfig(BaseModel):
    """Tax settings for one zone."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: Optional[str] = None
    default_rate: float = 0.0
    apply_to_shipping: bool = False
    rates_by_category: Dict[str, float] = Field(default_factory=dict)


class ShippingMethodType(str, Enum):
    FLAT = "flat"
    PERCENTAGE = "percentage"
    WEIGHT = "weight"


class ShippingMethodConfig(BaseModel):
    """Settings for one shipping method."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: Optional[str] = None
    cost: float = 0.0
    type: ShippingMethodType = ShippingMethodType.FLAT
    rate: float = 0.0
    rate_per_kg: float = 0.0
    # Not range-checked here; the shipping calculator raises InvalidVatRate
    # when the rate is resolved.
    vat_rate: Optional[float] = None
    vat_included: bool = False


class DiscountPolicy(BaseModel):
    """Whether several discount codes may apply to one cart, and how many."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    allow_stacking: bool = False
    max_discount_codes: int = 3


class ConfigurationProvider(Protocol):
    """Read interface the calculators use to look up configuration."""

    def get_zone_tax_config(self, zone: Optional[str]) -> Optional[ZoneTaxConfig]:
        ...

    def get_shipping_method_config(self, method_id: str) -> Optional[ShippingMethodConfig]:
        ...

    def get_shipping_methods(self) -> Dict[str, ShippingMethodConfig]:
        ...

    def get_free_shipping_threshold(self) -> Optional[float]:
        ...

    def get_discount_policy(self) -> DiscountPolicy:
        ...


class PricingConfiguration(BaseModel):
    """In-memory ConfigurationProvider."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    zones: Dict[str, ZoneTaxConfig] = Field(default_factory=dict)
    shipping_methods: Dict[str, ShippingMethodConfig] = Field(default_factory=dict)
    free_shipping_threshold: Optional[float] = None
    discount_policy: DiscountPolicy = Field(default_factory=DiscountPolicy)

    @field_validator("free_shipping_threshold", mode="before")
    @classmethod
    def zero_threshold_is_none(cls, v):
        if v in (0, 0.0, "", "0"):
            return None
        return v

    def get_zone_tax_config(self, zone: Optional[str]) -> Optional[ZoneTaxConfig]:
        if not zone:
            return None
        return self.zones.get(zone)

    def get_shipping_method_config(self, method_id: str) -> Optional[ShippingMethodConfig]:
        return self.shipping_methods.get(method_id)

    def get_shipping_methods(self) -> Dict[str, ShippingMethodConfig]:
        return dict(self.shipping_methods)

    def get_free_shipping_threshold(self) -> Optional[float]:
        return self.free_shipping_threshold

    def get_discount_policy(self) -> DiscountPolicy:
        return self.discount_policy

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> "PricingConfiguration":
        """
        Build a configuration from the nested settings dict.

        Args:
            settings: Settings in the layout documented in this module

        Returns:
            A frozen PricingConfiguration
        """
        tax = settings.get("tax") or {}
        shipping = settings.get("shipping") or {}
        discounts = settings.get("discounts") or {}

        shipping_settings = shipping.get("settings") or {}
        # Older settings put the threshold directly under "shipping"
        if "free_shipping_threshold" in shipping_settings:
            threshold = shipping_settings["free_shipping_threshold"]
        else:
            threshold = shipping.get("free_shipping_threshold")

        return cls(
            zones=(tax.get("settings") or {}).get("zones") or {},
            shipping_methods=shipping_settings.get("methods") or {},
            free_shipping_threshold=threshold,
            discount_policy=DiscountPolicy(
                allow_stacking=discounts.get("allow_stacking", False),
                max_discount_codes=discounts.get("max_discount_codes", 3),
            ),
        )
