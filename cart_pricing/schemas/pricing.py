"""
Pricing result returned by CartPricingEngine.price().
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class PricingResult(BaseModel):
    """
    Full pricing breakdown for a cart.

    Monetary fields are rounded to 2 decimals. The total is
    subtotal + shipping_amount + tax_amount + extra_costs_total - discount_amount,
    rounded once.
    """
    model_config = ConfigDict(frozen=True)

    subtotal: float
    shipping_amount: float
    tax_amount: float
    discount_amount: float
    extra_costs_total: float
    total: float
    item_count: int
    is_free_shipping_applied: bool

    def as_summary(self) -> Dict[str, Any]:
        """Plain dict for the cart-management layer."""
        return {
            "item_count": self.item_count,
            "subtotal": self.subtotal,
            "shipping": self.shipping_amount,
            "tax": self.tax_amount,
            "discounts": self.discount_amount,
            "extra_costs": self.extra_costs_total,
            "total": self.total,
            "free_shipping": self.is_free_shipping_applied,
        }
