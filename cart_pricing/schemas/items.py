"""
Line Item Schema
================

A line item is one product entry in the cart: a unit price, a quantity and
optional classification used by tax and discount scoping.

Validation:
-----------
Bounds are enforced at construction and violations raise InvalidLineItem.
Values are never clamped:

- unit_price must be a finite number within [0, 999999.99]
- quantity must be at least 1

Metadata:
---------
The free-form metadata dict carries optional per-item hints read by the
calculators:

- "type": item type used for per-type tax overrides (e.g. "digital")
- "weight": weight in kg used by weight-based shipping methods
"""

import math
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..exceptions import InvalidLineItem

MAX_UNIT_PRICE = 999999.99


class LineItem(BaseModel):
    """
    One product entry in the cart.

    Attributes:
        id: Product identifier, unique within a cart
        name: Display name
        unit_price: Price for a single unit
        quantity: Number of units (>= 1)
        category: Optional category used for tax rates and discount scoping
        metadata: Optional extra data ("type", "weight", ...)
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    unit_price: float
    quantity: int = 1
    category: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """Accept numeric product ids from persisted data."""
        if isinstance(v, int):
            return str(v)
        return v

    @model_validator(mode="after")
    def check_bounds(self):
        if not math.isfinite(self.unit_price) or self.unit_price < 0 or self.unit_price > MAX_UNIT_PRICE:
            raise InvalidLineItem(
                self.id, "unit_price", self.unit_price,
                f"must be between 0 and {MAX_UNIT_PRICE:,.2f}",
            )
        if self.quantity < 1:
            raise InvalidLineItem(self.id, "quantity", self.quantity, "must be at least 1")
        return self

    @property
    def line_total(self) -> float:
        """Unrounded unit_price * quantity."""
        return self.unit_price * self.quantity

    @property
    def item_type(self) -> Optional[str]:
        return self.metadata.get("type")

    @property
    def weight(self) -> float:
        return float(self.metadata.get("weight") or 0.0)

    def with_quantity(self, quantity: int) -> "LineItem":
        """Return a copy with a new quantity (validated again)."""
        return LineItem(**{**self.model_dump(), "quantity": quantity})
