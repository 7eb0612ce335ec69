"""
Discount Schemas
================

Discounts are stored on the cart keyed by code. The insertion order of that
mapping is the evaluation priority when stacking is disabled.

Discount Types:
---------------
- **fixed**: A fixed amount off the targeted items
- **percentage**: A percentage off the targeted items
- **shipping**: An amount (or, with applies_to="percentage", a percentage)
  off the shipping cost
- **free_shipping**: Zeroes the shipping cost. It contributes nothing to the
  discount total; the shipping calculator realises it.

Conditions:
-----------
All conditions are optional and all present conditions must hold:

- minimum_amount: cart subtotal must be at least this amount
- min_items: total quantity across the cart
- item_id: the product must be in the cart; scopes the discount to it
- category: at least one item of the category; scopes the discount to it
- min_quantity: quantity of the scoped item(s), or of the whole cart when
  neither item_id nor category is given

Raw Input:
----------
Persisted discount data uses both snake_case and camelCase keys
("applies_to"/"appliesTo"). DiscountSpec.from_dict accepts either and raises
InvalidDiscount when code, type or value is missing.
"""

import math
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from ..exceptions import InvalidDiscount


class DiscountType(str, Enum):
    """Kind of discount."""
    FIXED = "fixed"
    PERCENTAGE = "percentage"
    SHIPPING = "shipping"
    FREE_SHIPPING = "free_shipping"

    @property
    def label(self) -> str:
        return {
            DiscountType.FIXED: "Fixed Amount",
            DiscountType.PERCENTAGE: "Percentage Off",
            DiscountType.SHIPPING: "Shipping Discount",
            DiscountType.FREE_SHIPPING: "Free Shipping",
        }[self]

    @property
    def affects_shipping(self) -> bool:
        return self in (DiscountType.SHIPPING, DiscountType.FREE_SHIPPING)


class DiscountConditions(BaseModel):
    """Eligibility conditions for a discount."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    minimum_amount: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("minimum_amount", "minimumAmount"),
    )
    min_quantity: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("min_quantity", "minQuantity"),
    )
    min_items: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("min_items", "minItems"),
    )
    category: Optional[str] = None
    item_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("item_id", "itemId"),
    )

    @field_validator("item_id", mode="before")
    @classmethod
    def coerce_item_id(cls, v):
        if isinstance(v, int):
            return str(v)
        return v


class DiscountSpec(BaseModel):
    """
    A discount applied to the cart.

    Attributes:
        code: Unique discount code
        type: One of DiscountType
        value: Amount or percentage, never negative
        applies_to: "percentage" turns a shipping discount into a percentage
            of the shipping cost
        conditions: Optional eligibility conditions
    """
    model_config = ConfigDict(frozen=True)

    code: str
    type: DiscountType = DiscountType.FIXED
    value: float = 0.0
    applies_to: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("applies_to", "appliesTo"),
    )
    conditions: DiscountConditions = Field(default_factory=DiscountConditions)

    @model_validator(mode="before")
    @classmethod
    def check_type(cls, data):
        """Reject unknown discount types with InvalidDiscount."""
        if isinstance(data, dict) and "type" in data:
            raw_type = data["type"]
            if isinstance(raw_type, DiscountType):
                return data
            try:
                DiscountType(raw_type)
            except ValueError:
                raise InvalidDiscount(data.get("code"), f"unknown type {raw_type!r}") from None
        return data

    @field_validator("conditions", mode="before")
    @classmethod
    def default_conditions(cls, v):
        """Persisted data stores missing conditions as null or []."""
        if v is None or v == []:
            return {}
        return v

    @model_validator(mode="after")
    def check_value(self):
        if not math.isfinite(self.value):
            raise InvalidDiscount(self.code, "value must be a finite number")
        if self.value < 0:
            raise InvalidDiscount(self.code, "value cannot be negative")
        return self

    @property
    def is_percentage_of_shipping(self) -> bool:
        return self.type == DiscountType.SHIPPING and self.applies_to == "percentage"

    @classmethod
    def from_dict(cls, data: Dict[str, Any], code: Optional[str] = None) -> "DiscountSpec":
        """
        Build a discount from raw persisted data.

        Args:
            data: Raw discount dict (code, type, value, conditions, appliesTo)
            code: Code to use when the dict itself has none (mapping key)

        Raises:
            InvalidDiscount: If code, type or value is missing, or invalid
        """
        data = dict(data)
        if code is not None:
            data.setdefault("code", code)
        missing = [key for key in ("code", "type", "value") if data.get(key) is None]
        if missing:
            raise InvalidDiscount(data.get("code"), f"missing required fields: {', '.join(missing)}")
        return cls.model_validate(data)
