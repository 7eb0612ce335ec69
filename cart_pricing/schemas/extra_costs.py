"""
Extra cost schema: fixed or percentage-of-subtotal charges (gift wrap,
handling, insurance) with their own VAT treatment.
"""

import math
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from ..exceptions import InvalidExtraCost


class ExtraCostType(str, Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"


class ExtraCostSpec(BaseModel):
    """
    An additional cost on the cart.

    vat_included=True means the amount already embeds VAT and no tax is
    added for it, whatever vat_rate says. vat_rate=None falls back to the
    cart's zone default rate.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    amount: float
    type: ExtraCostType = ExtraCostType.FIXED
    description: Optional[str] = None
    vat_rate: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("vat_rate", "vatRate"),
    )
    vat_included: bool = Field(
        default=False, validation_alias=AliasChoices("vat_included", "vatIncluded"),
    )

    @model_validator(mode="before")
    @classmethod
    def check_type(cls, data):
        if isinstance(data, dict) and "type" in data and not isinstance(data["type"], ExtraCostType):
            try:
                ExtraCostType(data["type"])
            except ValueError:
                raise InvalidExtraCost(data.get("name"), f"unknown type {data['type']!r}") from None
        return data

    @model_validator(mode="after")
    def check_amount(self):
        if not math.isfinite(self.amount):
            raise InvalidExtraCost(self.name, "amount must be a finite number")
        if self.type == ExtraCostType.FIXED and self.amount < 0:
            raise InvalidExtraCost(self.name, "fixed amount cannot be negative")
        return self

    @property
    def is_taxable(self) -> bool:
        return not self.vat_included

    def amount_for(self, subtotal: float) -> float:
        """Unrounded amount of this cost for the given subtotal."""
        if self.type == ExtraCostType.PERCENTAGE:
            return subtotal * self.amount / 100
        return self.amount

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtraCostSpec":
        """Build from raw data; name, amount and type are required."""
        missing = [key for key in ("name", "amount", "type") if data.get(key) is None]
        if missing:
            raise InvalidExtraCost(data.get("name"), f"missing required fields: {', '.join(missing)}")
        return cls.model_validate(data)
