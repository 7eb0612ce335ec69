"""
Per-cart tax overrides.

A cart may carry its own tax data on top of the zone configuration: a
cart-level default rate, a shipping rate, and per-item / per-category /
per-type rate overrides. Every rate must be a fraction in [0, 1].
"""

import math
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..exceptions import InvalidVatRate


def check_rate(source: str, rate: Optional[float]) -> Optional[float]:
    """Raise InvalidVatRate unless rate is None or a finite number within [0, 1]."""
    if rate is not None and (not math.isfinite(rate) or rate < 0 or rate > 1):
        raise InvalidVatRate(source, rate)
    return rate


class TaxConditions(BaseModel):
    """Rate overrides keyed by product id, category or item type."""
    model_config = ConfigDict(frozen=True)

    rates_per_item: Dict[str, float] = Field(default_factory=dict)
    rates_per_category: Dict[str, float] = Field(default_factory=dict)
    rates_per_type: Dict[str, float] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_rates(self):
        for field_name in ("rates_per_item", "rates_per_category", "rates_per_type"):
            for key, rate in getattr(self, field_name).items():
                check_rate(f"{field_name}[{key}]", rate)
        return self


class TaxOverrides(BaseModel):
    """Tax data applied to a single cart."""
    model_config = ConfigDict(frozen=True)

    rate: Optional[float] = None
    shipping_rate: Optional[float] = None
    conditions: TaxConditions = Field(default_factory=TaxConditions)

    @model_validator(mode="after")
    def check_rates(self):
        check_rate("tax override", self.rate)
        check_rate("shipping tax override", self.shipping_rate)
        return self
