"""
Pricing errors.

All errors are input-validation rejections raised synchronously at the
boundary (model construction or a calculator entry point). The pricing core
never catches them; callers translate them into application responses.

These do not subclass ValueError so pydantic validators let them propagate
unchanged instead of folding them into a ValidationError.
"""

from typing import Any


class PricingError(Exception):
    """Base class for pricing input errors."""


class InvalidLineItem(PricingError):
    """Raised when a line item has an out-of-range price or quantity."""

    def __init__(self, item_id: Any, field: str, value: Any, reason: str):
        self.item_id = item_id
        self.field = field
        self.value = value
        super().__init__(f"Invalid line item {item_id!r}: {field}={value!r} ({reason})")


class InvalidDiscount(PricingError):
    """Raised for an unknown discount type, negative value or missing fields."""

    def __init__(self, code: Any, reason: str):
        self.code = code
        super().__init__(f"Invalid discount {code!r}: {reason}")


class InvalidVatRate(PricingError):
    """Raised when a configured or supplied VAT rate is outside [0, 1]."""

    def __init__(self, source: str, rate: Any):
        self.source = source
        self.rate = rate
        super().__init__(f"VAT rate for {source} must be between 0 and 1, got {rate!r}")


class InvalidExtraCost(PricingError):
    """Raised for an unknown extra cost type or a negative fixed amount."""

    def __init__(self, name: Any, reason: str):
        self.name = name
        super().__init__(f"Invalid extra cost {name!r}: {reason}")


class DiscountLimitExceeded(PricingError):
    """Raised when applying a discount code would exceed the allowed number of codes."""

    def __init__(self, code: str, max_codes: int):
        self.code = code
        self.max_codes = max_codes
        super().__init__(f"Cannot apply {code!r}: no more than {max_codes} discount codes allowed")
