"""
Cart Snapshot Schema
====================

CartSnapshot is the read-only view of a cart handed to every calculator. It
is built fresh from persisted state before each pricing call and never
mutated by the calculators.

Snapshot Lifecycle:
-------------------
1. The cart-management layer loads persisted cart state
2. CartSnapshot.from_dict() (or the constructor) validates it
3. The pricing engine reads the snapshot and returns a PricingResult

Changes (add item, apply discount, select shipping) happen upstream. The
with_*/without_* helpers return a new snapshot so callers can derive the
next state without touching the current one.

Usage:
------
    snapshot = CartSnapshot(tax_zone="RO").with_item(
        LineItem(id="sku-1", name="Book", unit_price=20.0, category="books")
    )
    result = CartPricingEngine(configuration).price(snapshot)
"""

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..exceptions import DiscountLimitExceeded, InvalidDiscount
from .discounts import DiscountSpec, DiscountType
from .extra_costs import ExtraCostSpec
from .items import LineItem
from .shipping import ShippingSelection
from .tax import TaxOverrides


class CartSnapshot(BaseModel):
    """
    Immutable view of a cart's pricing inputs.

    Attributes:
        items: Line items in insertion order
        tax_zone: Tax zone code; no zone means no tax
        vat_exempt: When True every tax amount is 0
        shipping: Selected shipping method, if any
        discounts: Discounts keyed by code; insertion order is priority
        extra_costs: Additional costs in insertion order
        tax_overrides: Cart-level tax data (rate overrides)
    """
    model_config = ConfigDict(frozen=True)

    items: Tuple[LineItem, ...] = ()
    tax_zone: Optional[str] = None
    vat_exempt: bool = False
    shipping: Optional[ShippingSelection] = None
    discounts: Dict[str, DiscountSpec] = Field(default_factory=dict)
    extra_costs: Tuple[ExtraCostSpec, ...] = ()
    tax_overrides: Optional[TaxOverrides] = None

    @field_validator("discounts")
    @classmethod
    def codes_match_keys(cls, v: Dict[str, DiscountSpec]) -> Dict[str, DiscountSpec]:
        for code, discount in v.items():
            if discount.code != code:
                raise InvalidDiscount(code, f"stored under a different code ({discount.code!r})")
        return v

    # =========================================================================
    # Derived values
    # =========================================================================

    @property
    def item_count(self) -> int:
        """Total quantity across all line items."""
        return sum(item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def shipping_method(self) -> Optional[str]:
        return self.shipping.method_id if self.shipping else None

    def has_discount_type(self, discount_type: DiscountType) -> bool:
        return any(d.type == discount_type for d in self.discounts.values())

    def find_item(self, item_id: str) -> Optional[LineItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    # =========================================================================
    # Immutable updates
    # =========================================================================

    def with_item(self, item: LineItem) -> "CartSnapshot":
        """Add an item; an existing item with the same id gets its quantity increased."""
        existing = self.find_item(item.id)
        if existing is None:
            return self.model_copy(update={"items": self.items + (item,)})
        merged = item.with_quantity(existing.quantity + item.quantity)
        items = tuple(merged if i.id == item.id else i for i in self.items)
        return self.model_copy(update={"items": items})

    def without_item(self, item_id: str) -> "CartSnapshot":
        return self.model_copy(update={"items": tuple(i for i in self.items if i.id != item_id)})

    def with_quantity(self, item_id: str, quantity: int) -> "CartSnapshot":
        """Set an item's quantity; zero or less removes the item."""
        if quantity <= 0:
            return self.without_item(item_id)
        items = tuple(i.with_quantity(quantity) if i.id == item_id else i for i in self.items)
        return self.model_copy(update={"items": items})

    def with_discount(self, discount: DiscountSpec, max_codes: Optional[int] = None) -> "CartSnapshot":
        """
        Apply a discount code.

        A code that is already applied is left as is.

        Raises:
            DiscountLimitExceeded: If max_codes codes are already applied
        """
        if discount.code in self.discounts:
            return self
        if max_codes is not None and len(self.discounts) >= max_codes:
            raise DiscountLimitExceeded(discount.code, max_codes)
        return self.model_copy(update={"discounts": {**self.discounts, discount.code: discount}})

    def without_discount(self, code: str) -> "CartSnapshot":
        discounts = {k: v for k, v in self.discounts.items() if k != code}
        return self.model_copy(update={"discounts": discounts})

    def with_extra_cost(self, cost: ExtraCostSpec) -> "CartSnapshot":
        """Add an extra cost, replacing any existing cost with the same name."""
        costs = tuple(c for c in self.extra_costs if c.name != cost.name) + (cost,)
        return self.model_copy(update={"extra_costs": costs})

    def without_extra_cost(self, name: str) -> "CartSnapshot":
        costs = tuple(c for c in self.extra_costs if c.name != name)
        return self.model_copy(update={"extra_costs": costs})

    def with_shipping(
        self,
        method_id: str,
        vat_rate: Optional[float] = None,
        vat_included: Optional[bool] = None,
    ) -> "CartSnapshot":
        selection = ShippingSelection(method_id=method_id, vat_rate=vat_rate, vat_included=vat_included)
        return self.model_copy(update={"shipping": selection})

    def without_shipping(self) -> "CartSnapshot":
        return self.model_copy(update={"shipping": None})

    def with_vat_exempt(self, exempt: bool = True) -> "CartSnapshot":
        return self.model_copy(update={"vat_exempt": exempt})

    def with_tax_zone(self, zone: Optional[str]) -> "CartSnapshot":
        return self.model_copy(update={"tax_zone": zone})

    def with_tax_overrides(self, overrides: Optional[TaxOverrides]) -> "CartSnapshot":
        return self.model_copy(update={"tax_overrides": overrides})

    # =========================================================================
    # Construction from persisted state
    # =========================================================================

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartSnapshot":
        """
        Build a snapshot from raw persisted cart state.

        Accepted keys: items, tax_zone, vat_exempt, shipping_data (or
        shipping), discount_data (or discounts; a dict keyed by code or a
        list), extra_costs, tax_data (or tax_overrides).

        Raises:
            InvalidLineItem, InvalidDiscount, InvalidExtraCost, InvalidVatRate:
                On invalid input, propagated unchanged
        """
        raw_discounts = data.get("discount_data", data.get("discounts")) or {}
        if isinstance(raw_discounts, dict):
            discounts = {
                code: DiscountSpec.from_dict(raw, code=code) for code, raw in raw_discounts.items()
            }
        else:
            parsed = [DiscountSpec.from_dict(raw) for raw in raw_discounts]
            discounts = {d.code: d for d in parsed}

        raw_shipping = data.get("shipping_data", data.get("shipping"))
        raw_tax = data.get("tax_data", data.get("tax_overrides"))

        return cls(
            items=tuple(LineItem.model_validate(_item_fields(raw)) for raw in data.get("items") or ()),
            tax_zone=data.get("tax_zone"),
            vat_exempt=bool(data.get("vat_exempt", False)),
            shipping=ShippingSelection.model_validate(raw_shipping) if raw_shipping else None,
            discounts=discounts,
            extra_costs=tuple(ExtraCostSpec.from_dict(raw) for raw in data.get("extra_costs") or ()),
            tax_overrides=TaxOverrides.model_validate(raw_tax) if raw_tax else None,
        )


def _item_fields(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Map persisted item keys (product_id, price) onto LineItem fields."""
    fields = dict(raw)
    if "id" not in fields and "product_id" in fields:
        fields["id"] = fields.pop("product_id")
    if "unit_price" not in fields and "price" in fields:
        fields["unit_price"] = fields.pop("price")
    if fields.get("metadata") is None:
        fields.pop("metadata", None)
    return fields

