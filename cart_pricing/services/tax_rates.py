"""
Tax rate resolution.

Each line item resolves its rate independently, so one cart can mix rates.
Priority, highest first:

1. Cart override for the product id (rates_per_item)
2. Cart override for the item's category (rates_per_category)
3. Cart override for the item's type metadata (rates_per_type)
4. Zone rate for the category (rates_by_category)
5. Cart-level override rate, else the zone default rate
6. 0.0 when there is no zone
"""

from typing import Optional

from ..schemas.configuration import ZoneTaxConfig
from ..schemas.tax import TaxOverrides


def default_rate(zone_config: Optional[ZoneTaxConfig], overrides: Optional[TaxOverrides] = None) -> float:
    """Cart-wide default rate: the override rate, else the zone default, else 0."""
    if overrides is not None and overrides.rate is not None:
        return overrides.rate
    if zone_config is None:
        return 0.0
    return zone_config.default_rate


def resolve_rate(
    zone_config: Optional[ZoneTaxConfig],
    category: Optional[str] = None,
    product_id: Optional[str] = None,
    item_type: Optional[str] = None,
    overrides: Optional[TaxOverrides] = None,
) -> float:
    """
    Resolve the effective tax rate for one item.

    Args:
        zone_config: Tax settings for the cart's zone (None when no zone)
        category: Item category
        product_id: Item product id
        item_type: Item type from metadata["type"]
        overrides: Cart-level tax overrides

    Returns:
        Rate as a fraction (0.19 for 19%)
    """
    if overrides is not None:
        conditions = overrides.conditions
        if product_id is not None and product_id in conditions.rates_per_item:
            return conditions.rates_per_item[product_id]
        if category is not None and category in conditions.rates_per_category:
            return conditions.rates_per_category[category]
        if item_type is not None and item_type in conditions.rates_per_type:
            return conditions.rates_per_type[item_type]

    if zone_config is not None and category is not None and category in zone_config.rates_by_category:
        return zone_config.rates_by_category[category]

    return default_rate(zone_config, overrides)
