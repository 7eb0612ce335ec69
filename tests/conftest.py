import pytest

from cart_pricing.schemas import (
    CartSnapshot,
    DiscountPolicy,
    LineItem,
    PricingConfiguration,
    ShippingMethodConfig,
    ZoneTaxConfig,
)
from cart_pricing.services.pricing import CartPricingEngine


def build_configuration(
    free_shipping_threshold=None,
    allow_stacking=False,
    max_discount_codes=3,
    **methods,
):
    """Test configuration with the US and RO zones and flat shipping methods."""
    shipping_methods = {
        "standard": ShippingMethodConfig(name="Standard Shipping", cost=5.99),
        "express": ShippingMethodConfig(name="Express Shipping", cost=15.99),
    }
    shipping_methods.update(methods)
    return PricingConfiguration(
        zones={
            "US": ZoneTaxConfig(
                name="United States",
                default_rate=0.0725,
                apply_to_shipping=False,
                rates_by_category={"digital": 0.0, "food": 0.03},
            ),
            "RO": ZoneTaxConfig(
                name="Romania",
                default_rate=0.19,
                apply_to_shipping=True,
                rates_by_category={"books": 0.05, "food": 0.09},
            ),
        },
        shipping_methods=shipping_methods,
        free_shipping_threshold=free_shipping_threshold,
        discount_policy=DiscountPolicy(
            allow_stacking=allow_stacking,
            max_discount_codes=max_discount_codes,
        ),
    )


@pytest.fixture
def config():
    """Configuration without a free shipping threshold and without stacking."""
    return build_configuration()


@pytest.fixture
def engine(config):
    return CartPricingEngine(config)


@pytest.fixture
def config_factory():
    """Returns build_configuration so tests can vary threshold and stacking."""
    return build_configuration


@pytest.fixture
def make_item():
    """Factory for line items: make_item("sku", 9.99, quantity=2, category="books")."""
    def _make(item_id="item-1", price=100.0, quantity=1, **kwargs):
        return LineItem(
            id=item_id,
            name=kwargs.pop("name", f"Test Product {item_id}"),
            unit_price=price,
            quantity=quantity,
            **kwargs,
        )
    return _make


@pytest.fixture
def ro_cart(make_item):
    """RO cart with a single 100.00 item."""
    return CartSnapshot(tax_zone="RO", items=(make_item("item-1", 100.0),))
