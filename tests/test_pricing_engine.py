"""
Tests for CartPricingEngine.

End-to-end pricing of cart snapshots: the worked scenarios, the total
formula, free shipping and the agreement between price() and the
individual getters.
"""
import pytest

from cart_pricing.exceptions import InvalidVatRate
from cart_pricing.schemas import CartSnapshot, DiscountSpec, ExtraCostSpec, ShippingMethodConfig
from cart_pricing.services.pricing import CartPricingEngine


# =============================================================================
# Worked scenarios
# =============================================================================

class TestScenarios:
    """End-to-end carts with known totals."""

    def test_single_item_ro(self, engine, ro_cart):
        """100.00 in RO with no shipping or discounts: 19.00 tax, 119.00 total."""
        result = engine.price(ro_cart)
        assert result.subtotal == 100.0
        assert result.tax_amount == 19.0
        assert result.total == 119.0
        assert result.item_count == 1

    def test_gift_wrap_extra_cost(self, engine, ro_cart):
        """A 5.00 gift wrap adds 5.00 plus 0.95 tax: total 124.95."""
        snapshot = ro_cart.with_extra_cost(ExtraCostSpec(name="Gift Wrap", amount=5.0))
        result = engine.price(snapshot)
        assert result.extra_costs_total == 5.0
        assert result.tax_amount == 19.95
        assert result.total == 124.95

    def test_shipping_discount_capped(self, engine, ro_cart):
        """A 10.00 shipping discount on 5.99 standard shipping is capped at 5.99."""
        snapshot = (
            ro_cart
            .with_shipping("standard")
            .with_discount(DiscountSpec(code="SHIP10", type="shipping", value=10.0))
        )
        result = engine.price(snapshot)
        assert result.shipping_amount == 5.99
        assert result.discount_amount == 5.99
        # Shipping tax is on the undiscounted shipping: 19.00 + 1.14
        assert result.tax_amount == 20.14
        assert result.total == 120.14

    def test_mixed_tax_rates(self, engine, make_item):
        """Books at 5% plus an uncategorized item at 19%: 24.00 tax."""
        snapshot = CartSnapshot(
            tax_zone="RO",
            items=(make_item("book", 100.0, category="books"), make_item("lamp", 100.0)),
        )
        result = engine.price(snapshot)
        assert result.tax_amount == 24.0
        assert result.total == 224.0


# =============================================================================
# Totals
# =============================================================================

class TestTotals:
    """Test the total formula and edge cases."""

    def test_empty_cart(self, engine):
        result = engine.price(CartSnapshot(tax_zone="RO"))
        assert result.subtotal == 0.0
        assert result.total == 0.0
        assert result.item_count == 0
        assert result.is_free_shipping_applied is False

    def test_total_formula(self, config_factory, make_item):
        engine = CartPricingEngine(config_factory(allow_stacking=True))
        snapshot = (
            CartSnapshot(tax_zone="US", items=(make_item("a", 40.0, quantity=2),))
            .with_shipping("express")
            .with_extra_cost(ExtraCostSpec(name="Handling", amount=4.0, vat_rate=0.0))
            .with_discount(DiscountSpec(code="TEN", type="fixed", value=10))
        )
        result = engine.price(snapshot)
        # US: 80 * 0.0725 = 5.80, shipping untaxed in US
        assert result.tax_amount == 5.8
        assert result.total == pytest.approx(80.0 + 15.99 + 5.8 + 4.0 - 10.0)
        assert result.total == 95.79

    def test_vat_exempt_cart(self, engine, ro_cart):
        snapshot = (
            ro_cart
            .with_shipping("standard")
            .with_extra_cost(ExtraCostSpec(name="Gift Wrap", amount=5.0))
            .with_vat_exempt()
        )
        result = engine.price(snapshot)
        assert result.tax_amount == 0.0
        assert result.total == 110.99

    def test_no_tax_zone(self, engine, ro_cart):
        result = engine.price(ro_cart.with_tax_zone(None))
        assert result.tax_amount == 0.0
        assert result.total == 100.0

    def test_discount_can_zero_the_cart(self, engine, ro_cart):
        """Discounts stop at subtotal plus shipping; tax is still due."""
        snapshot = ro_cart.with_discount(DiscountSpec(code="ALL", type="fixed", value=500))
        result = engine.price(snapshot)
        assert result.discount_amount == 100.0
        assert result.total == 19.0

    def test_ten_small_lines(self, engine, make_item):
        items = tuple(make_item(f"sku-{n}", 9.99) for n in range(10))
        result = engine.price(CartSnapshot(tax_zone="RO", items=items))
        assert result.subtotal == 99.9
        assert result.tax_amount == 18.98
        assert result.total == 118.88

    def test_invalid_shipping_rate_raises(self, engine, ro_cart):
        with pytest.raises(InvalidVatRate):
            engine.price(ro_cart.with_shipping("standard", vat_rate=2.0))

    def test_unknown_method_charges_nothing(self, engine, ro_cart):
        result = engine.price(ro_cart.with_shipping("teleport"))
        assert result.shipping_amount == 0.0
        assert result.total == 119.0


# =============================================================================
# Free shipping
# =============================================================================

class TestFreeShipping:
    """Test free shipping by threshold and by discount."""

    @pytest.fixture
    def threshold_engine(self, config_factory):
        return CartPricingEngine(config_factory(free_shipping_threshold=100.0))

    def test_threshold_met(self, threshold_engine, ro_cart):
        result = threshold_engine.price(ro_cart.with_shipping("express"))
        assert result.shipping_amount == 0.0
        assert result.is_free_shipping_applied is True
        assert result.total == 119.0

    def test_threshold_not_met(self, threshold_engine, make_item):
        snapshot = CartSnapshot(tax_zone="US", items=(make_item("a", 50.0),)).with_shipping("standard")
        result = threshold_engine.price(snapshot)
        assert result.shipping_amount == 5.99
        assert result.is_free_shipping_applied is False

    def test_free_shipping_discount(self, engine, ro_cart):
        snapshot = (
            ro_cart
            .with_shipping("express")
            .with_discount(DiscountSpec(code="FREESHIP", type="free_shipping", value=0))
        )
        result = engine.price(snapshot)
        assert result.shipping_amount == 0.0
        assert result.discount_amount == 0.0
        assert result.is_free_shipping_applied is True
        assert result.total == 119.0

    def test_free_shipping_code_without_method(self, engine, ro_cart):
        """With nothing to ship, a free shipping code does not block the next code."""
        snapshot = (
            ro_cart
            .with_discount(DiscountSpec(code="FREESHIP", type="free_shipping", value=0))
            .with_discount(DiscountSpec(code="FIVE", type="fixed", value=5))
        )
        result = engine.price(snapshot)
        assert result.discount_amount == 5.0
        assert result.total == 114.0

    def test_no_method_is_not_free_shipping(self, threshold_engine, ro_cart):
        assert threshold_engine.price(ro_cart).is_free_shipping_applied is False


# =============================================================================
# Getters
# =============================================================================

class TestGetters:
    """The individual getters agree with price()."""

    @pytest.fixture
    def snapshot(self, make_item):
        return (
            CartSnapshot(
                tax_zone="RO",
                items=(
                    make_item("book", 12.5, quantity=3, category="books"),
                    make_item("mug", 9.99, quantity=2),
                ),
            )
            .with_shipping("standard")
            .with_extra_cost(ExtraCostSpec(name="Gift Wrap", amount=3.0, vat_rate=0.09))
            .with_discount(DiscountSpec(code="PCT", type="percentage", value=10))
        )

    def test_getters_match_price(self, engine, snapshot):
        result = engine.price(snapshot)
        assert engine.get_subtotal(snapshot) == result.subtotal
        assert engine.get_item_count(snapshot) == result.item_count == 5
        assert engine.get_shipping_amount(snapshot) == result.shipping_amount
        assert engine.get_tax_amount(snapshot) == result.tax_amount
        assert engine.get_extra_costs_total(snapshot) == result.extra_costs_total
        assert engine.get_discount_amount(snapshot) == result.discount_amount
        assert engine.is_free_shipping_applied(snapshot) == result.is_free_shipping_applied
        assert engine.get_total(snapshot) == result.total

    def test_invalid_shipping_rate_raises_from_every_shipping_getter(self, engine, ro_cart):
        """Getters that depend on shipping fail the same way get_total() does."""
        snapshot = ro_cart.with_shipping("standard", vat_rate=2.0)
        for getter in (
            engine.get_shipping_amount,
            engine.get_discount_amount,
            engine.get_tax_amount,
            engine.is_free_shipping_applied,
            engine.get_total,
        ):
            with pytest.raises(InvalidVatRate):
                getter(snapshot)

    def test_shipping_info(self, engine, snapshot):
        info = engine.get_shipping_info(snapshot)
        assert info.amount == 5.99
        assert info.vat_included is False

    def test_repeatable(self, engine, snapshot):
        """Pricing the same snapshot twice gives the same result."""
        assert engine.price(snapshot) == engine.price(snapshot)

    def test_snapshot_unchanged(self, engine, snapshot):
        before = snapshot.model_dump()
        engine.price(snapshot)
        assert snapshot.model_dump() == before

    def test_exposes_calculators(self, engine, config):
        assert engine.config is config
        assert engine.shipping.available_methods().keys() == {"standard", "express"}
        assert engine.tax is not None
        assert engine.discounts is not None


class TestWeightShipping:

    def test_weight_based_method(self, config_factory, make_item):
        engine = CartPricingEngine(
            config_factory(courier=ShippingMethodConfig(name="Courier", type="weight", rate_per_kg=2.0))
        )
        snapshot = CartSnapshot(
            tax_zone="US",
            items=(make_item("kettle", 30.0, metadata={"weight": 2.5}),),
        ).with_shipping("courier")
        result = engine.price(snapshot)
        assert result.shipping_amount == 5.0
