"""
Tests for ExtraCostCalculator.
"""
from cart_pricing.schemas import ExtraCostSpec
from cart_pricing.services.extra_costs import ExtraCostCalculator


class TestExtraCostCalculator:

    def test_no_costs(self, ro_cart):
        assert ExtraCostCalculator().total(ro_cart, 100.0) == 0.0

    def test_fixed_and_percentage(self, ro_cart):
        snapshot = (
            ro_cart
            .with_extra_cost(ExtraCostSpec(name="Gift Wrap", amount=5.0))
            .with_extra_cost(ExtraCostSpec(name="Insurance", amount=1.5, type="percentage"))
        )
        assert ExtraCostCalculator().total(snapshot, 200.0) == 8.0

    def test_amounts_in_order(self, ro_cart):
        snapshot = (
            ro_cart
            .with_extra_cost(ExtraCostSpec(name="Gift Wrap", amount=5.0))
            .with_extra_cost(ExtraCostSpec(name="Handling", amount=2.5))
        )
        amounts = [(cost.name, amount) for cost, amount in ExtraCostCalculator().amounts(snapshot, 100.0)]
        assert amounts == [("Gift Wrap", 5.0), ("Handling", 2.5)]

    def test_total_is_rounded(self, ro_cart):
        """0.5% of 99.99 is 0.49995, rounded half-up to 0.50."""
        snapshot = ro_cart.with_extra_cost(ExtraCostSpec(name="Insurance", amount=0.5, type="percentage"))
        assert ExtraCostCalculator().total(snapshot, 99.99) == 0.5
