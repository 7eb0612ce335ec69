"""
Tests for setup_logging and the log records the calculators emit.
"""
import logging


class TestSetupLogging:
    """Level selection for the cart_pricing logger."""

    def test_info_when_log_level_unset(self, monkeypatch):
        """Without LOG_LEVEL the package logs at INFO."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        from cart_pricing.logging_config import setup_logging
        setup_logging()

        logger = logging.getLogger("cart_pricing")
        assert logger.level == logging.INFO

    def test_lowercase_log_level_env(self, monkeypatch):
        """LOG_LEVEL is case-insensitive."""
        monkeypatch.setenv("LOG_LEVEL", "warning")

        from cart_pricing.logging_config import setup_logging
        setup_logging()

        logger = logging.getLogger("cart_pricing")
        assert logger.level == logging.WARNING

    def test_argument_beats_environment(self, monkeypatch):
        """An explicit level wins over LOG_LEVEL."""
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        from cart_pricing.logging_config import setup_logging
        setup_logging(level="DEBUG")

        logger = logging.getLogger("cart_pricing")
        assert logger.level == logging.DEBUG

    def test_unknown_level_name_means_info(self):
        """A typo in the level name leaves the package at INFO instead of failing."""
        from cart_pricing.logging_config import setup_logging
        setup_logging(level="INVALID_LEVEL")

        logger = logging.getLogger("cart_pricing")
        assert logger.level == logging.INFO


class TestPricingLogs:
    """Test what the calculators log while pricing."""

    def test_price_logs_breakdown_at_debug(self, engine, ro_cart, caplog):
        """The full breakdown is logged at DEBUG only."""
        with caplog.at_level(logging.DEBUG, logger="cart_pricing"):
            engine.price(ro_cart)

        breakdown = [r for r in caplog.records if r.message.startswith("Priced cart")]
        assert len(breakdown) == 1
        assert breakdown[0].levelno == logging.DEBUG
        assert "total=119.00" in breakdown[0].message

    def test_nothing_above_debug_for_a_plain_cart(self, engine, ro_cart, caplog):
        with caplog.at_level(logging.INFO):
            engine.price(ro_cart.with_shipping("standard"))

        assert [r for r in caplog.records if r.name.startswith("cart_pricing")] == []
