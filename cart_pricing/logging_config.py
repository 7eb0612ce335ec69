"""
Logging configuration for the cart pricing package.

Usage:
    from cart_pricing.logging_config import setup_logging
    setup_logging()  # Call once at application startup

Environment variables:
    LOG_LEVEL: Set to DEBUG, INFO, WARNING, ERROR, or CRITICAL (default: INFO)

The calculators log each pricing step at DEBUG, skipped discounts at INFO
and unknown shipping methods at WARNING.
"""
import logging
import os
import sys


def setup_logging(level: str = None) -> None:
    """
    Send cart_pricing log records to stdout at the chosen level.

    Args:
        level: Level name, case-insensitive. Falls back to LOG_LEVEL, then
               INFO; an unknown name also means INFO.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    level = level.upper()

    valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if level not in valid_levels:
        level = "INFO"

    numeric_level = getattr(logging, level)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )

    logging.getLogger("cart_pricing").setLevel(numeric_level)

    logger = logging.getLogger(__name__)
    logger.debug("Logging configured at %s level", level)
