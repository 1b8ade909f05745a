"""Core constants module.

Re-exports all constants for convenience.
"""

from src.core.constants.generic import (
    WAD,
    PRECISION,
    MAX_FEED_DECIMALS,
    INFINITE_HEALTH_FACTOR,
    to_wad,
    from_wad,
)

from src.core.constants.protocol import (
    LIQUIDATION_THRESHOLD,
    LIQUIDATION_BONUS,
    LIQUIDATION_PRECISION,
    MIN_HEALTH_FACTOR,
    MIN_DEBT_THRESHOLD,
    DEFAULT_ENGINE_ADDRESS,
)

__all__ = [
    # Generic
    "WAD",
    "PRECISION",
    "MAX_FEED_DECIMALS",
    "INFINITE_HEALTH_FACTOR",
    "to_wad",
    "from_wad",
    # Engine defaults
    "LIQUIDATION_THRESHOLD",
    "LIQUIDATION_BONUS",
    "LIQUIDATION_PRECISION",
    "MIN_HEALTH_FACTOR",
    "MIN_DEBT_THRESHOLD",
    "DEFAULT_ENGINE_ADDRESS",
]
