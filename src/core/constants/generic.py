"""Generic fixed-point constants for the engine's integer arithmetic.

Every on-ledger amount (collateral balances, debt, USD values, health factors)
is an ``int`` scaled by ``WAD``.
"""

from decimal import Decimal

# Precision constants
WAD = 10**18  # Standard 18 decimal precision
PRECISION = WAD
MAX_FEED_DECIMALS = 18

# Sentinel for a position without debt
INFINITE_HEALTH_FACTOR = float("inf")


def to_wad(value) -> int:
    """Convert a human amount (e.g. ``"3.24"``) to an 18-decimal integer."""
    return int(Decimal(str(value)) * WAD)


def from_wad(value) -> Decimal:
    """Convert an 18-decimal integer to a Decimal for display."""
    if value == INFINITE_HEALTH_FACTOR:
        return Decimal("Infinity")
    return Decimal(value) / Decimal(WAD)
