"""Core module - models, constants and exceptions."""

from .models import (
    CollateralTokenConfig,
    PriceQuote,
    HealthStatus,
    PositionSnapshot,
    ExactAmount,
    FullOutstandingDebt,
    LiquidationResult,
)
from .constants import WAD, PRECISION, MIN_HEALTH_FACTOR, INFINITE_HEALTH_FACTOR

__all__ = [
    "CollateralTokenConfig",
    "PriceQuote",
    "HealthStatus",
    "PositionSnapshot",
    "ExactAmount",
    "FullOutstandingDebt",
    "LiquidationResult",
    "WAD",
    "PRECISION",
    "MIN_HEALTH_FACTOR",
    "INFINITE_HEALTH_FACTOR",
]
