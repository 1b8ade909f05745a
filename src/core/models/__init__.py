"""Core data models for the stablecoin engine."""

from .collateral import CollateralTokenConfig, PriceQuote
from .position import HealthStatus, PositionSnapshot
from .risk import RiskParameters
from .liquidation import DebtToCover, ExactAmount, FullOutstandingDebt, LiquidationResult
from .events import (
    EngineEvent,
    CollateralDeposited,
    CollateralRedeemed,
    DscMinted,
    DscBurned,
    PositionLiquidated,
    LiquidationShortfall,
)

__all__ = [
    "CollateralTokenConfig",
    "PriceQuote",
    "HealthStatus",
    "PositionSnapshot",
    "RiskParameters",
    "DebtToCover",
    "ExactAmount",
    "FullOutstandingDebt",
    "LiquidationResult",
    "EngineEvent",
    "CollateralDeposited",
    "CollateralRedeemed",
    "DscMinted",
    "DscBurned",
    "PositionLiquidated",
    "LiquidationShortfall",
]
