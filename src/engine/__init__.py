"""Solvency engine components."""

from .ledger import CollateralLedger
from .oracle import PriceOracleAdapter, StalenessPolicy
from .health import HealthFactorCalculator
from .guard import PositionGuard
from .transaction import EventLog, StateCheckpoint
from .positions import PositionOperations
from .liquidation import LiquidationEngine
from .dsc_engine import DSCEngine

__all__ = [
    "CollateralLedger",
    "PriceOracleAdapter",
    "StalenessPolicy",
    "HealthFactorCalculator",
    "PositionGuard",
    "EventLog",
    "StateCheckpoint",
    "PositionOperations",
    "LiquidationEngine",
    "DSCEngine",
]
