"""Risk parameters governing solvency and liquidation."""

from dataclasses import dataclass

from src.core.constants import (
    LIQUIDATION_BONUS,
    LIQUIDATION_PRECISION,
    LIQUIDATION_THRESHOLD,
    MIN_DEBT_THRESHOLD,
    MIN_HEALTH_FACTOR,
)


@dataclass(frozen=True)
class RiskParameters:
    """Integer risk parameters, fixed for the lifetime of an engine."""

    liquidation_threshold: int = LIQUIDATION_THRESHOLD   # % of collateral value counted
    liquidation_bonus: int = LIQUIDATION_BONUS           # % extra collateral to liquidators
    min_health_factor: int = MIN_HEALTH_FACTOR           # WAD
    min_debt_threshold: int = MIN_DEBT_THRESHOLD         # WAD

    def __post_init__(self):
        if not 0 < self.liquidation_threshold <= LIQUIDATION_PRECISION:
            raise ValueError(f"liquidation_threshold must be in (0, 100]: {self.liquidation_threshold}")
        if not 0 <= self.liquidation_bonus <= LIQUIDATION_PRECISION:
            raise ValueError(f"liquidation_bonus must be in [0, 100]: {self.liquidation_bonus}")
        if self.min_debt_threshold < 0:
            raise ValueError(f"min_debt_threshold cannot be negative: {self.min_debt_threshold}")

    @property
    def collateralization_ratio(self) -> int:
        """Required collateral as a percentage of debt (e.g. 200)."""
        return LIQUIDATION_PRECISION * LIQUIDATION_PRECISION // self.liquidation_threshold

    def is_dust(self, debt: int) -> bool:
        """True for a nonzero debt below the minimum position size."""
        return 0 < debt < self.min_debt_threshold
