"""Liquidation request and result models."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from src.core.constants import from_wad


@dataclass(frozen=True)
class ExactAmount:
    """Repay exactly ``amount`` of the target's debt."""

    amount: int


@dataclass(frozen=True)
class FullOutstandingDebt:
    """Repay all of the target's outstanding debt."""


DebtToCover = Union[ExactAmount, FullOutstandingDebt]


@dataclass(frozen=True)
class LiquidationResult:
    """
    Outcome of a committed liquidation.

    A nonzero ``bonus_shortfall`` means the target did not hold enough of the
    collateral token to pay the full bonus. A nonzero ``uncovered_debt`` means
    the seized collateral was worth less than the debt that was burned: the
    difference is bad debt carried by the liquidator.
    """

    target: str
    liquidator: str
    collateral_token: str

    debt_covered: int           # DSC burned from the liquidator
    collateral_seized: int      # Collateral transferred to the liquidator
    bonus: int                  # Bonus collateral actually paid

    bonus_shortfall: int = 0    # Collateral units of bonus that could not be paid
    uncovered_debt: int = 0     # USD (WAD) of debt not backed by seized collateral

    health_factor_before: Union[int, float] = 0
    health_factor_after: Union[int, float] = 0

    @property
    def has_shortfall(self) -> bool:
        return self.bonus_shortfall > 0 or self.uncovered_debt > 0

    @property
    def health_factor_improvement(self) -> Decimal:
        return from_wad(self.health_factor_after) - from_wad(self.health_factor_before)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "target": self.target,
            "liquidator": self.liquidator,
            "collateral_token": self.collateral_token,
            "debt_covered": str(self.debt_covered),
            "collateral_seized": str(self.collateral_seized),
            "bonus": str(self.bonus),
            "bonus_shortfall": str(self.bonus_shortfall),
            "uncovered_debt": str(self.uncovered_debt),
            "health_factor_before": str(from_wad(self.health_factor_before)),
            "health_factor_after": str(from_wad(self.health_factor_after)),
        }
