"""Position snapshot model for user positions in the engine."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, Union

from src.core.constants import INFINITE_HEALTH_FACTOR, MIN_HEALTH_FACTOR, from_wad


class HealthStatus(Enum):
    """Solvency state of a position."""

    HEALTHY = "healthy"          # health factor >= 1.0
    UNDERWATER = "underwater"    # health factor < 1.0, liquidatable

    @classmethod
    def from_health_factor(cls, health_factor: Union[int, float]) -> "HealthStatus":
        if health_factor >= MIN_HEALTH_FACTOR:
            return cls.HEALTHY
        return cls.UNDERWATER


@dataclass(frozen=True)
class PositionSnapshot:
    """
    Read-only view of a user's position at one point in time.

    All integer fields are 18-decimal fixed point; the ``*_display``
    properties convert them to Decimal for reporting.
    """

    user: str

    # Collateral token -> deposited amount
    collateral: Dict[str, int] = field(default_factory=dict)

    # Valuation at snapshot time
    collateral_value: int = 0
    debt: int = 0
    health_factor: Union[int, float] = INFINITE_HEALTH_FACTOR

    @property
    def status(self) -> HealthStatus:
        return HealthStatus.from_health_factor(self.health_factor)

    @property
    def is_liquidatable(self) -> bool:
        return self.status == HealthStatus.UNDERWATER

    @property
    def is_empty(self) -> bool:
        """True when the position holds neither collateral nor debt."""
        return self.debt == 0 and not any(self.collateral.values())

    @property
    def collateral_value_display(self) -> Decimal:
        return from_wad(self.collateral_value)

    @property
    def debt_display(self) -> Decimal:
        return from_wad(self.debt)

    @property
    def health_factor_display(self) -> Decimal:
        return from_wad(self.health_factor)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "user": self.user,
            "collateral": {token: str(amount) for token, amount in self.collateral.items()},
            "collateral_value": str(self.collateral_value),
            "debt": str(self.debt),
            "health_factor": str(self.health_factor_display),
            "status": self.status.value,
        }
