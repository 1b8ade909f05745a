"""Health factor calculation for engine positions."""

from typing import Tuple, Union

from src.core.constants import (
    INFINITE_HEALTH_FACTOR,
    LIQUIDATION_PRECISION,
    LIQUIDATION_THRESHOLD,
    MIN_HEALTH_FACTOR,
    PRECISION,
)
from src.core.models import HealthStatus, PositionSnapshot
from src.engine.ledger import CollateralLedger
from src.engine.oracle import PriceOracleAdapter

HealthFactor = Union[int, float]


class HealthFactorCalculator:
    """
    Calculator for position solvency.

    Reads the ledger and the oracle; never mutates either.
    """

    def __init__(
        self,
        ledger: CollateralLedger,
        oracle: PriceOracleAdapter,
        liquidation_threshold: int = LIQUIDATION_THRESHOLD,
    ):
        self.ledger = ledger
        self.oracle = oracle
        self.liquidation_threshold = liquidation_threshold

    @staticmethod
    def calculate_health_factor(
        total_debt: int,
        collateral_value: int,
        liquidation_threshold: int = LIQUIDATION_THRESHOLD,
    ) -> HealthFactor:
        """
        Calculate health factor.

        HF = (Collateral Value * Threshold / 100) / Debt

        With threshold 50 a position needs 200% collateralization to sit at
        exactly 1.0.

        Args:
            total_debt: Outstanding debt (WAD)
            collateral_value: USD value of all collateral (WAD)
            liquidation_threshold: Percentage of collateral value counted

        Returns:
            Health factor (WAD), or infinity without debt
        """
        if total_debt == 0:
            return INFINITE_HEALTH_FACTOR

        adjusted_collateral = collateral_value * liquidation_threshold // LIQUIDATION_PRECISION
        return adjusted_collateral * PRECISION // total_debt

    def account_collateral_value(self, user: str) -> int:
        """Sum of the USD values of every collateral balance, priced fresh."""
        total = 0
        for token, amount in self.ledger.collateral_of(user).items():
            total += self.oracle.usd_value(token, amount)
        return total

    def account_information(self, user: str) -> Tuple[int, int]:
        """
        Returns:
            Tuple of (debt, collateral value in USD), both WAD
        """
        return self.ledger.debt_of(user), self.account_collateral_value(user)

    def health_factor(self, user: str) -> HealthFactor:
        # Debt-free positions are never priced, so a bad feed cannot lock them
        debt = self.ledger.debt_of(user)
        if debt == 0:
            return INFINITE_HEALTH_FACTOR
        collateral_value = self.account_collateral_value(user)
        return self.calculate_health_factor(debt, collateral_value, self.liquidation_threshold)

    def is_healthy(self, user: str) -> bool:
        return self.health_factor(user) >= MIN_HEALTH_FACTOR

    def status(self, user: str) -> HealthStatus:
        return HealthStatus.from_health_factor(self.health_factor(user))

    def max_mintable(self, user: str) -> int:
        """
        Additional debt the user could take while keeping HF >= 1.0.

        max_debt = Collateral Value * Threshold / 100
        """
        debt, collateral_value = self.account_information(user)
        max_debt = collateral_value * self.liquidation_threshold // LIQUIDATION_PRECISION
        return max(0, max_debt - debt)

    def snapshot(self, user: str) -> PositionSnapshot:
        debt, collateral_value = self.account_information(user)
        return PositionSnapshot(
            user=user,
            collateral=self.ledger.collateral_of(user),
            collateral_value=collateral_value,
            debt=debt,
            health_factor=self.calculate_health_factor(
                debt, collateral_value, self.liquidation_threshold
            ),
        )
