"""Liquidation of underwater positions."""

import logging

from src.core.constants import LIQUIDATION_PRECISION
from src.core.exceptions import HealthFactorNotImproved, HealthFactorOk
from src.core.models import (
    DebtToCover,
    ExactAmount,
    FullOutstandingDebt,
    LiquidationResult,
    LiquidationShortfall,
    PositionLiquidated,
)
from src.engine.context import EngineContext
from src.engine.positions import PositionOperations

logger = logging.getLogger(__name__)


class LiquidationEngine:
    """
    Lets a third party repay an underwater position's debt for collateral.

    The liquidator burns stablecoin they already hold and receives collateral
    worth the repaid debt plus ``liquidation_bonus`` percent.

    Example at $500 per unit with a 10% bonus:
    - Cover 1500 DSC of debt
    - Base seizure = 1500 / 500 = 3 units
    - Bonus = 0.3 units, total 3.3 units (capped at the target's balance)
    """

    def __init__(self, ctx: EngineContext, operations: PositionOperations):
        self.ctx = ctx
        self.operations = operations

    def resolve_debt_to_cover(self, debt_to_cover: DebtToCover, outstanding: int) -> int:
        """Turn a liquidation request into a concrete DSC amount."""
        if isinstance(debt_to_cover, FullOutstandingDebt):
            return outstanding
        if isinstance(debt_to_cover, ExactAmount):
            return debt_to_cover.amount
        raise TypeError(
            f"debt_to_cover must be ExactAmount or FullOutstandingDebt, "
            f"got {type(debt_to_cover).__name__}"
        )

    def liquidate(
        self,
        liquidator: str,
        collateral_token: str,
        target: str,
        debt_to_cover: DebtToCover,
    ) -> LiquidationResult:
        """
        Liquidate ``target`` by covering part or all of its debt.

        Args:
            liquidator: Account paying the DSC and receiving the collateral
            collateral_token: Collateral to seize
            target: Underwater position
            debt_to_cover: ``ExactAmount(n)`` or ``FullOutstandingDebt()``

        Returns:
            LiquidationResult describing the committed liquidation

        Raises:
            HealthFactorOk: If the target is not underwater
            HealthFactorNotImproved: If the liquidation would lower the target's
                health factor
        """
        ctx = self.ctx
        ctx.require_supported(collateral_token)

        with ctx.operation(target):
            before = ctx.health.health_factor(target)
            if before >= ctx.risk.min_health_factor:
                raise HealthFactorOk(target, before)

            cover = self.resolve_debt_to_cover(debt_to_cover, ctx.ledger.debt_of(target))
            ctx.require_positive(cover)

            base = ctx.oracle.token_amount_for_usd(collateral_token, cover)
            bonus = base * ctx.risk.liquidation_bonus // LIQUIDATION_PRECISION
            available = ctx.ledger.balance_of(target, collateral_token)
            seized = min(base + bonus, available)

            if seized:
                self.operations.move_collateral(
                    collateral_token, seized, from_user=target, to_user=liquidator
                )
            self.operations.settle_debt(cover, on_behalf_of=target, paid_by=liquidator)

            after = ctx.health.health_factor(target)
            if after < before:
                raise HealthFactorNotImproved(target, before, after)

            bonus_paid = max(0, seized - base)
            seized_value = ctx.oracle.usd_value(collateral_token, seized)
            result = LiquidationResult(
                target=target,
                liquidator=liquidator,
                collateral_token=collateral_token,
                debt_covered=cover,
                collateral_seized=seized,
                bonus=bonus_paid,
                bonus_shortfall=bonus - bonus_paid,
                uncovered_debt=max(0, cover - seized_value),
                health_factor_before=before,
                health_factor_after=after,
            )

            ctx.events.record(
                PositionLiquidated(
                    target=target,
                    liquidator=liquidator,
                    token=collateral_token,
                    debt_covered=cover,
                    collateral_seized=seized,
                )
            )
            if result.has_shortfall:
                ctx.events.record(
                    LiquidationShortfall(
                        target=target,
                        token=collateral_token,
                        bonus_shortfall=result.bonus_shortfall,
                        uncovered_debt=result.uncovered_debt,
                    )
                )

        if result.has_shortfall:
            logger.warning(
                f"Liquidation of {target} hit a collateral shortfall: "
                f"bonus short {result.bonus_shortfall}, uncovered debt {result.uncovered_debt}"
            )
        logger.info(
            f"{liquidator} liquidated {target}: covered {cover} DSC, "
            f"seized {seized} of {collateral_token}"
        )
        return result
