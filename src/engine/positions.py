"""Position operations: deposit, redeem, mint, burn and their composites."""

import logging

from src.core.models import CollateralDeposited, CollateralRedeemed, DscBurned, DscMinted
from src.engine.context import EngineContext

logger = logging.getLogger(__name__)


class PositionOperations:
    """
    User-facing mutations of a position.

    Each public method runs as one indivisible operation (see
    ``EngineContext.operation``): it validates, updates the ledger, calls the
    collaborators, then re-checks the health factor against fresh prices.
    Any failure leaves ledger, tokens and events exactly as before the call.
    """

    def __init__(self, ctx: EngineContext):
        self.ctx = ctx

    # ========== PUBLIC OPERATIONS ==========

    def deposit_collateral(self, user: str, token: str, amount: int) -> None:
        """
        Deposit collateral pulled from the user's token balance.

        The user must have approved the engine for ``amount`` beforehand.
        Deposits can only improve solvency, so no health check follows.
        """
        with self.ctx.operation(user):
            self.pull_collateral(user, token, amount)
        logger.info(f"{user} deposited {amount} of {token}")

    def redeem_collateral(self, user: str, token: str, amount: int) -> None:
        """Withdraw collateral; fails if the remaining position is undercollateralized."""
        with self.ctx.operation(user):
            self.move_collateral(token, amount, from_user=user, to_user=user)
            self.ctx.require_healthy(user)
        logger.info(f"{user} redeemed {amount} of {token}")

    def mint_dsc(self, user: str, amount: int) -> None:
        """
        Mint stablecoin against deposited collateral.

        Raises:
            BelowMinDscLevel: If the resulting debt would be dust
            BreaksHealthFactor: If the resulting health factor is below 1.0
        """
        with self.ctx.operation(user):
            self.issue_debt(user, amount)
            self.ctx.require_healthy(user)
        logger.info(f"{user} minted {amount} DSC")

    def burn_dsc(self, user: str, amount: int) -> None:
        """Repay debt with stablecoin from the user's own balance."""
        with self.ctx.operation(user):
            self.settle_debt(amount, on_behalf_of=user, paid_by=user)
        logger.info(f"{user} burned {amount} DSC")

    def deposit_collateral_and_mint_dsc(
        self,
        user: str,
        token: str,
        collateral_amount: int,
        mint_amount: int,
    ) -> None:
        """Deposit and mint in one step; neither takes effect unless both do."""
        with self.ctx.operation(user):
            self.pull_collateral(user, token, collateral_amount)
            self.issue_debt(user, mint_amount)
            self.ctx.require_healthy(user)
        logger.info(
            f"{user} deposited {collateral_amount} of {token} and minted {mint_amount} DSC"
        )

    def redeem_collateral_for_dsc(
        self,
        user: str,
        token: str,
        collateral_amount: int,
        burn_amount: int,
    ) -> None:
        """Burn debt then redeem collateral in one step."""
        with self.ctx.operation(user):
            self.settle_debt(burn_amount, on_behalf_of=user, paid_by=user)
            self.move_collateral(token, collateral_amount, from_user=user, to_user=user)
            self.ctx.require_healthy(user)
        logger.info(
            f"{user} burned {burn_amount} DSC and redeemed {collateral_amount} of {token}"
        )

    # ========== PRIMITIVES ==========
    # Callers must already be inside ``ctx.operation``.

    def pull_collateral(self, user: str, token: str, amount: int) -> None:
        ctx = self.ctx
        ctx.require_positive(amount)
        collateral = ctx.require_supported(token)

        ctx.ledger.credit_collateral(user, token, amount)
        ctx.events.record(CollateralDeposited(user=user, token=token, amount=amount))
        ctx.interact(
            f"{collateral.symbol}.transfer_from",
            collateral.transfer_from,
            ctx.address,
            user,
            ctx.address,
            amount,
        )

    def move_collateral(self, token: str, amount: int, from_user: str, to_user: str) -> None:
        """Debit ``from_user``'s collateral and send the tokens to ``to_user``."""
        ctx = self.ctx
        ctx.require_positive(amount)
        collateral = ctx.require_supported(token)

        ctx.ledger.debit_collateral(from_user, token, amount)
        ctx.events.record(
            CollateralRedeemed(
                redeemed_from=from_user,
                redeemed_to=to_user,
                token=token,
                amount=amount,
            )
        )
        ctx.interact(
            f"{collateral.symbol}.transfer",
            collateral.transfer,
            ctx.address,
            to_user,
            amount,
        )

    def issue_debt(self, user: str, amount: int) -> None:
        ctx = self.ctx
        ctx.require_positive(amount)

        new_debt = ctx.ledger.debt_of(user) + amount
        ctx.require_no_dust(user, new_debt)

        ctx.ledger.increase_debt(user, amount)
        ctx.events.record(DscMinted(user=user, amount=amount))
        ctx.interact("mint", ctx.mint_authority.mint, user, amount)

    def settle_debt(self, amount: int, on_behalf_of: str, paid_by: str) -> None:
        """
        Reduce ``on_behalf_of``'s debt, paying with ``paid_by``'s stablecoin.

        The stablecoin is pulled into the engine (``paid_by`` must have
        approved it) and burned from the engine's own balance.
        """
        ctx = self.ctx
        ctx.require_positive(amount)

        ctx.ledger.decrease_debt(on_behalf_of, amount)
        ctx.require_no_dust(on_behalf_of, ctx.ledger.debt_of(on_behalf_of))
        ctx.events.record(DscBurned(on_behalf_of=on_behalf_of, paid_by=paid_by, amount=amount))

        stablecoin = ctx.stablecoin
        ctx.interact(
            f"{stablecoin.symbol}.transfer_from",
            stablecoin.transfer_from,
            ctx.address,
            paid_by,
            ctx.address,
            amount,
        )
        ctx.interact(f"{stablecoin.symbol}.burn", stablecoin.burn, ctx.address, amount)
