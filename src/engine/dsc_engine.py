"""DSC engine: construction, operations and the read-only query API."""

import logging
from typing import Dict, List, Optional, Sequence

from config.settings import Settings, get_settings
from src.collaborators.base import BurnableToken, FungibleToken, PriceFeed
from src.collaborators.stablecoin import MintAuthority
from src.core.constants import DEFAULT_ENGINE_ADDRESS
from src.core.exceptions import (
    ConfigArrayLengthMismatch,
    DuplicateCollateralToken,
    MintAuthorityMismatch,
)
from src.core.models import (
    CollateralTokenConfig,
    DebtToCover,
    EngineEvent,
    LiquidationResult,
    LiquidationShortfall,
    PositionSnapshot,
    RiskParameters,
)
from src.engine.context import EngineContext
from src.engine.health import HealthFactor, HealthFactorCalculator
from src.engine.ledger import CollateralLedger
from src.engine.liquidation import LiquidationEngine
from src.engine.oracle import Clock, PriceOracleAdapter, StalenessPolicy
from src.engine.positions import PositionOperations

logger = logging.getLogger(__name__)


class DSCEngine:
    """
    Collateralized-debt engine for a USD-pegged stablecoin.

    Users deposit approved collateral, mint DSC against it and must keep their
    health factor at or above 1.0; anyone holding DSC may liquidate positions
    that fall below it.

    Args:
        collateral_tokens: Approved collateral, in order
        price_feeds: USD feeds, paired 1:1 with ``collateral_tokens``
        stablecoin: The DSC token
        mint_authority: DSC mint capability, issued to ``address``
        settings: Engine settings (default: environment)
        address: Identity the engine uses when holding tokens
        risk: Overrides the risk parameters derived from ``settings``
        clock: Unix-time source for staleness checks
        ledger: Existing ledger to operate on (default: empty)
    """

    def __init__(
        self,
        collateral_tokens: Sequence[FungibleToken],
        price_feeds: Sequence[PriceFeed],
        stablecoin: BurnableToken,
        mint_authority: MintAuthority,
        settings: Optional[Settings] = None,
        *,
        address: str = DEFAULT_ENGINE_ADDRESS,
        risk: Optional[RiskParameters] = None,
        clock: Optional[Clock] = None,
        ledger: Optional[CollateralLedger] = None,
    ):
        if len(collateral_tokens) != len(price_feeds):
            raise ConfigArrayLengthMismatch(len(collateral_tokens), len(price_feeds))
        if mint_authority.stablecoin is not stablecoin or mint_authority.holder != address:
            raise MintAuthorityMismatch(address, mint_authority.holder)

        settings = settings or get_settings()
        self.settings = settings
        self.address = address
        self.stablecoin = stablecoin

        tokens: Dict[str, FungibleToken] = {}
        configs: List[CollateralTokenConfig] = []
        for token, feed in zip(collateral_tokens, price_feeds):
            if token.address in tokens:
                raise DuplicateCollateralToken(token.address)
            tokens[token.address] = token
            configs.append(
                CollateralTokenConfig(
                    token=token.address,
                    price_feed=feed,
                    feed_decimals=feed.decimals(),
                )
            )

        oracle = PriceOracleAdapter(
            configs,
            staleness=StalenessPolicy(settings.oracle_max_staleness_seconds),
            clock=clock,
        )
        risk = risk or settings.risk_parameters()
        ledger = ledger if ledger is not None else CollateralLedger()

        self._ctx = EngineContext(
            address=address,
            ledger=ledger,
            oracle=oracle,
            health=HealthFactorCalculator(ledger, oracle, risk.liquidation_threshold),
            risk=risk,
            collateral_tokens=tokens,
            stablecoin=stablecoin,
            mint_authority=mint_authority,
        )
        self._operations = PositionOperations(self._ctx)
        self._liquidations = LiquidationEngine(self._ctx, self._operations)

        logger.info(
            f"DSC engine {address} ready with collateral {list(tokens)}, "
            f"threshold {risk.liquidation_threshold}%, bonus {risk.liquidation_bonus}%"
        )

    # ========== POSITION OPERATIONS ==========

    def deposit_collateral(self, user: str, token: str, amount: int) -> None:
        self._operations.deposit_collateral(user, token, amount)

    def redeem_collateral(self, user: str, token: str, amount: int) -> None:
        self._operations.redeem_collateral(user, token, amount)

    def mint_dsc(self, user: str, amount: int) -> None:
        self._operations.mint_dsc(user, amount)

    def burn_dsc(self, user: str, amount: int) -> None:
        self._operations.burn_dsc(user, amount)

    def deposit_collateral_and_mint_dsc(
        self,
        user: str,
        token: str,
        collateral_amount: int,
        mint_amount: int,
    ) -> None:
        self._operations.deposit_collateral_and_mint_dsc(
            user, token, collateral_amount, mint_amount
        )

    def redeem_collateral_for_dsc(
        self,
        user: str,
        token: str,
        collateral_amount: int,
        burn_amount: int,
    ) -> None:
        self._operations.redeem_collateral_for_dsc(
            user, token, collateral_amount, burn_amount
        )

    def liquidate(
        self,
        liquidator: str,
        collateral_token: str,
        target: str,
        debt_to_cover: DebtToCover,
    ) -> LiquidationResult:
        return self._liquidations.liquidate(liquidator, collateral_token, target, debt_to_cover)

    # ========== QUERIES ==========

    @property
    def risk(self) -> RiskParameters:
        return self._ctx.risk

    @property
    def ledger(self) -> CollateralLedger:
        return self._ctx.ledger

    def collateral_tokens(self) -> List[str]:
        return self._ctx.oracle.tokens

    def price_feed_for(self, token: str) -> PriceFeed:
        return self._ctx.oracle.price_feed_for(token)

    def collateral_balance_of(self, user: str, token: str) -> int:
        return self._ctx.ledger.balance_of(user, token)

    def debt_of(self, user: str) -> int:
        return self._ctx.ledger.debt_of(user)

    def total_debt(self) -> int:
        return self._ctx.ledger.total_debt

    def account_collateral_value(self, user: str) -> int:
        return self._ctx.health.account_collateral_value(user)

    def account_information(self, user: str):
        """Returns (debt, collateral value in USD), both WAD."""
        return self._ctx.health.account_information(user)

    def health_factor(self, user: str) -> HealthFactor:
        return self._ctx.health.health_factor(user)

    def calculate_health_factor(self, total_debt: int, collateral_value: int) -> HealthFactor:
        return HealthFactorCalculator.calculate_health_factor(
            total_debt, collateral_value, self._ctx.risk.liquidation_threshold
        )

    def max_mintable(self, user: str) -> int:
        return self._ctx.health.max_mintable(user)

    def usd_value(self, token: str, amount: int) -> int:
        return self._ctx.oracle.usd_value(token, amount)

    def token_amount_for_usd(self, token: str, usd_amount: int) -> int:
        return self._ctx.oracle.token_amount_for_usd(token, usd_amount)

    def position(self, user: str) -> PositionSnapshot:
        return self._ctx.health.snapshot(user)

    def positions(self) -> List[PositionSnapshot]:
        """Snapshots of every open position, priced now."""
        return [self._ctx.health.snapshot(user) for user in self._ctx.ledger.users()]

    def events(self) -> List[EngineEvent]:
        return list(self._ctx.events)

    def shortfalls(self) -> List[LiquidationShortfall]:
        return [e for e in self._ctx.events if isinstance(e, LiquidationShortfall)]
