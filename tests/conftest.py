"""Pytest configuration and fixtures."""

import pytest

from config.settings import Settings
from src.collaborators import CollateralToken, StableCoin, StaticPriceFeed
from src.core.constants import WAD, to_wad
from src.engine import DSCEngine

NOW = 1_700_000_000

USER = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
USER2 = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"
LIQUIDATOR = "0x90F79bf6EB2c4f870365E785982E1f101E93b906"

ETH_PRICE = 1000 * WAD          # 18-decimal mock feed, $1000
BTC_PRICE = 30_000 * 10**8      # 8-decimal feed, $30,000


class FakeClock:
    """Settable unix clock."""

    def __init__(self, now: int = NOW):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


@pytest.fixture
def settings() -> Settings:
    """Settings with the default risk parameters, isolated from the environment."""
    return Settings(
        _env_file=None,
        liquidation_threshold=50,
        liquidation_bonus=10,
        min_debt_threshold=20,
        oracle_max_staleness_seconds=None,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def weth() -> CollateralToken:
    return CollateralToken("0xweth", "WETH")


@pytest.fixture
def wbtc() -> CollateralToken:
    return CollateralToken("0xwbtc", "WBTC")


@pytest.fixture
def eth_feed() -> StaticPriceFeed:
    return StaticPriceFeed(decimals=18, initial_answer=ETH_PRICE, updated_at=NOW)


@pytest.fixture
def btc_feed() -> StaticPriceFeed:
    return StaticPriceFeed(decimals=8, initial_answer=BTC_PRICE, updated_at=NOW)


@pytest.fixture
def dsc() -> StableCoin:
    return StableCoin()


@pytest.fixture
def engine(weth, wbtc, eth_feed, btc_feed, dsc, settings, clock) -> DSCEngine:
    """Engine accepting WETH ($1000, 18-dec feed) and WBTC ($30k, 8-dec feed)."""
    authority = dsc.issue_mint_authority("dsc-engine")
    return DSCEngine(
        [weth, wbtc],
        [eth_feed, btc_feed],
        dsc,
        authority,
        settings,
        clock=clock,
    )


def fund(token: CollateralToken, user: str, amount: int, engine: DSCEngine) -> None:
    """Give ``user`` tokens and approve the engine to pull them."""
    token.mint(user, amount)
    token.approve(user, engine.address, token.allowance(user, engine.address) + amount)


def approve_dsc(dsc: StableCoin, user: str, amount: int, engine: DSCEngine) -> None:
    dsc.approve(user, engine.address, dsc.allowance(user, engine.address) + amount)


@pytest.fixture
def deposited(engine, weth):
    """USER with 10 WETH ($10,000) deposited and no debt."""
    fund(weth, USER, to_wad(10), engine)
    engine.deposit_collateral(USER, weth.address, to_wad(10))
    return engine
