"""Unit tests for liquidation."""

import logging

import pytest

from src.core.constants import WAD, to_wad
from src.core.exceptions import (
    BelowMinDscLevel,
    CollaboratorError,
    HealthFactorNotImproved,
    HealthFactorOk,
    InsufficientDebt,
    UnsupportedToken,
)
from src.core.models import (
    ExactAmount,
    FullOutstandingDebt,
    LiquidationShortfall,
    PositionLiquidated,
)
from tests.conftest import LIQUIDATOR, USER, approve_dsc, fund


def arm_liquidator(engine, weth, dsc, collateral: int, dsc_amount: int) -> None:
    """Give LIQUIDATOR stablecoin to repay with, minted while prices are high."""
    fund(weth, LIQUIDATOR, collateral, engine)
    engine.deposit_collateral_and_mint_dsc(LIQUIDATOR, weth.address, collateral, dsc_amount)
    approve_dsc(dsc, LIQUIDATOR, dsc_amount, engine)


@pytest.fixture
def maxed(deposited, weth, dsc):
    """USER at exactly HF 1.0 (10 WETH, 5000 DSC) and an armed liquidator."""
    deposited.mint_dsc(USER, to_wad(5000))
    arm_liquidator(deposited, weth, dsc, to_wad(20), to_wad(5000))
    return deposited


class TestPreconditions:
    """Tests for liquidation guards."""

    def test_healthy_position_rejected(self, maxed, weth):
        """HF of exactly 1.0 is not liquidatable."""
        with pytest.raises(HealthFactorOk):
            maxed.liquidate(LIQUIDATOR, weth.address, USER, ExactAmount(to_wad(100)))

    def test_empty_position_rejected(self, engine, weth):
        with pytest.raises(HealthFactorOk):
            engine.liquidate(LIQUIDATOR, weth.address, USER, FullOutstandingDebt())

    def test_unsupported_collateral(self, maxed, eth_feed):
        eth_feed.update_answer(900 * WAD)
        with pytest.raises(UnsupportedToken):
            maxed.liquidate(LIQUIDATOR, "0xrandom", USER, FullOutstandingDebt())

    def test_cover_more_than_debt(self, maxed, weth, eth_feed):
        eth_feed.update_answer(900 * WAD)
        with pytest.raises(InsufficientDebt):
            maxed.liquidate(LIQUIDATOR, weth.address, USER, ExactAmount(to_wad(5001)))

    def test_unknown_request_type(self, maxed, weth, eth_feed):
        eth_feed.update_answer(900 * WAD)
        with pytest.raises(TypeError):
            maxed.liquidate(LIQUIDATOR, weth.address, USER, to_wad(100))


class TestPartialLiquidation:
    """USER underwater at $900: collateral $9000 against 5000 debt, HF 0.9."""

    @pytest.fixture
    def underwater(self, maxed, eth_feed):
        eth_feed.update_answer(900 * WAD)
        return maxed

    def test_seizes_base_plus_bonus(self, underwater, weth, dsc):
        result = underwater.liquidate(LIQUIDATOR, weth.address, USER, ExactAmount(to_wad(1800)))

        # 1800 / 900 = 2 units, plus 10%
        assert result.collateral_seized == to_wad("2.2")
        assert result.bonus == to_wad("0.2")
        assert not result.has_shortfall
        assert underwater.collateral_balance_of(USER, weth.address) == to_wad("7.8")
        assert underwater.debt_of(USER) == to_wad(3200)
        assert weth.balance_of(LIQUIDATOR) == to_wad("2.2")
        assert dsc.balance_of(LIQUIDATOR) == to_wad(3200)
        assert dsc.total_supply() == underwater.total_debt()

    def test_health_factor_improves(self, underwater, weth):
        result = underwater.liquidate(LIQUIDATOR, weth.address, USER, ExactAmount(to_wad(1800)))

        assert result.health_factor_before == to_wad("0.9")
        assert result.health_factor_after > result.health_factor_before
        assert result.health_factor_after == underwater.health_factor(USER)

    def test_records_events(self, underwater, weth):
        underwater.liquidate(LIQUIDATOR, weth.address, USER, ExactAmount(to_wad(1800)))

        assert underwater.events()[-1] == PositionLiquidated(
            target=USER,
            liquidator=LIQUIDATOR,
            token=weth.address,
            debt_covered=to_wad(1800),
            collateral_seized=to_wad("2.2"),
        )
        assert underwater.shortfalls() == []

    def test_leaving_dust_rejected(self, underwater, weth):
        with pytest.raises(BelowMinDscLevel):
            underwater.liquidate(LIQUIDATOR, weth.address, USER, ExactAmount(to_wad(4990)))

        assert underwater.debt_of(USER) == to_wad(5000)

    def test_missing_dsc_approval_rolls_back(self, underwater, weth, dsc):
        dsc.approve(LIQUIDATOR, underwater.address, 0)
        events_before = underwater.events()

        with pytest.raises(CollaboratorError):
            underwater.liquidate(LIQUIDATOR, weth.address, USER, ExactAmount(to_wad(1800)))

        assert underwater.collateral_balance_of(USER, weth.address) == to_wad(10)
        assert underwater.debt_of(USER) == to_wad(5000)
        assert weth.balance_of(LIQUIDATOR) == 0
        assert dsc.balance_of(LIQUIDATOR) == to_wad(5000)
        assert underwater.events() == events_before


class TestFullLiquidation:
    """Covering all outstanding debt."""

    def test_bonus_capped_at_balance(self, maxed, weth, eth_feed):
        """At $500, 5000 DSC buys all 10 units; the 1-unit bonus cannot be paid."""
        eth_feed.update_answer(500 * WAD)

        result = maxed.liquidate(LIQUIDATOR, weth.address, USER, FullOutstandingDebt())

        assert result.debt_covered == to_wad(5000)
        assert result.collateral_seized == to_wad(10)
        assert result.bonus == 0
        assert result.bonus_shortfall == to_wad(1)
        assert result.uncovered_debt == 0
        assert maxed.debt_of(USER) == 0
        assert maxed.collateral_balance_of(USER, weth.address) == 0
        assert maxed.health_factor(USER) == float("inf")

    def test_uncovered_debt_reported(self, maxed, weth, dsc, eth_feed, caplog):
        """At $400 the position holds $4000 against 5000 debt."""
        eth_feed.update_answer(400 * WAD)

        with caplog.at_level(logging.WARNING, logger="src.engine.liquidation"):
            result = maxed.liquidate(LIQUIDATOR, weth.address, USER, FullOutstandingDebt())

        assert result.collateral_seized == to_wad(10)
        assert result.uncovered_debt == to_wad(1000)
        assert result.bonus_shortfall == to_wad("1.25")
        assert maxed.shortfalls() == [
            LiquidationShortfall(
                target=USER,
                token=weth.address,
                bonus_shortfall=to_wad("1.25"),
                uncovered_debt=to_wad(1000),
            )
        ]
        assert "shortfall" in caplog.text
        assert maxed.total_debt() == dsc.total_supply()


class TestHealthFactorNotImproved:
    """1 WETH backing 500 DSC, price falls to $540 (HF 0.54)."""

    @pytest.fixture
    def thin(self, engine, weth, dsc, eth_feed):
        fund(weth, USER, WAD, engine)
        engine.deposit_collateral_and_mint_dsc(USER, weth.address, WAD, to_wad(500))
        arm_liquidator(engine, weth, dsc, to_wad(10), to_wad(1000))
        eth_feed.update_answer(540 * WAD)
        return engine

    def test_small_cover_worsens_position(self, thin, weth, dsc):
        """Paying the bonus out of a thin position lowers its health factor."""
        with pytest.raises(HealthFactorNotImproved) as exc_info:
            thin.liquidate(LIQUIDATOR, weth.address, USER, ExactAmount(to_wad(100)))

        assert exc_info.value.after < exc_info.value.before
        assert thin.collateral_balance_of(USER, weth.address) == WAD
        assert thin.debt_of(USER) == to_wad(500)
        assert dsc.balance_of(LIQUIDATOR) == to_wad(1000)

    def test_full_cover_succeeds(self, thin, weth):
        result = thin.liquidate(LIQUIDATOR, weth.address, USER, FullOutstandingDebt())

        assert result.collateral_seized == WAD
        assert result.bonus_shortfall > 0
        assert thin.debt_of(USER) == 0
        assert thin.positions()[0].user == LIQUIDATOR


def test_result_serialization(maxed, weth, eth_feed):
    eth_feed.update_answer(900 * WAD)

    result = maxed.liquidate(LIQUIDATOR, weth.address, USER, ExactAmount(to_wad(1800)))
    data = result.to_dict()

    assert data["debt_covered"] == str(to_wad(1800))
    assert data["health_factor_before"] == "0.9"
    assert result.health_factor_improvement > 0
