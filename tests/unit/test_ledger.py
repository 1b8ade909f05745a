"""Unit tests for the collateral and debt ledger."""

import pytest

from src.core.constants import to_wad
from src.core.exceptions import InsufficientBalance, InsufficientDebt
from src.engine import CollateralLedger


class TestCollateralLedger:
    """Tests for CollateralLedger bookkeeping."""

    @pytest.fixture
    def ledger(self):
        return CollateralLedger()

    def test_empty_ledger(self, ledger):
        """Unknown users read as zero."""
        assert ledger.balance_of("alice", "weth") == 0
        assert ledger.debt_of("alice") == 0
        assert ledger.total_debt == 0
        assert list(ledger.users()) == []

    def test_credit_and_debit_collateral(self, ledger):
        ledger.credit_collateral("alice", "weth", to_wad(3))
        ledger.credit_collateral("alice", "weth", to_wad(1))
        assert ledger.balance_of("alice", "weth") == to_wad(4)

        ledger.debit_collateral("alice", "weth", to_wad("1.5"))
        assert ledger.balance_of("alice", "weth") == to_wad("2.5")

    def test_debit_more_than_balance(self, ledger):
        ledger.credit_collateral("alice", "weth", 100)

        with pytest.raises(InsufficientBalance) as exc_info:
            ledger.debit_collateral("alice", "weth", 101)

        assert exc_info.value.requested == 101
        assert exc_info.value.available == 100
        assert ledger.balance_of("alice", "weth") == 100

    def test_debt_tracks_total(self, ledger):
        ledger.increase_debt("alice", 500)
        ledger.increase_debt("bob", 300)
        ledger.decrease_debt("alice", 200)

        assert ledger.debt_of("alice") == 300
        assert ledger.debt_of("bob") == 300
        assert ledger.total_debt == 600

    def test_decrease_more_than_debt(self, ledger):
        ledger.increase_debt("alice", 10)

        with pytest.raises(InsufficientDebt):
            ledger.decrease_debt("alice", 11)

        assert ledger.debt_of("alice") == 10
        assert ledger.total_debt == 10

    def test_negative_amounts_rejected(self, ledger):
        with pytest.raises(ValueError):
            ledger.credit_collateral("alice", "weth", -1)
        with pytest.raises(ValueError):
            ledger.increase_debt("alice", -1)

    def test_empty_position_disappears(self, ledger):
        """A position with no balance and no debt is logically absent."""
        ledger.credit_collateral("alice", "weth", 5)
        ledger.increase_debt("alice", 2)
        assert list(ledger.users()) == ["alice"]

        ledger.decrease_debt("alice", 2)
        assert list(ledger.users()) == ["alice"]

        ledger.debit_collateral("alice", "weth", 5)
        assert list(ledger.users()) == []
        assert ledger.collateral_of("alice") == {}

    def test_collateral_of_is_a_copy(self, ledger):
        ledger.credit_collateral("alice", "weth", 5)
        balances = ledger.collateral_of("alice")
        balances["weth"] = 0

        assert ledger.balance_of("alice", "weth") == 5

    def test_checkpoint_and_revert(self, ledger):
        ledger.credit_collateral("alice", "weth", 5)
        ledger.increase_debt("alice", 2)
        state = ledger.checkpoint()

        ledger.credit_collateral("alice", "wbtc", 7)
        ledger.debit_collateral("alice", "weth", 5)
        ledger.increase_debt("bob", 9)
        ledger.revert_to(state)

        assert ledger.collateral_of("alice") == {"weth": 5}
        assert ledger.debt_of("bob") == 0
        assert ledger.total_debt == 2

    def test_serialization(self, ledger):
        ledger.credit_collateral("alice", "weth", to_wad("3.24"))
        ledger.increase_debt("alice", to_wad(1500))

        data = ledger.to_dict()
        assert data["debt"]["alice"] == str(to_wad(1500))

        restored = CollateralLedger.from_dict(data)
        assert restored.balance_of("alice", "weth") == to_wad("3.24")
        assert restored.debt_of("alice") == to_wad(1500)
        assert restored.total_debt == to_wad(1500)
