"""Unit tests for the in-memory collaborators."""

import pytest

from src.collaborators import (
    CollateralToken,
    InsufficientAllowance,
    InsufficientTokenBalance,
    MintAuthorityAlreadyIssued,
    StableCoin,
    StaticPriceFeed,
)
from src.collaborators.stablecoin import MintAuthority


class TestCollateralToken:
    """Tests for CollateralToken."""

    @pytest.fixture
    def token(self):
        token = CollateralToken("0xweth", "WETH")
        token.mint("alice", 100)
        return token

    def test_transfer(self, token):
        assert token.transfer("alice", "bob", 40)
        assert token.balance_of("alice") == 60
        assert token.balance_of("bob") == 40
        assert token.total_supply() == 100

    def test_transfer_exceeding_balance(self, token):
        with pytest.raises(InsufficientTokenBalance):
            token.transfer("alice", "bob", 101)

    def test_transfer_from_consumes_allowance(self, token):
        token.approve("alice", "engine", 50)
        token.transfer_from("engine", "alice", "engine", 30)

        assert token.balance_of("engine") == 30
        assert token.allowance("alice", "engine") == 20

        with pytest.raises(InsufficientAllowance):
            token.transfer_from("engine", "alice", "engine", 21)

    def test_checkpoint_and_revert(self, token):
        state = token.checkpoint()
        token.approve("alice", "engine", 10)
        token.transfer("alice", "bob", 10)
        token.mint("carol", 5)

        token.revert_to(state)

        assert token.balance_of("alice") == 100
        assert token.balance_of("bob") == 0
        assert token.allowance("alice", "engine") == 0
        assert token.total_supply() == 100


class TestStableCoin:
    """Tests for the stablecoin and its mint capability."""

    def test_mint_authority_is_issued_once(self):
        dsc = StableCoin()
        authority = dsc.issue_mint_authority("engine")

        assert authority.holder == "engine"
        assert dsc.minter == "engine"
        with pytest.raises(MintAuthorityAlreadyIssued):
            dsc.issue_mint_authority("attacker")

    def test_authority_cannot_be_forged(self):
        dsc = StableCoin()
        with pytest.raises(TypeError):
            MintAuthority(dsc, "attacker", object())

    def test_mint_and_burn(self):
        dsc = StableCoin()
        authority = dsc.issue_mint_authority("engine")

        authority.mint("alice", 100)
        assert dsc.total_supply() == 100

        dsc.burn("alice", 40)
        assert dsc.balance_of("alice") == 60
        assert dsc.total_supply() == 60

    def test_burn_is_limited_to_own_balance(self):
        dsc = StableCoin()
        dsc.issue_mint_authority("engine").mint("alice", 10)

        with pytest.raises(InsufficientTokenBalance):
            dsc.burn("bob", 1)


class TestStaticPriceFeed:
    """Tests for StaticPriceFeed."""

    def test_update_answer(self):
        feed = StaticPriceFeed(decimals=8, initial_answer=2000 * 10**8, updated_at=100)
        assert feed.latest_quote() == (2000 * 10**8, 100)
        assert feed.decimals() == 8

        feed.update_answer(1900 * 10**8, updated_at=200)

        assert feed.latest_quote() == (1900 * 10**8, 200)
        assert feed.round_id == 2
