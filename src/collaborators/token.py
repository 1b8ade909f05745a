"""In-memory fungible token implementations."""

import logging
from typing import Any, Dict

from src.collaborators.base import FungibleToken

logger = logging.getLogger(__name__)


class TokenError(Exception):
    """Raised by in-memory tokens when a transfer cannot be honoured."""


class InsufficientTokenBalance(TokenError):
    def __init__(self, account: str, requested: int, available: int):
        self.account = account
        self.requested = requested
        self.available = available
        super().__init__(f"{account} has {available}, tried to move {requested}")


class InsufficientAllowance(TokenError):
    def __init__(self, owner: str, spender: str, requested: int, available: int):
        self.owner = owner
        self.spender = spender
        self.requested = requested
        self.available = available
        super().__init__(
            f"{spender} may move {available} of {owner}'s tokens, tried {requested}"
        )


class InMemoryToken(FungibleToken):
    """
    Dictionary-backed fungible token.

    Supply changes only through the protected ``_mint`` / ``_burn`` hooks,
    which subclasses expose according to their own authority rules.
    """

    def __init__(self, address: str, symbol: str):
        self._address = address
        self._symbol = symbol
        self._balances: Dict[str, int] = {}
        self._allowances: Dict[str, Dict[str, int]] = {}
        self._total_supply = 0

    @property
    def address(self) -> str:
        return self._address

    @property
    def symbol(self) -> str:
        return self._symbol

    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get(owner, {}).get(spender, 0)

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        if amount < 0:
            raise ValueError(f"Allowance cannot be negative: {amount}")
        self._allowances.setdefault(owner, {})[spender] = amount
        return True

    def transfer(self, sender: str, to: str, amount: int) -> bool:
        self._move(sender, to, amount)
        return True

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> bool:
        available = self.allowance(owner, spender)
        if amount > available:
            raise InsufficientAllowance(owner, spender, amount, available)
        self._move(owner, to, amount)
        self._allowances[owner][spender] = available - amount
        return True

    def checkpoint(self) -> Any:
        return (
            dict(self._balances),
            {owner: dict(spenders) for owner, spenders in self._allowances.items()},
            self._total_supply,
        )

    def revert_to(self, state: Any) -> None:
        balances, allowances, total_supply = state
        self._balances = dict(balances)
        self._allowances = {owner: dict(spenders) for owner, spenders in allowances.items()}
        self._total_supply = total_supply

    def _move(self, sender: str, to: str, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Transfer amount cannot be negative: {amount}")
        available = self.balance_of(sender)
        if amount > available:
            raise InsufficientTokenBalance(sender, amount, available)
        self._balances[sender] = available - amount
        self._balances[to] = self.balance_of(to) + amount

    def _mint(self, to: str, amount: int) -> None:
        if amount <= 0:
            raise ValueError(f"Mint amount must be positive: {amount}")
        self._balances[to] = self.balance_of(to) + amount
        self._total_supply += amount

    def _burn(self, holder: str, amount: int) -> None:
        if amount <= 0:
            raise ValueError(f"Burn amount must be positive: {amount}")
        available = self.balance_of(holder)
        if amount > available:
            raise InsufficientTokenBalance(holder, amount, available)
        self._balances[holder] = available - amount
        self._total_supply -= amount

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._symbol} @ {self._address})"


class CollateralToken(InMemoryToken):
    """Freely mintable token used as collateral in tests and simulations."""

    def mint(self, to: str, amount: int) -> None:
        self._mint(to, amount)
        logger.debug(f"Minted {amount} {self.symbol} to {to}")
