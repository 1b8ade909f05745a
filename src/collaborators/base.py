"""Base collaborator interfaces.

Defines the abstract interfaces the engine calls across its boundary:
fungible collateral tokens, the stablecoin and USD price feeds. Any
implementation that honours these interfaces can be plugged into the engine.
"""

from abc import ABC, abstractmethod
from typing import Any, Tuple


class Revertible(ABC):
    """State holder that can be rolled back to an earlier checkpoint.

    The engine checkpoints every participant before an operation and reverts
    all of them if the operation fails, so no partial effect is observable.
    """

    @abstractmethod
    def checkpoint(self) -> Any:
        """Capture the current state as an opaque value."""
        ...

    @abstractmethod
    def revert_to(self, state: Any) -> None:
        """Restore a state previously returned by ``checkpoint``."""
        ...


class FungibleToken(Revertible):
    """Standard fungible token.

    Callers pass their own identity explicitly (``sender`` / ``owner`` /
    ``spender``) since there is no ambient message sender.
    """

    @property
    @abstractmethod
    def address(self) -> str:
        """Return the token identifier."""
        ...

    @property
    @abstractmethod
    def symbol(self) -> str:
        """Return a human-readable ticker."""
        ...

    @abstractmethod
    def total_supply(self) -> int:
        ...

    @abstractmethod
    def balance_of(self, account: str) -> int:
        ...

    @abstractmethod
    def allowance(self, owner: str, spender: str) -> int:
        ...

    @abstractmethod
    def approve(self, owner: str, spender: str, amount: int) -> bool:
        """Allow ``spender`` to move up to ``amount`` of ``owner``'s tokens."""
        ...

    @abstractmethod
    def transfer(self, sender: str, to: str, amount: int) -> bool:
        """Move ``amount`` from ``sender`` to ``to``.

        Returns:
            True on success
        """
        ...

    @abstractmethod
    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> bool:
        """Move ``amount`` from ``owner`` to ``to`` using ``spender``'s allowance.

        Returns:
            True on success
        """
        ...


class PriceFeed(ABC):
    """USD price feed for a single collateral token."""

    @abstractmethod
    def latest_quote(self) -> Tuple[int, int]:
        """Return the latest answer.

        Returns:
            Tuple of (price scaled by 10**decimals, unix timestamp of update)
        """
        ...

    @abstractmethod
    def decimals(self) -> int:
        """Return the precision of the feed's answer."""
        ...


class BurnableToken(FungibleToken):
    """Fungible token whose holders can destroy their own balance."""

    @abstractmethod
    def burn(self, holder: str, amount: int) -> bool:
        """Destroy ``amount`` of ``holder``'s balance.

        Returns:
            True on success
        """
        ...
