"""Collateral and debt ledger."""

import logging
from typing import Any, Dict, Iterator

from src.collaborators.base import Revertible
from src.core.exceptions import InsufficientBalance, InsufficientDebt

logger = logging.getLogger(__name__)


class CollateralLedger(Revertible):
    """
    Authoritative per-user record of deposited collateral and minted debt.

    Pure bookkeeping: no external calls and no solvency checks. Callers
    evaluate solvency around each mutation.

    Layout:
        collateral[user][token] -> amount (WAD)
        debt[user]              -> amount (WAD)

    Zero entries are removed so that a position with no balance and no debt
    is absent from ``users()``.
    """

    def __init__(self):
        self._collateral: Dict[str, Dict[str, int]] = {}
        self._debt: Dict[str, int] = {}
        self._total_debt = 0

    # ========== READS ==========

    def balance_of(self, user: str, token: str) -> int:
        return self._collateral.get(user, {}).get(token, 0)

    def debt_of(self, user: str) -> int:
        return self._debt.get(user, 0)

    def collateral_of(self, user: str) -> Dict[str, int]:
        """Copy of the user's nonzero collateral balances."""
        return dict(self._collateral.get(user, {}))

    @property
    def total_debt(self) -> int:
        return self._total_debt

    def users(self) -> Iterator[str]:
        """Users holding collateral or debt, in first-seen order."""
        seen = dict.fromkeys(self._collateral)
        seen.update(dict.fromkeys(self._debt))
        return iter(list(seen))

    # ========== WRITES ==========

    def credit_collateral(self, user: str, token: str, amount: int) -> None:
        self._require_non_negative(amount)
        if amount == 0:
            return
        balances = self._collateral.setdefault(user, {})
        balances[token] = balances.get(token, 0) + amount

    def debit_collateral(self, user: str, token: str, amount: int) -> None:
        self._require_non_negative(amount)
        available = self.balance_of(user, token)
        if amount > available:
            raise InsufficientBalance(user, token, amount, available)
        if amount == 0:
            return

        remaining = available - amount
        balances = self._collateral[user]
        if remaining:
            balances[token] = remaining
        else:
            del balances[token]
            if not balances:
                del self._collateral[user]

    def increase_debt(self, user: str, amount: int) -> None:
        self._require_non_negative(amount)
        if amount == 0:
            return
        self._debt[user] = self.debt_of(user) + amount
        self._total_debt += amount

    def decrease_debt(self, user: str, amount: int) -> None:
        self._require_non_negative(amount)
        available = self.debt_of(user)
        if amount > available:
            raise InsufficientDebt(user, amount, available)
        if amount == 0:
            return

        remaining = available - amount
        if remaining:
            self._debt[user] = remaining
        else:
            del self._debt[user]
        self._total_debt -= amount

    # ========== CHECKPOINTS ==========

    def checkpoint(self) -> Any:
        return (
            {user: dict(balances) for user, balances in self._collateral.items()},
            dict(self._debt),
            self._total_debt,
        )

    def revert_to(self, state: Any) -> None:
        collateral, debt, total_debt = state
        self._collateral = {user: dict(balances) for user, balances in collateral.items()}
        self._debt = dict(debt)
        self._total_debt = total_debt

    # ========== SERIALIZATION ==========

    def to_dict(self) -> dict:
        """Serialize to dictionary (amounts as strings)."""
        return {
            "collateral": {
                user: {token: str(amount) for token, amount in balances.items()}
                for user, balances in self._collateral.items()
            },
            "debt": {user: str(amount) for user, amount in self._debt.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CollateralLedger":
        """Deserialize from dictionary."""
        ledger = cls()
        for user, balances in data.get("collateral", {}).items():
            for token, amount in balances.items():
                ledger.credit_collateral(user, token, int(amount))
        for user, amount in data.get("debt", {}).items():
            ledger.increase_debt(user, int(amount))
        logger.debug(f"Loaded ledger with {len(list(ledger.users()))} positions")
        return ledger

    @staticmethod
    def _require_non_negative(amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Ledger amounts cannot be negative: {amount}")
