"""Settable price feed, the in-memory counterpart of an aggregator mock."""

from datetime import datetime, timezone
from typing import Optional, Tuple

from src.collaborators.base import PriceFeed


class StaticPriceFeed(PriceFeed):
    """
    Price feed whose answer is set explicitly.

    Args:
        decimals: Precision of the answer (e.g. 8 for USD pairs, 18 for mocks)
        initial_answer: Starting price scaled by 10**decimals
        updated_at: Timestamp of the starting answer (default: now)
    """

    def __init__(
        self,
        decimals: int,
        initial_answer: int,
        updated_at: Optional[int] = None,
    ):
        self._decimals = decimals
        self._answer = initial_answer
        self._updated_at = updated_at if updated_at is not None else self._now()
        self._round_id = 1

    @staticmethod
    def _now() -> int:
        return int(datetime.now(timezone.utc).timestamp())

    @property
    def round_id(self) -> int:
        return self._round_id

    def update_answer(self, answer: int, updated_at: Optional[int] = None) -> None:
        """Publish a new answer."""
        self._answer = answer
        self._updated_at = updated_at if updated_at is not None else self._now()
        self._round_id += 1

    def latest_quote(self) -> Tuple[int, int]:
        return self._answer, self._updated_at

    def decimals(self) -> int:
        return self._decimals
