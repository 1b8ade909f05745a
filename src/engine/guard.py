"""Per-position reentrancy guard."""

import logging
from contextlib import contextmanager
from typing import Iterator, Set

from src.core.exceptions import ReentrantCall

logger = logging.getLogger(__name__)


class PositionGuard:
    """
    Mutual exclusion over positions for the duration of an operation.

    A mutating operation holds its position's lock across the whole
    checks-effects-interactions window. A collaborator that calls back into
    the engine for a held position gets ``ReentrantCall``; other positions
    stay available.
    """

    def __init__(self):
        self._held: Set[str] = set()

    def is_held(self, user: str) -> bool:
        return user in self._held

    @contextmanager
    def hold(self, user: str) -> Iterator[None]:
        if user in self._held:
            logger.warning(f"Rejected reentrant call on position {user}")
            raise ReentrantCall(user)
        self._held.add(user)
        try:
            yield
        finally:
            self._held.discard(user)
