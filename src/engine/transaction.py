"""All-or-nothing execution across the ledger and its collaborators."""

import logging
from typing import Any, List, Sequence, Tuple

from src.collaborators.base import Revertible

logger = logging.getLogger(__name__)


class EventLog(Revertible):
    """Append-only journal of committed engine events."""

    def __init__(self):
        self._events: List[Any] = []

    def record(self, event: Any) -> None:
        self._events.append(event)

    def __iter__(self):
        return iter(list(self._events))

    def __len__(self) -> int:
        return len(self._events)

    def checkpoint(self) -> Any:
        return len(self._events)

    def revert_to(self, state: Any) -> None:
        del self._events[state:]


class StateCheckpoint:
    """
    Context manager that restores every participant if the block raises.

    Usage:
        with StateCheckpoint([ledger, events, token, stablecoin]):
            ...  # any exception leaves all participants untouched
    """

    def __init__(self, participants: Sequence[Revertible]):
        self._participants = list(participants)
        self._states: List[Tuple[Revertible, Any]] = []

    def __enter__(self) -> "StateCheckpoint":
        self._states = [(p, p.checkpoint()) for p in self._participants]
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            for participant, state in reversed(self._states):
                participant.revert_to(state)
            logger.debug(f"Rolled back {len(self._states)} participants after {exc_type.__name__}")
        self._states = []
        return False
