"""Shared state and guard rails used by every engine operation."""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator

from src.collaborators.base import BurnableToken, FungibleToken
from src.collaborators.stablecoin import MintAuthority
from src.core.exceptions import (
    BelowMinDscLevel,
    BreaksHealthFactor,
    CollaboratorError,
    EngineError,
    InvalidAmount,
    NeedsMoreThanZero,
    UnsupportedToken,
)
from src.core.models import RiskParameters
from src.engine.guard import PositionGuard
from src.engine.health import HealthFactorCalculator
from src.engine.ledger import CollateralLedger
from src.engine.oracle import PriceOracleAdapter
from src.engine.transaction import EventLog, StateCheckpoint

logger = logging.getLogger(__name__)


@dataclass
class EngineContext:
    """
    Everything an operation needs, owned by one engine.

    ``operation(user)`` wraps a mutating operation: it holds the position
    guard, checkpoints the ledger, the event log and every collaborator, and
    restores them all if the body raises.
    """

    address: str
    ledger: CollateralLedger
    oracle: PriceOracleAdapter
    health: HealthFactorCalculator
    risk: RiskParameters
    collateral_tokens: Dict[str, FungibleToken]
    stablecoin: BurnableToken
    mint_authority: MintAuthority
    guard: PositionGuard = field(default_factory=PositionGuard)
    events: EventLog = field(default_factory=EventLog)

    @contextmanager
    def operation(self, user: str) -> Iterator[None]:
        with self.guard.hold(user):
            participants = [self.ledger, self.events, self.stablecoin]
            participants.extend(self.collateral_tokens.values())
            with StateCheckpoint(participants):
                yield

    # ========== CHECKS ==========

    @staticmethod
    def require_positive(amount: int) -> None:
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise InvalidAmount(amount)
        if amount <= 0:
            raise NeedsMoreThanZero(amount)

    def require_supported(self, token: str) -> FungibleToken:
        collateral = self.collateral_tokens.get(token)
        if collateral is None:
            raise UnsupportedToken(token)
        return collateral

    def require_healthy(self, user: str) -> None:
        """Fail unless the user's health factor, priced now, is at least 1.0."""
        health_factor = self.health.health_factor(user)
        if health_factor < self.risk.min_health_factor:
            raise BreaksHealthFactor(user, health_factor)

    def require_no_dust(self, user: str, debt: int) -> None:
        if self.risk.is_dust(debt):
            raise BelowMinDscLevel(user, debt, self.risk.min_debt_threshold)

    # ========== INTERACTIONS ==========

    @staticmethod
    def interact(operation: str, call: Callable[..., bool], *args) -> None:
        """
        Invoke a collaborator.

        Engine errors raised from inside the call (e.g. a reentrant callback)
        propagate unchanged; anything else, or a False return, becomes
        ``CollaboratorError``.
        """
        try:
            ok = call(*args)
        except EngineError:
            raise
        except Exception as e:
            raise CollaboratorError(operation, str(e)) from e
        if ok is False:
            raise CollaboratorError(operation, "returned False")
