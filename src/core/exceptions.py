"""Exception hierarchy for the stablecoin engine.

Every error aborts the enclosing operation; the engine restores the ledger and
all collaborators to their state before the call before re-raising.
"""

from typing import Optional


class EngineError(Exception):
    """Base class for all engine errors."""


# ========== VALIDATION ==========


class ValidationError(EngineError):
    """Malformed input or configuration."""


class NeedsMoreThanZero(ValidationError):
    def __init__(self, amount: int):
        self.amount = amount
        super().__init__(f"Amount must be greater than zero, got {amount}")


class InvalidAmount(ValidationError):
    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"Amount must be an integer, got {type(amount).__name__}")


class UnsupportedToken(ValidationError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Token not allowed as collateral: {token}")


class ConfigArrayLengthMismatch(ValidationError):
    def __init__(self, tokens: int, feeds: int):
        self.tokens = tokens
        self.feeds = feeds
        super().__init__(
            f"Collateral tokens and price feeds must pair 1:1 "
            f"({tokens} tokens, {feeds} feeds)"
        )


class DuplicateCollateralToken(ValidationError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Collateral token configured twice: {token}")


class MintAuthorityMismatch(ValidationError):
    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Mint authority is bound to {actual!r}, engine address is {expected!r}"
        )


class UnsupportedFeedPrecision(ValidationError):
    def __init__(self, token: str, decimals: int):
        self.token = token
        self.decimals = decimals
        super().__init__(f"Price feed for {token} reports {decimals} decimals (max 18)")


# ========== SOLVENCY ==========


class SolvencyError(EngineError):
    """Operation would leave a position insolvent or dusty."""


class BreaksHealthFactor(SolvencyError):
    def __init__(self, user: str, health_factor):
        self.user = user
        self.health_factor = health_factor
        super().__init__(f"Health factor of {user} would drop to {health_factor}")


class BelowMinDscLevel(SolvencyError):
    def __init__(self, user: str, debt: int, minimum: int):
        self.user = user
        self.debt = debt
        self.minimum = minimum
        super().__init__(f"Debt of {user} would be {debt}, below minimum {minimum}")


# ========== LIQUIDATION ==========


class LiquidationError(EngineError):
    """Liquidation preconditions or postconditions failed."""


class HealthFactorOk(LiquidationError):
    def __init__(self, user: str, health_factor):
        self.user = user
        self.health_factor = health_factor
        super().__init__(f"Position of {user} is healthy ({health_factor})")


class HealthFactorNotImproved(LiquidationError):
    def __init__(self, user: str, before, after):
        self.user = user
        self.before = before
        self.after = after
        super().__init__(
            f"Liquidation of {user} would move health factor from {before} to {after}"
        )


# ========== LEDGER ==========


class LedgerError(EngineError):
    """Bookkeeping would go negative."""


class InsufficientBalance(LedgerError):
    def __init__(self, user: str, token: str, requested: int, available: int):
        self.user = user
        self.token = token
        self.requested = requested
        self.available = available
        super().__init__(
            f"{user} holds {available} of {token} as collateral, requested {requested}"
        )


class InsufficientDebt(LedgerError):
    def __init__(self, user: str, requested: int, available: int):
        self.user = user
        self.requested = requested
        self.available = available
        super().__init__(f"{user} owes {available}, requested decrease of {requested}")


# ========== COLLABORATORS ==========


class CollaboratorError(EngineError):
    """A token or stablecoin call failed or returned False."""

    def __init__(self, operation: str, detail: Optional[str] = None):
        self.operation = operation
        self.detail = detail
        message = f"Collaborator call failed: {operation}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


# ========== ORACLE ==========


class OracleError(EngineError):
    """Price quote cannot be trusted."""


class StalePrice(OracleError):
    def __init__(self, token: str, age_seconds: int, max_age_seconds: int):
        self.token = token
        self.age_seconds = age_seconds
        self.max_age_seconds = max_age_seconds
        super().__init__(
            f"Quote for {token} is {age_seconds}s old (limit {max_age_seconds}s)"
        )


class InvalidPrice(OracleError):
    def __init__(self, token: str, price: int):
        self.token = token
        self.price = price
        super().__init__(f"Price feed for {token} returned non-positive price {price}")


# ========== REENTRANCY ==========


class ReentrantCall(EngineError):
    def __init__(self, user: str):
        self.user = user
        super().__init__(f"Position of {user} is locked by an operation in progress")
