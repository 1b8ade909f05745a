"""Events recorded by the engine for every committed operation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineEvent:
    """Base class for engine events."""

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class CollateralDeposited(EngineEvent):
    user: str
    token: str
    amount: int


@dataclass(frozen=True)
class CollateralRedeemed(EngineEvent):
    redeemed_from: str
    redeemed_to: str
    token: str
    amount: int


@dataclass(frozen=True)
class DscMinted(EngineEvent):
    user: str
    amount: int


@dataclass(frozen=True)
class DscBurned(EngineEvent):
    on_behalf_of: str
    paid_by: str
    amount: int


@dataclass(frozen=True)
class PositionLiquidated(EngineEvent):
    target: str
    liquidator: str
    token: str
    debt_covered: int
    collateral_seized: int


@dataclass(frozen=True)
class LiquidationShortfall(EngineEvent):
    target: str
    token: str
    bonus_shortfall: int
    uncovered_debt: int
