"""Collaborator interfaces and in-memory implementations."""

from .base import BurnableToken, FungibleToken, PriceFeed, Revertible
from .token import (
    CollateralToken,
    InMemoryToken,
    InsufficientAllowance,
    InsufficientTokenBalance,
    TokenError,
)
from .stablecoin import MintAuthority, MintAuthorityAlreadyIssued, StableCoin
from .price_feed import StaticPriceFeed

__all__ = [
    "BurnableToken",
    "FungibleToken",
    "PriceFeed",
    "Revertible",
    "CollateralToken",
    "InMemoryToken",
    "InsufficientAllowance",
    "InsufficientTokenBalance",
    "TokenError",
    "MintAuthority",
    "MintAuthorityAlreadyIssued",
    "StableCoin",
    "StaticPriceFeed",
]
