"""Collateral configuration and price quote models."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.core.constants import WAD

if TYPE_CHECKING:
    from src.collaborators.base import PriceFeed


@dataclass(frozen=True)
class CollateralTokenConfig:
    """An approved collateral token paired with its USD price feed."""

    token: str                      # Token identifier (address)
    price_feed: "PriceFeed"
    feed_decimals: int              # Precision of the feed's answer


@dataclass(frozen=True)
class PriceQuote:
    """
    A single answer from a price feed.

    Quotes are never cached: every valuation fetches a new one so that a
    multi-step operation is always priced against the current answer.
    """

    price: int                      # Raw feed answer, scaled by 10**feed_decimals
    feed_decimals: int
    updated_at: int                 # Unix timestamp of the feed update

    @property
    def additional_feed_precision(self) -> int:
        """Factor lifting the feed answer to 18 decimals."""
        return 10 ** (18 - self.feed_decimals)

    @property
    def price_wad(self) -> int:
        """Price normalized to 18-decimal fixed point."""
        return self.price * self.additional_feed_precision

    def usd_value(self, amount: int) -> int:
        """USD value (WAD) of ``amount`` token units (WAD)."""
        return amount * self.price_wad // WAD

    def token_amount(self, usd_amount: int) -> int:
        """Token units (WAD) worth ``usd_amount`` USD (WAD), rounded down."""
        return usd_amount * WAD // self.price_wad

    def age(self, now: int) -> int:
        """Seconds elapsed since the feed was updated."""
        return max(0, now - self.updated_at)
