"""Price oracle adapter: converts between collateral amounts and USD."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from src.collaborators.base import PriceFeed
from src.core.constants import MAX_FEED_DECIMALS
from src.core.exceptions import (
    InvalidPrice,
    StalePrice,
    UnsupportedFeedPrecision,
    UnsupportedToken,
)
from src.core.models import CollateralTokenConfig, PriceQuote

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def utc_now() -> int:
    """Current unix timestamp."""
    return int(datetime.now(timezone.utc).timestamp())


@dataclass(frozen=True)
class StalenessPolicy:
    """
    Maximum accepted age of a price quote.

    ``max_age_seconds=None`` accepts quotes of any age.
    """

    max_age_seconds: Optional[int] = None

    @property
    def enabled(self) -> bool:
        return self.max_age_seconds is not None

    def check(self, token: str, quote: PriceQuote, now: int) -> None:
        if self.max_age_seconds is None:
            return
        age = quote.age(now)
        if age > self.max_age_seconds:
            logger.warning(f"Rejecting stale quote for {token}: {age}s old")
            raise StalePrice(token, age, self.max_age_seconds)


class PriceOracleAdapter:
    """
    Normalizes price feed answers to 18-decimal USD values.

    A fresh quote is fetched for every conversion.

    usd_value = amount * price * 10**(18 - feed_decimals) / 10**18
    """

    def __init__(
        self,
        collateral: Iterable[CollateralTokenConfig],
        staleness: Optional[StalenessPolicy] = None,
        clock: Optional[Clock] = None,
    ):
        self._configs: Dict[str, CollateralTokenConfig] = {}
        for config in collateral:
            if not 0 <= config.feed_decimals <= MAX_FEED_DECIMALS:
                raise UnsupportedFeedPrecision(config.token, config.feed_decimals)
            self._configs[config.token] = config

        self.staleness = staleness or StalenessPolicy()
        self._clock = clock or utc_now

    @classmethod
    def from_feeds(
        cls,
        feeds: Dict[str, PriceFeed],
        staleness: Optional[StalenessPolicy] = None,
        clock: Optional[Clock] = None,
    ) -> "PriceOracleAdapter":
        """Build an adapter from a token -> feed mapping, reading each feed's decimals."""
        configs = [
            CollateralTokenConfig(token=token, price_feed=feed, feed_decimals=feed.decimals())
            for token, feed in feeds.items()
        ]
        return cls(configs, staleness=staleness, clock=clock)

    @property
    def tokens(self) -> List[str]:
        """Supported tokens in configuration order."""
        return list(self._configs)

    def supports(self, token: str) -> bool:
        return token in self._configs

    def config_for(self, token: str) -> CollateralTokenConfig:
        config = self._configs.get(token)
        if config is None:
            raise UnsupportedToken(token)
        return config

    def price_feed_for(self, token: str) -> PriceFeed:
        return self.config_for(token).price_feed

    def quote(self, token: str) -> PriceQuote:
        """
        Fetch and validate the current quote for a token.

        Raises:
            UnsupportedToken: If the token has no configured feed
            InvalidPrice: If the feed answer is not positive
            StalePrice: If the staleness policy rejects the quote
        """
        config = self.config_for(token)
        price, updated_at = config.price_feed.latest_quote()
        if price <= 0:
            raise InvalidPrice(token, price)

        quote = PriceQuote(
            price=price,
            feed_decimals=config.feed_decimals,
            updated_at=updated_at,
        )
        self.staleness.check(token, quote, self._clock())
        return quote

    def usd_value(self, token: str, amount: int) -> int:
        """USD value (WAD) of ``amount`` (WAD) of ``token``."""
        return self.quote(token).usd_value(amount)

    def token_amount_for_usd(self, token: str, usd_amount: int) -> int:
        """Amount (WAD) of ``token`` worth ``usd_amount`` (WAD), rounded down."""
        return self.quote(token).token_amount(usd_amount)
