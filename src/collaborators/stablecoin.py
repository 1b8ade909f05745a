"""Stablecoin token with a single, non-transferable mint capability."""

import logging
from typing import Optional

from src.collaborators.base import BurnableToken
from src.collaborators.token import InMemoryToken, TokenError

logger = logging.getLogger(__name__)


class MintAuthorityAlreadyIssued(TokenError):
    def __init__(self, holder: str):
        self.holder = holder
        super().__init__(f"Mint authority already issued to {holder}")


class MintAuthority:
    """
    Capability to mint a specific stablecoin.

    Only ``StableCoin.issue_mint_authority`` creates instances, and it does so
    at most once per coin, so whoever holds this object is the sole minter.
    """

    def __init__(self, stablecoin: "StableCoin", holder: str, _token: object):
        if _token is not stablecoin._issue_token:
            raise TypeError("MintAuthority is created by StableCoin.issue_mint_authority")
        self._stablecoin = stablecoin
        self._holder = holder

    @property
    def stablecoin(self) -> "StableCoin":
        return self._stablecoin

    @property
    def holder(self) -> str:
        return self._holder

    def mint(self, to: str, amount: int) -> bool:
        self._stablecoin._mint(to, amount)
        logger.debug(f"{self._holder} minted {amount} {self._stablecoin.symbol} to {to}")
        return True


class StableCoin(InMemoryToken, BurnableToken):
    """
    USD-pegged stablecoin.

    Any holder may burn their own balance; minting requires the
    ``MintAuthority`` issued once at deployment.
    """

    def __init__(self, address: str = "dsc", symbol: str = "DSC"):
        super().__init__(address, symbol)
        self._issue_token = object()
        self._authority_holder: Optional[str] = None

    @property
    def minter(self) -> Optional[str]:
        """Holder of the mint authority, if issued."""
        return self._authority_holder

    def issue_mint_authority(self, holder: str) -> MintAuthority:
        if self._authority_holder is not None:
            raise MintAuthorityAlreadyIssued(self._authority_holder)
        self._authority_holder = holder
        logger.info(f"Mint authority for {self.symbol} issued to {holder}")
        return MintAuthority(self, holder, self._issue_token)

    def burn(self, holder: str, amount: int) -> bool:
        self._burn(holder, amount)
        return True
