"""Pydantic settings for the DSC engine."""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.constants import to_wad
from src.core.models import RiskParameters


class Settings(BaseSettings):
    """Engine settings loaded from environment variables (prefix ``DSC_``)."""

    model_config = SettingsConfigDict(
        env_prefix="DSC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Solvency
    liquidation_threshold: int = Field(
        default=50, gt=0, le=100, description="Percent of collateral value counted against debt"
    )
    liquidation_bonus: int = Field(
        default=10, ge=0, le=100, description="Percent bonus collateral paid to liquidators"
    )
    min_debt_threshold: Decimal = Field(
        default=Decimal("20"), ge=0, description="Smallest nonzero debt, in DSC units"
    )

    # Oracle
    oracle_max_staleness_seconds: Optional[int] = Field(
        default=None, gt=0, description="Reject quotes older than this; unset disables the check"
    )

    # Persistence
    storage_dir: Path = Field(default=Path(".dsc_engine"), description="Ledger snapshot directory")

    @field_validator("oracle_max_staleness_seconds", mode="before")
    @classmethod
    def parse_staleness(cls, v):
        """Treat an empty value as 'no staleness limit'."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("storage_dir", mode="before")
    @classmethod
    def parse_storage_dir(cls, v):
        """Convert string to Path."""
        if isinstance(v, str):
            return Path(v)
        return v

    def risk_parameters(self) -> RiskParameters:
        """Integer risk parameters for the engine."""
        return RiskParameters(
            liquidation_threshold=self.liquidation_threshold,
            liquidation_bonus=self.liquidation_bonus,
            min_debt_threshold=to_wad(self.min_debt_threshold),
        )

    def ensure_storage_dir(self) -> Path:
        """Ensure storage directory exists and return it."""
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        return self.storage_dir


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
