"""Default risk parameters of the stablecoin engine."""

from src.core.constants.generic import WAD

# Collateral must be worth twice the debt (threshold 50 / precision 100)
LIQUIDATION_THRESHOLD = 50
LIQUIDATION_BONUS = 10  # 10% extra collateral paid to liquidators
LIQUIDATION_PRECISION = 100

MIN_HEALTH_FACTOR = 1 * WAD

# Smallest nonzero debt a position may carry
MIN_DEBT_THRESHOLD = 20 * WAD

DEFAULT_ENGINE_ADDRESS = "dsc-engine"
