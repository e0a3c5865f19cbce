"""Engine configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from amm_engine.constants import DEFAULT_AMPLIFICATION_COEFFICIENT_PRECISE, DEFAULT_SWAP_FEE


@dataclass(frozen=True)
class EngineConfig:
    """Defaults applied where pair data leaves a parameter unspecified.

    Protocol constants (FEE_ACCURACY, MINIMUM_LIQUIDITY, iteration caps) are
    not configurable: they must match the deployed contracts.

    Attributes:
        default_swap_fee: Swap fee for snapshots without one (FEE_ACCURACY parts)
        default_amplification_coefficient: A * A_PRECISION offered by the CLI
            when building stable pairs by hand
        log_level: Log level name used by the CLI
    """

    default_swap_fee: int = DEFAULT_SWAP_FEE
    default_amplification_coefficient: int = DEFAULT_AMPLIFICATION_COEFFICIENT_PRECISE
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Read configuration from environment variables.

        - AMM_DEFAULT_SWAP_FEE
        - AMM_DEFAULT_AMPLIFICATION_COEFFICIENT
        - AMM_LOG_LEVEL
        """
        return cls(
            default_swap_fee=int(os.environ.get("AMM_DEFAULT_SWAP_FEE", str(DEFAULT_SWAP_FEE))),
            default_amplification_coefficient=int(
                os.environ.get(
                    "AMM_DEFAULT_AMPLIFICATION_COEFFICIENT",
                    str(DEFAULT_AMPLIFICATION_COEFFICIENT_PRECISE),
                )
            ),
            log_level=os.environ.get("AMM_LOG_LEVEL", "INFO").upper(),
        )


# Default configuration instance
DEFAULT_ENGINE_CONFIG = EngineConfig()
