"""Pydantic models for pair state as it is fetched from chain.

A PairSnapshot is what an RPC fetcher or a JSON fixture provides: token
metadata, raw reserves, the factory curve id, swap fee and (stable pairs)
the amplification coefficient. Converting it to a Pair validates the curve
parameters and orders the tokens.
"""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import BaseModel, Field

from amm_engine.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from amm_engine.models.pair import Pair
from amm_engine.models.token import Token, TokenAmount
from amm_engine.models.types import Address, Uint256

logger = structlog.get_logger()


class TokenSnapshot(BaseModel):
    """Token metadata included in a pair snapshot."""

    model_config = {"populate_by_name": True}

    address: Address
    decimals: int = Field(ge=0, le=77)
    symbol: str | None = None
    name: str | None = None

    def to_token(self, chain_id: int) -> Token:
        return Token(chain_id, self.address, self.decimals, self.symbol, self.name)

    @classmethod
    def from_token(cls, token: Token) -> TokenSnapshot:
        return cls(address=token.address, decimals=token.decimals, symbol=token.symbol, name=token.name)


class PairSnapshot(BaseModel):
    """Serialized pair state.

    Reserves and the amplification coefficient are uint256 values and accept
    decimal strings. The swap fee is in FEE_ACCURACY parts; when omitted the
    engine default applies.
    """

    model_config = {"populate_by_name": True}

    chain_id: int = Field(alias="chainId", ge=1)
    address: Address | None = None
    token0: TokenSnapshot
    token1: TokenSnapshot
    reserve0: Uint256
    reserve1: Uint256
    curve_id: int = Field(alias="curveId")
    swap_fee: int | None = Field(default=None, alias="swapFee", ge=0)
    amplification_coefficient: Uint256 | None = Field(
        default=None,
        alias="amplificationCoefficient",
        description="Amplification coefficient scaled by A_PRECISION (stable pairs only)",
    )

    def to_pair(self, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> Pair:
        """Build the Pair described by this snapshot.

        Raises:
            InvalidCurveId: If curve_id is unknown
            MissingAmplificationCoefficient: If a stable pair has no coefficient
            InvalidFee: If the swap fee is out of range
        """
        swap_fee = config.default_swap_fee if self.swap_fee is None else self.swap_fee
        return Pair.from_curve_id(
            TokenAmount(self.token0.to_token(self.chain_id), self.reserve0),
            TokenAmount(self.token1.to_token(self.chain_id), self.reserve1),
            self.curve_id,
            swap_fee=swap_fee,
            amplification_coefficient=self.amplification_coefficient,
            address=self.address,
        )

    @classmethod
    def from_pair(cls, pair: Pair) -> PairSnapshot:
        return cls(
            chain_id=pair.chain_id,
            address=pair.address,
            token0=TokenSnapshot.from_token(pair.token0),
            token1=TokenSnapshot.from_token(pair.token1),
            reserve0=pair.reserve0.raw,
            reserve1=pair.reserve1.raw,
            curve_id=pair.curve_id,
            swap_fee=pair.swap_fee,
            amplification_coefficient=pair.amplification_coefficient,
        )


def parse_pair(data: dict[str, Any], config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> Pair:
    """Validate raw snapshot data and convert it to a Pair.

    Args:
        data: Snapshot dict (camelCase or snake_case keys)
        config: Engine configuration supplying defaults

    Returns:
        The parsed Pair

    Raises:
        pydantic.ValidationError: If the data is malformed
        AMMError: If the curve parameters are invalid
    """
    snapshot = PairSnapshot.model_validate(data)
    if snapshot.swap_fee is None:
        logger.debug(
            "pair_snapshot_default_fee",
            pair=snapshot.address,
            using_default=config.default_swap_fee,
        )

    pair = snapshot.to_pair(config)
    logger.debug(
        "pair_snapshot_parsed",
        pair=pair.address,
        curve_id=pair.curve_id,
        token0=pair.token0.address,
        token1=pair.token1.address,
        reserve0=pair.reserve0.raw,
        reserve1=pair.reserve1.raw,
    )
    return pair
