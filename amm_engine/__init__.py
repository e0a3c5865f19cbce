"""Off-chain pricing engine for constant-product and StableSwap pairs."""

from amm_engine.constants import FEE_ACCURACY, MINIMUM_LIQUIDITY
from amm_engine.curves import ConstantProduct, StableSwap, curve_from_id
from amm_engine.errors import (
    AMMError,
    InsufficientInputAmount,
    InsufficientReserves,
    InvalidCurveId,
    InvalidDecimals,
    InvalidFee,
    MissingAmplificationCoefficient,
    TokenMismatch,
)
from amm_engine.models import Pair, PairSnapshot, Price, Token, TokenAmount, parse_pair

__version__ = "0.1.0"
__all__ = [
    "FEE_ACCURACY",
    "MINIMUM_LIQUIDITY",
    # Curves
    "ConstantProduct",
    "StableSwap",
    "curve_from_id",
    # Models
    "Token",
    "TokenAmount",
    "Price",
    "Pair",
    "PairSnapshot",
    "parse_pair",
    # Errors
    "AMMError",
    "InvalidCurveId",
    "TokenMismatch",
    "InsufficientReserves",
    "InsufficientInputAmount",
    "MissingAmplificationCoefficient",
    "InvalidFee",
    "InvalidDecimals",
    "__version__",
]
