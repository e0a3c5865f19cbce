"""Value objects: tokens, amounts, prices, pairs and pair snapshots."""

from amm_engine.models.pair import Pair
from amm_engine.models.price import Price
from amm_engine.models.snapshot import PairSnapshot, TokenSnapshot, parse_pair
from amm_engine.models.token import Token, TokenAmount
from amm_engine.models.types import Address, Uint256, is_valid_address, normalize_address

__all__ = [
    "Token",
    "TokenAmount",
    "Price",
    "Pair",
    "PairSnapshot",
    "TokenSnapshot",
    "parse_pair",
    "Address",
    "Uint256",
    "is_valid_address",
    "normalize_address",
]
