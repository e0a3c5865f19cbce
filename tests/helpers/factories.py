"""Factory functions for creating test pairs.

Usage:
    from tests.helpers import make_pair, DAI, USDC

    pair = make_pair(DAI, 10**21, USDC, 10**9)
"""

from amm_engine.constants import DEFAULT_SWAP_FEE
from amm_engine.curves import ConstantProduct, Curve
from amm_engine.models import Pair, Token, TokenAmount


def amount(token: Token, raw: int) -> TokenAmount:
    """Shorthand for TokenAmount(token, raw)."""
    return TokenAmount(token, raw)


def make_pair(
    token_a: Token,
    reserve_a: int,
    token_b: Token,
    reserve_b: int,
    curve: Curve | None = None,
    swap_fee: int = DEFAULT_SWAP_FEE,
    address: str | None = None,
) -> Pair:
    """Create a pair from raw reserves (tokens may be passed in any order)."""
    return Pair(
        TokenAmount(token_a, reserve_a),
        TokenAmount(token_b, reserve_b),
        curve if curve is not None else ConstantProduct(),
        swap_fee,
        address,
    )
