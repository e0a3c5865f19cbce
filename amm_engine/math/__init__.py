"""Integer math for the pricing engine.

- scaling: 18-decimal normalization and fee helpers
- stable_math: StableSwap invariant solver
- liquidity: LP mint and redemption formulas
"""

from amm_engine.math.liquidity import (
    constant_product_liquidity_minted,
    liquidity_value,
    protocol_fee_liquidity,
    stable_liquidity_minted,
)
from amm_engine.math.scaling import (
    add_swap_fee,
    fee_multiplier,
    scale_down,
    scale_up,
    scaling_factor,
    subtract_swap_fee,
    validate_swap_fee,
)
from amm_engine.math.stable_math import (
    calc_in_given_out,
    calc_out_given_in,
    calculate_invariant,
    calculate_spot_price,
    get_balance_given_invariant,
)

__all__ = [
    # Scaling
    "scaling_factor",
    "scale_up",
    "scale_down",
    # Fees
    "validate_swap_fee",
    "fee_multiplier",
    "subtract_swap_fee",
    "add_swap_fee",
    # Stable math
    "calculate_invariant",
    "get_balance_given_invariant",
    "calc_out_given_in",
    "calc_in_given_out",
    "calculate_spot_price",
    # Liquidity
    "constant_product_liquidity_minted",
    "stable_liquidity_minted",
    "protocol_fee_liquidity",
    "liquidity_value",
]
