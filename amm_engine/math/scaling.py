"""Fixed-point scaling and fee helpers.

Stable-curve math runs on balances normalized to 18 decimals. Amounts cross
that boundary here: scaling up is exact, scaling down always floors. Fee
helpers work in FEE_ACCURACY parts (1_000_000 = 100%).

Constant-product math never goes through this module; it works directly on
native-decimal integers.
"""

from amm_engine.constants import FEE_ACCURACY, INTERNAL_DECIMALS
from amm_engine.errors import InvalidDecimals, InvalidFee
from amm_engine.safe_int import S


def scaling_factor(decimals: int) -> int:
    """Factor that lifts a native amount to 18 decimals.

    Args:
        decimals: Token decimals (0..18)

    Returns:
        10 ** (18 - decimals)

    Raises:
        InvalidDecimals: If decimals is outside [0, 18]
    """
    if decimals < 0 or decimals > INTERNAL_DECIMALS:
        raise InvalidDecimals(
            f"Token decimals must be in range [0, {INTERNAL_DECIMALS}] for stable math, "
            f"got {decimals}"
        )
    return 10 ** (INTERNAL_DECIMALS - decimals)


def scale_up(amount: int, decimals: int) -> int:
    """Scale a native-decimal amount to 18 decimals (exact)."""
    return (S(amount) * S(scaling_factor(decimals))).value


def scale_down(scaled: int, decimals: int) -> int:
    """Scale an 18-decimal amount back to native decimals, rounding down."""
    return (S(scaled) // S(scaling_factor(decimals))).value


def validate_swap_fee(swap_fee: int) -> int:
    """Check that a swap fee lies in [0, FEE_ACCURACY).

    Raises:
        InvalidFee: If the fee is out of range
    """
    if swap_fee < 0 or swap_fee >= FEE_ACCURACY:
        raise InvalidFee(f"Swap fee must be in range [0, {FEE_ACCURACY}), got {swap_fee}")
    return swap_fee


def fee_multiplier(swap_fee: int) -> int:
    """Share of an input that reaches the curve: FEE_ACCURACY - swap_fee."""
    return FEE_ACCURACY - validate_swap_fee(swap_fee)


def subtract_swap_fee(amount: int, swap_fee: int) -> int:
    """Deduct the swap fee from an input amount (exact input swaps).

    Formula: amount * (FEE_ACCURACY - fee) // FEE_ACCURACY
    """
    return (S(amount) * S(fee_multiplier(swap_fee)) // S(FEE_ACCURACY)).value


def add_swap_fee(amount: int, swap_fee: int) -> int:
    """Gross a fee-free input amount up by the swap fee (exact output swaps).

    Formula: amount * FEE_ACCURACY // (FEE_ACCURACY - fee)
    """
    return (S(amount) * S(FEE_ACCURACY) // S(fee_multiplier(swap_fee))).value
