"""Liquidity accounting math.

LP tokens minted on deposit and redemption value on withdrawal, for both
curves, including dilution by undistributed protocol fees. All functions take
and return plain ints; token bookkeeping lives in amm_engine.models.pair.
"""

from amm_engine.constants import MINIMUM_LIQUIDITY, PROTOCOL_FEE_DIVISOR
from amm_engine.errors import InsufficientInputAmount, InsufficientReserves
from amm_engine.math.stable_math import calculate_invariant
from amm_engine.safe_int import S


def _require_positive(liquidity: int) -> int:
    if liquidity <= 0:
        raise InsufficientInputAmount(f"Liquidity minted must be positive, got {liquidity}")
    return liquidity


def _require_reserves(reserve0: int, reserve1: int) -> None:
    if reserve0 <= 0 or reserve1 <= 0:
        raise InsufficientReserves(
            f"Cannot mint into a pair with supply and an empty reserve ({reserve0}, {reserve1})"
        )


def constant_product_liquidity_minted(
    total_supply: int,
    reserve0: int,
    reserve1: int,
    amount0: int,
    amount1: int,
) -> int:
    """LP tokens minted by a deposit into a constant-product pair.

    Empty pool: sqrt(amount0 * amount1) - MINIMUM_LIQUIDITY
    Otherwise:  min(amount0 * ts / reserve0, amount1 * ts / reserve1)

    Args:
        total_supply: Current LP total supply
        reserve0: Token0 reserve before the deposit
        reserve1: Token1 reserve before the deposit
        amount0: Token0 deposited
        amount1: Token1 deposited

    Returns:
        LP tokens minted

    Raises:
        InsufficientReserves: If the pool has supply but an empty reserve
        InsufficientInputAmount: If the result is not strictly positive
    """
    if total_supply == 0:
        # Signed: deposits below MINIMUM_LIQUIDITY go negative and are rejected
        liquidity = (S(amount0) * S(amount1)).isqrt().value - MINIMUM_LIQUIDITY
    else:
        _require_reserves(reserve0, reserve1)
        liquidity0 = S(amount0) * S(total_supply) // S(reserve0)
        liquidity1 = S(amount1) * S(total_supply) // S(reserve1)
        liquidity = liquidity0.min(liquidity1).value

    return _require_positive(liquidity)


def stable_liquidity_minted(
    total_supply: int,
    balance0: int,
    balance1: int,
    amount0: int,
    amount1: int,
    amplification_coefficient: int,
) -> int:
    """LP tokens minted by a deposit into a stable pair.

    Empty pool: D(amount0, amount1) - MINIMUM_LIQUIDITY
    Otherwise:  (D(balances + amounts) - D(balances)) * ts / D(balances)

    All balances and amounts are 18-decimal values.

    NOTE: this is known to drift from the contract's result by about
    0.0001% on non-empty pools; the formula is kept unchanged.

    Raises:
        InsufficientReserves: If the pool has supply but an empty balance
        InsufficientInputAmount: If a first deposit is one-sided or the
            result is not strictly positive
    """
    if total_supply == 0:
        if amount0 <= 0 or amount1 <= 0:
            raise InsufficientInputAmount("First deposit into a stable pair must include both tokens")
        invariant = calculate_invariant(amount0, amount1, amplification_coefficient)
        return _require_positive(invariant - MINIMUM_LIQUIDITY)

    _require_reserves(balance0, balance1)
    old_invariant = calculate_invariant(balance0, balance1, amplification_coefficient)
    new_invariant = calculate_invariant(
        (S(balance0) + S(amount0)).value,
        (S(balance1) + S(amount1)).value,
        amplification_coefficient,
    )

    growth = new_invariant - old_invariant
    if growth <= 0:
        raise InsufficientInputAmount("Deposit does not grow the invariant")

    liquidity = S(growth) * S(total_supply) // S(old_invariant)
    return _require_positive(liquidity.value)


def protocol_fee_liquidity(total_supply: int, reserve0: int, reserve1: int, k_last: int) -> int:
    """Phantom LP tokens owed to the protocol for fee growth since k_last.

    Formula: ts * (rootK - rootKLast) / (5 * rootK + rootKLast)

    Zero when k_last is zero or the pool has not grown.
    """
    if k_last == 0:
        return 0

    root_k = (S(reserve0) * S(reserve1)).isqrt()
    root_k_last = S(k_last).isqrt()
    if root_k <= root_k_last:
        return 0

    numerator = S(total_supply) * (root_k - root_k_last)
    denominator = root_k * S(PROTOCOL_FEE_DIVISOR) + root_k_last
    return (numerator // denominator).value


def liquidity_value(
    total_supply: int,
    liquidity: int,
    reserve: int,
    reserve0: int,
    reserve1: int,
    protocol_fee_on: bool = False,
    k_last: int | None = None,
) -> int:
    """Amount of one token redeemed by burning liquidity.

    Formula: liquidity * reserve / adjusted_total_supply

    When the protocol fee is on, adjusted_total_supply includes the phantom
    fee share (see protocol_fee_liquidity).

    Args:
        total_supply: Current LP total supply
        liquidity: LP tokens burned
        reserve: Reserve of the token being valued
        reserve0: Token0 reserve (for fee growth)
        reserve1: Token1 reserve (for fee growth)
        protocol_fee_on: Whether the factory has the protocol fee enabled
        k_last: reserve0 * reserve1 recorded at the last liquidity event

    Returns:
        Redeemable amount of the token

    Raises:
        InsufficientInputAmount: If liquidity exceeds total supply or the
            supply is empty
        ValueError: If protocol_fee_on is set without k_last
    """
    if liquidity > total_supply:
        raise InsufficientInputAmount(
            f"Liquidity {liquidity} exceeds total supply {total_supply}"
        )

    adjusted_total_supply = S(total_supply)
    if protocol_fee_on:
        if k_last is None:
            raise ValueError("k_last is required when the protocol fee is on")
        adjusted_total_supply = adjusted_total_supply + S(
            protocol_fee_liquidity(total_supply, reserve0, reserve1, k_last)
        )

    if adjusted_total_supply == 0:
        raise InsufficientInputAmount("Cannot value liquidity of an empty pool")

    return (S(liquidity) * S(reserve) // adjusted_total_supply).value
