"""StableSwap invariant solver for two-token pairs.

Newton-Raphson routines for the invariant D and for the balance of one token
given D and the other balance. The iteration formulas, the order of the
integer divisions and the iteration cap reproduce the stable pair contract,
so every intermediate value floors exactly where the contract floors.

Balances are 18-decimal integers (see amm_engine.math.scaling). The
amplification coefficient is pre-scaled by A_PRECISION.

When the iteration cap is reached without convergence the last estimate is
returned and a warning is logged, as the contract returns its last estimate.
"""

from decimal import Decimal, localcontext

import structlog

from amm_engine.constants import A_PRECISION, MAX_LOOP_LIMIT, N_COINS
from amm_engine.errors import InsufficientReserves
from amm_engine.safe_int import S

logger = structlog.get_logger()

# Precision for spot price evaluation (uint256 fits in 78 digits)
_SPOT_PRICE_PRECISION = 78


def calculate_invariant(balance0: int, balance1: int, amplification_coefficient: int) -> int:
    """Calculate the StableSwap invariant D using Newton-Raphson iteration.

    Algorithm:
        1. Initial guess: D = balance0 + balance1
        2. d_p = D^3 / (4 * balance0 * balance1), floored step by step
        3. D' = (n_a * sum / A_PRECISION + 2 * d_p) * D
                / ((n_a - A_PRECISION) * D / A_PRECISION + 3 * d_p)
        4. Stop when |D' - D| <= 1, at most MAX_LOOP_LIMIT times

    n_a is amplification_coefficient * 2 (two coins per pair).

    Args:
        balance0: Token0 balance (18 decimals)
        balance1: Token1 balance (18 decimals)
        amplification_coefficient: A scaled by A_PRECISION

    Returns:
        The invariant D (18 decimals). Zero when both balances are zero.

    Raises:
        InsufficientReserves: If exactly one of the balances is zero
    """
    total = S(balance0) + S(balance1)
    if total == 0:
        return 0
    if balance0 <= 0 or balance1 <= 0:
        raise InsufficientReserves(
            f"Stable invariant requires positive balances, got ({balance0}, {balance1})"
        )

    b0, b1 = S(balance0), S(balance1)
    n_a = S(amplification_coefficient) * S(N_COINS)

    invariant = total
    for _ in range(MAX_LOOP_LIMIT):
        d_p = invariant * invariant // b0 * invariant // b1 // S(4)

        prev_invariant = invariant
        numerator = (n_a * total // S(A_PRECISION) + d_p * S(2)) * invariant
        denominator = (n_a - S(A_PRECISION)) * invariant // S(A_PRECISION) + d_p * S(3)
        invariant = numerator // denominator

        if invariant.within_one(prev_invariant):
            break
    else:
        logger.warning(
            "stable_invariant_did_not_converge",
            iterations=MAX_LOOP_LIMIT,
            balance0=balance0,
            balance1=balance1,
            amplification_coefficient=amplification_coefficient,
            last_estimate=invariant.value,
        )

    return invariant.value


def get_balance_given_invariant(other_balance: int, amplification_coefficient: int, invariant: int) -> int:
    """Solve for one token balance given D and the other token's balance.

    Rearranging the two-coin invariant for the unknown balance y gives
    y^2 + (b - D) * y = c with:

        c = D^3 * A_PRECISION / (4 * n_a * other_balance)
        b = other_balance + D * A_PRECISION / n_a

    which is iterated as y' = (y^2 + c) / (2y + b - D), starting from y = D.

    Args:
        other_balance: The known balance (18 decimals)
        amplification_coefficient: A scaled by A_PRECISION
        invariant: The invariant D to preserve

    Returns:
        The unknown balance (18 decimals)
    """
    d = S(invariant)
    n_a = S(amplification_coefficient) * S(N_COINS)
    other = S(other_balance)

    c = d * d // (other * S(2))
    c = c * d * S(A_PRECISION) // (n_a * S(2))

    b = other + d * S(A_PRECISION) // n_a

    balance = d
    for _ in range(MAX_LOOP_LIMIT):
        prev_balance = balance
        balance = (balance * balance + c) // (S(2) * balance + b - d)
        if balance.within_one(prev_balance):
            break
    else:
        logger.warning(
            "stable_balance_did_not_converge",
            iterations=MAX_LOOP_LIMIT,
            other_balance=other_balance,
            amplification_coefficient=amplification_coefficient,
            invariant=invariant,
            last_estimate=balance.value,
        )

    return balance.value


def calc_out_given_in(
    balance_in: int,
    balance_out: int,
    amplification_coefficient: int,
    amount_in: int,
) -> int:
    """Output amount for a given input on the stable curve.

    The swap fee must already be deducted from amount_in.

    Algorithm:
        1. D over the current balances
        2. new_balance_out given D and balance_in + amount_in
        3. amount_out = balance_out - new_balance_out (floored at 0)

    Args:
        balance_in: Input token balance (18 decimals)
        balance_out: Output token balance (18 decimals)
        amplification_coefficient: A scaled by A_PRECISION
        amount_in: Net input amount (18 decimals)

    Returns:
        Output amount (18 decimals)
    """
    invariant = calculate_invariant(balance_in, balance_out, amplification_coefficient)
    new_balance_in = S(balance_in) + S(amount_in)

    new_balance_out = get_balance_given_invariant(
        new_balance_in.value, amplification_coefficient, invariant
    )
    return S(balance_out).saturating_sub(new_balance_out).value


def calc_in_given_out(
    balance_in: int,
    balance_out: int,
    amplification_coefficient: int,
    amount_out: int,
) -> int:
    """Input amount (before fee) for a given output on the stable curve.

    Algorithm:
        1. D over the current balances
        2. new_balance_in given D and balance_out - amount_out
        3. amount_in = new_balance_in - balance_in (floored at 0)

    Args:
        balance_in: Input token balance (18 decimals)
        balance_out: Output token balance (18 decimals)
        amplification_coefficient: A scaled by A_PRECISION
        amount_out: Desired output amount (18 decimals)

    Returns:
        Input amount without fee (18 decimals)

    Raises:
        Underflow: If amount_out exceeds balance_out
    """
    invariant = calculate_invariant(balance_in, balance_out, amplification_coefficient)
    new_balance_out = S(balance_out) - S(amount_out)

    new_balance_in = get_balance_given_invariant(
        new_balance_out.value, amplification_coefficient, invariant
    )
    return S(new_balance_in).saturating_sub(balance_in).value


def calculate_spot_price(balance0: int, balance1: int, amplification_coefficient: int) -> Decimal:
    """Marginal price of token0 expressed in token1 at the current balances.

    Ratio of the invariant's partial derivatives:

        (2a*x*y + a*y^2 - b*y) / (2a*x*y + a*x^2 - b*x)

    with a = n_a / A_PRECISION and b = D * a - D. For a flat curve this tends
    to 1; for a -> 0 it tends to y / x, the constant-product spot price.

    Args:
        balance0: Token0 balance (18 decimals)
        balance1: Token1 balance (18 decimals)
        amplification_coefficient: A scaled by A_PRECISION

    Returns:
        Units of token1 per unit of token0

    Raises:
        InsufficientReserves: If either balance is zero
    """
    if balance0 <= 0 or balance1 <= 0:
        raise InsufficientReserves("Spot price requires positive balances")

    invariant = calculate_invariant(balance0, balance1, amplification_coefficient)

    with localcontext() as ctx:
        ctx.prec = _SPOT_PRICE_PRECISION
        x = Decimal(balance0)
        y = Decimal(balance1)
        d = Decimal(invariant)
        a = Decimal(amplification_coefficient * N_COINS) / Decimal(A_PRECISION)
        b = d * a - d

        axy2 = 2 * a * x * y
        derivative_x = axy2 + a * y * y - b * y
        derivative_y = axy2 + a * x * x - b * x

        return derivative_x / derivative_y
