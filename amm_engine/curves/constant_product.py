"""Constant-product curve.

Pairs on this curve satisfy x * y = k. The fee is taken from the input
before it reaches the curve. Math runs directly on native-decimal integers.
"""

from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import ClassVar

from amm_engine.constants import CONSTANT_PRODUCT_CURVE_ID, FEE_ACCURACY
from amm_engine.curves.base import Curve
from amm_engine.math.scaling import fee_multiplier
from amm_engine.safe_int import S


@dataclass(frozen=True)
class ConstantProduct(Curve):
    """Constant-product (x * y = k) curve.

    Formula: amount_out = (in * (FA - fee) * r_out) / (r_in * FA + in * (FA - fee))

    where FA is FEE_ACCURACY.
    """

    curve_id: ClassVar[int] = CONSTANT_PRODUCT_CURVE_ID

    def quote_output_given_input(
        self,
        reserve_in: int,
        reserve_out: int,
        amount_in: int,
        swap_fee: int,
        decimals_in: int = 18,
        decimals_out: int = 18,
    ) -> int:
        """Calculate output amount using the constant product formula.

        Result is floored, so rounding never favors the trader.
        """
        amount_in_with_fee = S(amount_in) * S(fee_multiplier(swap_fee))
        numerator = amount_in_with_fee * S(reserve_out)
        denominator = S(reserve_in) * S(FEE_ACCURACY) + amount_in_with_fee

        return (numerator // denominator).value

    def quote_input_given_output(
        self,
        reserve_in: int,
        reserve_out: int,
        amount_out: int,
        swap_fee: int,
        decimals_in: int = 18,
        decimals_out: int = 18,
    ) -> int:
        """Calculate required input for desired output.

        Formula: amount_in = (r_in * out * FA) / ((r_out - out) * (FA - fee)) + 1

        The + 1 covers the remainder lost by the floor division.
        """
        numerator = S(reserve_in) * S(amount_out) * S(FEE_ACCURACY)
        denominator = (S(reserve_out) - S(amount_out)) * S(fee_multiplier(swap_fee))

        return ((numerator // denominator) + S(1)).value

    def spot_price(self, reserve0: int, reserve1: int, decimals0: int, decimals1: int) -> Decimal:
        with localcontext() as ctx:
            ctx.prec = 78
            return (Decimal(reserve1) * Decimal(10) ** decimals0) / (
                Decimal(reserve0) * Decimal(10) ** decimals1
            )
