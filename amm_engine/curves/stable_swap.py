"""StableSwap curve.

Blends constant-sum and constant-product pricing through the invariant D and
the amplification coefficient A. Amounts are lifted to 18 decimals before
solving and floored back to native decimals afterwards.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar

from amm_engine.constants import A_PRECISION, STABLE_CURVE_ID
from amm_engine.curves.base import Curve
from amm_engine.errors import MissingAmplificationCoefficient
from amm_engine.math.scaling import add_swap_fee, scale_down, scale_up, subtract_swap_fee
from amm_engine.math.stable_math import calc_in_given_out, calc_out_given_in, calculate_spot_price


@dataclass(frozen=True)
class StableSwap(Curve):
    """StableSwap curve with a fixed amplification coefficient.

    Attributes:
        amplification_coefficient_precise: A scaled by A_PRECISION
            (e.g. A=1000 is stored as 100_000)
    """

    amplification_coefficient_precise: int

    curve_id: ClassVar[int] = STABLE_CURVE_ID

    def __post_init__(self) -> None:
        amp = self.amplification_coefficient_precise
        if amp is None:
            raise MissingAmplificationCoefficient("StableSwap curve requires an amplification coefficient")
        if isinstance(amp, bool) or not isinstance(amp, int) or amp < A_PRECISION:
            raise MissingAmplificationCoefficient(
                f"Amplification coefficient must be an int of at least {A_PRECISION} (A >= 1), got {amp!r}"
            )

    @property
    def amplification_coefficient(self) -> int:
        return self.amplification_coefficient_precise

    def quote_output_given_input(
        self,
        reserve_in: int,
        reserve_out: int,
        amount_in: int,
        swap_fee: int,
        decimals_in: int,
        decimals_out: int,
    ) -> int:
        """Calculate output amount for a given input.

        Algorithm:
            1. Deduct the fee from amount_in (native decimals)
            2. Scale reserves and net input to 18 decimals
            3. Solve the invariant for the new output balance
            4. Floor the difference back to output token decimals
        """
        amount_in_net = subtract_swap_fee(amount_in, swap_fee)

        amount_out = calc_out_given_in(
            scale_up(reserve_in, decimals_in),
            scale_up(reserve_out, decimals_out),
            self.amplification_coefficient_precise,
            scale_up(amount_in_net, decimals_in),
        )
        return scale_down(amount_out, decimals_out)

    def quote_input_given_output(
        self,
        reserve_in: int,
        reserve_out: int,
        amount_out: int,
        swap_fee: int,
        decimals_in: int,
        decimals_out: int,
    ) -> int:
        """Calculate required input for a desired output.

        Algorithm:
            1. Scale reserves and amount_out to 18 decimals
            2. Solve the invariant for the new input balance
            3. Floor the difference back to input token decimals
            4. Gross up by the fee: net * FEE_ACCURACY / (FEE_ACCURACY - fee)
        """
        amount_in_net = calc_in_given_out(
            scale_up(reserve_in, decimals_in),
            scale_up(reserve_out, decimals_out),
            self.amplification_coefficient_precise,
            scale_up(amount_out, decimals_out),
        )
        return add_swap_fee(scale_down(amount_in_net, decimals_in), swap_fee)

    def spot_price(self, reserve0: int, reserve1: int, decimals0: int, decimals1: int) -> Decimal:
        return calculate_spot_price(
            scale_up(reserve0, decimals0),
            scale_up(reserve1, decimals1),
            self.amplification_coefficient_precise,
        )
