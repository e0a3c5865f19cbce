"""Base class for the liquidity curves a pair can be deployed with."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import ClassVar


class Curve(ABC):
    """A pricing curve over two reserves.

    Curves are stateless values: reserves, fee and decimals are passed to every
    call, so the same curve instance can be shared by any number of pairs.

    Reserve arguments are raw integers in each token's native decimals. The
    fee is in FEE_ACCURACY parts and must already be validated.
    """

    curve_id: ClassVar[int]

    @property
    def amplification_coefficient(self) -> int | None:
        """Amplification coefficient (A * A_PRECISION) or None for non-stable curves."""
        return None

    @abstractmethod
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

        Args:
            reserve_in: Reserve of input token
            reserve_out: Reserve of output token
            amount_in: Input amount, fee included
            swap_fee: Fee in FEE_ACCURACY parts
            decimals_in: Input token decimals
            decimals_out: Output token decimals

        Returns:
            Output amount in the output token's native decimals
        """
        ...

    @abstractmethod
    def quote_input_given_output(
        self,
        reserve_in: int,
        reserve_out: int,
        amount_out: int,
        swap_fee: int,
        decimals_in: int,
        decimals_out: int,
    ) -> int:
        """Calculate required input (fee included) for a desired output.

        Callers must ensure amount_out < reserve_out.

        Args:
            reserve_in: Reserve of input token
            reserve_out: Reserve of output token
            amount_out: Desired output amount
            swap_fee: Fee in FEE_ACCURACY parts
            decimals_in: Input token decimals
            decimals_out: Output token decimals

        Returns:
            Input amount in the input token's native decimals
        """
        ...

    @abstractmethod
    def spot_price(self, reserve0: int, reserve1: int, decimals0: int, decimals1: int) -> Decimal:
        """Marginal price of one whole token0 in whole token1 units."""
        ...
