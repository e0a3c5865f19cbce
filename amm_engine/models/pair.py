"""Pair state and quote engine.

A Pair is an immutable snapshot of a two-token pool: ordered reserves, swap
fee, curve and (optionally) the deployed pair address. Quotes never mutate a
pair; they return the quoted amount together with a new Pair holding the
post-trade reserves.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

import structlog

from amm_engine.constants import (
    DEFAULT_SWAP_FEE,
    LIQUIDITY_TOKEN_DECIMALS,
    LIQUIDITY_TOKEN_NAME,
    LIQUIDITY_TOKEN_SYMBOL,
    ZERO_ADDRESS,
)
from amm_engine.curves import ConstantProduct, Curve, CurveVariant, StableSwap, curve_from_id
from amm_engine.errors import (
    InsufficientInputAmount,
    InsufficientReserves,
    InvalidCurveId,
    TokenMismatch,
)
from amm_engine.math.liquidity import (
    constant_product_liquidity_minted,
    liquidity_value,
    stable_liquidity_minted,
)
from amm_engine.math.scaling import scale_up, validate_swap_fee
from amm_engine.models.price import Price
from amm_engine.models.token import Token, TokenAmount
from amm_engine.models.types import is_valid_address, normalize_address

logger = structlog.get_logger()


@dataclass(frozen=True)
class Pair:
    """Immutable two-token pair.

    The two reserves may be passed in any order; they are stored sorted so that
    reserve0 holds token0 (the token with the lower address).

    Attributes:
        reserve0: Reserve of token0
        reserve1: Reserve of token1
        curve: ConstantProduct() or StableSwap(amplification_coefficient)
        swap_fee: Fee in FEE_ACCURACY parts (3000 = 0.3%)
        address: Deployed pair address, if known
    """

    reserve0: TokenAmount
    reserve1: TokenAmount
    curve: CurveVariant = ConstantProduct()
    swap_fee: int = DEFAULT_SWAP_FEE
    address: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.curve, Curve):
            raise InvalidCurveId(f"Unsupported curve: {self.curve!r}")
        validate_swap_fee(self.swap_fee)

        token_a, token_b = self.reserve0.token, self.reserve1.token
        if token_a.chain_id != token_b.chain_id:
            raise TokenMismatch(f"Pair tokens are on different chains: {token_a.chain_id} != {token_b.chain_id}")
        if token_a == token_b:
            raise TokenMismatch(f"Pair requires two distinct tokens, got {token_a} twice")

        if not token_a.sorts_before(token_b):
            reserve0, reserve1 = self.reserve1, self.reserve0
            object.__setattr__(self, "reserve0", reserve0)
            object.__setattr__(self, "reserve1", reserve1)

        if self.address is not None:
            if not is_valid_address(self.address):
                raise ValueError(f"Invalid pair address: {self.address}")
            object.__setattr__(self, "address", normalize_address(self.address))

    @classmethod
    def from_curve_id(
        cls,
        amount_a: TokenAmount,
        amount_b: TokenAmount,
        curve_id: int,
        swap_fee: int = DEFAULT_SWAP_FEE,
        amplification_coefficient: int | None = None,
        address: str | None = None,
    ) -> Pair:
        """Build a pair from the factory's integer curve discriminant.

        Raises:
            InvalidCurveId: If curve_id is unknown
            MissingAmplificationCoefficient: If curve_id is stable and no coefficient is given
        """
        curve = curve_from_id(curve_id, amplification_coefficient)
        return cls(amount_a, amount_b, curve, swap_fee, address)

    # --- Identity ---

    @property
    def token0(self) -> Token:
        return self.reserve0.token

    @property
    def token1(self) -> Token:
        return self.reserve1.token

    @property
    def chain_id(self) -> int:
        return self.token0.chain_id

    @property
    def curve_id(self) -> int:
        return self.curve.curve_id

    @property
    def amplification_coefficient(self) -> int | None:
        return self.curve.amplification_coefficient

    @property
    def liquidity_token(self) -> Token:
        """LP token of this pair (18 decimals, at the pair address).

        Pairs without an address all share the LP token at ZERO_ADDRESS on
        their chain, so liquidity amounts cannot be told apart between them.
        Set address when supplies of several pairs are handled together.
        """
        return Token(
            self.chain_id,
            self.address or ZERO_ADDRESS,
            LIQUIDITY_TOKEN_DECIMALS,
            LIQUIDITY_TOKEN_SYMBOL,
            LIQUIDITY_TOKEN_NAME,
        )

    def involves_token(self, token: Token) -> bool:
        """True if token is token0 or token1."""
        return token == self.token0 or token == self.token1

    def _require_token(self, token: Token) -> None:
        if not self.involves_token(token):
            raise TokenMismatch(f"Token {token} is not part of pair {self.token0}/{self.token1}")

    def _require_liquidity_token(self, amount: TokenAmount, name: str) -> None:
        if amount.token != self.liquidity_token:
            raise TokenMismatch(f"{name} must be denominated in the pair's liquidity token")

    def reserve_of(self, token: Token) -> TokenAmount:
        self._require_token(token)
        return self.reserve0 if token == self.token0 else self.reserve1

    def other_token(self, token: Token) -> Token:
        self._require_token(token)
        return self.token1 if token == self.token0 else self.token0

    # --- Prices ---

    @property
    def token0_price(self) -> Price:
        """Ratio of reserve1 to reserve0: token1 per token0."""
        return Price(self.token0, self.token1, self.reserve0.raw, self.reserve1.raw)

    @property
    def token1_price(self) -> Price:
        """Ratio of reserve0 to reserve1: token0 per token1."""
        return Price(self.token1, self.token0, self.reserve1.raw, self.reserve0.raw)

    def price_of(self, token: Token) -> Price:
        """Reserve-ratio price of token in terms of the other token."""
        self._require_token(token)
        return self.token0_price if token == self.token0 else self.token1_price

    def liq_ratio(self, token: Token) -> Price:
        """The other token's reserve expressed per unit of token's reserve."""
        return self.price_of(token)

    def spot_price(self) -> Decimal:
        """Curve-aware marginal price of token0 in whole token1 units.

        Raises:
            InsufficientReserves: If either reserve is zero
        """
        self._require_reserves()
        return self.curve.spot_price(
            self.reserve0.raw, self.reserve1.raw, self.token0.decimals, self.token1.decimals
        )

    # --- Swaps ---

    def _require_reserves(self) -> None:
        if self.reserve0.raw == 0 or self.reserve1.raw == 0:
            raise InsufficientReserves(
                f"Pair {self.token0}/{self.token1} has an empty reserve "
                f"({self.reserve0.raw}, {self.reserve1.raw})"
            )

    def _with_reserves(self, reserve_a: TokenAmount, reserve_b: TokenAmount) -> Pair:
        return Pair(reserve_a, reserve_b, self.curve, self.swap_fee, self.address)

    def get_output_amount(self, input_amount: TokenAmount) -> tuple[TokenAmount, Pair]:
        """Quote an exact-input swap.

        Args:
            input_amount: Amount of token0 or token1 sold into the pair

        Returns:
            Tuple of (output amount, pair after the swap)

        Raises:
            TokenMismatch: If the input token is not in the pair
            InsufficientReserves: If either reserve is zero
            InsufficientInputAmount: If a constant-product swap yields nothing
        """
        self._require_token(input_amount.token)
        self._require_reserves()

        input_reserve = self.reserve_of(input_amount.token)
        output_reserve = self.reserve_of(self.other_token(input_amount.token))

        amount_out = self.curve.quote_output_given_input(
            input_reserve.raw,
            output_reserve.raw,
            input_amount.raw,
            self.swap_fee,
            input_reserve.token.decimals,
            output_reserve.token.decimals,
        )
        if isinstance(self.curve, ConstantProduct) and amount_out == 0:
            raise InsufficientInputAmount(
                f"Input {input_amount.raw} of {input_amount.token} is too small to yield any output"
            )

        output_amount = TokenAmount(output_reserve.token, amount_out)
        logger.debug(
            "pair_quote_output",
            curve_id=self.curve_id,
            token_in=input_amount.token.address,
            amount_in=input_amount.raw,
            amount_out=amount_out,
        )
        return output_amount, self._with_reserves(
            input_reserve.add(input_amount), output_reserve.subtract(output_amount)
        )

    def get_input_amount(self, output_amount: TokenAmount) -> tuple[TokenAmount, Pair]:
        """Quote an exact-output swap.

        Args:
            output_amount: Amount of token0 or token1 bought from the pair

        Returns:
            Tuple of (required input amount, pair after the swap)

        Raises:
            TokenMismatch: If the output token is not in the pair
            InsufficientReserves: If either reserve is zero or the output
                meets or exceeds its reserve
        """
        self._require_token(output_amount.token)
        self._require_reserves()

        output_reserve = self.reserve_of(output_amount.token)
        input_reserve = self.reserve_of(self.other_token(output_amount.token))
        if output_amount.raw >= output_reserve.raw:
            raise InsufficientReserves(
                f"Requested {output_amount.raw} of {output_amount.token} but reserve is {output_reserve.raw}"
            )

        amount_in = self.curve.quote_input_given_output(
            input_reserve.raw,
            output_reserve.raw,
            output_amount.raw,
            self.swap_fee,
            input_reserve.token.decimals,
            output_reserve.token.decimals,
        )

        input_amount = TokenAmount(input_reserve.token, amount_in)
        logger.debug(
            "pair_quote_input",
            curve_id=self.curve_id,
            token_out=output_amount.token.address,
            amount_out=output_amount.raw,
            amount_in=amount_in,
        )
        return input_amount, self._with_reserves(
            input_reserve.add(input_amount), output_reserve.subtract(output_amount)
        )

    # --- Liquidity ---

    def get_liquidity_minted(
        self,
        total_supply: TokenAmount,
        amount_a: TokenAmount,
        amount_b: TokenAmount,
    ) -> TokenAmount:
        """LP tokens minted for depositing amount_a and amount_b.

        Args:
            total_supply: Current LP total supply
            amount_a: Deposit of one pair token
            amount_b: Deposit of the other pair token

        Returns:
            Liquidity token amount minted

        Raises:
            TokenMismatch: If the deposits are not one of each pair token, or
                total_supply is not in the liquidity token
            InsufficientReserves: If the pair has supply but an empty reserve
            InsufficientInputAmount: If the minted liquidity is not positive
        """
        self._require_liquidity_token(total_supply, "Total supply")
        self._require_token(amount_a.token)
        self._require_token(amount_b.token)
        if amount_a.token == amount_b.token:
            raise TokenMismatch("Deposits must include one amount of each pair token")

        deposit0, deposit1 = (amount_a, amount_b) if amount_a.token == self.token0 else (amount_b, amount_a)

        if isinstance(self.curve, StableSwap):
            decimals0, decimals1 = self.token0.decimals, self.token1.decimals
            liquidity = stable_liquidity_minted(
                total_supply.raw,
                scale_up(self.reserve0.raw, decimals0),
                scale_up(self.reserve1.raw, decimals1),
                scale_up(deposit0.raw, decimals0),
                scale_up(deposit1.raw, decimals1),
                self.curve.amplification_coefficient_precise,
            )
        else:
            liquidity = constant_product_liquidity_minted(
                total_supply.raw,
                self.reserve0.raw,
                self.reserve1.raw,
                deposit0.raw,
                deposit1.raw,
            )

        return TokenAmount(self.liquidity_token, liquidity)

    def get_liquidity_value(
        self,
        token: Token,
        total_supply: TokenAmount,
        liquidity: TokenAmount,
        protocol_fee_on: bool = False,
        k_last: int | None = None,
    ) -> TokenAmount:
        """Amount of token redeemed by burning liquidity.

        Args:
            token: Pair token to value the liquidity in
            total_supply: Current LP total supply
            liquidity: LP tokens burned
            protocol_fee_on: Whether the protocol fee is enabled
            k_last: reserve0 * reserve1 recorded at the last liquidity event

        Returns:
            Redeemable amount of token

        Raises:
            TokenMismatch: If token is not in the pair, or the LP amounts are
                not in the liquidity token
            InsufficientInputAmount: If liquidity exceeds total supply
        """
        self._require_token(token)
        self._require_liquidity_token(total_supply, "Total supply")
        self._require_liquidity_token(liquidity, "Liquidity")

        value = liquidity_value(
            total_supply.raw,
            liquidity.raw,
            self.reserve_of(token).raw,
            self.reserve0.raw,
            self.reserve1.raw,
            protocol_fee_on=protocol_fee_on,
            k_last=k_last,
        )
        return TokenAmount(token, value)
