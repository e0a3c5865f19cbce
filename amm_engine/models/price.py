"""Price of one token in terms of another, as a ratio of raw amounts."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext

from amm_engine.errors import InsufficientReserves, TokenMismatch
from amm_engine.models.token import Token, TokenAmount
from amm_engine.safe_int import S

_PRICE_PRECISION = 78


@dataclass(frozen=True)
class Price:
    """Amount of quote_token per base_token.

    numerator and denominator are raw (native decimals) amounts of the quote
    and base token respectively.
    """

    base_token: Token
    quote_token: Token
    denominator: int
    numerator: int

    def __post_init__(self) -> None:
        if self.denominator == 0:
            raise InsufficientReserves(f"Price of {self.base_token} is undefined with zero reserve")

    @property
    def raw(self) -> Decimal:
        """Ratio of raw amounts, ignoring decimals."""
        with localcontext() as ctx:
            ctx.prec = _PRICE_PRECISION
            return Decimal(self.numerator) / Decimal(self.denominator)

    def to_decimal(self) -> Decimal:
        """Price in whole-token units (adjusted for both tokens' decimals)."""
        with localcontext() as ctx:
            ctx.prec = _PRICE_PRECISION
            return self.raw.scaleb(self.base_token.decimals - self.quote_token.decimals)

    def invert(self) -> Price:
        return Price(self.quote_token, self.base_token, self.numerator, self.denominator)

    def quote(self, amount: TokenAmount) -> TokenAmount:
        """Convert an amount of base_token into quote_token, rounding down.

        Raises:
            TokenMismatch: If amount is not denominated in base_token
        """
        if amount.token != self.base_token:
            raise TokenMismatch(f"Cannot quote {amount.token} with a {self.base_token} price")
        raw = S(amount.raw) * S(self.numerator) // S(self.denominator)
        return TokenAmount(self.quote_token, raw.value)
