"""Token and token amount value objects.

Tokens are identified by chain and address; metadata such as symbol and name
never takes part in equality. Amounts carry raw integers in the token's
native decimals and do exact integer arithmetic only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext

from amm_engine.constants import MAX_TOKEN_DECIMALS
from amm_engine.errors import InvalidDecimals, TokenMismatch
from amm_engine.models.types import is_valid_address, normalize_address
from amm_engine.safe_int import S


@dataclass(frozen=True)
class Token:
    """An ERC20 token on a specific chain.

    Attributes:
        chain_id: Chain the token lives on
        address: Token contract address (normalized to lowercase)
        decimals: Native decimals of the token
        symbol: Optional display symbol
        name: Optional display name
    """

    chain_id: int
    address: str
    decimals: int = field(compare=False)
    symbol: str | None = field(default=None, compare=False)
    name: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not is_valid_address(self.address):
            raise ValueError(f"Invalid token address: {self.address}")
        object.__setattr__(self, "address", normalize_address(self.address))
        if self.decimals < 0 or self.decimals > MAX_TOKEN_DECIMALS:
            raise InvalidDecimals(
                f"Token decimals must be in range [0, {MAX_TOKEN_DECIMALS}], got {self.decimals}"
            )

    def sorts_before(self, other: Token) -> bool:
        """True if this token is token0 in a pair with other.

        Raises:
            ValueError: If the tokens are on different chains or are the same token
        """
        if self.chain_id != other.chain_id:
            raise ValueError(f"Tokens on different chains: {self.chain_id} != {other.chain_id}")
        if self.address == other.address:
            raise ValueError(f"Cannot order a token against itself: {self.address}")
        return self.address < other.address

    def __str__(self) -> str:
        return self.symbol or self.address


@dataclass(frozen=True)
class TokenAmount:
    """A raw amount of a token, in the token's native decimals."""

    token: Token
    raw: int

    def __post_init__(self) -> None:
        # Validates type and uint256 range
        S(self.raw).to_uint256()

    @classmethod
    def from_exact(cls, token: Token, exact: str | Decimal) -> TokenAmount:
        """Parse a human-readable amount ("1.5"), truncating extra digits.

        Raises:
            ValueError: If exact is not a decimal number
        """
        try:
            value = Decimal(exact)
        except InvalidOperation as err:
            raise ValueError(f"Invalid decimal amount: {exact!r}") from err
        with localcontext() as ctx:
            ctx.prec = 100
            raw = (value.scaleb(token.decimals)).to_integral_value(rounding=ROUND_DOWN)
        return cls(token, int(raw))

    @classmethod
    def zero(cls, token: Token) -> TokenAmount:
        return cls(token, 0)

    def _check_same_token(self, other: TokenAmount) -> None:
        if self.token != other.token:
            raise TokenMismatch(f"Cannot combine amounts of {self.token} and {other.token}")

    def add(self, other: TokenAmount) -> TokenAmount:
        self._check_same_token(other)
        return TokenAmount(self.token, (S(self.raw) + S(other.raw)).value)

    def subtract(self, other: TokenAmount) -> TokenAmount:
        """Subtract another amount of the same token.

        Raises:
            TokenMismatch: If the tokens differ
            Underflow: If other is larger than self
        """
        self._check_same_token(other)
        return TokenAmount(self.token, (S(self.raw) - S(other.raw)).value)

    def multiply(self, factor: int) -> TokenAmount:
        return TokenAmount(self.token, (S(self.raw) * S(factor)).value)

    def divide(self, divisor: int) -> TokenAmount:
        """Integer division, truncating."""
        return TokenAmount(self.token, (S(self.raw) // S(divisor)).value)

    def to_exact(self) -> str:
        """Exact decimal rendering without trailing zeros ("1.5", "1000")."""
        decimals = self.token.decimals
        if decimals == 0:
            return str(self.raw)
        digits = str(self.raw).rjust(decimals + 1, "0")
        whole, fraction = digits[:-decimals], digits[-decimals:].rstrip("0")
        return f"{whole}.{fraction}" if fraction else whole

    def __str__(self) -> str:
        return f"{self.to_exact()} {self.token}"
