"""Checked integer arithmetic for reserve and quote math.

Every value the pair contracts handle is a non-negative uint256, and every
division they perform truncates. SafeInt keeps Python's arbitrary-precision
ints but makes the two failure modes that Solidity reverts on explicit:

- Division by zero raises DivisionByZero
- Subtraction below zero raises Underflow

Results are checked against the uint256 range only when leaving the engine
(to_uint256), matching the contracts, which only revert on overflow when a
value is actually stored.

Usage pattern:
    from amm_engine.safe_int import S

    def quote(amount_in: int, reserve_in: int, reserve_out: int) -> int:
        numerator = S(amount_in) * S(reserve_out)
        denominator = S(reserve_in) + S(amount_in)
        return (numerator // denominator).value
"""

from __future__ import annotations

import math

UINT256_MAX = 2**256 - 1


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce a negative result."""

    pass


class Uint256Overflow(SafeIntError):
    """Value does not fit in a uint256."""

    pass


class SafeInt:
    """Integer with contract-style checked arithmetic.

    Attributes:
        value: The wrapped integer (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The wrapped integer."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _unwrap(other))

    def __radd__(self, other: int) -> SafeInt:
        return SafeInt(other + self._value)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract, raising Underflow below zero."""
        other_val = _unwrap(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __rsub__(self, other: int) -> SafeInt:
        result = other - self._value
        if result < 0:
            raise Underflow(f"Underflow: {other} - {self._value} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _unwrap(other))

    def __rmul__(self, other: int) -> SafeInt:
        return SafeInt(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Floor division, raising DivisionByZero on a zero divisor."""
        other_val = _unwrap(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def __rfloordiv__(self, other: int) -> SafeInt:
        if self._value == 0:
            raise DivisionByZero(f"Division by zero: {other} // 0")
        return SafeInt(other // self._value)

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _unwrap(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _unwrap(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _unwrap(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _unwrap(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __index__(self) -> int:
        return self._value

    # --- Named operations ---

    def min(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(min(self._value, _unwrap(other)))

    def saturating_sub(self, other: SafeInt | int) -> SafeInt:
        """Subtract, clamping at zero instead of raising."""
        return SafeInt(max(0, self._value - _unwrap(other)))

    def within_one(self, other: SafeInt | int) -> bool:
        """True if the two values differ by at most one unit.

        This is the convergence test of the Newton-Raphson loops.
        """
        return abs(self._value - _unwrap(other)) <= 1

    def isqrt(self) -> SafeInt:
        """Floor square root (Babylonian sqrt of the contracts).

        Raises:
            Underflow: If the value is negative
        """
        if self._value < 0:
            raise Underflow(f"Square root of negative value: {self._value}")
        return SafeInt(math.isqrt(self._value))

    def to_uint256(self) -> int:
        """Return the value, validating uint256 bounds.

        Raises:
            Uint256Overflow: If value is negative or exceeds 2^256-1
        """
        if self._value < 0:
            raise Uint256Overflow(f"Negative value cannot be uint256: {self._value}")
        if self._value > UINT256_MAX:
            raise Uint256Overflow(f"Value exceeds uint256 max: {self._value}")
        return self._value


def isqrt(value: int) -> int:
    """Floor square root of a non-negative int."""
    return SafeInt(value).isqrt().value


def _unwrap(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


# Short alias used throughout the math modules
S = SafeInt
