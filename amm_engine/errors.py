"""Pricing engine error classes.

Every error is a precondition violation: inputs must be corrected by the
caller, nothing here is transient or retryable.
"""


class AMMError(Exception):
    """Base error for pair and curve operations."""

    pass


class InvalidCurveId(AMMError):
    """Pair constructed with an unrecognized curve discriminant."""

    pass


class TokenMismatch(AMMError):
    """Operation invoked with a token that does not belong to the pair."""

    pass


class InsufficientReserves(AMMError):
    """A reserve is zero, or the requested output meets or exceeds the reserve."""

    pass


class InsufficientInputAmount(AMMError):
    """A swap or liquidity computation degenerated to a non-positive result."""

    pass


class MissingAmplificationCoefficient(AMMError):
    """StableSwap operation invoked without an amplification coefficient."""

    pass


class InvalidFee(AMMError):
    """Swap fee must be in range [0, FEE_ACCURACY)."""

    pass


class InvalidDecimals(AMMError):
    """Token decimals are outside the range supported by the scaling math."""

    pass
