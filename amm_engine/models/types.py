"""Shared type definitions for pair and token models."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from amm_engine.safe_int import UINT256_MAX


def validate_uint256(value: Any) -> int:
    """Coerce a reserve-style value into a uint256 int.

    Accepts ints and decimal strings (the form RPC and JSON snapshots use for
    values that overflow JSON numbers).

    Raises:
        ValueError: If value is not a non-negative integer within uint256 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint256 cannot be a bool")

    if isinstance(value, str):
        try:
            value = int(value, 10)
        except ValueError as err:
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err

    if not isinstance(value, int):
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
    return value


# Ethereum address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]

# 256-bit unsigned integer, parsed from int or decimal string
Uint256 = Annotated[
    int,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer"),
]


def normalize_address(address: str) -> str:
    """Lowercase an address and ensure the 0x prefix."""
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr
    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a 0x-prefixed, 20-byte hex address."""
    if not isinstance(address, str):
        return False
    if not address.startswith("0x") or len(address) != 42:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False
