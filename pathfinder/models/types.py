"""Shared type definitions for pool and route models."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from pathfinder.safe_int import UINT256_MAX


def validate_uint256(value: Any) -> int:
    """Validate that a value is a uint256, given as int or decimal string.

    Args:
        value: Value to validate

    Returns:
        The value as int

    Raises:
        ValueError: If value is not a non-negative integer within uint256 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint256 cannot be a boolean")
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err
    if not isinstance(value, int):
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
    return value


# 256-bit unsigned integer, accepted as int or decimal string
Uint256 = Annotated[
    int,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer"),
]


def normalize_token(token: str) -> str:
    """Normalize a token or pool identifier.

    Hex addresses (0x-prefixed) are lowercased so that checksummed and plain
    spellings compare equal. Other identifiers are only stripped of
    surrounding whitespace.
    """
    ident = token.strip()
    if ident[:2].lower() == "0x":
        return ident.lower()
    return ident
