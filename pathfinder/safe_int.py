"""Checked uint256 integer wrapper for swap arithmetic.

Python ints never wrap, but on-chain pools compute in uint256 and a product
that would overflow there reverts the swap. U256 reproduces that: every
result is range-checked and leaving [0, 2**256 - 1] raises instead of
silently producing an amount no pool could settle.

Usage pattern:
    from pathfinder.safe_int import U

    def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
        with_fee = U(amount_in) * 9970
        return (with_fee * reserve_out // (U(reserve_in) * 10000 + with_fee)).value
"""

from __future__ import annotations

from pathfinder.errors import Overflow

UINT256_MAX = 2**256 - 1


class SafeIntError(ArithmeticError):
    """Base class for checked arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError, Overflow):
    """Subtraction would produce a negative value."""

    pass


class Uint256Overflow(SafeIntError, Overflow):
    """Value exceeds the uint256 maximum."""

    pass


def _check(value: int) -> int:
    if value < 0:
        raise Underflow(f"Negative value is not a uint256: {value}")
    if value > UINT256_MAX:
        raise Uint256Overflow(f"Value exceeds uint256 max: {value}")
    return value


def _extract_value(x: U256 | int) -> int:
    if isinstance(x, U256):
        return x._value
    if isinstance(x, bool) or not isinstance(x, int):
        raise TypeError(f"U256 requires int, got {type(x).__name__}")
    return _check(x)


class U256:
    """Unsigned 256-bit integer with checked arithmetic.

    Construction and every operator validate the uint256 range:
    - Values above 2**256 - 1 raise Uint256Overflow
    - Negative values (including subtraction results) raise Underflow
    - Division by zero raises DivisionByZero

    Attributes:
        value: The underlying integer (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | U256) -> None:
        self._value = _extract_value(value)

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"U256({self._value})"

    def __hash__(self) -> int:
        return hash(self._value)

    def __add__(self, other: U256 | int) -> U256:
        return U256(_check(self._value + _extract_value(other)))

    __radd__ = __add__

    def __sub__(self, other: U256 | int) -> U256:
        return U256(_check(self._value - _extract_value(other)))

    def __rsub__(self, other: int) -> U256:
        return U256(_check(_extract_value(other) - self._value))

    def __mul__(self, other: U256 | int) -> U256:
        return U256(_check(self._value * _extract_value(other)))

    __rmul__ = __mul__

    def __floordiv__(self, other: U256 | int) -> U256:
        divisor = _extract_value(other)
        if divisor == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return U256(self._value // divisor)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, U256):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: U256 | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: U256 | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: U256 | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: U256 | int) -> bool:
        return self._value >= _extract_value(other)

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0


def fits_uint256(value: int) -> bool:
    """Check if an int is a valid uint256 without raising."""
    return 0 <= value <= UINT256_MAX


# Convenience alias for concise code
U = U256
