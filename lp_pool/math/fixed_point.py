"""Signed fixed-point arithmetic with 10 decimal digits.

Values are stored as integers scaled by 10^10 and are confined to the signed
128-bit range. Python integers never wrap, so every intermediate result is
range-checked explicitly; leaving the range raises Overflow.

Multiplication splits both operands into integer and fractional parts so that
no intermediate product needs more than 128 bits. The fractional-by-fractional
term is computed after dropping the lowest five digits of each fraction, so a
product can be off by up to (|x2| + |y2|) / MUL_PRECISION + 1 raw units (below
2 * 10^-5) when both operands have long fractional parts.

Division multiplies by the reciprocal FIXED_ONE^2 / divisor. All integer
divisions truncate toward zero.
"""

from __future__ import annotations

import decimal
from decimal import ROUND_HALF_UP, Decimal
from typing import ClassVar

from lp_pool.errors import DivisionByZero, DivisorTooLarge, NegativeValue, Overflow

__all__ = [
    "Fixed",
    "FIXED_DIGITS",
    "FIXED_ONE",
    "MUL_PRECISION",
    "MAX_FIXED_DIVISOR",
    "MAX_FIXED_DIV",
    "INT128_MAX",
    "INT128_MIN",
    "UINT64_MAX",
]

# =============================================================================
# Constants
# =============================================================================

FIXED_DIGITS = 10
FIXED_ONE = 10**FIXED_DIGITS

# sqrt(FIXED_ONE), applied to both fractional parts before multiplying them
MUL_PRECISION = 10**5

INT128_MAX = 2**127 - 1
INT128_MIN = -(2**127)
UINT64_MAX = 2**64 - 1

# Largest divisor whose reciprocal is still non-zero
MAX_FIXED_DIVISOR = FIXED_ONE * FIXED_ONE

# Largest raw value that can be divided by Fixed(1) without overflow
MAX_FIXED_DIV = INT128_MAX // FIXED_ONE

# Enough digits for any int128 raw value, so conversions never round
_DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)


# =============================================================================
# Integer helpers
# =============================================================================


def _div_trunc(a: int, b: int) -> int:
    """Integer division with truncation toward zero.

    Python's // rounds toward negative infinity; the fixed-point format is
    defined with truncation, which differs when the operands have different
    signs (-7 / 3 is -2, not -3).

    Raises:
        DivisionByZero: If b is zero
    """
    if b == 0:
        raise DivisionByZero(f"Integer division by zero: {a} / 0")
    if (a >= 0) == (b >= 0):
        return a // b
    return -(abs(a) // abs(b))


def _check_range(value: int, expression: str) -> int:
    """Return value if it fits int128, otherwise raise Overflow."""
    if not INT128_MIN <= value <= INT128_MAX:
        raise Overflow(f"Overflow: {expression} = {value} does not fit int128")
    return value


def _checked_add(x: int, y: int) -> int:
    return _check_range(x + y, f"{x} + {y}")


def _checked_mul(x: int, y: int) -> int:
    return _check_range(x * y, f"{x} * {y}")


# =============================================================================
# Fixed
# =============================================================================


class Fixed:
    """Fixed-point number stored as a raw int128 scaled by 10^10.

    Example: 1.5 is stored as 15_000_000_000.

    Supports +, -, *, / and unary - between Fixed values. Every operation
    returns a new instance.
    """

    ONE: ClassVar[Fixed]
    ZERO: ClassVar[Fixed]

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int) -> None:
        """Create Fixed from a raw scaled value.

        Raises:
            TypeError: If value is not an int
            Overflow: If value does not fit int128
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Fixed requires int, got {type(value).__name__}")
        self._value = _check_range(value, "Fixed")

    @property
    def value(self) -> int:
        """The raw scaled integer."""
        return self._value

    # --- Construction and conversion ---

    @classmethod
    def from_raw(cls, raw: int) -> Fixed:
        """Create from a raw value that is already scaled by 10^10."""
        return cls(raw)

    @classmethod
    def from_integer(cls, n: int) -> Fixed:
        """Create from a whole number (scaled by 10^10, exact)."""
        return cls(_checked_mul(n, FIXED_ONE))

    @classmethod
    def from_decimal(cls, d: Decimal | str | int) -> Fixed:
        """Create from a decimal, rounding to 10 digits with ROUND_HALF_UP.

        Raises:
            ValueError: If d is not a finite number
            Overflow: If the scaled value is outside the int128 range
        """
        try:
            d = Decimal(d)
        except decimal.InvalidOperation as err:
            raise ValueError(f"Fixed.from_decimal requires a number, got {d!r}") from err
        if not d.is_finite():
            raise ValueError(f"Fixed.from_decimal requires a finite value, got {d}")
        # INT128_MAX has 39 digits; anything wider cannot fit once scaled
        if d and d.adjusted() + FIXED_DIGITS >= len(str(INT128_MAX)):
            raise Overflow(f"Value out of int128 range: {d}")
        with decimal.localcontext(_DECIMAL_HIGH_PREC_CONTEXT):
            scaled = d.scaleb(FIXED_DIGITS).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return cls(int(scaled))

    def to_decimal(self) -> Decimal:
        """Convert to Decimal (exact)."""
        with decimal.localcontext(_DECIMAL_HIGH_PREC_CONTEXT):
            return Decimal(self._value).scaleb(-FIXED_DIGITS)

    def to_unsigned(self, max_value: int = UINT64_MAX) -> int:
        """Return the raw value, checking it is in [0, max_value].

        Raises:
            NegativeValue: If the value is negative
            Overflow: If the value exceeds max_value
        """
        if self._value < 0:
            raise NegativeValue(f"Negative value cannot be unsigned: {self._value}")
        if self._value > max_value:
            raise Overflow(f"Value exceeds {max_value}: {self._value}")
        return self._value

    # --- Parts ---

    def integer_part(self) -> int:
        """Whole-number part, truncated toward zero (unscaled)."""
        return _div_trunc(self._value, FIXED_ONE)

    def fractional(self) -> int:
        """Raw fractional remainder; carries the sign of the value."""
        return self._value - self.integer_part() * FIXED_ONE

    def reciprocal(self) -> Fixed:
        """Return 1 / self as FIXED_ONE^2 / value, truncated.

        Raises:
            DivisionByZero: If self is zero
            DivisorTooLarge: If |self| > MAX_FIXED_DIVISOR
        """
        if self._value == 0:
            raise DivisionByZero("Reciprocal of zero")
        if abs(self._value) > MAX_FIXED_DIVISOR:
            raise DivisorTooLarge(
                f"Divisor {self._value} exceeds max fixed divisor {MAX_FIXED_DIVISOR}"
            )
        return Fixed(_div_trunc(MAX_FIXED_DIVISOR, self._value))

    # --- Arithmetic ---

    def __add__(self, other: object) -> Fixed:
        if not isinstance(other, Fixed):
            return NotImplemented
        return Fixed(_checked_add(self._value, other._value))

    def __sub__(self, other: object) -> Fixed:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self + -other

    def __neg__(self) -> Fixed:
        return Fixed(_check_range(-self._value, f"-{self._value}"))

    def __mul__(self, other: object) -> Fixed:
        """Multiply, splitting x = x1 + x2 and y = y1 + y2.

        (x1 + x2) * (y1 + y2) = x1*y1 + x1*y2 + x2*y1 + x2*y2

        x1*y1 is rescaled by FIXED_ONE; x2*y2 is computed on fractions that
        were first divided by MUL_PRECISION.
        """
        if not isinstance(other, Fixed):
            return NotImplemented
        x = self._value
        y = other._value

        if x == 0 or y == 0:
            return Fixed.ZERO
        if x == FIXED_ONE:
            return other
        if y == FIXED_ONE:
            return self

        x1 = self.integer_part()
        x2 = self.fractional()
        y1 = other.integer_part()
        y2 = other.fractional()

        x1y1 = _checked_mul(_checked_mul(x1, y1), FIXED_ONE)
        x2y1 = _checked_mul(x2, y1)
        x1y2 = _checked_mul(x1, y2)

        x2 = _div_trunc(x2, MUL_PRECISION)
        y2 = _div_trunc(y2, MUL_PRECISION)
        x2y2 = _checked_mul(x2, y2)

        result = x1y1
        result = _checked_add(result, x2y1)
        result = _checked_add(result, x1y2)
        result = _checked_add(result, x2y2)
        return Fixed(result)

    def __truediv__(self, other: object) -> Fixed:
        """Divide by multiplying with the reciprocal of other.

        Raises:
            DivisionByZero: If other is zero
            DivisorTooLarge: If |other| > MAX_FIXED_DIVISOR
        """
        if not isinstance(other, Fixed):
            return NotImplemented
        if other._value == 0:
            raise DivisionByZero(f"Fixed division by zero: {self._value} / 0")
        if other._value == FIXED_ONE:
            return self
        if self._value == other._value:
            return Fixed.ONE
        return self * other.reciprocal()

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self._value < other._value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self._value <= other._value

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self._value > other._value

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self._value >= other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return self._value != 0

    def __repr__(self) -> str:
        return f"Fixed({self._value})"

    def __str__(self) -> str:
        return format(self.to_decimal(), "f")


Fixed.ONE = Fixed(FIXED_ONE)
Fixed.ZERO = Fixed(0)
