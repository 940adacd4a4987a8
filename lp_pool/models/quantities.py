"""Unit-typed quantities used by the pool.

Each quantity wraps one Fixed value. The wrappers share a representation but
are distinct types: a StakedTokenAmount cannot be added to, or ordered against,
a TokenAmount. Arithmetic that needs to cross units (e.g. staked amount times
price) is done on the underlying Fixed values inside the pool.

All quantities are non-negative and their raw value fits an unsigned 64-bit
integer.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TypeVar

from lp_pool.errors import InvalidArgument
from lp_pool.math.fixed_point import Fixed

__all__ = [
    "Quantity",
    "TokenAmount",
    "StakedTokenAmount",
    "LpTokenAmount",
    "Price",
    "Percentage",
]

Q = TypeVar("Q", bound="Quantity")


class Quantity:
    """Base class for unit-typed fixed-point amounts."""

    __slots__ = ("_fixed",)
    _fixed: Fixed

    def __init__(self, value: Fixed) -> None:
        """Wrap a Fixed value.

        Raises:
            TypeError: If value is not a Fixed
            NegativeValue: If value is negative
            Overflow: If the raw value exceeds 2^64 - 1
        """
        if not isinstance(value, Fixed):
            raise TypeError(f"{type(self).__name__} requires Fixed, got {type(value).__name__}")
        self._validate(value)
        self._fixed = value

    def _validate(self, value: Fixed) -> None:
        value.to_unsigned()

    @property
    def fixed(self) -> Fixed:
        """The underlying fixed-point value."""
        return self._fixed

    @property
    def raw(self) -> int:
        """The raw scaled integer."""
        return self._fixed.value

    @classmethod
    def from_raw(cls: type[Q], raw: int) -> Q:
        """Create from a raw value already scaled by 10^10."""
        return cls(Fixed.from_raw(raw))

    @classmethod
    def from_integer(cls: type[Q], n: int) -> Q:
        return cls(Fixed.from_integer(n))

    @classmethod
    def from_decimal(cls: type[Q], d: Decimal | str | int) -> Q:
        return cls(Fixed.from_decimal(d))

    @classmethod
    def zero(cls: type[Q]) -> Q:
        return cls(Fixed.ZERO)

    def to_decimal(self) -> Decimal:
        return self._fixed.to_decimal()

    def is_zero(self) -> bool:
        return self._fixed.value == 0

    # --- Same-unit arithmetic ---

    def __add__(self: Q, other: object) -> Q:
        if not isinstance(other, type(self)):
            return NotImplemented
        return type(self)(self._fixed + other._fixed)

    def __sub__(self: Q, other: object) -> Q:
        """Subtract a same-unit amount.

        Raises:
            NegativeValue: If the result would be negative
        """
        if not isinstance(other, type(self)):
            return NotImplemented
        return type(self)(self._fixed - other._fixed)

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._fixed == other._fixed

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._fixed < other._fixed

    def __le__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._fixed <= other._fixed

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._fixed > other._fixed

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._fixed >= other._fixed

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._fixed.value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._fixed.value})"

    def __str__(self) -> str:
        return format(self.to_decimal(), "f")


class TokenAmount(Quantity):
    """Amount of the base token."""

    __slots__ = ()


class StakedTokenAmount(Quantity):
    """Amount of the staked token."""

    __slots__ = ()


class LpTokenAmount(Quantity):
    """Amount of pool shares."""

    __slots__ = ()


class Price(Quantity):
    """Base tokens per staked token."""

    __slots__ = ()


class Percentage(Quantity):
    """Ratio in [0, 1]; Percentage.from_decimal("0.09") is 9%."""

    __slots__ = ()

    def _validate(self, value: Fixed) -> None:
        super()._validate(value)
        if value > Fixed.ONE:
            raise InvalidArgument(f"Percentage must be at most 1.0, got {value}")
