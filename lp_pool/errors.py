"""Error classes shared by the fixed-point math and the pool.

Arithmetic errors derive from ArithmeticError so callers can treat them like
any other numeric failure; pool errors describe requests the pool rejects.
"""


class LpPoolError(Exception):
    """Base error for all lp_pool operations."""

    pass


class FixedPointError(LpPoolError, ArithmeticError):
    """Base class for fixed-point arithmetic errors."""

    pass


class Overflow(FixedPointError):
    """Result does not fit the signed 128-bit backing integer."""

    pass


class DivisionByZero(FixedPointError):
    """Divisor is the zero value."""

    pass


class DivisorTooLarge(FixedPointError):
    """Divisor magnitude exceeds FIXED_ONE^2, so its reciprocal is zero."""

    pass


class InvalidArgument(LpPoolError, ValueError):
    """Pool parameters violate an invariant (fee ordering, zero target/price)."""

    pass


class InvalidOperation(LpPoolError):
    """Request exceeds what the pool holds."""

    pass


class NegativeValue(LpPoolError):
    """A computed amount came out negative."""

    pass
