"""Mathematical primitives for pool calculations.

This package provides:
- Fixed: signed 10-decimal fixed-point arithmetic on an int128 range
"""

from lp_pool.math.fixed_point import FIXED_DIGITS, FIXED_ONE, Fixed

__all__ = ["Fixed", "FIXED_DIGITS", "FIXED_ONE"]
