"""Two-asset liquidity pool on signed fixed-point arithmetic."""

from lp_pool.config import DEFAULT_POOL_CONFIG, PoolConfig
from lp_pool.errors import (
    DivisionByZero,
    DivisorTooLarge,
    FixedPointError,
    InvalidArgument,
    InvalidOperation,
    LpPoolError,
    NegativeValue,
    Overflow,
)
from lp_pool.math.fixed_point import Fixed
from lp_pool.models.quantities import (
    LpTokenAmount,
    Percentage,
    Price,
    StakedTokenAmount,
    TokenAmount,
)
from lp_pool.pool import LpPool, SwapQuote

__version__ = "0.1.0"
__all__ = [
    "LpPool",
    "SwapQuote",
    "PoolConfig",
    "DEFAULT_POOL_CONFIG",
    "Fixed",
    "TokenAmount",
    "StakedTokenAmount",
    "LpTokenAmount",
    "Price",
    "Percentage",
    "LpPoolError",
    "FixedPointError",
    "Overflow",
    "DivisionByZero",
    "DivisorTooLarge",
    "InvalidArgument",
    "InvalidOperation",
    "NegativeValue",
    "__version__",
]
