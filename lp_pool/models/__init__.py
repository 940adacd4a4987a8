"""Domain models for the liquidity pool."""

from lp_pool.models.quantities import (
    LpTokenAmount,
    Percentage,
    Price,
    Quantity,
    StakedTokenAmount,
    TokenAmount,
)
from lp_pool.models.snapshot import PoolSnapshot

__all__ = [
    "Quantity",
    "TokenAmount",
    "StakedTokenAmount",
    "LpTokenAmount",
    "Price",
    "Percentage",
    "PoolSnapshot",
]
