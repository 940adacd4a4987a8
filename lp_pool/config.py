"""Pool configuration.

Parameters are kept as Decimal so they can be written the way people read
them ("0.001" for 0.1%) and converted to fixed-point quantities only when a
pool is built.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from lp_pool.errors import InvalidArgument
from lp_pool.models.quantities import Percentage, Price, TokenAmount

# Environment variables read by PoolConfig.from_env()
ENV_PRICE = "LP_POOL_PRICE"
ENV_MIN_FEE = "LP_POOL_MIN_FEE"
ENV_MAX_FEE = "LP_POOL_MAX_FEE"
ENV_LIQUIDITY_TARGET = "LP_POOL_LIQUIDITY_TARGET"


@dataclass(frozen=True)
class PoolConfig:
    """Parameters an LpPool is initialized with.

    Attributes:
        price: Base tokens per staked token (default: 1.5)
        min_fee: Swap fee when the base reserve stays above the target (default: 0.1%)
        max_fee: Swap fee when the base reserve would be drained (default: 5%)
        liquidity_target: Base reserve at which the fee bottoms out (default: 1000)
    """

    price: Decimal = Decimal("1.5")
    min_fee: Decimal = Decimal("0.001")
    max_fee: Decimal = Decimal("0.05")
    liquidity_target: Decimal = Decimal("1000")

    def to_pool_params(self) -> tuple[Price, Percentage, Percentage, TokenAmount]:
        """Convert to the typed arguments of LpPool.init().

        Raises:
            NegativeValue: If a parameter is negative
            InvalidArgument: If a fee exceeds 1.0
        """
        return (
            Price.from_decimal(self.price),
            Percentage.from_decimal(self.min_fee),
            Percentage.from_decimal(self.max_fee),
            TokenAmount.from_decimal(self.liquidity_target),
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PoolConfig:
        """Build a config from environment variables.

        Unset variables fall back to the defaults.

        - LP_POOL_PRICE
        - LP_POOL_MIN_FEE
        - LP_POOL_MAX_FEE
        - LP_POOL_LIQUIDITY_TARGET

        Raises:
            InvalidArgument: If a variable is not a decimal number
        """
        env: Mapping[str, str] = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            price=_decimal_from_env(env, ENV_PRICE, defaults.price),
            min_fee=_decimal_from_env(env, ENV_MIN_FEE, defaults.min_fee),
            max_fee=_decimal_from_env(env, ENV_MAX_FEE, defaults.max_fee),
            liquidity_target=_decimal_from_env(
                env, ENV_LIQUIDITY_TARGET, defaults.liquidity_target
            ),
        )


def parse_decimal(value: str, name: str) -> Decimal:
    """Parse a finite decimal, raising InvalidArgument otherwise."""
    try:
        result = Decimal(value.strip())
    except InvalidOperation as err:
        raise InvalidArgument(f"{name} must be a decimal number: '{value}'") from err
    if not result.is_finite():
        raise InvalidArgument(f"{name} must be finite: '{value}'")
    return result


def _decimal_from_env(env: Mapping[str, str], name: str, default: Decimal) -> Decimal:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    return parse_decimal(raw, name)


# Default configuration instance
DEFAULT_POOL_CONFIG = PoolConfig()
