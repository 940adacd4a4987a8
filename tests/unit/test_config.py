"""Tests for pool configuration."""

from decimal import Decimal

import pytest

from lp_pool.config import (
    DEFAULT_POOL_CONFIG,
    ENV_LIQUIDITY_TARGET,
    ENV_MAX_FEE,
    ENV_MIN_FEE,
    ENV_PRICE,
    PoolConfig,
    parse_decimal,
)
from lp_pool.errors import InvalidArgument, NegativeValue
from lp_pool.models.quantities import Percentage, Price, TokenAmount


class TestPoolConfig:
    """Tests for PoolConfig defaults and conversion."""

    def test_defaults(self):
        """Defaults are the demo parameters."""
        assert DEFAULT_POOL_CONFIG.price == Decimal("1.5")
        assert DEFAULT_POOL_CONFIG.min_fee == Decimal("0.001")
        assert DEFAULT_POOL_CONFIG.max_fee == Decimal("0.05")
        assert DEFAULT_POOL_CONFIG.liquidity_target == Decimal("1000")

    def test_frozen(self):
        """PoolConfig is immutable."""
        with pytest.raises(AttributeError):
            DEFAULT_POOL_CONFIG.price = Decimal("2")  # type: ignore[misc]

    def test_to_pool_params(self):
        """to_pool_params returns typed quantities."""
        price, min_fee, max_fee, target = PoolConfig(max_fee=Decimal("0.09")).to_pool_params()
        assert price == Price.from_decimal("1.5")
        assert min_fee == Percentage.from_decimal("0.001")
        assert max_fee == Percentage.from_decimal("0.09")
        assert target == TokenAmount.from_integer(1000)

    def test_fee_above_one_rejected(self):
        """A fee above 100% cannot be converted."""
        with pytest.raises(InvalidArgument):
            PoolConfig(max_fee=Decimal("1.5")).to_pool_params()

    def test_negative_price_rejected(self):
        """A negative price cannot be converted."""
        with pytest.raises(NegativeValue):
            PoolConfig(price=Decimal("-1")).to_pool_params()


class TestPoolConfigFromEnv:
    """Tests for environment loading."""

    def test_empty_environment_uses_defaults(self):
        """Unset variables fall back to defaults."""
        assert PoolConfig.from_env({}) == DEFAULT_POOL_CONFIG

    def test_reads_all_variables(self):
        """Each variable overrides its parameter."""
        config = PoolConfig.from_env(
            {
                ENV_PRICE: "2.5",
                ENV_MIN_FEE: "0.002",
                ENV_MAX_FEE: "0.1",
                ENV_LIQUIDITY_TARGET: "500",
            }
        )
        assert config == PoolConfig(
            price=Decimal("2.5"),
            min_fee=Decimal("0.002"),
            max_fee=Decimal("0.1"),
            liquidity_target=Decimal("500"),
        )

    def test_blank_variable_uses_default(self):
        """Blank values count as unset."""
        assert PoolConfig.from_env({ENV_PRICE: "  "}).price == DEFAULT_POOL_CONFIG.price

    def test_malformed_variable_rejected(self):
        """Non-numeric values raise InvalidArgument naming the variable."""
        with pytest.raises(InvalidArgument, match=ENV_MAX_FEE):
            PoolConfig.from_env({ENV_MAX_FEE: "five percent"})

    def test_reads_process_environment(self, monkeypatch):
        """Without an explicit mapping, os.environ is used."""
        monkeypatch.setenv(ENV_LIQUIDITY_TARGET, "90")
        assert PoolConfig.from_env().liquidity_target == Decimal("90")


class TestParseDecimal:
    """Tests for parse_decimal."""

    def test_parses_and_strips(self):
        """Whitespace around the number is ignored."""
        assert parse_decimal(" 0.09 ", "fee") == Decimal("0.09")

    def test_rejects_non_finite(self):
        """NaN and infinity are rejected."""
        with pytest.raises(InvalidArgument):
            parse_decimal("NaN", "fee")
        with pytest.raises(InvalidArgument):
            parse_decimal("-Infinity", "fee")
