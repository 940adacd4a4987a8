"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
import structlog

from lp_pool.models.quantities import TokenAmount
from lp_pool.pool import LpPool
from tests.helpers import make_pool


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo logging configuration done by the CLI between tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def pool() -> LpPool:
    """Empty pool with the reference parameters (1.5, 0.1%, 9%, 90)."""
    return make_pool()


@pytest.fixture
def funded_pool() -> LpPool:
    """Reference pool holding 100 base tokens and 100 shares."""
    pool = make_pool()
    pool.add_liquidity(TokenAmount.from_integer(100))
    return pool
