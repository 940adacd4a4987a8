"""Test helpers module for shared test utilities.

- constants: raw fixed-point values used across tests
- factories: pool factory functions
"""

from tests.helpers.constants import HALF, ONE, TWO
from tests.helpers.factories import make_pool, snapshot_balances

__all__ = [
    # Constants
    "ONE",
    "TWO",
    "HALF",
    # Factories
    "make_pool",
    "snapshot_balances",
]
