"""Test helpers module for shared test utilities.

- constants: Token addresses
- factories: Pool and pool-record factory functions
"""

from tests.helpers.constants import (
    DAI,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    TOKEN_D,
    TOKEN_Z,
    USDC,
    USDT,
    WBTC,
    WETH,
)
from tests.helpers.factories import make_pool, make_pool_address, make_pool_record

__all__ = [
    # Constants
    "WETH",
    "USDC",
    "DAI",
    "USDT",
    "WBTC",
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_C",
    "TOKEN_D",
    "TOKEN_Z",
    # Factories
    "make_pool",
    "make_pool_address",
    "make_pool_record",
]
