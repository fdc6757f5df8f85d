"""Pytest configuration and fixtures."""

import pytest

from pathfinder.engine import Pathfinder
from pathfinder.models.pool import Pool
from pathfinder.routing.graph import TokenGraph, build_graph
from tests.helpers import DAI, USDC, USDT, WETH, make_pool, make_pool_address

# Mainnet-like snapshot: WETH is the hub, USDC/DAI have no direct pool.
# Prices: 1 WETH = 2500 USDC = 2500 DAI, 1 USDC = 1 USDT.
WETH_USDC = make_pool(
    USDC,
    WETH,
    reserve0=50_000_000 * 10**6,
    reserve1=20_000 * 10**18,
    address=make_pool_address(0x1001),
)
WETH_DAI = make_pool(
    DAI,
    WETH,
    reserve0=25_000_000 * 10**18,
    reserve1=10_000 * 10**18,
    address=make_pool_address(0x1002),
)
USDC_USDT = make_pool(
    USDC,
    USDT,
    reserve0=10_000_000 * 10**6,
    reserve1=10_000_000 * 10**6,
    fee_bps=5,
    address=make_pool_address(0x1003),
)
WETH_USDT = make_pool(
    USDT,
    WETH,
    reserve0=5_000_000 * 10**6,
    reserve1=2_000 * 10**18,
    address=make_pool_address(0x1004),
)


@pytest.fixture
def mainnet_pools() -> list[Pool]:
    """Small hub-and-spoke snapshot around WETH."""
    return [WETH_USDC, WETH_DAI, USDC_USDT, WETH_USDT]


@pytest.fixture
def mainnet_graph(mainnet_pools: list[Pool]) -> TokenGraph:
    return build_graph(mainnet_pools)


@pytest.fixture
def engine(mainnet_pools: list[Pool]) -> Pathfinder:
    return Pathfinder(mainnet_pools)
