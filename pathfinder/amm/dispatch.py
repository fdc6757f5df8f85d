"""Protocol-based dispatch to swap simulators."""

from __future__ import annotations

from pathfinder.amm.base import SwapQuote, SwapSimulator
from pathfinder.amm.constant_product import constant_product
from pathfinder.errors import UnsupportedProtocol
from pathfinder.models.pool import Pool, PoolProtocol

_SIMULATORS: dict[PoolProtocol, SwapSimulator] = {
    PoolProtocol.CONSTANT_PRODUCT: constant_product,
}


def register_simulator(protocol: PoolProtocol, simulator: SwapSimulator) -> None:
    """Plug in a simulator for a pool protocol.

    Call before building engines; graphs built earlier keep excluding pools
    of that protocol.
    """
    if not isinstance(simulator, SwapSimulator):
        raise TypeError(f"{type(simulator).__name__} does not implement SwapSimulator")
    _SIMULATORS[protocol] = simulator


def is_supported(protocol: PoolProtocol) -> bool:
    return protocol in _SIMULATORS


def simulator_for(pool: Pool) -> SwapSimulator:
    """Return the simulator for a pool's protocol.

    Raises:
        UnsupportedProtocol: If no simulator is registered for the protocol
    """
    simulator = _SIMULATORS.get(pool.protocol)
    if simulator is None:
        raise UnsupportedProtocol(
            f"No simulator for protocol {pool.protocol.value} (pool {pool.address})"
        )
    return simulator


def simulate_swap(pool: Pool, token_in: str, amount_in: int) -> SwapQuote:
    """Simulate an exact-input swap through any supported pool."""
    return simulator_for(pool).simulate_swap(pool, token_in, amount_in)


def spot_price(pool: Pool, token_in: str) -> float:
    return simulator_for(pool).spot_price(pool, token_in)


def marginal_rate(pool: Pool, token_in: str, amount_in: int) -> float:
    return simulator_for(pool).marginal_rate(pool, token_in, amount_in)
