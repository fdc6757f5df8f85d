"""AMM swap simulators."""

from pathfinder.amm.base import SwapQuote, SwapSimulator
from pathfinder.amm.constant_product import ConstantProductSimulator, constant_product
from pathfinder.amm.dispatch import (
    is_supported,
    marginal_rate,
    register_simulator,
    simulate_swap,
    simulator_for,
    spot_price,
)

__all__ = [
    # Base types
    "SwapQuote",
    "SwapSimulator",
    # Constant product
    "ConstantProductSimulator",
    "constant_product",
    # Dispatch
    "is_supported",
    "marginal_rate",
    "register_simulator",
    "simulate_swap",
    "simulator_for",
    "spot_price",
]
