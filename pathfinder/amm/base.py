"""Base types for AMM simulators."""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from pathfinder.models.pool import Pool


@dataclass(frozen=True)
class SwapQuote:
    """Result of simulating an exact-input swap through one pool."""

    token_out: str
    amount_out: int
    # Percentage at basis-point resolution (1.25 == 1.25%)
    price_impact: float


@runtime_checkable
class SwapSimulator(Protocol):
    """Protocol for per-curve swap simulators.

    Every pool protocol plugs in through this interface, so the graph
    builder, path finder and split optimizer never look at curve math.
    """

    def simulate_swap(self, pool: Pool, token_in: str, amount_in: int) -> SwapQuote:
        """Simulate an exact-input swap.

        Raises:
            InvalidTokenForPool: token_in is not one of the pool's tokens
            InvalidAmount: amount_in is not positive
            InvalidPool: the pool cannot be traded through
            Overflow: arithmetic left the uint256 range
        """
        ...

    def spot_price(self, pool: Pool, token_in: str) -> float:
        """Marginal exchange rate (out per in) at zero trade size, before fees."""
        ...

    def marginal_rate(self, pool: Pool, token_in: str, amount_in: int) -> float:
        """Derivative of output with respect to input after amount_in is sold."""
        ...
