"""Route types handed to the execution layer."""

from __future__ import annotations

import math
from dataclasses import dataclass

from pathfinder.config import SplitStrategy
from pathfinder.constants import DISTRIBUTION_TOLERANCE
from pathfinder.models.pool import Pool


@dataclass(frozen=True)
class SwapStep:
    """One simulated hop through a single pool."""

    pool_address: str
    token_in: str
    token_out: str
    amount_in: int
    amount_out: int
    # Slippage floor, left at 0 by simulation and set by the execution layer
    amount_out_min: int = 0
    price_impact: float = 0.0
    gas_cost_usd: float = 0.0


@dataclass(frozen=True)
class Route:
    """A complete path from one token to another.

    Steps chain: each step's token_out is the next step's token_in, and
    amount_out is the result of simulating the steps in order from amount_in.
    """

    steps: tuple[SwapStep, ...]
    pools: tuple[Pool, ...]
    amount_in: int
    amount_out: int
    # Percentage, basis-point resolution
    price_impact: float
    gas_cost_usd: float
    gas_estimate: int

    @property
    def token_in(self) -> str:
        return self.steps[0].token_in

    @property
    def token_out(self) -> str:
        return self.steps[-1].token_out

    @property
    def path(self) -> tuple[str, ...]:
        """Token sequence, source first."""
        return (self.steps[0].token_in,) + tuple(step.token_out for step in self.steps)

    @property
    def pool_addresses(self) -> tuple[str, ...]:
        return tuple(step.pool_address for step in self.steps)

    @property
    def hop_count(self) -> int:
        return len(self.steps)

    @property
    def is_multihop(self) -> bool:
        """Check if this is a multi-hop route."""
        return len(self.steps) > 1


@dataclass(frozen=True)
class SplitRoute:
    """A single trade spread over several routes.

    distribution[i] is the fraction of total_amount_in sent down routes[i].
    """

    routes: tuple[Route, ...]
    distribution: tuple[float, ...]
    total_amount_in: int
    total_amount_out: int
    strategy: SplitStrategy = SplitStrategy.EQUALIZED

    def __post_init__(self) -> None:
        if not self.routes:
            raise ValueError("SplitRoute needs at least one route")
        if len(self.distribution) != len(self.routes):
            raise ValueError(
                f"distribution has {len(self.distribution)} entries for {len(self.routes)} routes"
            )
        if any(not 0.0 <= share <= 1.0 for share in self.distribution):
            raise ValueError(f"distribution entries must be in [0, 1]: {self.distribution}")
        if not math.isclose(math.fsum(self.distribution), 1.0, abs_tol=DISTRIBUTION_TOLERANCE):
            raise ValueError(f"distribution must sum to 1.0: {self.distribution}")

    @property
    def is_split(self) -> bool:
        return len(self.routes) > 1
