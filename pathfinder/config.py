"""Routing configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from pathfinder.constants import (
    DEFAULT_MAX_HOPS,
    DEFAULT_SPLIT_MAX_ROUTES,
    HOP_GAS_COST_USD,
)


class SplitStrategy(str, Enum):
    """How the split optimizer allocates volume across routes."""

    # Single-shot: weights proportional to each route's full-volume output
    PROPORTIONAL = "proportional"
    # Iterative: allocations chosen so marginal rates match across routes
    EQUALIZED = "equalized"


@dataclass(frozen=True)
class RoutingConfig:
    """Centralized configuration for path search and split optimization.

    Attributes:
        max_hops: Maximum number of pools in one route (default: 2)
        min_capacity: Edges whose destination reserve is below this are
            pruned before simulation (default: 0, no pruning)
        max_edges_per_token: If set, only the N lowest-weight edges leaving
            each token are explored (default: None, explore all)
        hop_gas_cost_usd: Estimated USD gas cost attributed to every hop
        split_max_routes: Number of candidate routes considered for a split
        split_strategy: Allocation contract used by optimize_split
        split_tolerance: Relative tolerance on the allocated total before
            the equalizing bisection stops
        split_max_iterations: Upper bound on equalizing bisection rounds
    """

    max_hops: int = DEFAULT_MAX_HOPS
    min_capacity: int = 0
    max_edges_per_token: int | None = None
    hop_gas_cost_usd: float = HOP_GAS_COST_USD
    split_max_routes: int = DEFAULT_SPLIT_MAX_ROUTES
    split_strategy: SplitStrategy = SplitStrategy.EQUALIZED
    split_tolerance: float = 1e-9
    split_max_iterations: int = 64

    def __post_init__(self) -> None:
        if self.max_hops < 1:
            raise ValueError(f"max_hops must be at least 1, got {self.max_hops}")
        if self.min_capacity < 0:
            raise ValueError(f"min_capacity cannot be negative: {self.min_capacity}")
        if self.max_edges_per_token is not None and self.max_edges_per_token < 1:
            raise ValueError(
                f"max_edges_per_token must be positive, got {self.max_edges_per_token}"
            )
        if self.hop_gas_cost_usd < 0:
            raise ValueError(f"hop_gas_cost_usd cannot be negative: {self.hop_gas_cost_usd}")
        if self.split_max_routes < 1:
            raise ValueError(f"split_max_routes must be at least 1, got {self.split_max_routes}")
        if not 0 < self.split_tolerance < 1:
            raise ValueError(f"split_tolerance must be in (0, 1), got {self.split_tolerance}")
        if self.split_max_iterations < 1:
            raise ValueError(
                f"split_max_iterations must be at least 1, got {self.split_max_iterations}"
            )

    @classmethod
    def from_env(cls) -> RoutingConfig:
        """Build a config from PATHFINDER_* environment variables.

        Unset variables keep their defaults:
        - PATHFINDER_MAX_HOPS
        - PATHFINDER_MIN_CAPACITY
        - PATHFINDER_MAX_EDGES_PER_TOKEN
        - PATHFINDER_HOP_GAS_COST_USD
        - PATHFINDER_SPLIT_MAX_ROUTES
        - PATHFINDER_SPLIT_STRATEGY ("equalized" or "proportional")
        """
        defaults = cls()
        max_edges = os.environ.get("PATHFINDER_MAX_EDGES_PER_TOKEN")
        return cls(
            max_hops=int(os.environ.get("PATHFINDER_MAX_HOPS", defaults.max_hops)),
            min_capacity=int(os.environ.get("PATHFINDER_MIN_CAPACITY", defaults.min_capacity)),
            max_edges_per_token=int(max_edges) if max_edges else None,
            hop_gas_cost_usd=float(
                os.environ.get("PATHFINDER_HOP_GAS_COST_USD", defaults.hop_gas_cost_usd)
            ),
            split_max_routes=int(
                os.environ.get("PATHFINDER_SPLIT_MAX_ROUTES", defaults.split_max_routes)
            ),
            split_strategy=SplitStrategy(
                os.environ.get("PATHFINDER_SPLIT_STRATEGY", defaults.split_strategy.value).lower()
            ),
        )


# Default configuration instance
DEFAULT_ROUTING_CONFIG = RoutingConfig()
