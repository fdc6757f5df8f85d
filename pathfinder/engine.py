"""Pathfinder engine facade.

Usage:
    engine = Pathfinder(pools)
    routes = engine.find_best_paths(token_in, token_out, amount_in, k=3)
    split = engine.optimize_split(token_in, token_out, amount_in)

The engine builds the token graph once and only reads it afterwards, so a
single instance can serve concurrent queries. A new pool snapshot needs a
new engine.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pathfinder.config import DEFAULT_ROUTING_CONFIG, RoutingConfig
from pathfinder.constants import DEFAULT_TOP_K
from pathfinder.models.pool import Pool
from pathfinder.models.route import Route, SplitRoute
from pathfinder.models.snapshot import PoolRecord, load_pools
from pathfinder.routing.graph import TokenGraph, build_graph
from pathfinder.routing.pathfinding import find_best_path, find_best_paths, simulate_route
from pathfinder.routing.split import optimize_split


class Pathfinder:
    """Route discovery and split optimization over one pool snapshot."""

    __slots__ = ("_graph", "_config")

    def __init__(self, pools: Iterable[Pool], config: RoutingConfig | None = None) -> None:
        """Build the engine.

        Args:
            pools: Pool snapshot; unusable pools are logged and skipped
            config: Routing configuration (default: DEFAULT_ROUTING_CONFIG)
        """
        self._graph = build_graph(pools)
        self._config = config if config is not None else DEFAULT_ROUTING_CONFIG

    @classmethod
    def from_snapshot(
        cls,
        records: Iterable[Mapping[str, Any] | PoolRecord],
        config: RoutingConfig | None = None,
    ) -> Pathfinder:
        """Build an engine from raw pool-data provider records."""
        return cls(load_pools(records), config=config)

    @property
    def graph(self) -> TokenGraph:
        return self._graph

    @property
    def config(self) -> RoutingConfig:
        return self._config

    def find_best_paths(
        self,
        from_token: str,
        to_token: str,
        amount_in: int,
        k: int = DEFAULT_TOP_K,
    ) -> list[Route]:
        """Top-k routes by simulated output; empty when no route exists."""
        return find_best_paths(
            self._graph, from_token, to_token, amount_in, k=k, config=self._config
        )

    def find_best_path(self, from_token: str, to_token: str, amount_in: int) -> Route:
        """Best route; raises NoRouteFound when none exists."""
        return find_best_path(self._graph, from_token, to_token, amount_in, config=self._config)

    def optimize_split(self, from_token: str, to_token: str, total_amount: int) -> SplitRoute:
        return optimize_split(self._graph, from_token, to_token, total_amount, config=self._config)

    def simulate_route(self, pools: Sequence[Pool], token_in: str, amount_in: int) -> Route:
        return simulate_route(pools, token_in, amount_in, config=self._config)
