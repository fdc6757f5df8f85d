"""Route discovery over the token graph.

Candidates are enumerated depth-first up to `config.max_hops` pools without
revisiting a token, and every hop is simulated on the exact output of the
previous one. Ranking is by realized output, never by edge weight; weights
only decide which edges a bounded search gets to look at.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from pathfinder.amm.dispatch import simulate_swap
from pathfinder.config import DEFAULT_ROUTING_CONFIG, RoutingConfig
from pathfinder.constants import DEFAULT_TOP_K
from pathfinder.errors import InvalidAmount, NoRouteFound, Overflow
from pathfinder.models.pool import Pool
from pathfinder.models.route import Route, SwapStep
from pathfinder.models.types import normalize_token
from pathfinder.routing.graph import GraphEdge, TokenGraph

logger = structlog.get_logger()


def _check_amount(amount_in: int) -> None:
    if isinstance(amount_in, bool) or not isinstance(amount_in, int) or amount_in <= 0:
        raise InvalidAmount(f"amount_in must be a positive integer, got {amount_in!r}")


def _compound_impact(steps: Sequence[SwapStep]) -> float:
    """Combine per-hop price impacts (percent) into one route impact."""
    remaining = 1.0
    for step in steps:
        remaining *= 1.0 - step.price_impact / 100
    return (1.0 - remaining) * 100


def _make_step(pool: Pool, token_in: str, amount_in: int, config: RoutingConfig) -> SwapStep:
    quote = simulate_swap(pool, token_in, amount_in)
    return SwapStep(
        pool_address=pool.address,
        token_in=token_in,
        token_out=quote.token_out,
        amount_in=amount_in,
        amount_out=quote.amount_out,
        price_impact=quote.price_impact,
        gas_cost_usd=config.hop_gas_cost_usd,
    )


def _assemble_route(steps: Sequence[SwapStep], pools: Sequence[Pool]) -> Route:
    return Route(
        steps=tuple(steps),
        pools=tuple(pools),
        amount_in=steps[0].amount_in,
        amount_out=steps[-1].amount_out,
        price_impact=_compound_impact(steps),
        gas_cost_usd=sum(step.gas_cost_usd for step in steps),
        gas_estimate=sum(pool.gas_estimate for pool in pools),
    )


def simulate_route(
    pools: Sequence[Pool],
    token_in: str,
    amount_in: int,
    config: RoutingConfig = DEFAULT_ROUTING_CONFIG,
) -> Route:
    """Simulate a fixed sequence of pools, feeding each hop the previous output.

    Args:
        pools: Pools to traverse, in order
        token_in: Token sold into the first pool
        amount_in: Exact input amount
        config: Routing configuration (gas cost per hop)

    Returns:
        Route whose amount_out is the sequential simulation result

    Raises:
        InvalidAmount: If amount_in is not positive, or a hop's output is
            zero so the next hop has nothing to sell
        InvalidTokenForPool: If consecutive pools do not share a token
        Overflow: If a hop exceeds uint256 arithmetic
    """
    if not pools:
        raise ValueError("Route needs at least one pool")
    _check_amount(amount_in)

    steps: list[SwapStep] = []
    token = normalize_token(token_in)
    amount = amount_in
    for pool in pools:
        step = _make_step(pool, token, amount, config)
        steps.append(step)
        token, amount = step.token_out, step.amount_out
    return _assemble_route(steps, pools)


def _route_sort_key(route: Route) -> tuple[int, int, float, float, tuple[str, ...]]:
    # Highest output first; ties go to fewer hops, then cheaper gas, then
    # lower impact, then pool addresses so the order is total.
    return (
        -route.amount_out,
        route.hop_count,
        route.gas_cost_usd,
        route.price_impact,
        route.pool_addresses,
    )


def _candidate_edges(
    graph: TokenGraph,
    index: int,
    target: int,
    config: RoutingConfig,
) -> list[GraphEdge]:
    """Edges worth simulating from a token.

    Starved edges (capacity below min_capacity) are dropped. With
    max_edges_per_token set, only the lowest-weight edges toward
    intermediate tokens are kept; edges into the target always are.
    """
    edges = [edge for edge in graph.edges_at(index) if edge.capacity >= config.min_capacity]
    if config.max_edges_per_token is None:
        return edges

    finishing = [edge for edge in edges if edge.to_index == target]
    onward = [edge for edge in edges if edge.to_index != target]
    # sorted() is stable, so equal weights keep snapshot order
    onward = sorted(onward, key=lambda edge: edge.weight)[: config.max_edges_per_token]
    return finishing + onward


def find_best_paths(
    graph: TokenGraph,
    from_token: str,
    to_token: str,
    amount_in: int,
    k: int = DEFAULT_TOP_K,
    config: RoutingConfig = DEFAULT_ROUTING_CONFIG,
) -> list[Route]:
    """Find the k routes with the highest simulated output.

    Path types by hops:
    - Direct (1 hop): from_token -> to_token through one pool
    - 2-hop: from_token -> intermediate -> to_token
    - Deeper, up to config.max_hops, never repeating a token

    Args:
        graph: Token graph for the current snapshot
        from_token: Token to sell
        to_token: Token to buy
        amount_in: Exact input amount
        k: Maximum number of routes to return
        config: Routing configuration

    Returns:
        Routes sorted by amount_out descending. Empty if nothing connects
        the two tokens; callers treat that as "no route found". A hop whose
        uint256 math overflows ends only that branch of the search.

    Raises:
        InvalidAmount: If amount_in is not positive
        ValueError: If k < 1
    """
    _check_amount(amount_in)
    if k < 1:
        raise ValueError(f"k must be at least 1, got {k}")

    source = graph.index_of(from_token)
    target = graph.index_of(to_token)
    if source is None or target is None or source == target:
        return []

    routes: list[Route] = []

    def explore(
        index: int,
        amount: int,
        visited: frozenset[int],
        steps: list[SwapStep],
        pools: list[Pool],
    ) -> None:
        token = graph.token_at(index)
        hops_left = config.max_hops - len(steps)
        for edge in _candidate_edges(graph, index, target, config):
            if edge.to_index in visited:
                continue
            finishes = edge.to_index == target
            if not finishes and hops_left < 2:
                continue
            try:
                step = _make_step(edge.pool, token, amount, config)
            except Overflow:
                # Reserves or amount too large for uint256 math on this pool only
                logger.debug(
                    "edge_skipped",
                    pool=edge.pool.address,
                    token_in=token,
                    amount_in=amount,
                    reason="overflow",
                )
                continue
            if step.amount_out == 0:
                continue
            if finishes:
                routes.append(_assemble_route(steps + [step], pools + [edge.pool]))
            else:
                explore(
                    edge.to_index,
                    step.amount_out,
                    visited | {edge.to_index},
                    steps + [step],
                    pools + [edge.pool],
                )

    explore(source, amount_in, frozenset({source}), [], [])
    routes.sort(key=_route_sort_key)

    logger.debug(
        "paths_found",
        token_in=graph.token_at(source),
        token_out=graph.token_at(target),
        amount_in=amount_in,
        candidates=len(routes),
        returned=min(k, len(routes)),
    )
    return routes[:k]


def find_best_path(
    graph: TokenGraph,
    from_token: str,
    to_token: str,
    amount_in: int,
    config: RoutingConfig = DEFAULT_ROUTING_CONFIG,
) -> Route:
    """Return the single best route.

    Raises:
        NoRouteFound: If no route connects the tokens within max_hops
    """
    routes = find_best_paths(graph, from_token, to_token, amount_in, k=1, config=config)
    if not routes:
        raise NoRouteFound(
            f"No route from {from_token} to {to_token} within {config.max_hops} hops"
        )
    return routes[0]
