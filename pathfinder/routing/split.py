"""Split routing: spread one trade over several routes.

Two allocation contracts are available (RoutingConfig.split_strategy):

PROPORTIONAL
    Single shot. Each route gets a share proportional to its full-volume
    output, and the reported total is the sum of those full-volume outputs.
    That total overstates what the split actually returns, because each
    route only receives part of the volume; it is kept for callers that
    depend on the legacy numbers.

EQUALIZED (default)
    Allocations are chosen so the marginal rate (extra output per extra unit
    of input) is the same on every route that receives volume, which is the
    optimality condition for concave AMM curves. A bisection on the common
    marginal rate finds the allocations; each route is then re-simulated on
    its own allocation and the exact outputs are summed. Candidates that
    reuse a pool of a better-ranked candidate are left out, since each route
    is simulated against the snapshot on its own.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import structlog

from pathfinder.amm.dispatch import marginal_rate, simulate_swap
from pathfinder.config import DEFAULT_ROUTING_CONFIG, RoutingConfig, SplitStrategy
from pathfinder.errors import NoRouteFound
from pathfinder.models.route import Route, SplitRoute
from pathfinder.routing.graph import TokenGraph
from pathfinder.routing.pathfinding import find_best_paths, simulate_route

logger = structlog.get_logger()


def route_marginal_rate(route: Route, amount_in: int) -> float:
    """Marginal rate of a whole route after amount_in has been sent down it.

    Chain rule over the hops: each hop's marginal rate is evaluated at the
    amount actually reaching that hop.
    """
    rate = 1.0
    token = route.token_in
    amount = amount_in
    for pool in route.pools:
        rate *= marginal_rate(pool, token, amount)
        token_out = pool.get_token_out(token)
        amount = simulate_swap(pool, token, amount).amount_out if amount > 0 else 0
        token = token_out
    return rate


def _allocation_at(route: Route, rate: float, total_amount: int) -> int:
    """Largest allocation in [0, total_amount] whose marginal rate is >= rate."""
    if route_marginal_rate(route, 0) < rate:
        return 0
    if route_marginal_rate(route, total_amount) >= rate:
        return total_amount
    lo, hi = 0, total_amount
    while hi - lo > 1:
        mid = (lo + hi) // 2
        if route_marginal_rate(route, mid) >= rate:
            lo = mid
        else:
            hi = mid
    return lo


def equalize_allocations(
    routes: Sequence[Route],
    total_amount: int,
    config: RoutingConfig = DEFAULT_ROUTING_CONFIG,
) -> list[int]:
    """Allocate total_amount so marginal rates match across routes.

    Bisects the common marginal rate: a lower rate lets every route absorb
    more volume, so the allocated sum is non-increasing in the rate.
    Stops once the sum is within split_tolerance of total_amount or after
    split_max_iterations rounds. The integer remainder goes to the route
    with the best marginal rate at its current allocation, so the result
    always sums to exactly total_amount.
    """
    rate_lo = 0.0
    rate_hi = max(route_marginal_rate(route, 0) for route in routes)
    allocations = [0] * len(routes)

    for _ in range(config.split_max_iterations):
        rate = (rate_lo + rate_hi) / 2
        trial = [_allocation_at(route, rate, total_amount) for route in routes]
        allocated = sum(trial)
        if allocated > total_amount:
            rate_lo = rate
            continue
        allocations = trial
        rate_hi = rate
        if total_amount - allocated <= config.split_tolerance * total_amount:
            break

    remainder = total_amount - sum(allocations)
    if remainder > 0:
        best = max(
            range(len(routes)),
            key=lambda i: (route_marginal_rate(routes[i], allocations[i]), -i),
        )
        allocations[best] += remainder
    return allocations


def _disjoint_routes(routes: Sequence[Route]) -> list[Route]:
    """Keep routes that share no pool with a better-ranked route.

    Routes are simulated independently against the snapshot, so two routes
    through one pool would each see its full reserves.
    """
    kept: list[Route] = []
    used: set[str] = set()
    for route in routes:
        addresses = set(route.pool_addresses)
        if addresses & used:
            continue
        kept.append(route)
        used |= addresses
    return kept


def _single_route(route: Route, total_amount: int, strategy: SplitStrategy) -> SplitRoute:
    return SplitRoute(
        routes=(route,),
        distribution=(1.0,),
        total_amount_in=total_amount,
        total_amount_out=route.amount_out,
        strategy=strategy,
    )


def _proportional_split(routes: Sequence[Route], total_amount: int) -> SplitRoute:
    total_out = sum(route.amount_out for route in routes)
    return SplitRoute(
        routes=tuple(routes),
        distribution=tuple(route.amount_out / total_out for route in routes),
        total_amount_in=total_amount,
        # Full-volume outputs: an upper bound, not the split's real output
        total_amount_out=total_out,
        strategy=SplitStrategy.PROPORTIONAL,
    )


def _equalized_split(
    routes: Sequence[Route],
    total_amount: int,
    config: RoutingConfig,
) -> SplitRoute:
    best_single = routes[0]
    allocations = equalize_allocations(routes, total_amount, config)

    split_routes: list[Route] = []
    used: list[int] = []
    for route, allocation in zip(routes, allocations):
        if allocation == 0:
            continue
        resimulated = simulate_route(route.pools, route.token_in, allocation, config)
        if resimulated.amount_out == 0:
            # Allocation too small to clear the route's rounding
            return _single_route(best_single, total_amount, SplitStrategy.EQUALIZED)
        split_routes.append(resimulated)
        used.append(allocation)

    total_out = sum(route.amount_out for route in split_routes)
    if len(split_routes) < 2 or total_out <= best_single.amount_out:
        return _single_route(best_single, total_amount, SplitStrategy.EQUALIZED)

    distribution = [allocation / total_amount for allocation in used]
    # Absorb float drift so the shares sum to one
    distribution[-1] = max(0.0, 1.0 - math.fsum(distribution[:-1]))
    return SplitRoute(
        routes=tuple(split_routes),
        distribution=tuple(distribution),
        total_amount_in=total_amount,
        total_amount_out=total_out,
        strategy=SplitStrategy.EQUALIZED,
    )


def optimize_split(
    graph: TokenGraph,
    from_token: str,
    to_token: str,
    total_amount: int,
    config: RoutingConfig = DEFAULT_ROUTING_CONFIG,
) -> SplitRoute:
    """Distribute total_amount over the best routes to cut price impact.

    With EQUALIZED, candidates that reuse a pool of a better-ranked candidate
    are dropped before allocating. The result holds a single route with
    distribution (1.0,) whenever splitting does not beat that route, which
    is the usual outcome for small amounts: each route rounds its output
    down, and the price impact saved is smaller than those rounding losses.

    Args:
        graph: Token graph for the current snapshot
        from_token: Token to sell
        to_token: Token to buy
        total_amount: Total exact input
        config: Routing configuration (split_strategy, split_max_routes, ...)

    Returns:
        SplitRoute whose distribution sums to 1.0

    Raises:
        NoRouteFound: If no route connects the tokens
        InvalidAmount: If total_amount is not positive
    """
    candidates = find_best_paths(
        graph, from_token, to_token, total_amount, k=config.split_max_routes, config=config
    )
    if not candidates:
        raise NoRouteFound(
            f"No route from {from_token} to {to_token} within {config.max_hops} hops"
        )

    if config.split_strategy is SplitStrategy.EQUALIZED:
        candidates = _disjoint_routes(candidates)

    if len(candidates) == 1:
        result = _single_route(candidates[0], total_amount, config.split_strategy)
    elif config.split_strategy is SplitStrategy.PROPORTIONAL:
        result = _proportional_split(candidates, total_amount)
    else:
        result = _equalized_split(candidates, total_amount, config)

    logger.debug(
        "split_optimized",
        strategy=result.strategy.value,
        candidates=len(candidates),
        routes=len(result.routes),
        total_amount_in=total_amount,
        total_amount_out=result.total_amount_out,
    )
    return result
