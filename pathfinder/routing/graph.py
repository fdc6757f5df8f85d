"""Token graph built from a pool snapshot.

Tokens are nodes and every usable pool contributes two directed edges, one
per swap direction. Token identifiers are interned to small integer indices
at build time so the search walks tuples instead of hashing addresses; the
identifier strings stay available for display.

The graph is immutable. Reserves move, so a new snapshot means a new graph:
there is deliberately no way to add or update pools in place.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

import structlog

from pathfinder.amm.dispatch import is_supported, spot_price
from pathfinder.models.pool import Pool
from pathfinder.models.types import normalize_token

logger = structlog.get_logger()


@dataclass(frozen=True)
class GraphEdge:
    """One directed way to trade into `to` through `pool`.

    weight is -ln(spot price) and only ranks or prunes candidates; amounts
    always come from exact simulation.
    """

    to: str
    to_index: int
    weight: float
    # Destination-side reserve, a liquidity depth signal
    capacity: int
    pool: Pool


class TokenGraph:
    """Immutable adjacency structure over interned token indices.

    Build with `build_graph(pools)` or `TokenGraph.from_pools(pools)`.
    """

    __slots__ = ("_tokens", "_index", "_adjacency", "_pools")

    def __init__(
        self,
        tokens: tuple[str, ...],
        adjacency: tuple[tuple[GraphEdge, ...], ...],
        pools: tuple[Pool, ...],
    ) -> None:
        if len(tokens) != len(adjacency):
            raise ValueError("adjacency must have one edge list per token")
        self._tokens = tokens
        self._index: Mapping[str, int] = MappingProxyType(
            {token: i for i, token in enumerate(tokens)}
        )
        self._adjacency = adjacency
        self._pools = pools

    @classmethod
    def from_pools(cls, pools: Iterable[Pool]) -> TokenGraph:
        """Build a TokenGraph from a pool snapshot."""
        return build_graph(pools)

    def index_of(self, token: str) -> int | None:
        """Interned index for a token, or None if it is not in the graph."""
        return self._index.get(normalize_token(token))

    def token_at(self, index: int) -> str:
        return self._tokens[index]

    def has_token(self, token: str) -> bool:
        return normalize_token(token) in self._index

    def edges_from(self, token: str) -> tuple[GraphEdge, ...]:
        """Outgoing edges of a token, in snapshot order."""
        index = self.index_of(token)
        if index is None:
            return ()
        return self._adjacency[index]

    def edges_at(self, index: int) -> tuple[GraphEdge, ...]:
        """Outgoing edges for an already-interned token index."""
        return self._adjacency[index]

    def neighbors(self, token: str) -> set[str]:
        """Tokens reachable from `token` in one swap."""
        return {edge.to for edge in self.edges_from(token)}

    @property
    def tokens(self) -> tuple[str, ...]:
        return self._tokens

    @property
    def pools(self) -> tuple[Pool, ...]:
        """Pools that made it into the graph, in snapshot order."""
        return self._pools

    @property
    def token_count(self) -> int:
        """Number of unique tokens in the graph."""
        return len(self._tokens)

    @property
    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._adjacency)


def _make_edge(pool: Pool, token_in: str, to_index: int) -> GraphEdge:
    token_out = pool.get_token_out(token_in)
    _, reserve_out = pool.get_reserves(token_in)
    return GraphEdge(
        to=token_out,
        to_index=to_index,
        weight=-math.log(spot_price(pool, token_in)),
        capacity=reserve_out,
        pool=pool,
    )


def build_graph(pools: Iterable[Pool]) -> TokenGraph:
    """Build the token graph for a pool snapshot.

    Unusable pools (empty reserves, out-of-range fee, identical tokens,
    unsupported protocol, repeated address) are logged and skipped; the rest
    of the snapshot still builds. Parallel pools for the same pair are kept
    as separate edges.

    Args:
        pools: Pool snapshot from the provider

    Returns:
        Immutable TokenGraph
    """
    index: dict[str, int] = {}
    adjacency: list[list[GraphEdge]] = []
    kept: list[Pool] = []
    seen_addresses: set[str] = set()
    skipped = 0

    def intern(token: str) -> int:
        if token not in index:
            index[token] = len(adjacency)
            adjacency.append([])
        return index[token]

    for pool in pools:
        reason = pool.unusable_reason()
        if reason is None and not is_supported(pool.protocol):
            reason = "unsupported_protocol"
        if reason is None and pool.address in seen_addresses:
            reason = "duplicate_address"
        if reason is not None:
            skipped += 1
            logger.warning(
                "pool_skipped",
                pool=pool.address,
                protocol=pool.protocol.value,
                reason=reason,
            )
            continue

        seen_addresses.add(pool.address)
        i0 = intern(pool.token0)
        i1 = intern(pool.token1)
        adjacency[i0].append(_make_edge(pool, pool.token0, i1))
        adjacency[i1].append(_make_edge(pool, pool.token1, i0))
        kept.append(pool)

    graph = TokenGraph(
        tokens=tuple(index),
        adjacency=tuple(tuple(edges) for edges in adjacency),
        pools=tuple(kept),
    )
    logger.debug(
        "graph_built",
        tokens=graph.token_count,
        pools=len(kept),
        skipped=skipped,
    )
    return graph
