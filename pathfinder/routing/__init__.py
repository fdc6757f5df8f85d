"""Route discovery and split optimization.

Module structure:
- graph.py: TokenGraph, GraphEdge and the build_graph builder
- pathfinding.py: bounded-hop search ranked by simulated output
- split.py: volume distribution across the best routes
"""

from pathfinder.routing.graph import GraphEdge, TokenGraph, build_graph
from pathfinder.routing.pathfinding import find_best_path, find_best_paths, simulate_route
from pathfinder.routing.split import equalize_allocations, optimize_split, route_marginal_rate

__all__ = [
    "GraphEdge",
    "TokenGraph",
    "build_graph",
    "equalize_allocations",
    "find_best_path",
    "find_best_paths",
    "optimize_split",
    "route_marginal_rate",
    "simulate_route",
]
