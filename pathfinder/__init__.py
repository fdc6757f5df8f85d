"""Pathfinder - route discovery and split optimization over AMM pools."""

from pathfinder.config import DEFAULT_ROUTING_CONFIG, RoutingConfig, SplitStrategy
from pathfinder.engine import Pathfinder
from pathfinder.errors import (
    InvalidAmount,
    InvalidPool,
    InvalidTokenForPool,
    NoRouteFound,
    Overflow,
    PathfinderError,
)
from pathfinder.models import Pool, PoolProtocol, Route, SplitRoute, SwapStep

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_ROUTING_CONFIG",
    "InvalidAmount",
    "InvalidPool",
    "InvalidTokenForPool",
    "NoRouteFound",
    "Overflow",
    "Pathfinder",
    "PathfinderError",
    "Pool",
    "PoolProtocol",
    "Route",
    "RoutingConfig",
    "SplitRoute",
    "SplitStrategy",
    "SwapStep",
    "__version__",
]
