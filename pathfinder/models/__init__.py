"""Pool and route data models."""

from pathfinder.models.pool import Pool, PoolProtocol
from pathfinder.models.route import Route, SplitRoute, SwapStep
from pathfinder.models.snapshot import PoolRecord, PoolSnapshot, load_pools
from pathfinder.models.types import Uint256, normalize_token

__all__ = [
    "Pool",
    "PoolProtocol",
    "PoolRecord",
    "PoolSnapshot",
    "Route",
    "SplitRoute",
    "SwapStep",
    "Uint256",
    "load_pools",
    "normalize_token",
]
