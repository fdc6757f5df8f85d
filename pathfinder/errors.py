"""Error classes for the pathfinder engine.

Construction-time pool problems are logged and the pool skipped; every other
error is raised synchronously to the caller and never retried here.
"""


class PathfinderError(Exception):
    """Base error for routing and simulation."""

    pass


class InvalidPool(PathfinderError):
    """Pool is unusable: empty reserves, bad fee, or identical tokens."""

    pass


class UnsupportedProtocol(InvalidPool):
    """No simulator is registered for the pool's protocol."""

    pass


class InvalidTokenForPool(PathfinderError):
    """Swap requested with a token the pool does not hold."""

    pass


class InvalidAmount(PathfinderError):
    """Input amount is not strictly positive."""

    pass


class NoRouteFound(PathfinderError):
    """No path connects the two tokens within the configured hop bound."""

    pass


class Overflow(PathfinderError, ArithmeticError):
    """Arithmetic left the uint256 range."""

    pass


class SimulationInvariantError(PathfinderError):
    """Simulated output reached or exceeded the opposing reserve."""

    pass


__all__ = [
    "PathfinderError",
    "InvalidPool",
    "UnsupportedProtocol",
    "InvalidTokenForPool",
    "InvalidAmount",
    "NoRouteFound",
    "Overflow",
    "SimulationInvariantError",
]
