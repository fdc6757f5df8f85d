"""Protocol constants shared by the simulator and the router."""

# Fee denominator: fees are expressed in basis points of notional
BPS_DENOMINATOR = 10_000

# Gas units for one swap through a constant-product pool
POOL_SWAP_GAS_COST = 60_000

# Flat USD cost attributed to each hop of a route
HOP_GAS_COST_USD = 5.0

# Search defaults
DEFAULT_MAX_HOPS = 2
DEFAULT_TOP_K = 3
DEFAULT_SPLIT_MAX_ROUTES = 3

# Allowed drift when checking that a split distribution sums to one
DISTRIBUTION_TOLERANCE = 1e-6
