"""Liquidity pool snapshot model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pathfinder.constants import BPS_DENOMINATOR, POOL_SWAP_GAS_COST
from pathfinder.errors import InvalidTokenForPool
from pathfinder.models.types import normalize_token
from pathfinder.safe_int import fits_uint256


class PoolProtocol(str, Enum):
    """Pricing curve a pool implements."""

    CONSTANT_PRODUCT = "constant_product"
    CONCENTRATED_LIQUIDITY = "concentrated_liquidity"
    STABLE_SWAP = "stable_swap"


@dataclass(frozen=True)
class Pool:
    """One liquidity pool at a point in time.

    Pools are snapshots: simulating a swap never changes the reserves, and a
    fresh snapshot means building a fresh engine.
    """

    address: str
    token0: str
    token1: str
    reserve0: int
    reserve1: int
    # Fee in basis points (30 = 0.3%)
    fee_bps: int = 30
    protocol: PoolProtocol = PoolProtocol.CONSTANT_PRODUCT
    gas_estimate: int = POOL_SWAP_GAS_COST

    def __post_init__(self) -> None:
        object.__setattr__(self, "address", normalize_token(self.address))
        object.__setattr__(self, "token0", normalize_token(self.token0))
        object.__setattr__(self, "token1", normalize_token(self.token1))

    @property
    def fee_multiplier(self) -> int:
        """Fee multiplier for AMM math (10000 - fee_bps).

        For 30 bps (0.3%), this returns 9970.
        """
        return BPS_DENOMINATOR - self.fee_bps

    @property
    def tokens(self) -> tuple[str, str]:
        return self.token0, self.token1

    def has_token(self, token: str) -> bool:
        return normalize_token(token) in (self.token0, self.token1)

    def get_reserves(self, token_in: str) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        token = normalize_token(token_in)
        if token == self.token0:
            return self.reserve0, self.reserve1
        if token == self.token1:
            return self.reserve1, self.reserve0
        raise InvalidTokenForPool(f"Token {token_in} not in pool {self.address}")

    def get_token_out(self, token_in: str) -> str:
        """Get the output token for a given input token."""
        token = normalize_token(token_in)
        if token == self.token0:
            return self.token1
        if token == self.token1:
            return self.token0
        raise InvalidTokenForPool(f"Token {token_in} not in pool {self.address}")

    def unusable_reason(self) -> str | None:
        """Return why this pool cannot be traded through, or None if it can."""
        if self.token0 == self.token1:
            return "identical_tokens"
        if self.reserve0 <= 0 or self.reserve1 <= 0:
            return "empty_reserve"
        if not (fits_uint256(self.reserve0) and fits_uint256(self.reserve1)):
            return "reserve_overflow"
        if not 0 <= self.fee_bps < BPS_DENOMINATOR:
            return "fee_out_of_range"
        return None

    @property
    def is_usable(self) -> bool:
        return self.unusable_reason() is None
