"""Pydantic models for pool snapshots from the pool-data provider.

The provider hands over plain records; these models validate them and turn
them into immutable Pool objects. A record that fails validation is logged
and dropped so one bad pool never takes the whole snapshot down.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from pydantic import BaseModel, Field, ValidationError

from pathfinder.constants import BPS_DENOMINATOR, POOL_SWAP_GAS_COST
from pathfinder.models.pool import Pool, PoolProtocol
from pathfinder.models.types import Uint256

logger = structlog.get_logger()


class PoolRecord(BaseModel):
    """One pool as reported by the provider."""

    address: str = Field(min_length=1)
    token0: str = Field(min_length=1)
    token1: str = Field(min_length=1)
    reserve0: Uint256
    reserve1: Uint256
    fee: int = Field(default=30, ge=0, lt=BPS_DENOMINATOR, description="Fee in basis points")
    protocol: PoolProtocol = PoolProtocol.CONSTANT_PRODUCT
    gas_estimate: int = Field(default=POOL_SWAP_GAS_COST, ge=0, alias="gasEstimate")

    model_config = {"populate_by_name": True, "frozen": True}

    def to_pool(self) -> Pool:
        return Pool(
            address=self.address,
            token0=self.token0,
            token1=self.token1,
            reserve0=self.reserve0,
            reserve1=self.reserve1,
            fee_bps=self.fee,
            protocol=self.protocol,
            gas_estimate=self.gas_estimate,
        )


class PoolSnapshot(BaseModel):
    """A full snapshot: every pool the provider considers tradable."""

    pools: list[PoolRecord] = Field(default_factory=list)

    def to_pools(self) -> list[Pool]:
        return [record.to_pool() for record in self.pools]


def load_pools(records: Iterable[Mapping[str, Any] | PoolRecord]) -> list[Pool]:
    """Validate raw provider records and convert them to pools.

    Records that fail validation are skipped with a warning.

    Args:
        records: Mappings (or already-parsed PoolRecords) from the provider

    Returns:
        Pools in the order the valid records appeared
    """
    pools: list[Pool] = []
    for position, raw in enumerate(records):
        if isinstance(raw, PoolRecord):
            pools.append(raw.to_pool())
            continue
        try:
            record = PoolRecord.model_validate(raw)
        except ValidationError as err:
            logger.warning(
                "pool_record_rejected",
                position=position,
                address=raw.get("address") if isinstance(raw, Mapping) else None,
                errors=err.error_count(),
            )
            continue
        pools.append(record.to_pool())
    return pools
