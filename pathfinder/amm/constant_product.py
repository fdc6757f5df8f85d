"""Constant-product AMM simulation.

Pools follow the x * y = k invariant with the fee taken from the input:

    amount_out = (in * (10000 - fee) * res_out) / (res_in * 10000 + in * (10000 - fee))

Integer division truncates, so the simulated output never overstates what
the pool pays on-chain.
"""

from __future__ import annotations

from pathfinder.amm.base import SwapQuote
from pathfinder.constants import BPS_DENOMINATOR
from pathfinder.errors import InvalidAmount, InvalidPool, SimulationInvariantError
from pathfinder.models.pool import Pool
from pathfinder.safe_int import U


class ConstantProductSimulator:
    """Swap math for UniswapV2-style pools."""

    def get_amount_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        fee_multiplier: int = 9970,
    ) -> int:
        """Calculate output amount using the constant product formula.

        Args:
            amount_in: Input token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool
            fee_multiplier: 10000 - fee_bps (9970 for a 0.3% fee)

        Returns:
            Output token amount, rounded down

        Raises:
            Overflow: If any intermediate value exceeds uint256
        """
        amount_in_with_fee = U(amount_in) * fee_multiplier
        numerator = amount_in_with_fee * reserve_out
        denominator = U(reserve_in) * BPS_DENOMINATOR + amount_in_with_fee
        return (numerator // denominator).value

    def get_price_impact(self, amount_in: int, reserve_in: int) -> float:
        """Price impact in percent: amount_in / (reserve_in + amount_in) * 100.

        Computed in basis points with integer math, then scaled, so the
        figure is reproducible bit for bit.
        """
        impact_bps = (U(amount_in) * BPS_DENOMINATOR // (U(reserve_in) + amount_in)).value
        return impact_bps / 100

    def simulate_swap(self, pool: Pool, token_in: str, amount_in: int) -> SwapQuote:
        """Simulate an exact-input swap through a pool.

        Args:
            pool: The liquidity pool (not modified)
            token_in: Input token
            amount_in: Amount to swap, must be positive

        Returns:
            SwapQuote with the output token, amount and price impact
        """
        reserve_in, reserve_out = pool.get_reserves(token_in)
        if isinstance(amount_in, bool) or not isinstance(amount_in, int) or amount_in <= 0:
            raise InvalidAmount(f"amount_in must be a positive integer, got {amount_in!r}")
        reason = pool.unusable_reason()
        if reason is not None:
            raise InvalidPool(f"Pool {pool.address} is unusable: {reason}")

        amount_out = self.get_amount_out(amount_in, reserve_in, reserve_out, pool.fee_multiplier)
        if amount_out >= reserve_out:
            raise SimulationInvariantError(
                f"Output {amount_out} reached reserve {reserve_out} in pool {pool.address}"
            )

        return SwapQuote(
            token_out=pool.get_token_out(token_in),
            amount_out=amount_out,
            price_impact=self.get_price_impact(amount_in, reserve_in),
        )

    def spot_price(self, pool: Pool, token_in: str) -> float:
        reserve_in, reserve_out = pool.get_reserves(token_in)
        if reserve_in <= 0 or reserve_out <= 0:
            raise InvalidPool(f"Pool {pool.address} has an empty reserve")
        return reserve_out / reserve_in

    def marginal_rate(self, pool: Pool, token_in: str, amount_in: int) -> float:
        """Output gained per extra unit of input once amount_in has been sold.

        d(out)/d(in) = g * R_in * R_out / (R_in + g * in)^2, with g the fee
        multiplier as a fraction. Strictly decreasing in amount_in.
        """
        reserve_in, reserve_out = pool.get_reserves(token_in)
        if reserve_in <= 0 or reserve_out <= 0:
            raise InvalidPool(f"Pool {pool.address} has an empty reserve")
        gamma = pool.fee_multiplier / BPS_DENOMINATOR
        effective_in = reserve_in + gamma * max(amount_in, 0)
        return (gamma * reserve_out / effective_in) * (reserve_in / effective_in)


# Singleton instance
constant_product = ConstantProductSimulator()
