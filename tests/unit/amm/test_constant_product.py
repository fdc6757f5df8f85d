"""Tests for constant-product swap simulation."""

import pytest

from pathfinder.amm.constant_product import ConstantProductSimulator, constant_product
from pathfinder.errors import (
    InvalidAmount,
    InvalidPool,
    InvalidTokenForPool,
    Overflow,
)
from pathfinder.safe_int import UINT256_MAX
from tests.helpers import TOKEN_A, TOKEN_B, TOKEN_C, make_pool


class TestConstantProductMath:
    """Tests for the raw constant product formula."""

    def test_get_amount_out_basic(self):
        """1 ETH into a 100 ETH / 250k USDC pool returns ~2467 USDC."""
        amm = ConstantProductSimulator()
        amount_out = amm.get_amount_out(1 * 10**18, 100 * 10**18, 250_000 * 10**6)

        assert amount_out < 250_000 * 10**6
        expected = 2467 * 10**6
        assert abs(amount_out - expected) < expected * 0.01

    def test_get_amount_out_matches_formula(self):
        amm = ConstantProductSimulator()
        amount_in, reserve_in, reserve_out = 12_345, 1_000_000, 3_000_000
        expected = (amount_in * 9975 * reserve_out) // (reserve_in * 10000 + amount_in * 9975)
        assert amm.get_amount_out(amount_in, reserve_in, reserve_out, 9975) == expected

    def test_get_amount_out_rounds_down(self):
        """Integer division truncates: 1 wei in yields nothing from a balanced pool."""
        amm = ConstantProductSimulator()
        assert amm.get_amount_out(1, 10**18, 10**18) == 0

    def test_zero_fee(self):
        amm = ConstantProductSimulator()
        # x*y=k with no fee: 100 * 1000 / (1000 + 100) = 90.9 -> 90
        assert amm.get_amount_out(100, 1000, 1000, fee_multiplier=10000) == 90

    def test_price_impact_basis_point_resolution(self):
        amm = ConstantProductSimulator()
        # 10000 * 10000 // 1010000 = 99 bps -> 0.99%
        assert amm.get_price_impact(10_000, 1_000_000) == 0.99

    def test_overflow_is_signaled(self):
        """Products beyond uint256 raise instead of wrapping."""
        amm = ConstantProductSimulator()
        with pytest.raises(Overflow):
            amm.get_amount_out(2**200, 2**200, 2**200)


class TestSimulateSwap:
    """Tests for ConstantProductSimulator.simulate_swap."""

    def test_scenario_a(self):
        """Reserves 1,000,000 / 2,000,000 at 30 bps, 10,000 token0 in."""
        pool = make_pool(TOKEN_A, TOKEN_B, reserve0=1_000_000, reserve1=2_000_000, fee_bps=30)
        quote = constant_product.simulate_swap(pool, TOKEN_A, 10_000)

        expected = (10_000 * 9970 * 2_000_000) // (1_000_000 * 10_000 + 10_000 * 9970)
        assert quote.amount_out == expected
        assert quote.amount_out == 19743
        assert quote.token_out == TOKEN_B
        assert quote.price_impact == 0.99

    def test_reverse_direction(self):
        pool = make_pool(TOKEN_A, TOKEN_B, reserve0=1_000_000, reserve1=2_000_000)
        quote = constant_product.simulate_swap(pool, TOKEN_B, 10_000)

        expected = (10_000 * 9970 * 1_000_000) // (2_000_000 * 10_000 + 10_000 * 9970)
        assert quote.amount_out == expected
        assert quote.token_out == TOKEN_A

    def test_token_lookup_is_case_insensitive(self):
        pool = make_pool(TOKEN_A, TOKEN_B)
        quote = constant_product.simulate_swap(pool, TOKEN_A.upper().replace("0X", "0x"), 10**18)
        assert quote.token_out == TOKEN_B

    def test_does_not_mutate_pool(self):
        pool = make_pool(TOKEN_A, TOKEN_B, reserve0=1_000_000, reserve1=2_000_000)
        constant_product.simulate_swap(pool, TOKEN_A, 500_000)
        assert pool.reserve0 == 1_000_000
        assert pool.reserve1 == 2_000_000

    def test_token_not_in_pool(self):
        pool = make_pool(TOKEN_A, TOKEN_B)
        with pytest.raises(InvalidTokenForPool):
            constant_product.simulate_swap(pool, TOKEN_C, 1000)

    @pytest.mark.parametrize("amount", [0, -1, -(10**18)])
    def test_non_positive_amount(self, amount):
        pool = make_pool(TOKEN_A, TOKEN_B)
        with pytest.raises(InvalidAmount):
            constant_product.simulate_swap(pool, TOKEN_A, amount)

    def test_non_integer_amount(self):
        pool = make_pool(TOKEN_A, TOKEN_B)
        with pytest.raises(InvalidAmount):
            constant_product.simulate_swap(pool, TOKEN_A, 1.5)  # type: ignore[arg-type]

    def test_empty_reserve_pool(self):
        pool = make_pool(TOKEN_A, TOKEN_B, reserve0=0, reserve1=1000)
        with pytest.raises(InvalidPool):
            constant_product.simulate_swap(pool, TOKEN_A, 100)

    def test_amount_above_uint256(self):
        pool = make_pool(TOKEN_A, TOKEN_B)
        with pytest.raises(Overflow):
            constant_product.simulate_swap(pool, TOKEN_A, UINT256_MAX + 1)


class TestSwapProperties:
    """Invariants every constant-product simulation must satisfy."""

    RESERVES = [
        (1_000, 1_000),
        (1_000_000, 2_000_000),
        (10**24, 3 * 10**21),
        (7, 10**30),
    ]
    AMOUNTS = [1, 999, 10**6, 10**18, 10**27]

    @pytest.mark.parametrize("reserve0,reserve1", RESERVES)
    @pytest.mark.parametrize("fee_bps", [0, 5, 30, 100, 9999])
    def test_output_stays_below_reserve(self, reserve0, reserve1, fee_bps):
        pool = make_pool(TOKEN_A, TOKEN_B, reserve0=reserve0, reserve1=reserve1, fee_bps=fee_bps)
        for amount in self.AMOUNTS:
            assert constant_product.simulate_swap(pool, TOKEN_A, amount).amount_out < reserve1
            assert constant_product.simulate_swap(pool, TOKEN_B, amount).amount_out < reserve0

    @pytest.mark.parametrize("reserve0,reserve1", RESERVES[1:3])
    def test_output_increases_with_input(self, reserve0, reserve1):
        pool = make_pool(TOKEN_A, TOKEN_B, reserve0=reserve0, reserve1=reserve1)
        amounts = [reserve0 // 1000, reserve0 // 100, reserve0 // 10, reserve0, reserve0 * 10]
        outputs = [constant_product.simulate_swap(pool, TOKEN_A, a).amount_out for a in amounts]
        assert all(lo < hi for lo, hi in zip(outputs, outputs[1:]))

    def test_lower_fee_pays_more(self):
        cheap = make_pool(TOKEN_A, TOKEN_B, reserve0=10**24, reserve1=10**24, fee_bps=5)
        dear = make_pool(TOKEN_A, TOKEN_B, reserve0=10**24, reserve1=10**24, fee_bps=30)
        for amount in (10**15, 10**18, 10**21):
            assert (
                constant_product.simulate_swap(cheap, TOKEN_A, amount).amount_out
                > constant_product.simulate_swap(dear, TOKEN_A, amount).amount_out
            )

    @pytest.mark.parametrize("fee_bps", [1, 30, 100])
    def test_round_trip_loses_value(self, fee_bps):
        """Selling and buying back on the same pool never makes money."""
        pool = make_pool(TOKEN_A, TOKEN_B, reserve0=10**24, reserve1=3 * 10**24, fee_bps=fee_bps)
        for amount in (10**6, 10**18, 10**23):
            there = constant_product.simulate_swap(pool, TOKEN_A, amount).amount_out
            back = constant_product.simulate_swap(pool, TOKEN_B, there).amount_out
            assert back < amount


class TestMarginalRate:
    """Tests for marginal rate and spot price."""

    def test_spot_price(self):
        pool = make_pool(TOKEN_A, TOKEN_B, reserve0=1_000_000, reserve1=2_000_000)
        assert constant_product.spot_price(pool, TOKEN_A) == 2.0
        assert constant_product.spot_price(pool, TOKEN_B) == 0.5

    def test_marginal_rate_at_zero_is_spot_after_fee(self):
        pool = make_pool(TOKEN_A, TOKEN_B, reserve0=1_000_000, reserve1=2_000_000, fee_bps=30)
        assert constant_product.marginal_rate(pool, TOKEN_A, 0) == pytest.approx(2.0 * 0.997)

    def test_marginal_rate_decreases_with_size(self):
        pool = make_pool(TOKEN_A, TOKEN_B, reserve0=10**24, reserve1=10**24)
        rates = [constant_product.marginal_rate(pool, TOKEN_A, x) for x in (0, 10**21, 10**23)]
        assert rates[0] > rates[1] > rates[2] > 0

    def test_marginal_rate_tracks_finite_difference(self):
        pool = make_pool(TOKEN_A, TOKEN_B, reserve0=10**24, reserve1=2 * 10**24)
        x, h = 10**22, 10**18
        out_x = constant_product.simulate_swap(pool, TOKEN_A, x).amount_out
        out_xh = constant_product.simulate_swap(pool, TOKEN_A, x + h).amount_out
        assert constant_product.marginal_rate(pool, TOKEN_A, x) == pytest.approx(
            (out_xh - out_x) / h, rel=1e-3
        )
