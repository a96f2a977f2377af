"""Tests for two-token G3M curve math."""

import pytest

from g3m.config import DEFAULT_ENGINE_CONFIG
from g3m.curves.g3m import (
    G3M_CURVE,
    G3MCurveParams,
    compute_initial_pool_data,
    compute_l,
    compute_price,
    compute_trading_function,
    compute_x_given_y,
    compute_y_given_x,
)
from g3m.errors import DomainError, InvalidConfiguration
from g3m.math.fixed_point import WAD

HALF = G3MCurveParams(w_x=WAD // 2)


class TestCurveParams:
    """Tests for G3MCurveParams."""

    def test_w_y_complements_w_x(self):
        assert G3MCurveParams(w_x=3 * WAD // 10).w_y == 7 * WAD // 10

    @pytest.mark.parametrize("w_x", [0, WAD, WAD + 1])
    def test_weight_out_of_range(self, w_x):
        """wX must lie strictly between 0 and 1."""
        with pytest.raises(DomainError):
            G3MCurveParams(w_x=w_x)


class TestTradingFunction:
    """Tests for compute_trading_function."""

    def test_balanced_pool_is_zero(self):
        """100/100 reserves at L = 100 evaluate to exactly zero."""
        assert compute_trading_function(100 * WAD, 100 * WAD, 100 * WAD, HALF) == 0

    def test_monotone_in_liquidity(self):
        """Less liquidity means a larger invariant."""
        params = G3MCurveParams(w_x=3 * WAD // 10)
        reserves = (100 * WAD, 400 * WAD)
        values = [
            G3M_CURVE.trading_function(reserves, liquidity, params)
            for liquidity in (200 * WAD, 250 * WAD, 300 * WAD, 350 * WAD)
        ]
        assert values == sorted(values, reverse=True)
        assert len(set(values)) == len(values)

    def test_over_claimed_liquidity_is_negative(self):
        """Claiming more liquidity than the reserves back is negative."""
        assert compute_trading_function(100 * WAD, 100 * WAD, 101 * WAD, HALF) < 0

    def test_zero_liquidity(self):
        """Liquidity must be positive."""
        with pytest.raises(DomainError):
            compute_trading_function(100 * WAD, 100 * WAD, 0, HALF)

    @pytest.mark.parametrize("reserves", [(WAD,), (WAD, WAD, WAD)])
    def test_reserve_count(self, reserves):
        """A two-token curve takes exactly two reserves."""
        with pytest.raises(InvalidConfiguration) as exc_info:
            G3M_CURVE.trading_function(reserves, WAD, HALF)
        assert exc_info.value.reserves_length == len(reserves)
        assert exc_info.value.weights_length == 2


class TestPrices:
    """Tests for spot price and price-derived reserves."""

    def test_balanced_price(self):
        """A 50/50 pool with equal reserves prices X at 1."""
        assert compute_price(100 * WAD, 100 * WAD, HALF) == WAD

    def test_weighted_price(self):
        """price = (wX * rY) / (wY * rX)."""
        params = G3MCurveParams(w_x=WAD // 4)
        # (0.25 * 300) / (0.75 * 100) = 1
        assert compute_price(100 * WAD, 300 * WAD, params) == WAD

    def test_y_given_x(self):
        """Reserve of Y for a target price."""
        assert compute_y_given_x(100 * WAD, WAD, HALF) == 100 * WAD
        assert compute_y_given_x(100 * WAD, 2 * WAD, HALF) == 200 * WAD

    def test_x_given_y(self):
        """Reserve of X for a target price."""
        assert compute_x_given_y(200 * WAD, 2 * WAD, HALF) == 100 * WAD

    def test_price_round_trip(self):
        """Reserves derived from a price reproduce that price."""
        params = G3MCurveParams(w_x=3 * WAD // 10)
        reserve_y = compute_y_given_x(50 * WAD, 2 * WAD, params)
        assert abs(compute_price(50 * WAD, reserve_y, params) - 2 * WAD) <= 1


class TestLiquidity:
    """Tests for liquidity approximation and initial pool data."""

    def test_compute_l_balanced(self):
        """Equal reserves give L equal to either reserve."""
        assert compute_l(100 * WAD, 100 * WAD, HALF) == 100 * WAD

    def test_initial_pool_data_balanced(self):
        """rX = rY = 100, wX = 0.5 gives L = 100 and a zero invariant."""
        data = compute_initial_pool_data(100 * WAD, WAD, HALF)
        assert data.reserves == (100 * WAD, 100 * WAD)
        assert data.liquidity == 100 * WAD
        assert data.invariant == 0

    def test_initial_pool_data_weighted(self):
        """An uneven pool still solves to an invariant inside the band."""
        params = G3MCurveParams(w_x=3 * WAD // 10)
        data = compute_initial_pool_data(50 * WAD, 2 * WAD, params)
        assert DEFAULT_ENGINE_CONFIG.is_within_epsilon(data.invariant)
        assert data.invariant >= 0
