"""Two-token geometric mean market maker math.

Trading function:
    (rX / L)^wX * (rY / L)^wY - 1,  with wY = 1 - wX

Ratios and the product round up, so marginal states evaluate slightly
positive rather than slightly negative.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from g3m.config import EngineConfig
from g3m.errors import DomainError, InvalidConfiguration
from g3m.math.fixed_point import (
    WAD,
    div_down,
    div_up,
    mul_div_down,
    mul_down,
    mul_up,
    pow_wad,
)

from .base import Curve, InitialPoolData

N_TOKENS = 2


@dataclass(frozen=True)
class G3MCurveParams:
    """Actualized two-token curve parameters.

    Attributes:
        w_x: Weight of token X, in (0, 1 WAD)
        swap_fee: Fee fraction in [0, 1 WAD)
    """

    w_x: int
    swap_fee: int = 0

    def __post_init__(self) -> None:
        if not 0 < self.w_x < WAD:
            raise DomainError(f"w_x must be in range (0, 1e18), got {self.w_x}")

    @property
    def w_y(self) -> int:
        return WAD - self.w_x


def compute_trading_function(
    reserve_x: int, reserve_y: int, liquidity: int, params: G3MCurveParams
) -> int:
    """Evaluate (rX/L)^wX * (rY/L)^wY - 1 as a signed WAD value.

    Raises:
        DomainError: If liquidity is zero
    """
    if liquidity <= 0:
        raise DomainError("Liquidity must be positive to evaluate the trading function")
    a = pow_wad(div_up(reserve_x, liquidity), params.w_x)
    b = pow_wad(div_up(reserve_y, liquidity), params.w_y)
    return mul_up(a, b) - WAD


def compute_l(reserve_x: int, reserve_y: int, params: G3MCurveParams) -> int:
    """Closed-form liquidity: rX^wX * rY^wY, computed as rX * (rY/rX)^wY.

    The ratio form is exact when the reserves are equal.
    """
    if reserve_x <= 0:
        raise DomainError("reserve_x must be positive")
    return mul_down(reserve_x, pow_wad(div_down(reserve_y, reserve_x), params.w_y))


def compute_price(reserve_x: int, reserve_y: int, params: G3MCurveParams) -> int:
    """Spot price of X in units of Y: (wX * rY) / (wY * rX)."""
    if reserve_x <= 0:
        raise DomainError("reserve_x must be positive")
    return div_down(mul_div_down(reserve_y, params.w_x, params.w_y), reserve_x)


def compute_y_given_x(reserve_x: int, price: int, params: G3MCurveParams) -> int:
    """Reserve of Y that puts the spot price of X at ``price``."""
    return mul_div_down(mul_down(reserve_x, price), params.w_y, params.w_x)


def compute_x_given_y(reserve_y: int, price: int, params: G3MCurveParams) -> int:
    """Reserve of X that puts the spot price of X at ``price``."""
    if price <= 0:
        raise DomainError("price must be positive")
    return div_down(mul_div_down(reserve_y, params.w_x, params.w_y), price)


def _unpack(reserves: Sequence[int]) -> tuple[int, int]:
    if len(reserves) != N_TOKENS:
        raise InvalidConfiguration(len(reserves), N_TOKENS)
    reserve_x, reserve_y = reserves
    return reserve_x, reserve_y


class G3MCurve(Curve[G3MCurveParams]):
    """Two-token G3M curve; reserves are (rX, rY)."""

    def trading_function(
        self, reserves: Sequence[int], liquidity: int, params: G3MCurveParams
    ) -> int:
        reserve_x, reserve_y = _unpack(reserves)
        return compute_trading_function(reserve_x, reserve_y, liquidity, params)

    def compute_l(self, reserves: Sequence[int], params: G3MCurveParams) -> int:
        reserve_x, reserve_y = _unpack(reserves)
        return compute_l(reserve_x, reserve_y, params)


G3M_CURVE = G3MCurve()


def compute_initial_pool_data(
    amount_x: int,
    initial_price: int,
    params: G3MCurveParams,
    config: EngineConfig | None = None,
) -> InitialPoolData:
    """Reserves and liquidity for a pool seeded with ``amount_x`` at ``initial_price``.

    Args:
        amount_x: Initial reserve of X
        initial_price: Spot price of X in Y (WAD)
        params: Curve parameters
        config: Engine configuration for the liquidity solver

    Returns:
        InitialPoolData with (rX, rY), solved liquidity and its invariant
    """
    reserve_y = compute_y_given_x(amount_x, initial_price, params)
    reserves = (amount_x, reserve_y)
    liquidity = G3M_CURVE.solve_liquidity(reserves, params, config)
    invariant = compute_trading_function(amount_x, reserve_y, liquidity, params)
    return InitialPoolData(reserves=reserves, liquidity=liquidity, invariant=invariant)
