"""N-token geometric mean market maker math.

Trading function:
    prod_i (r[i] / L)^w[i] - 1,  with sum(w) = 1

The last token is the numeraire for prices.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from g3m.config import EngineConfig
from g3m.errors import DomainError, InvalidConfiguration, InvalidWeights
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


def validate_weights(weights: Sequence[int]) -> None:
    """Check every weight is in (0, 1 WAD) and the vector sums to 1 WAD.

    Raises:
        InvalidWeights: If the sum is not exactly 1 WAD
        DomainError: If fewer than two weights, or a weight is out of range
    """
    if len(weights) < 2:
        raise DomainError(f"At least two weights are required, got {len(weights)}")
    total = sum(weights)
    if total != WAD:
        raise InvalidWeights(total)
    for i, w in enumerate(weights):
        if not 0 < w < WAD:
            raise DomainError(f"Weight at index {i} must be in range (0, 1e18), got {w}")


def check_lengths(reserves: Sequence[int], weights: Sequence[int]) -> None:
    if len(reserves) != len(weights):
        raise InvalidConfiguration(len(reserves), len(weights))


@dataclass(frozen=True)
class NTokenCurveParams:
    """Actualized N-token curve parameters.

    Attributes:
        weights: Weight per token, summing to 1 WAD
        swap_fee: Fee fraction in [0, 1 WAD)
    """

    weights: tuple[int, ...]
    swap_fee: int = 0

    def __post_init__(self) -> None:
        validate_weights(self.weights)


def compute_trading_function(
    reserves: Sequence[int], liquidity: int, params: NTokenCurveParams
) -> int:
    """Evaluate prod (r[i]/L)^w[i] - 1 as a signed WAD value.

    Raises:
        InvalidConfiguration: If reserves and weights differ in length
        DomainError: If liquidity is zero
    """
    check_lengths(reserves, params.weights)
    if liquidity <= 0:
        raise DomainError("Liquidity must be positive to evaluate the trading function")
    product = WAD
    for reserve, weight in zip(reserves, params.weights):
        product = mul_up(product, pow_wad(div_up(reserve, liquidity), weight))
    return product - WAD


def compute_l(reserves: Sequence[int], params: NTokenCurveParams) -> int:
    """Closed-form liquidity: r0 * prod_{i>0} (r[i]/r0)^w[i]."""
    check_lengths(reserves, params.weights)
    base = reserves[0]
    if base <= 0:
        raise DomainError("First reserve must be positive")
    liquidity = base
    for reserve, weight in zip(reserves[1:], params.weights[1:]):
        liquidity = mul_down(liquidity, pow_wad(div_down(reserve, base), weight))
    return liquidity


def compute_price(
    reserves: Sequence[int],
    params: NTokenCurveParams,
    token_index: int,
    numeraire_index: int | None = None,
) -> int:
    """Spot price of token ``token_index`` in units of the numeraire token.

    price = (w[i] * r[j]) / (w[j] * r[i]), j defaults to the last token.
    """
    check_lengths(reserves, params.weights)
    j = len(reserves) - 1 if numeraire_index is None else numeraire_index
    if reserves[token_index] <= 0:
        raise DomainError(f"Reserve at index {token_index} must be positive")
    scaled = mul_div_down(reserves[j], params.weights[token_index], params.weights[j])
    return div_down(scaled, reserves[token_index])


def compute_reserves_given_prices(
    amount_numeraire: int, prices: Sequence[int], params: NTokenCurveParams
) -> tuple[int, ...]:
    """Reserves that realize ``prices`` given the numeraire reserve.

    ``prices[i]`` is the price of token i in the numeraire (the last token),
    so r[i] = w[i] * r[n] / (w[n] * p[i]).
    """
    n = len(params.weights)
    if len(prices) != n - 1:
        raise InvalidConfiguration(len(prices) + 1, n)
    w_numeraire = params.weights[-1]
    reserves = []
    for price, weight in zip(prices, params.weights[:-1]):
        if price <= 0:
            raise DomainError("prices must be positive")
        reserves.append(div_down(mul_div_down(amount_numeraire, weight, w_numeraire), price))
    reserves.append(amount_numeraire)
    return tuple(reserves)


class NTokenG3MCurve(Curve[NTokenCurveParams]):
    """N-token G3M curve."""

    def trading_function(
        self, reserves: Sequence[int], liquidity: int, params: NTokenCurveParams
    ) -> int:
        return compute_trading_function(reserves, liquidity, params)

    def compute_l(self, reserves: Sequence[int], params: NTokenCurveParams) -> int:
        return compute_l(reserves, params)


NTOKEN_G3M_CURVE = NTokenG3MCurve()


def compute_initial_pool_data(
    amount_numeraire: int,
    prices: Sequence[int],
    params: NTokenCurveParams,
    config: EngineConfig | None = None,
) -> InitialPoolData:
    """Reserves and liquidity for a pool seeded with ``amount_numeraire`` at ``prices``."""
    reserves = compute_reserves_given_prices(amount_numeraire, prices, params)
    liquidity = NTOKEN_G3M_CURVE.solve_liquidity(reserves, params, config)
    invariant = compute_trading_function(reserves, liquidity, params)
    return InitialPoolData(reserves=reserves, liquidity=liquidity, invariant=invariant)
