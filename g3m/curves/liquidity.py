"""Liquidity correction solver.

Closed-form liquidity is only approximate in fixed point. The solver brackets
the exact root by stepping the approximation 0.1% at a time, then bisects it
down to a single wei.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

import structlog

from g3m.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from g3m.constants import BPS
from g3m.math.bisection import bisect
from g3m.math.fixed_point import mul_div_down, mul_div_up

from .base import Curve, LiquidityContext

logger = structlog.get_logger()

P = TypeVar("P")


def find_liquidity_bracket(
    curve: Curve[P],
    context: LiquidityContext[P],
    invariant: int,
    approximated_l: int,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> tuple[int, int]:
    """Expand around ``approximated_l`` until the invariant changes sign.

    A negative invariant means the guess over-claims, so ``lower`` shrinks
    until the invariant is non-negative. A positive one grows ``upper``
    until it is non-positive. Expansion stops after ``max_bracket_steps``.

    Returns:
        (lower, upper) bracket for the bisection solver
    """
    lower = approximated_l
    upper = approximated_l
    computed = invariant
    step = config.bracket_step_bps
    steps = 0

    if computed < 0:
        while computed < 0 and steps < config.max_bracket_steps:
            lower = mul_div_down(lower, BPS - step, BPS)
            steps += 1
            if lower == 0:
                break
            computed = curve.evaluate(context, lower)
    else:
        while computed > 0 and steps < config.max_bracket_steps:
            upper = mul_div_up(upper, BPS + step, BPS)
            steps += 1
            computed = curve.evaluate(context, upper)

    if steps >= config.max_bracket_steps:
        logger.warning(
            "liquidity_bracket_step_limit",
            approximated_l=approximated_l,
            lower=lower,
            upper=upper,
            steps=steps,
        )
    else:
        logger.debug(
            "liquidity_bracket_found",
            approximated_l=approximated_l,
            lower=lower,
            upper=upper,
            steps=steps,
        )
    return lower, upper


def correct_liquidity(
    curve: Curve[P],
    reserves: Sequence[int],
    invariant: int,
    approximated_l: int,
    params: P,
    config: EngineConfig | None = None,
) -> int:
    """Liquidity that zeroes the trading function, starting from a guess.

    If bisection lands on an exact root it is returned. Otherwise the last
    lower bound is returned: its invariant is non-negative, so the pool never
    claims more liquidity than the reserves back.

    Args:
        curve: Curve family to evaluate
        reserves: Reserve vector
        invariant: Trading function evaluated at ``approximated_l``
        approximated_l: Initial liquidity guess
        params: Actualized curve parameters
        config: Engine configuration (default: DEFAULT_ENGINE_CONFIG)

    Returns:
        Corrected liquidity

    Raises:
        DomainError: If no bracket could be established
    """
    config = config or DEFAULT_ENGINE_CONFIG
    context = LiquidityContext(reserves=tuple(reserves), target_invariant=0, params=params)

    lower, upper = find_liquidity_bracket(curve, context, invariant, approximated_l, config)
    result = bisect(
        context,
        lower,
        upper,
        config.bisection_tolerance,
        config.max_iterations,
        curve,
    )

    if result.root_value == 0:
        return result.root

    logger.debug(
        "liquidity_root_not_exact",
        root=result.root,
        root_value=result.root_value,
        using_lower_bound=result.last_lower_bound,
    )
    return result.last_lower_bound
