"""Generic bisection root-finder.

The solver knows nothing about curves: it evaluates an ``Evaluable`` with an
opaque context and a candidate x, and halves the bracket on sign.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeVar

import structlog

from g3m.errors import DomainError

logger = structlog.get_logger()

C = TypeVar("C")
C_contra = TypeVar("C_contra", contravariant=True)


class Evaluable(Protocol[C_contra]):
    """Capability implemented by each curve family.

    ``evaluate`` must be a pure function of its arguments: the solver relies on
    identical inputs producing identical outputs.
    """

    def evaluate(self, context: C_contra, x: int) -> int: ...


@dataclass(frozen=True)
class BisectionResult:
    """Outcome of a bisection run.

    Attributes:
        root: Exact root if one was hit, otherwise the last midpoint evaluated
        root_value: Evaluation at ``root``
        last_lower_bound: Lower bound after the final round. Its value has the
            sign of the original lower endpoint (or is zero).
    """

    root: int
    root_value: int
    last_lower_bound: int


def _same_sign(a: int, b: int) -> bool:
    return (a > 0 and b > 0) or (a < 0 and b < 0)


def bisect(
    context: C,
    lower: int,
    upper: int,
    tolerance: int,
    max_iterations: int,
    evaluable: Evaluable[C],
) -> BisectionResult:
    """Find x in [lower, upper] where ``evaluable.evaluate(context, x)`` crosses zero.

    Each round evaluates ``mid = lower + (upper - lower) // 2``. An exact zero is
    returned immediately; otherwise the bound whose value shares the sign of
    ``mid`` moves to ``mid``. The loop ends once ``upper - lower <= tolerance``
    or after ``max_iterations`` rounds. Running out of rounds is not an error:
    callers fall back to ``last_lower_bound``.

    Args:
        context: Opaque bundle passed unmodified to every evaluation
        lower: Lower bound of the bracket
        upper: Upper bound of the bracket
        tolerance: Stop when the bracket is this narrow
        max_iterations: Hard cap on rounds
        evaluable: Object implementing ``evaluate(context, x)``

    Returns:
        BisectionResult with root, its value and the last lower bound

    Raises:
        DomainError: If lower > upper, or the endpoints do not bracket a root
    """
    if lower > upper:
        raise DomainError(f"Invalid bisection bounds: lower {lower} > upper {upper}")
    if tolerance < 0 or max_iterations < 0:
        raise DomainError("Bisection tolerance and max_iterations must be non-negative")

    lower_value = evaluable.evaluate(context, lower)
    if lower_value == 0:
        return BisectionResult(root=lower, root_value=0, last_lower_bound=lower)

    upper_value = evaluable.evaluate(context, upper)
    if upper_value == 0:
        return BisectionResult(root=upper, root_value=0, last_lower_bound=lower)

    if _same_sign(lower_value, upper_value):
        raise DomainError(
            f"Root outside bounds: f({lower}) = {lower_value}, f({upper}) = {upper_value}"
        )

    root = lower
    root_value = lower_value
    iterations = 0

    while upper - lower > tolerance and iterations < max_iterations:
        root = lower + (upper - lower) // 2
        root_value = evaluable.evaluate(context, root)
        iterations += 1

        if root_value == 0:
            return BisectionResult(root=root, root_value=0, last_lower_bound=lower)

        if _same_sign(root_value, lower_value):
            lower = root
        else:
            upper = root

    logger.debug(
        "bisection_finished",
        iterations=iterations,
        lower=lower,
        upper=upper,
        root=root,
        root_value=root_value,
    )
    return BisectionResult(root=root, root_value=root_value, last_lower_bound=lower)


__all__ = ["BisectionResult", "Evaluable", "bisect"]
