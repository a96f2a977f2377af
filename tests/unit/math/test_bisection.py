"""Tests for the generic bisection root-finder."""

from dataclasses import dataclass

import pytest

from g3m.errors import DomainError
from g3m.math.bisection import BisectionResult, bisect


@dataclass(frozen=True)
class Line:
    """f(x) = intercept - slope * x."""

    intercept: int
    slope: int = 1


class LineEvaluator:
    def __init__(self) -> None:
        self.calls = 0

    def evaluate(self, context: Line, x: int) -> int:
        self.calls += 1
        return context.intercept - context.slope * x


class TestBisect:
    """Tests for bisect()."""

    def test_exact_root(self):
        """An integer root is found exactly."""
        result = bisect(Line(42), 0, 100, 0, 256, LineEvaluator())
        assert result == BisectionResult(root=42, root_value=0, last_lower_bound=41)

    def test_fractional_root_narrows_to_tolerance(self):
        """A root between integers leaves a bracket of width 1."""
        # f(x) = 85 - 2x has its root at 42.5
        result = bisect(Line(85, 2), 0, 100, 1, 256, LineEvaluator())
        assert result.root == 42
        assert result.root_value == 1
        assert result.last_lower_bound == 42

    def test_last_lower_bound_keeps_lower_sign(self):
        """The fallback bound evaluates with the sign of the original lower endpoint."""
        evaluator = LineEvaluator()
        result = bisect(Line(85, 2), 0, 100, 1, 256, evaluator)
        assert evaluator.evaluate(Line(85, 2), result.last_lower_bound) > 0

    def test_iteration_cap(self):
        """Running out of rounds returns the current state, not an error."""
        result = bisect(Line(42), 0, 100, 0, 2, LineEvaluator())
        # rounds: mid 50 -> upper, mid 25 -> lower
        assert result == BisectionResult(root=25, root_value=17, last_lower_bound=25)

    def test_zero_iterations(self):
        """With no rounds allowed the lower endpoint is reported."""
        result = bisect(Line(42), 0, 100, 0, 0, LineEvaluator())
        assert result == BisectionResult(root=0, root_value=42, last_lower_bound=0)

    def test_root_at_lower_endpoint(self):
        """A zero at the lower endpoint is returned without evaluating further."""
        evaluator = LineEvaluator()
        result = bisect(Line(10), 10, 50, 1, 256, evaluator)
        assert result.root == 10
        assert result.root_value == 0
        assert evaluator.calls == 1

    def test_root_at_upper_endpoint(self):
        """A zero at the upper endpoint is returned without bisecting."""
        result = bisect(Line(50), 10, 50, 1, 256, LineEvaluator())
        assert result.root == 50
        assert result.root_value == 0

    def test_increasing_function(self):
        """Bisection works for either direction of monotonicity."""
        # f(x) = x - 42
        result = bisect(Line(42, -1), 0, 100, 0, 256, _NegatedEvaluator())
        assert result.root == 42

    def test_same_sign_endpoints(self):
        """Endpoints that do not bracket a root are rejected."""
        with pytest.raises(DomainError, match="Root outside bounds"):
            bisect(Line(42), 50, 100, 1, 256, LineEvaluator())

    def test_inverted_bounds(self):
        """lower > upper is rejected."""
        with pytest.raises(DomainError):
            bisect(Line(42), 100, 0, 1, 256, LineEvaluator())

    def test_deterministic(self):
        """Identical inputs produce bit-identical results."""
        first = bisect(Line(10**21 + 7, 3), 0, 10**21, 1, 256, LineEvaluator())
        second = bisect(Line(10**21 + 7, 3), 0, 10**21, 1, 256, LineEvaluator())
        assert first == second


class _NegatedEvaluator:
    def evaluate(self, context: Line, x: int) -> int:
        return -(context.intercept + context.slope * x)
