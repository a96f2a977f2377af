"""Pytest configuration and fixtures."""

import pytest

from g3m.models.state import CallContext
from g3m.strategies import G3MStrategy, NTokenG3MStrategy
from tests.helpers.constants import CONTROLLER, ORCHESTRATOR
from tests.helpers.factories import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    """A clock frozen at START_TIME."""
    return FakeClock()


@pytest.fixture
def ctx() -> CallContext:
    """Call context of the orchestrator relaying the pool controller."""
    return CallContext(caller=ORCHESTRATOR, sender=CONTROLLER)


@pytest.fixture
def g3m_strategy(clock: FakeClock) -> G3MStrategy:
    """Empty two-token strategy driven by the test clock."""
    return G3MStrategy(ORCHESTRATOR, clock=clock)


@pytest.fixture
def ntoken_strategy(clock: FakeClock) -> NTokenG3MStrategy:
    """Empty N-token strategy driven by the test clock."""
    return NTokenG3MStrategy(ORCHESTRATOR, clock=clock)
