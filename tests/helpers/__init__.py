"""Test helpers module for shared test utilities.

- constants: caller identities and common amounts
- factories: init data and update payload factory functions
- quotes: swap output quoting by bisection
"""

from tests.helpers.constants import CONTROLLER, ORCHESTRATOR, START_TIME, WAD
from tests.helpers.factories import (
    FakeClock,
    make_controller_update,
    make_g3m_init_data,
    make_ntoken_init_data,
    make_swap_fee_update,
    make_weights_update,
)
from tests.helpers.quotes import quote_amount_out

__all__ = [
    # Constants
    "CONTROLLER",
    "ORCHESTRATOR",
    "START_TIME",
    "WAD",
    # Factories
    "FakeClock",
    "make_g3m_init_data",
    "make_ntoken_init_data",
    "make_swap_fee_update",
    "make_weights_update",
    "make_controller_update",
    # Quotes
    "quote_amount_out",
]
