"""Test configuration for pytest.

This module imports fixtures that should be available to all tests.
"""

# Import fixtures
from tests.fixtures.common import (  # noqa
    empty_flow,
    bullish_flow,
    sample_token,
    strong_holders,
    sniper_holder,
)
