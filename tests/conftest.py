"""
Pytest configuration and shared fixtures for merkletree tests.

This conftest.py:
1. Adds project root and tests root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from fixtures.broken import make_bytes_payloads  # noqa: E402
from fixtures.payments import GOLDEN_CASES, golden_case  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(params=GOLDEN_CASES, ids=lambda c: c.name)
def case(request):
    """Each golden payment case in turn."""
    return request.param


@pytest.fixture
def four_tx():
    """The four-payment golden case."""
    return golden_case("4 tx")


@pytest.fixture
def bytes_payloads():
    """Factory for n distinct BytesPayloads."""
    return make_bytes_payloads
