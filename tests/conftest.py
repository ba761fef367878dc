"""
Shared fixtures for the Parse schema SDK tests.
"""

import pytest

from parse_sdk.registry import reset_registry


@pytest.fixture(autouse=True)
def fresh_registry():
    """Each test starts with a newly created global registry."""
    reset_registry()
    yield
    reset_registry()
