"""
Unit test conftest.py for fintech-contract.

Unit tests never read the developer's environment or config/api.yaml.
"""

import pytest

from fintech_contract.config import clear_settings


@pytest.fixture(autouse=True)
def _isolated_settings():
    """Drop cached settings before and after each unit test."""
    clear_settings()
    yield
    clear_settings()
