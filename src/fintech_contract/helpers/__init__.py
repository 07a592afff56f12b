"""Assertion and validation helpers for API tests."""

from .assertions import TestHelpers
from .validation import ValidationHelpers

__all__ = ['TestHelpers', 'ValidationHelpers']
