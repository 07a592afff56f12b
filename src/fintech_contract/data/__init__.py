"""Static fixture tables for the API suites."""

from .test_data import API_ENDPOINTS, RESPONSE_CODES, SUPPORTED_ASSETS, TEST_DATA, TEST_USERS

__all__ = ['API_ENDPOINTS', 'RESPONSE_CODES', 'SUPPORTED_ASSETS', 'TEST_DATA', 'TEST_USERS']
