"""
API Client package for testing.

Provides consistent interface across unit and API test suites.
"""

from .base_client import APITestClient
from .client import APIClient, RequestDescriptor, build_path
from .concurrency import CallOutcome, fan_out, wait_for_response
from .exceptions import (
    APIClientError,
    LoginError,
    NotInitializedError,
    RequestTimeoutError,
    ResponseParseError,
)
from .response import APIResponse

__all__ = [
    'APITestClient',
    'APIClient',
    'APIResponse',
    'RequestDescriptor',
    'build_path',
    'CallOutcome',
    'fan_out',
    'wait_for_response',
    'APIClientError',
    'LoginError',
    'NotInitializedError',
    'RequestTimeoutError',
    'ResponseParseError',
]
