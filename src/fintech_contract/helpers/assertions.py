"""
Response assertion helpers.

Every test observes success or failure through these helpers: assert the
status, make sure the body is real JSON, and hand the parsed body back.
A mismatch raises AssertionError, which fails the current test only.
A body that is not JSON raises ResponseParseError instead.
"""
import random
import string
import time
from typing import Any, Callable, Iterable, List, Optional

from ..api_client.concurrency import wait_for_response
from ..api_client.response import APIResponse
from ..data.test_data import RESPONSE_CODES


def _check_status(response: APIResponse, expected_status: int) -> None:
    if response.status_code != expected_status:
        raise AssertionError(
            f"Expected status {expected_status}, got {response.status_code}: {response.text[:500]}"
        )


def _parsed_body(response: APIResponse) -> Any:
    body = response.json()
    if body is None:
        raise AssertionError(f"Response body (status {response.status_code}) is JSON null")
    return body


def _missing_fields(obj: Any, fields: Iterable[str]) -> List[str]:
    if not isinstance(obj, dict):
        return list(fields)
    return [name for name in fields if name not in obj]


class TestHelpers:
    """Static assertion and data helpers shared by all API tests."""

    # Not a test class, keep pytest from collecting it
    __test__ = False

    @staticmethod
    def expect_success_response(response: APIResponse, expected_status: int = RESPONSE_CODES['SUCCESS']) -> Any:
        """Assert the status code and a non-null JSON body; return the body."""
        _check_status(response, expected_status)
        return _parsed_body(response)

    @staticmethod
    def expect_error_response(response: APIResponse, expected_status: int) -> Any:
        """Same checks as expect_success_response, named for negative-path tests."""
        _check_status(response, expected_status)
        return _parsed_body(response)

    @staticmethod
    def validate_response_structure(response: APIResponse, required_fields: Iterable[str]) -> Any:
        """Assert that each named field is present on the body object."""
        body = response.json()
        missing = _missing_fields(body, required_fields)
        if missing:
            raise AssertionError(f"Response body is missing fields {missing}: {body!r}")
        return body

    @staticmethod
    def validate_array_response(response: APIResponse, item_fields: Optional[Iterable[str]] = None,
                                items_key: Optional[str] = None) -> list:
        """Assert the body is a JSON array and return it.

        Args:
            response: Response to validate
            item_fields: Fields the first item must carry (checked only when
                the array is non-empty)
            items_key: Read the array from this key of an object body, for
                envelopes such as ``{"wallets": [...]}``
        """
        body = response.json()
        items = body
        if items_key is not None:
            if not isinstance(body, dict) or items_key not in body:
                raise AssertionError(f"Response body has no '{items_key}' key: {body!r}")
            items = body[items_key]

        if not isinstance(items, list):
            raise AssertionError(f"Expected a JSON array, got {type(items).__name__}: {items!r}")

        if item_fields and items:
            missing = _missing_fields(items[0], item_fields)
            if missing:
                raise AssertionError(f"First item is missing fields {missing}: {items[0]!r}")

        return items

    @staticmethod
    def wait_for_response(call: Callable[[], APIResponse], timeout: float = 5.0) -> APIResponse:
        """Race a call against a timer; see api_client.concurrency.wait_for_response."""
        return wait_for_response(call, timeout)

    @staticmethod
    def generate_random_email() -> str:
        return f"testuser{int(time.time() * 1000)}{random.randint(0, 999)}@test.com"

    @staticmethod
    def generate_random_phone_number() -> str:
        return f"+65{random.randint(10000000, 99999999)}"

    @staticmethod
    def generate_random_string(length: int = 10) -> str:
        chars = string.ascii_letters + string.digits
        return ''.join(random.choice(chars) for _ in range(length))
