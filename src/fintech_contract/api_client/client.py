"""
Authenticated HTTP API client used by every test suite.

Owns a single reusable transport session bound to a base URL, applies the
default and bearer-token headers uniformly, and always hands back an
APIResponse regardless of status code.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional
from urllib.parse import urlencode

import requests

from .base_client import APITestClient
from .exceptions import LoginError, NotInitializedError
from .response import APIResponse

logger = logging.getLogger(__name__)

LOGIN_PATH = '/api/auth/login'
DEFAULT_HEADERS = {'Content-Type': 'application/json'}


@dataclass
class RequestDescriptor:
    """A single outgoing request, built per call and never persisted."""
    method: str
    path: str
    headers: Dict[str, str]
    body: Any = None


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def build_path(path: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Append URL-encoded query parameters to a path, keeping insertion order."""
    if not params:
        return path
    query = urlencode([(key, _query_value(value)) for key, value in params.items()])
    return f"{path}?{query}"


class APIClient(APITestClient):
    """HTTP transport wrapper with an embedded auth token.

    One instance per test. The session is acquired by initialize() and
    released by dispose(); the client can also be used as a context manager.

    Non-2xx responses are returned, never raised, so negative-path tests can
    inspect them. login() is the only call that raises on failure.
    """

    def __init__(self, base_url: str, default_headers: Optional[Dict[str, str]] = None,
                 session_factory: Optional[Callable[[], Any]] = None, timeout: float = 30.0):
        """Initialize with base URL for the API under test.

        Args:
            base_url: Base URL for the API (e.g., http://localhost:3030)
            default_headers: Optional headers included in all requests
            session_factory: Callable returning a transport session with a
                requests-style ``request(method, url, **kwargs)`` method.
                Defaults to ``requests.Session``.
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.default_headers = dict(default_headers or {})
        self.timeout = timeout
        self.auth_token: Optional[str] = None
        self._session_factory = session_factory or requests.Session
        self._session = None

    def __enter__(self):
        return self.initialize()

    def __exit__(self, exc_type, exc, tb):
        self.dispose()

    @property
    def is_initialized(self) -> bool:
        return self._session is not None

    def initialize(self) -> "APIClient":
        """Acquire the underlying transport session."""
        if self._session is None:
            self._session = self._session_factory()
            logger.debug(f"API client session opened for {self.base_url}")
        return self

    def dispose(self) -> None:
        """Release the transport session. Safe to call more than once."""
        if self._session is None:
            return
        session, self._session = self._session, None
        session.close()
        logger.debug(f"API client session closed for {self.base_url}")

    def set_auth_token(self, token: str) -> None:
        self.auth_token = token

    def logout(self) -> None:
        """Forget the token. The backend is not informed."""
        self.auth_token = None

    def is_authenticated(self) -> bool:
        return self.auth_token is not None

    def build_headers(self, additional_headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Merge default, auth and per-call headers; per-call headers win."""
        headers = dict(DEFAULT_HEADERS)
        headers.update(self.default_headers)
        if self.auth_token is not None:
            headers['Authorization'] = f'Bearer {self.auth_token}'
        if additional_headers:
            headers.update(additional_headers)
        return headers

    def _send(self, descriptor: RequestDescriptor, with_body: bool) -> APIResponse:
        if self._session is None:
            raise NotInitializedError()

        url = f"{self.base_url}{descriptor.path}"
        kwargs = {'headers': descriptor.headers, 'timeout': self.timeout}
        if with_body:
            kwargs['json'] = descriptor.body if descriptor.body is not None else {}

        logger.debug(f"{descriptor.method} {url}")
        raw = self._session.request(descriptor.method, url, **kwargs)
        response = APIResponse.from_transport(raw)
        logger.debug(f"{descriptor.method} {descriptor.path} -> {response.status_code}")
        return response

    def get(self, path, params=None):
        """Make GET request, appending ``params`` as a query string."""
        descriptor = RequestDescriptor('GET', build_path(path, params), self.build_headers())
        return self._send(descriptor, with_body=False)

    def post(self, path, data=None, headers=None):
        """Make POST request; an omitted body is sent as ``{}``."""
        descriptor = RequestDescriptor('POST', path, self.build_headers(headers), data)
        return self._send(descriptor, with_body=True)

    def put(self, path, data=None):
        """Make PUT request; an omitted body is sent as ``{}``."""
        descriptor = RequestDescriptor('PUT', path, self.build_headers(), data)
        return self._send(descriptor, with_body=True)

    def delete(self, path):
        """Make DELETE request."""
        descriptor = RequestDescriptor('DELETE', path, self.build_headers())
        return self._send(descriptor, with_body=False)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """Log in and keep the returned access token.

        Returns:
            The parsed login body.

        Raises:
            LoginError: if the status is not 2xx or no access_token came back
        """
        response = self.post(LOGIN_PATH, {
            'grant_type': 'password',
            'email': email,
            'password': password,
        })

        if response.ok:
            body = response.json()
            if isinstance(body, dict) and body.get('access_token'):
                self.set_auth_token(body['access_token'])
                logger.debug(f"Logged in as {email}")
                return body

        raise LoginError(response.status_code, response.reason)
