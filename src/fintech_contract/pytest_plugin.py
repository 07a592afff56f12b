"""
Pytest plugin supplying API client sessions to the test suites.

Every test gets its own APIClient, so auth state is never shared between
tests or parallel workers. The client is disposed on every teardown path,
including after assertion failures.

The api mode decides what the client talks to:
- IN_MEMORY: a fresh stub backend per test, through FastAPI's TestClient
- REMOTE: the real backend at the configured base URL, through requests
"""

import dataclasses
import logging

import pytest
from fastapi.testclient import TestClient

from fintech_contract.api_client import APIClient
from fintech_contract.config import (
    API_MODE_IN_MEMORY,
    IN_MEMORY_BASE_URL,
    ConfigurationError,
    get_settings,
)
from fintech_contract.stub import StubBackend
from fintech_contract.stub.store import SEED_USER

logger = logging.getLogger(__name__)


def pytest_addoption(parser):
    """Add custom command line options for pytest."""
    group = parser.getgroup("fintech-contract")
    group.addoption(
        "--api-url",
        action="store",
        default=None,
        help="Base URL of the backend under test (implies --api-mode=REMOTE)"
    )
    group.addoption(
        "--api-mode",
        action="store",
        default=None,
        choices=["IN_MEMORY", "REMOTE"],
        help="Run API tests against the in-memory stub or a remote backend"
    )


@pytest.fixture(scope="session")
def api_settings(request):
    """Resolved settings with command line overrides applied."""
    try:
        settings = get_settings()
    except ConfigurationError as e:
        pytest.skip(f"API tests require a valid configuration: {e.guidance}")

    overrides = {}
    api_url = request.config.getoption("--api-url")
    api_mode = request.config.getoption("--api-mode")
    if api_url:
        overrides['base_url'] = api_url
        overrides['api_mode'] = 'REMOTE'
    if api_mode:
        overrides['api_mode'] = api_mode

    if overrides:
        settings = dataclasses.replace(settings, **overrides)
    logger.debug(f"API tests running in {settings.api_mode} mode against {settings.base_url}")
    return settings


@pytest.fixture
def stub_backend(api_settings):
    """Fresh stub backend for this test, or None in REMOTE mode."""
    if api_settings.api_mode != API_MODE_IN_MEMORY:
        return None

    return StubBackend()


def _build_client(api_settings, stub_backend) -> APIClient:
    if stub_backend is None:
        return APIClient(api_settings.base_url, timeout=api_settings.request_timeout)

    app = stub_backend.app
    return APIClient(
        IN_MEMORY_BASE_URL,
        session_factory=lambda: TestClient(app, raise_server_exceptions=False),
        timeout=api_settings.request_timeout,
    )


@pytest.fixture
def api_client(api_settings, stub_backend):
    """Initialized, unauthenticated API client; disposed after the test."""
    client = _build_client(api_settings, stub_backend)
    client.initialize()
    try:
        yield client
    finally:
        client.dispose()


@pytest.fixture
def test_user(api_settings, stub_backend):
    """Credentials of the account the suites log in with."""
    if stub_backend is not None:
        return dict(SEED_USER)
    return {
        'email': api_settings.test_user_email,
        'password': api_settings.test_user_password,
    }


@pytest.fixture
def authenticated_client(api_client, test_user):
    """API client already logged in as the test user."""
    api_client.login(test_user['email'], test_user['password'])
    return api_client


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """Add skip summary with guidance to the terminal output."""
    if not terminalreporter.stats.get('skipped'):
        return

    terminalreporter.write_sep("=", "SKIP SUMMARY")
    terminalreporter.write_line("")

    # Group skipped tests by reason
    skip_reasons = {}
    for report in terminalreporter.stats['skipped']:
        longrepr = getattr(report, 'longrepr', None)
        reason = longrepr[2] if isinstance(longrepr, tuple) and len(longrepr) == 3 else str(longrepr)
        skip_reasons.setdefault(reason, []).append(report.nodeid)

    for reason, test_ids in skip_reasons.items():
        terminalreporter.write_line(f"❌ {len(test_ids)} tests skipped:")
        for line in str(reason).split('\n'):
            terminalreporter.write_line(line)
        terminalreporter.write_line("")
