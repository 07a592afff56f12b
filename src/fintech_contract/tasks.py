"""
Test runner tasks.

Runs the configured suites with pytest and writes a JUnit XML report per
suite under the report directory.

Examples:
    inv test unit
    inv test api --api-mode=REMOTE --api-url=http://20.188.112.117:3030
    inv test api --test-name="topup"
"""

import logging
import subprocess
import sys
from pathlib import Path
from typing import List

import yaml
from invoke import task

from fintech_contract.config import ConfigurationError, get_settings
from fintech_contract.config.logging import bootstrap_logging

bootstrap_logging()
logger = logging.getLogger(__name__)

TESTS_YAML = Path(__file__).parent / "config" / "tests.yaml"


def _get_test_paths(suite: str) -> List[str]:
    """Get test paths for a suite from tests.yaml."""
    try:
        with open(TESTS_YAML, 'r') as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        print(f"⚠️  Failed to load test paths for '{suite}': {e}", file=sys.stderr)
        return []

    return config.get('suites', {}).get(suite, {}).get('tests', [])


def build_pytest_command(suite: str, test_paths: List[str], report_dir: str, api_url=None,
                         api_mode=None, verbose=False, test_name=None) -> List[str]:
    """Build the pytest command line for a suite."""
    cmd = [sys.executable, "-m", "pytest", "--tb=short", "--strict-markers"]

    report_path = Path(report_dir) / f"{suite}-results.xml"
    cmd.append(f"--junitxml={report_path}")

    if api_url:
        cmd.extend(["--api-url", api_url])
    if api_mode:
        cmd.extend(["--api-mode", api_mode])
    if verbose:
        cmd.append("-v")
    if test_name:
        cmd.extend(["-k", test_name])

    cmd.extend(test_paths)
    return cmd


@task(help={
    'suite': 'Test suite to run (unit, api, all)',
    'api_url': 'Base URL of the backend under test (implies REMOTE mode)',
    'api_mode': 'IN_MEMORY or REMOTE',
    'verbose': 'Enable verbose output',
    'test_name': 'Filter to matching tests (passed to pytest -k)',
})
def test(ctx, suite, api_url=None, api_mode=None, verbose=False, test_name=None):
    """
    Run tests for a specific suite.
    """
    test_paths = [p for p in _get_test_paths(suite) if (Path.cwd() / p).exists()]
    if not test_paths:
        print(f"❌ No valid test paths found for suite '{suite}'")
        sys.exit(1)

    try:
        settings = get_settings()
    except ConfigurationError as e:
        print(e.guidance, file=sys.stderr)
        sys.exit(1)

    cmd = build_pytest_command(suite, test_paths, settings.report_dir, api_url=api_url,
                               api_mode=api_mode, verbose=verbose, test_name=test_name)
    logger.debug(f"Running: {' '.join(cmd)}")

    # Subprocess so the pytest plugin is loaded from the installed entry point
    result = subprocess.run(cmd, cwd=Path.cwd())
    if result.returncode == 0:
        print("✅ All tests passed!")
    else:
        print(f"❌ Tests failed with exit code {result.returncode}")
    sys.exit(result.returncode)
