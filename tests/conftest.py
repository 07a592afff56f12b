"""
Root pytest configuration for fintech-contract.

Bootstraps logging for every suite. API fixtures (api_client,
authenticated_client, test_user) come from the fintech_contract pytest plugin.
"""

from fintech_contract.config.logging import bootstrap_logging

# pytester runs the plugin's fixtures in isolated sessions
pytest_plugins = ["pytester"]

bootstrap_logging('tests')
