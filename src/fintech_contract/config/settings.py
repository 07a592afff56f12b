"""
Runtime settings for the API test suites.

Values are resolved in this order (first wins):
1. Environment variables
2. ``config/api.yaml`` in the current working directory (``api:`` mapping)
3. Built-in defaults
"""
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

API_MODE_IN_MEMORY = 'IN_MEMORY'
API_MODE_REMOTE = 'REMOTE'
API_MODES = (API_MODE_IN_MEMORY, API_MODE_REMOTE)

# Base URL used by the FastAPI TestClient
IN_MEMORY_BASE_URL = 'http://testserver'


@dataclass
class Settings:
    """Resolved configuration for one test run."""
    base_url: str = 'http://localhost:3030'
    api_mode: str = API_MODE_IN_MEMORY
    request_timeout: float = 30.0
    wait_timeout: float = 5.0
    test_user_email: str = 'user1@test.com'
    test_user_password: str = '123456789'
    report_dir: str = 'test-results'

    @property
    def is_remote(self) -> bool:
        return self.api_mode == API_MODE_REMOTE


# Setting name -> environment variable
ENV_VARS = {
    'base_url': 'API_BASE_URL',
    'api_mode': 'TEST_API_MODE',
    'request_timeout': 'API_TIMEOUT',
    'wait_timeout': 'API_WAIT_TIMEOUT',
    'test_user_email': 'TEST_USER_EMAIL',
    'test_user_password': 'TEST_USER_PASSWORD',
    'report_dir': 'TEST_REPORT_DIR',
}

_settings_cache: Optional[Settings] = None


def _load_yaml_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the ``api:`` mapping from config/api.yaml, or {} if there is none."""
    path = config_path or Path.cwd() / 'config' / 'api.yaml'
    if not path.exists():
        logger.debug(f"{path} not found, using environment and defaults")
        return {}

    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to read {path}: {e}", config_path=str(path))

    api_config = data.get('api', {})
    if not isinstance(api_config, dict):
        raise ConfigurationError(f"'api' in {path} must be a mapping", config_path=str(path))
    return api_config


def _coerce(name: str, raw: Any, target_type) -> Any:
    if target_type is float:
        try:
            return float(raw)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Setting '{name}' must be a number, got {raw!r}", setting_name=name)
    return str(raw)


def load_settings(config_path: Optional[Path] = None, environ: Optional[Dict[str, str]] = None) -> Settings:
    """Resolve settings from environment, YAML file and defaults.

    Raises:
        ConfigurationError: if the file is unreadable or a value is invalid
    """
    environ = os.environ if environ is None else environ
    file_values = _load_yaml_config(config_path)

    values = {}
    for f in fields(Settings):
        env_name = ENV_VARS[f.name]
        if environ.get(env_name):
            values[f.name] = _coerce(f.name, environ[env_name], f.type)
        elif f.name in file_values:
            values[f.name] = _coerce(f.name, file_values[f.name], f.type)

    settings = Settings(**values)
    settings.api_mode = settings.api_mode.strip().upper()
    if settings.api_mode not in API_MODES:
        raise ConfigurationError(
            f"Invalid TEST_API_MODE value: {settings.api_mode}. Use IN_MEMORY or REMOTE.",
            setting_name='api_mode',
        )

    logger.debug(f"Loaded settings: mode={settings.api_mode}, base_url={settings.base_url}")
    return settings


def get_settings() -> Settings:
    """Return the cached settings for this process, loading them on first use."""
    global _settings_cache

    if _settings_cache is None:
        _settings_cache = load_settings()
    return _settings_cache


def clear_settings() -> None:
    """Drop the cached settings so the next get_settings() reloads them."""
    global _settings_cache
    _settings_cache = None
