"""
Configuration for the API test suites: settings and logging.
"""

from .exceptions import ConfigurationError
from .settings import (
    API_MODE_IN_MEMORY,
    API_MODE_REMOTE,
    IN_MEMORY_BASE_URL,
    Settings,
    clear_settings,
    get_settings,
    load_settings,
)

__all__ = [
    'ConfigurationError',
    'API_MODE_IN_MEMORY',
    'API_MODE_REMOTE',
    'IN_MEMORY_BASE_URL',
    'Settings',
    'clear_settings',
    'get_settings',
    'load_settings',
]
