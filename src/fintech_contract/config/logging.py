"""
Centralized logging configuration.

Provides bootstrap_logging() so pytest, the invoke tasks and the stub backend
configure logging the same way, using Python's native INI format.
"""

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Optional

VALID_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

# Loggers that follow LOG_LEVEL even when logging.ini pins them
SPECIFIC_LOGGERS = [
    'fintech_contract.api_client',
    'fintech_contract.stub',
]


def _find_logging_config() -> Optional[Path]:
    """
    Find the logging configuration file.

    Looks for logging.ini in the current working directory, then config/.

    Returns:
        Path to logging configuration file, or None if not found.
    """
    for candidate in (Path('logging.ini'), Path('config/logging.ini')):
        if candidate.exists():
            return candidate
    return None


def _setup_environment_variables():
    """
    Set LOG_LEVEL to INFO if it is unset or invalid, so the INI file has a valid value.
    """
    if 'LOG_LEVEL' not in os.environ:
        os.environ['LOG_LEVEL'] = 'INFO'

    log_level = os.environ['LOG_LEVEL'].strip().upper()
    if log_level not in VALID_LEVELS:
        print(f"Warning: Invalid LOG_LEVEL '{log_level}', using INFO", file=sys.stderr)
        os.environ['LOG_LEVEL'] = 'INFO'


def _basic_config():
    logging.basicConfig(
        level=getattr(logging, os.environ.get('LOG_LEVEL', 'INFO').strip().upper(), logging.INFO),
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr
    )


def _apply_level_override():
    """Apply LOG_LEVEL to the root logger, its stream handlers and SPECIFIC_LOGGERS."""
    env_level = os.environ.get('LOG_LEVEL', '').strip().upper()
    if env_level not in VALID_LEVELS:
        return

    level = getattr(logging, env_level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        if isinstance(handler, logging.StreamHandler):
            handler.setLevel(level)
    for logger_name in SPECIFIC_LOGGERS:
        logging.getLogger(logger_name).setLevel(level)


def bootstrap_logging(name: Optional[str] = None) -> None:
    """
    Bootstrap logging configuration using Python's native INI format.

    1. Sets up LOG_LEVEL for INI file substitution
    2. Loads logging.ini with logging.config.fileConfig()
    3. Applies the LOG_LEVEL override after loading

    Falls back to basicConfig when no INI file exists or it cannot be loaded.

    Args:
        name: Optional name for the logger announcing the configuration
    """
    _setup_environment_variables()

    config_path = _find_logging_config()
    if config_path is None:
        _basic_config()
        _apply_level_override()
        return

    try:
        logging.config.fileConfig(
            str(config_path),
            defaults={'LOG_LEVEL': os.environ['LOG_LEVEL'].strip().upper()},
            disable_existing_loggers=False
        )
    except Exception as e:
        print(f"Warning: Failed to load logging config from {config_path}: {e}", file=sys.stderr)
        print("Using basic logging configuration", file=sys.stderr)
        _basic_config()

    _apply_level_override()
    logging.getLogger(name).debug(f"Logging configured from {config_path}")

