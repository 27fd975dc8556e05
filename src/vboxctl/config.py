"""
Configuration module for vboxctl

This module provides configuration settings for the application. Every
setting has a default so the tool runs without a configuration file; a
JSON file can override any of them.
"""

import os
import json
import logging
from typing import Dict, Any, Optional

from .error_handling import ConfigurationError

logger = logging.getLogger(__name__)

# Default configuration
CONFIG = {
    'VBOXMANAGE_BINARY': 'VBoxManage',
    'REQUIRED_COMMANDS': ['VBoxManage'],
    # Relative paths resolve against the working directory, like file targets
    'CACHE_FILE': 'vbox-manage.tmp',
    'LOG_FILE': 'vbox-manage.log',
    'MAX_LOG_FILE_SIZE': 10000000,
    'LOG_BACKUP_COUNT': 3,
    'LOG_LEVEL': 'INFO',
    'START_TYPE': 'headless',
    'COMMAND_TIMEOUT': None,
}

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

CONFIG_FILE = 'vbox-manage.json'


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from file

    Args:
        path: JSON file to overlay on the defaults; CONFIG_FILE when omitted

    Returns:
        Dict[str, Any]: Configuration dictionary
    """
    config = dict(CONFIG)
    config_path = path or CONFIG_FILE

    if not os.path.exists(config_path):
        if path:
            raise ConfigurationError(
                f"Configuration file {config_path} not found",
                code="VBOX-E201",
                suggestions=["Check the path given to --config"]
            )
        logger.debug(f"Configuration file {config_path} not found, using defaults")
        return config

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            user_config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Failed to load configuration from {config_path}: {e}",
            code="VBOX-E201",
            original_exception=e
        ) from e

    if not isinstance(user_config, dict):
        raise ConfigurationError(
            f"Configuration file {config_path} must contain a JSON object",
            code="VBOX-E201"
        )

    config.update(user_config)
    _validate(config)
    logger.info(f"Loaded configuration from {config_path}")
    return config


def _validate(config: Dict[str, Any]) -> None:
    size = config.get('MAX_LOG_FILE_SIZE')
    if not isinstance(size, int) or isinstance(size, bool) or size < 1:
        raise ConfigurationError("MAX_LOG_FILE_SIZE must be an integer >= 1")

    backups = config.get('LOG_BACKUP_COUNT')
    if not isinstance(backups, int) or isinstance(backups, bool) or backups < 1:
        raise ConfigurationError("LOG_BACKUP_COUNT must be an integer >= 1")

    timeout = config.get('COMMAND_TIMEOUT')
    if timeout is not None and (not isinstance(timeout, (int, float)) or timeout <= 0):
        raise ConfigurationError("COMMAND_TIMEOUT must be a positive number or null")

    required = config.get('REQUIRED_COMMANDS')
    if not isinstance(required, list) or not all(isinstance(r, str) for r in required):
        raise ConfigurationError("REQUIRED_COMMANDS must be a list of executable names")

    level = config.get('LOG_LEVEL')
    if level not in LOG_LEVELS:
        raise ConfigurationError(
            f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, not {level!r}",
            suggestions=["Level names are upper case, e.g. \"DEBUG\""],
        )

    for key in ('VBOXMANAGE_BINARY', 'CACHE_FILE', 'LOG_FILE', 'START_TYPE'):
        value = config.get(key)
        if not isinstance(value, str) or not value:
            raise ConfigurationError(f"{key} must be a non-empty string")
