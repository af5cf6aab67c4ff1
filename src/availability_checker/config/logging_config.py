"""
Logging setup for the availability checker.

Logging is configured from a dictConfig JSON file: one of the two files
bundled with the package ('dev' and 'prod'), or a file supplied by the user
('custom'). Every record is then tagged with the checker id.
"""

import json
import logging.config
import os
from typing import Any, Dict

from availability_checker.config.checker_context import CheckerContext

BUNDLED_CONFIGS: Dict[str, str] = {
    "dev": "logging-config-dev.json",
    "prod": "logging-config-prod.json",
}
CUSTOM_LOGGING_TYPE = "custom"


def configure_logging(context: CheckerContext) -> None:
    """
    Configure logging from the logging type of the context.

    'dev' and 'prod' select a bundled file, 'custom' loads
    context.logging_config_file. The comparison is case insensitive.
    A filter setting 'checker_id' on each record is attached to every
    handler of the root logger.

    Args:
        context: Configuration context containing logging settings.

    Raises:
        ValueError: If the logging type is empty or unknown, or if the 'custom'
            type is selected without a configuration file.
        RuntimeError: If the configuration file cannot be loaded.
    """
    logging_type: str = context.logging_type.lower()
    if not logging_type:
        raise ValueError("Logging type must be provided.")

    if logging_type in BUNDLED_CONFIGS:
        config_file = _get_local_package_file_path(BUNDLED_CONFIGS[logging_type])
    elif logging_type == CUSTOM_LOGGING_TYPE:
        if not context.logging_config_file:
            raise ValueError("Custom logging configuration file must be provided.")
        config_file = context.logging_config_file
    else:
        allowed = ", ".join([*BUNDLED_CONFIGS, CUSTOM_LOGGING_TYPE])
        raise ValueError(f"Invalid logging type: {context.logging_type}. Allowed values are: {allowed}")

    _load_logging_config(config_file)

    # Handler filters also see records propagated from module loggers
    checker_filter = _CheckerIdFilter(checker_id=context.checker_id)
    for handler in logging.getLogger().handlers:
        handler.addFilter(checker_filter)

    logging.debug(f"Logging configured from {config_file}.")


def _load_logging_config(config_file: str) -> None:
    """
    Apply a dictConfig JSON file.

    Raises:
        RuntimeError: If the file is missing, is not valid JSON, or is
            rejected by dictConfig.
    """
    try:
        with open(config_file) as f:
            config: Dict[str, Any] = json.load(f)
        logging.config.dictConfig(config)
    except FileNotFoundError as err:
        raise RuntimeError(f"Logging config file not found: {config_file}") from err
    except json.JSONDecodeError as err:
        raise RuntimeError(f"Invalid JSON format in logging config file: {config_file}") from err
    except Exception as err:
        raise RuntimeError(f"Error loading logging config: {err}") from err


def _get_local_package_file_path(config_file: str) -> str:
    """Absolute path of a file shipped next to this module."""
    return os.path.join(os.path.dirname(__file__), config_file)


class _CheckerIdFilter(logging.Filter):
    """Sets the 'checker_id' attribute used by the bundled formats."""

    def __init__(self, checker_id: str) -> None:
        super().__init__()
        self._checker_id: str = checker_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.checker_id = self._checker_id
        return True
