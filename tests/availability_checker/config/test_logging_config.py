"""
Unit tests for the logging configuration module.

This module ensures that logging is configured from the bundled or custom
files, and that invalid configurations are rejected.

The tests follow the Arrange-Act-Assert (AAA) pattern.
"""

import json
import logging
import os

import pytest

from availability_checker.config.checker_context import CheckerContext
from availability_checker.config.logging_config import (
    _CheckerIdFilter,
    _get_local_package_file_path,
    _load_logging_config,
    configure_logging,
)


def make_context(logging_type: str, logging_config_file: str = "") -> CheckerContext:
    return CheckerContext(
        urls=[],
        checker_id="test-checker",
        logging_type=logging_type,
        logging_config_file=logging_config_file,
        worker_number=5,
        queue_size=10,
        connection_limit=10,
        locale="en",
        strategies_file="",
    )


@pytest.fixture(autouse=True)
def restore_logging():
    """Restores the root logger after each test, since dictConfig replaces its handlers."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    aiohttp_level = logging.getLogger("aiohttp").level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("aiohttp").setLevel(aiohttp_level)


@pytest.mark.parametrize("logging_type, level", [("dev", logging.DEBUG), ("prod", logging.INFO), ("PROD", logging.INFO)])
def test_configure_logging_should_load_the_bundled_configurations(logging_type, level) -> None:
    # Act
    configure_logging(make_context(logging_type))

    # Assert
    root = logging.getLogger()
    assert root.level == level
    assert root.handlers
    for handler in root.handlers:
        assert any(isinstance(f, _CheckerIdFilter) for f in handler.filters)


def test_configure_logging_should_tag_records_from_module_loggers(tmp_path) -> None:
    """
    Tests that records propagated from module loggers carry the checker id.
    """
    # Arrange
    log_file = tmp_path / "checker.log"
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"plain": {"format": "%(checker_id)s %(message)s"}},
        "handlers": {
            "file": {"class": "logging.FileHandler", "filename": str(log_file), "formatter": "plain"}
        },
        "root": {"level": "INFO", "handlers": ["file"]},
    }
    config_file = tmp_path / "logging.json"
    config_file.write_text(json.dumps(config))

    # Act
    configure_logging(make_context("custom", str(config_file)))
    logging.getLogger("availability_checker.cascade").info("hello")
    for handler in logging.getLogger().handlers:
        handler.flush()

    # Assert
    assert log_file.read_text().strip() == "test-checker hello"


@pytest.mark.parametrize(
    "logging_type, config_file, message",
    [
        ("", "", "must be provided"),
        ("custom", "", "Custom logging configuration file must be provided"),
        ("verbose", "", "Invalid logging type"),
    ],
)
def test_configure_logging_should_reject_invalid_settings(logging_type, config_file, message) -> None:
    with pytest.raises(ValueError, match=message):
        configure_logging(make_context(logging_type, config_file))


def test_load_logging_config_should_report_a_missing_file(tmp_path) -> None:
    with pytest.raises(RuntimeError, match="not found"):
        _load_logging_config(str(tmp_path / "missing.json"))


def test_load_logging_config_should_report_invalid_json(tmp_path) -> None:
    # Arrange
    config_file = tmp_path / "broken.json"
    config_file.write_text("{broken")

    # Act & Assert
    with pytest.raises(RuntimeError, match="Invalid JSON"):
        _load_logging_config(str(config_file))


def test_load_logging_config_should_report_an_invalid_configuration(tmp_path) -> None:
    # Arrange
    config_file = tmp_path / "invalid.json"
    config_file.write_text(json.dumps({"version": 99}))

    # Act & Assert
    with pytest.raises(RuntimeError, match="Error loading logging config"):
        _load_logging_config(str(config_file))


@pytest.mark.parametrize("name", ["logging-config-dev.json", "logging-config-prod.json"])
def test_bundled_configurations_should_exist(name) -> None:
    assert os.path.isfile(_get_local_package_file_path(name))


def test_checker_id_filter_should_tag_records() -> None:
    # Arrange
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "message", None, None)

    # Act
    kept = _CheckerIdFilter("checker-1").filter(record)

    # Assert
    assert kept is True
    assert record.checker_id == "checker-1"
