"""
Unit tests for the strategy catalog.

The tests follow the Arrange-Act-Assert (AAA) pattern.
"""

import json
from datetime import timedelta

import pytest

from availability_checker.domain import Strategy
from availability_checker.strategies import StrategyCatalog, default_catalog, load_strategies


def test_default_catalog_should_order_strategies_by_increasing_timeout() -> None:
    # Act
    catalog = default_catalog()

    # Assert
    assert [strategy.name for strategy in catalog] == [
        "modern-browser",
        "mobile-safari",
        "legacy-curl",
        "minimal",
    ]
    assert [strategy.timeout.total_seconds() for strategy in catalog] == [3, 7, 12, 15]
    assert catalog.total_timeout == timedelta(seconds=37)


def test_default_catalog_should_give_each_strategy_a_distinct_signature() -> None:
    # Act
    catalog = default_catalog()

    # Assert
    assert catalog[0].headers["User-Agent"].startswith("Mozilla/5.0 (Windows NT 10.0")
    assert "iPhone" in catalog[1].headers["User-Agent"]
    assert dict(catalog[2].headers) == {"User-Agent": "curl/8.6.0", "Accept": "*/*"}
    assert dict(catalog[3].headers) == {}
    assert catalog[0].connection == "keep-alive"
    assert all(strategy.connection == "close" for strategy in list(catalog)[1:])


def test_catalog_should_freeze_headers() -> None:
    """
    Tests that headers of a cataloged strategy cannot be modified.
    """
    # Arrange
    headers = {"User-Agent": "standard"}
    catalog = StrategyCatalog([Strategy("only", timedelta(seconds=1), headers)])

    # Act
    headers["User-Agent"] = "changed"

    # Assert
    assert catalog[0].headers["User-Agent"] == "standard"
    with pytest.raises(TypeError):
        catalog[0].headers["User-Agent"] = "changed"  # type: ignore[index]


@pytest.mark.parametrize(
    "timeouts",
    [
        [2, 1],
        [1, 1],
        [0],
        [-1, 2],
    ],
)
def test_catalog_should_reject_invalid_timeouts(timeouts) -> None:
    # Arrange
    strategies = [
        Strategy(f"s{i}", timedelta(seconds=timeout), {}) for i, timeout in enumerate(timeouts)
    ]

    # Act & Assert
    with pytest.raises(ValueError):
        StrategyCatalog(strategies)


def test_catalog_should_reject_an_empty_list() -> None:
    with pytest.raises(ValueError, match="at least one strategy"):
        StrategyCatalog([])


def test_catalog_should_support_len_and_repr(catalog) -> None:
    assert len(catalog) == 3
    assert repr(catalog) == "StrategyCatalog([first, second, third])"


def test_load_strategies_should_read_a_json_catalog(tmp_path) -> None:
    """
    Tests that a strategy file is parsed into a validated catalog.
    """
    # Arrange
    path = tmp_path / "strategies.json"
    path.write_text(
        json.dumps(
            [
                {"name": "fast", "timeout": 0.5, "headers": {"User-Agent": "fast/1"}},
                {"name": "slow", "timeout": 2, "connection": "keep-alive"},
            ]
        )
    )

    # Act
    catalog = load_strategies(str(path))

    # Assert
    assert [strategy.name for strategy in catalog] == ["fast", "slow"]
    assert catalog[0].timeout == timedelta(milliseconds=500)
    assert dict(catalog[0].headers) == {"User-Agent": "fast/1"}
    assert catalog[0].connection == "close"
    assert dict(catalog[1].headers) == {}
    assert catalog[1].connection == "keep-alive"


@pytest.mark.parametrize(
    "content, message",
    [
        ("{not json", "Invalid JSON"),
        (json.dumps({"name": "x"}), "must contain a list"),
        (json.dumps([{"timeout": 1}]), "missing 'name'"),
        (json.dumps([{"name": "x", "timeout": "soon"}]), "invalid timeout"),
        (json.dumps([{"name": "x", "timeout": 1, "headers": ["a"]}]), "headers must be an object"),
        (json.dumps(["x"]), "must be an object"),
        (json.dumps([{"name": "a", "timeout": 2}, {"name": "b", "timeout": 1}]), "must be greater"),
    ],
)
def test_load_strategies_should_reject_invalid_files(tmp_path, content, message) -> None:
    # Arrange
    path = tmp_path / "strategies.json"
    path.write_text(content)

    # Act & Assert
    with pytest.raises(ValueError, match=message):
        load_strategies(str(path))


def test_load_strategies_should_report_a_missing_file(tmp_path) -> None:
    with pytest.raises(ValueError, match="not found"):
        load_strategies(str(tmp_path / "missing.json"))
