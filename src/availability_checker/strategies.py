"""
Request strategy catalog.

This module defines the ordered, immutable list of request strategies the
cascade walks through, from the most standards-compliant and fastest persona
to the most permissive and slowest one. It also loads custom catalogs from a
JSON file.
"""

import json
import logging
from datetime import timedelta
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Tuple

from availability_checker.domain import Strategy

# Module logger
logger = logging.getLogger(__name__)

MODERN_BROWSER = Strategy(
    name="modern-browser",
    timeout=timedelta(seconds=3),
    headers={
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
        ),
        "Accept": (
            "text/html,application/xhtml+xml,application/xml;q=0.9,"
            "image/avif,image/webp,image/apng,*/*;q=0.8"
        ),
        "Accept-Language": "ko-KR,ko;q=0.9,en-US;q=0.8,en;q=0.7",
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
    },
    connection="keep-alive",
)

MOBILE_SAFARI = Strategy(
    name="mobile-safari",
    timeout=timedelta(seconds=7),
    headers={
        "User-Agent": (
            "Mozilla/5.0 (iPhone; CPU iPhone OS 17_3 like Mac OS X) AppleWebKit/605.1.15 "
            "(KHTML, like Gecko) Version/17.2 Mobile/15E148 Safari/604.1"
        ),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "ko-KR,ko;q=0.9",
    },
)

LEGACY_CURL = Strategy(
    name="legacy-curl",
    timeout=timedelta(seconds=12),
    headers={"User-Agent": "curl/8.6.0", "Accept": "*/*"},
)

MINIMAL = Strategy(name="minimal", timeout=timedelta(seconds=15), headers={})


class StrategyCatalog:
    """
    An ordered, immutable sequence of strategies.

    Order is retry priority. Timeouts must be strictly increasing so that the
    cheap strategies fail fast and the lenient ones are tried last.
    """

    def __init__(self, strategies: Iterable[Strategy]) -> None:
        """
        Validates and freezes the given strategies.

        Args:
            strategies: Strategies in the order they should be attempted.

        Raises:
            ValueError: If the catalog is empty, contains a non-positive
                timeout, or its timeouts are not strictly increasing.
        """
        frozen: List[Strategy] = []
        for strategy in strategies:
            if strategy.timeout <= timedelta(0):
                raise ValueError(f"Strategy '{strategy.name}' must have a positive timeout.")
            if frozen and strategy.timeout <= frozen[-1].timeout:
                raise ValueError(
                    f"Strategy '{strategy.name}' timeout must be greater than "
                    f"'{frozen[-1].name}' timeout."
                )
            frozen.append(strategy._replace(headers=MappingProxyType(dict(strategy.headers))))

        if not frozen:
            raise ValueError("A strategy catalog needs at least one strategy.")

        self._strategies: Tuple[Strategy, ...] = tuple(frozen)

    def __iter__(self) -> Iterator[Strategy]:
        return iter(self._strategies)

    def __len__(self) -> int:
        return len(self._strategies)

    def __getitem__(self, index: int) -> Strategy:
        return self._strategies[index]

    def __repr__(self) -> str:
        names = ", ".join(strategy.name for strategy in self._strategies)
        return f"StrategyCatalog([{names}])"

    @property
    def total_timeout(self) -> timedelta:
        """Upper bound of one full cascade run."""
        return sum((strategy.timeout for strategy in self._strategies), timedelta(0))


def default_catalog() -> StrategyCatalog:
    """
    Builds the built-in catalog.

    Returns:
        StrategyCatalog: modern-browser, mobile-safari, legacy-curl and minimal,
            with timeouts of 3, 7, 12 and 15 seconds.
    """
    return StrategyCatalog([MODERN_BROWSER, MOBILE_SAFARI, LEGACY_CURL, MINIMAL])


def load_strategies(path: str) -> StrategyCatalog:
    """
    Loads a strategy catalog from a JSON file.

    The file must hold a list of objects with a 'name', a 'timeout' in
    seconds, and optional 'headers' and 'connection' entries.

    Args:
        path: Path to the JSON file.

    Returns:
        StrategyCatalog: The validated catalog.

    Raises:
        ValueError: If the file is missing, not valid JSON, or describes an
            invalid catalog.
    """
    try:
        with open(path) as f:
            raw: Any = json.load(f)
    except FileNotFoundError as err:
        raise ValueError(f"Strategy file not found: {path}") from err
    except json.JSONDecodeError as err:
        raise ValueError(f"Invalid JSON format in strategy file: {path}") from err

    if not isinstance(raw, list):
        raise ValueError(f"Strategy file must contain a list of strategies: {path}")

    strategies = [_parse_strategy(entry, position) for position, entry in enumerate(raw)]
    catalog = StrategyCatalog(strategies)
    logger.info(f"Loaded {len(catalog)} strategies from {path}")
    return catalog


def _parse_strategy(entry: Dict[str, Any], position: int) -> Strategy:
    if not isinstance(entry, dict):
        raise ValueError(f"Strategy #{position} must be an object.")
    try:
        name = str(entry["name"])
        timeout = timedelta(seconds=float(entry["timeout"]))
    except KeyError as err:
        raise ValueError(f"Strategy #{position} is missing '{err.args[0]}'.") from err
    except (TypeError, ValueError) as err:
        raise ValueError(f"Strategy #{position} has an invalid timeout.") from err

    headers = entry.get("headers") or {}
    if not isinstance(headers, dict):
        raise ValueError(f"Strategy '{name}' headers must be an object.")

    return Strategy(
        name=name,
        timeout=timeout,
        headers={str(key): str(value) for key, value in headers.items()},
        connection=str(entry.get("connection", "close")),
    )
