"""
Shared test doubles and fixtures.

The ScriptedExecutor replaces the network: each URL is given the list of
outcomes its successive attempts produce, and every call is recorded. The
LoopbackResolver lets real aiohttp requests reach 127.0.0.1 under any host name.
"""

import asyncio
import socket
from datetime import timedelta
from typing import Dict, List, Sequence, Tuple

import aiohttp
import pytest
import pytest_asyncio
from aiohttp.abc import AbstractResolver

from availability_checker.contracts import AttemptExecutor
from availability_checker.domain import AttemptOutcome, Strategy, Target
from availability_checker.strategies import StrategyCatalog


class ScriptedExecutor(AttemptExecutor):
    """An AttemptExecutor that replays scripted outcomes per URL."""

    def __init__(self, script: Dict[str, Sequence[AttemptOutcome]]) -> None:
        self._script: Dict[str, List[AttemptOutcome]] = {
            url: list(outcomes) for url, outcomes in script.items()
        }
        self.calls: List[Tuple[str, str]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def execute(self, url: str, strategy: Strategy) -> AttemptOutcome:
        self.calls.append((url, strategy.name))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            # Yield to the loop so overlapping attempts would be observable
            await asyncio.sleep(0)
            remaining = self._script.get(url)
            if not remaining:
                raise AssertionError(f"Unexpected attempt on {url} with {strategy.name}")
            return remaining.pop(0)
        finally:
            self.in_flight -= 1

    def urls(self) -> List[str]:
        return [url for url, _ in self.calls]


@pytest.fixture
def catalog() -> StrategyCatalog:
    """
    Creates a three strategy catalog for testing.

    Returns:
        StrategyCatalog: Strategies named first, second and third.
    """
    return StrategyCatalog(
        [
            Strategy("first", timedelta(seconds=1), {"User-Agent": "agent-1"}, "keep-alive"),
            Strategy("second", timedelta(seconds=2), {"User-Agent": "agent-2"}),
            Strategy("third", timedelta(seconds=3), {"User-Agent": "agent-3"}),
        ]
    )


@pytest.fixture
def sample_target() -> Target:
    """
    Creates a sample Target object for testing.

    Returns:
        Target: A Target object with test values.
    """
    return Target(id=1, url="http://example.org/x", name="Example", category="test")


@pytest.fixture
def make_executor():
    """
    Provides the ScriptedExecutor factory.

    Returns:
        Callable: Builds a ScriptedExecutor from a URL to outcomes mapping.
    """
    return ScriptedExecutor


class LoopbackResolver(AbstractResolver):
    """Resolves every host name to 127.0.0.1."""

    async def resolve(self, host, port=0, family=socket.AF_INET):
        return [
            {
                "hostname": host,
                "host": "127.0.0.1",
                "port": port,
                "family": socket.AF_INET,
                "proto": 0,
                "flags": socket.AI_NUMERICHOST,
            }
        ]

    async def close(self) -> None:
        pass


@pytest.fixture
def closed_port() -> int:
    """A local port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest_asyncio.fixture
async def loopback_connector():
    """
    Creates a connector that sends every request to 127.0.0.1.

    Yields:
        aiohttp.TCPConnector: The connector, closed after the test.
    """
    connector = aiohttp.TCPConnector(resolver=LoopbackResolver())
    yield connector
    await connector.close()
