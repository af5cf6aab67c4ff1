"""
Unit tests for the HTTP client configuration module.

The tests follow the Arrange-Act-Assert (AAA) pattern.
"""

import aiohttp
import pytest

from availability_checker.config.checker_context import CheckerContext
from availability_checker.config.http_config import get_http_session


@pytest.fixture
def context() -> CheckerContext:
    return CheckerContext(
        urls=[],
        checker_id="test-checker",
        logging_type="dev",
        logging_config_file="",
        worker_number=5,
        queue_size=10,
        connection_limit=7,
        locale="en",
        strategies_file="",
    )


@pytest.mark.asyncio
async def test_get_http_session_should_apply_the_connection_limit(context) -> None:
    # Act
    session = get_http_session(context)

    try:
        # Assert
        assert isinstance(session, aiohttp.ClientSession)
        assert session.connector.limit == 7
        assert isinstance(session.cookie_jar, aiohttp.DummyCookieJar)
    finally:
        await session.close()
