"""
HTTP client configuration module for the availability checker.

This module provides functionality to create the aiohttp client session shared
by all attempts of a run.
"""

import logging

import aiohttp

from availability_checker.config.checker_context import CheckerContext

# Module logger
logger = logging.getLogger(__name__)


def get_http_session(context: CheckerContext) -> aiohttp.ClientSession:
    """
    Create an HTTP client session based on the provided configuration.

    The session is shared by all checks. Cookies are not kept between
    attempts, so every attempt starts from the same client state.

    Args:
        context: Configuration context containing HTTP client settings.

    Returns:
        aiohttp.ClientSession: A configured HTTP client session.
    """
    connector = aiohttp.TCPConnector(limit=context.connection_limit)
    logger.debug(f"Creating HTTP session with a connection limit of {context.connection_limit}")
    return aiohttp.ClientSession(connector=connector, cookie_jar=aiohttp.DummyCookieJar())
