"""
Attempt executor implementation using the aiohttp library.

This module provides an implementation of the AttemptExecutor interface that
uses aiohttp to perform a single GET request under one strategy. It enforces
the strategy's hard timeout and classifies transport failures.
"""

import asyncio
import logging
from typing import Dict, Optional
from urllib.parse import urlsplit

import aiohttp

from availability_checker.classifier import ErrorClassifier
from availability_checker.contracts import AttemptExecutor
from availability_checker.domain import (
    AttemptOutcome,
    ClassifiedError,
    ErrorKind,
    HttpStatus,
    Strategy,
)

# Module logger
logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("http", "https")

# Headers aiohttp would otherwise add on its own
SKIP_AUTO_HEADERS = ("User-Agent", "Accept", "Accept-Encoding")


def build_headers(strategy: Strategy) -> Dict[str, str]:
    """
    Builds the request headers for a strategy.

    Args:
        strategy: The active strategy.

    Returns:
        Dict[str, str]: The strategy's headers plus the Connection header.
    """
    headers = dict(strategy.headers)
    headers["Connection"] = strategy.connection
    return headers


def _url_problem(url: str) -> Optional[str]:
    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError as e:
        return str(e)
    if parts.scheme.lower() not in SUPPORTED_SCHEMES:
        return f"Invalid URL scheme: {url!r}"
    if not host:
        return f"Invalid URL, no host: {url!r}"
    return None


class AiohttpAttemptExecutor(AttemptExecutor):
    """
    A concrete implementation of AttemptExecutor using aiohttp.

    It uses a shared aiohttp ClientSession. Each attempt owns its own
    timeout, and the response is released on every exit path before the
    next attempt starts.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        classifier: Optional[ErrorClassifier] = None,
    ) -> None:
        """
        Initializes the executor with a shared aiohttp ClientSession.

        Args:
            session: An active aiohttp.ClientSession to be used for requests.
            classifier: Maps transport errors to ErrorKind. Defaults to the
                built-in type and token tables.
        """
        self._session: aiohttp.ClientSession = session
        self._classifier: ErrorClassifier = classifier or ErrorClassifier()

    async def execute(self, url: str, strategy: Strategy) -> AttemptOutcome:
        """
        Issues one GET request to the URL under the given strategy.

        Args:
            url: The absolute URL to request.
            strategy: The strategy whose headers and timeout apply.

        Returns:
            AttemptOutcome: HttpStatus for any received response, otherwise a
                ClassifiedError. When aiohttp gives up on a redirect chain, the
                status of the last redirect response is returned.
        """
        problem = _url_problem(url)
        if problem is not None:
            return ClassifiedError(ErrorKind.INVALID_URL, problem)

        timeout: float = strategy.timeout.total_seconds()
        logger.debug(f"Attempting {url} with strategy '{strategy.name}' ({timeout}s)")

        try:
            # wait_for cancels the request when the budget is exhausted
            code = await asyncio.wait_for(self._get_status(url, strategy), timeout=timeout)
        except asyncio.TimeoutError:
            return ClassifiedError(
                ErrorKind.TIMEOUT, f"Strategy '{strategy.name}' timed out after {timeout}s"
            )
        except aiohttp.TooManyRedirects as e:
            # The last redirect response the transport received is the outcome
            if e.history:
                logger.debug(f"Redirect limit reached for {url} after {len(e.history)} responses")
                return HttpStatus(e.history[-1].status)
            return ClassifiedError(ErrorKind.PROTOCOL_ERROR, f"Too many redirects for {url}")
        except Exception as e:
            kind = self._classifier.classify(e)
            logger.debug(f"Attempt on {url} with strategy '{strategy.name}' failed: {kind.value}: {e!r}")
            return ClassifiedError(kind, str(e) or type(e).__name__)

        return HttpStatus(code)

    async def _get_status(self, url: str, strategy: Strategy) -> int:
        async with self._session.get(
            url,
            headers=build_headers(strategy),
            allow_redirects=True,
            skip_auto_headers=SKIP_AUTO_HEADERS,
        ) as response:
            return response.status
