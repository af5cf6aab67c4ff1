"""
Entry point of the check engine.

This module wires the classifier, catalog, executor, cascade, fallback, and
formatter into one AvailabilityChecker. Its check method is the engine's only
public operation and never lets an exception escape to the caller.
"""

import logging
from typing import Optional

import aiohttp

from availability_checker.cascade import CascadeOrchestrator
from availability_checker.classifier import ErrorClassifier
from availability_checker.contracts import AttemptExecutor
from availability_checker.domain import CheckResult, ErrorKind, Target
from availability_checker.fetcher.aiohttp_executor import AiohttpAttemptExecutor
from availability_checker.formatter import ResultFormatter
from availability_checker.resolver import DnsFallbackResolver
from availability_checker.strategies import StrategyCatalog, default_catalog

# Module logger
logger = logging.getLogger(__name__)


class AvailabilityChecker:
    """
    Checks whether targets are reachable and healthy.

    The checker holds no per-check state, so a single instance can check
    many targets concurrently.
    """

    def __init__(
        self,
        executor: AttemptExecutor,
        catalog: Optional[StrategyCatalog] = None,
        formatter: Optional[ResultFormatter] = None,
    ) -> None:
        """
        Initializes the checker.

        Args:
            executor: Performs single request attempts.
            catalog: Strategies to try, in order. Defaults to the built-in catalog.
            formatter: Builds the final results. Defaults to English reasons.
        """
        self._formatter: ResultFormatter = formatter or ResultFormatter()
        self._resolver: DnsFallbackResolver = DnsFallbackResolver(
            CascadeOrchestrator(executor, catalog or default_catalog()),
            self._formatter,
        )

    @classmethod
    def with_session(
        cls,
        session: aiohttp.ClientSession,
        catalog: Optional[StrategyCatalog] = None,
        locale: str = "en",
        classifier: Optional[ErrorClassifier] = None,
    ) -> "AvailabilityChecker":
        """Builds a checker that performs its attempts through an aiohttp session."""
        return cls(
            AiohttpAttemptExecutor(session, classifier),
            catalog=catalog,
            formatter=ResultFormatter(locale),
        )

    async def check(self, target: Target) -> CheckResult:
        """
        Checks a single target.

        Args:
            target: The target to check.

        Returns:
            CheckResult: The outcome. Unexpected failures are reported as an
                unreachable result instead of being raised.
        """
        logger.debug(f"Starting check for target {target.id}: {target.url}")
        start_time = self._formatter.now()
        try:
            result = await self._resolver.resolve(target)
        except Exception as e:
            logger.exception(f"Check failed unexpectedly for target {target.id}: {target.url}")
            return self._formatter.format(
                0, ErrorKind.UNKNOWN, start_time, raw_message=str(e) or type(e).__name__, url=target.url
            )

        logger.debug(
            f"Checked {target.url} in {result.latency}ms with status {result.status}: {result.result}"
        )
        return result
