"""
Strategy cascade for a single URL.

This module provides the CascadeOrchestrator, which drives the strategy
catalog through an AttemptExecutor one attempt at a time and decides after
each attempt whether to stop or to advance to the next strategy.
"""

import logging
from typing import AbstractSet, Optional

from availability_checker.contracts import AttemptExecutor
from availability_checker.domain import CascadeOutcome, ClassifiedError, ErrorKind
from availability_checker.strategies import StrategyCatalog

# Module logger
logger = logging.getLogger(__name__)

# Statuses that some servers return to unfamiliar clients; another persona may succeed.
RETRYABLE_STATUSES: AbstractSet[int] = frozenset({400, 403, 405, 406, 412, 500, 502, 503, 504})

RETRYABLE_ERRORS: AbstractSet[ErrorKind] = frozenset(
    {
        ErrorKind.TIMEOUT,
        ErrorKind.CONNECTION_RESET,
        ErrorKind.CONNECTION_REFUSED,
        ErrorKind.HANG_UP,
        ErrorKind.PROTOCOL_ERROR,
    }
)


def is_success(status: int) -> bool:
    """
    Tells whether a status ends the cascade as a success.

    Args:
        status: An HTTP status code.

    Returns:
        bool: True for 2xx and 3xx statuses.
    """
    return 200 <= status < 400


class CascadeOrchestrator:
    """
    Runs the strategies of a catalog in order against one URL.

    Attempts are strictly sequential. The cascade stops at the first success
    or terminal failure; retryable outcomes advance to the next strategy.
    When the catalog is exhausted, the last observed outcome is reported.
    """

    def __init__(
        self,
        executor: AttemptExecutor,
        catalog: StrategyCatalog,
        retryable_statuses: AbstractSet[int] = RETRYABLE_STATUSES,
        retryable_errors: AbstractSet[ErrorKind] = RETRYABLE_ERRORS,
    ) -> None:
        """
        Initializes the orchestrator.

        Args:
            executor: Performs a single attempt.
            catalog: The ordered strategies to try.
            retryable_statuses: HTTP statuses that advance the cascade.
            retryable_errors: Error kinds that advance the cascade.
        """
        self._executor: AttemptExecutor = executor
        self._catalog: StrategyCatalog = catalog
        self._retryable_statuses: AbstractSet[int] = frozenset(retryable_statuses)
        self._retryable_errors: AbstractSet[ErrorKind] = frozenset(retryable_errors)

    async def run(self, url: str) -> CascadeOutcome:
        """
        Walks the catalog until success, terminal failure, or exhaustion.

        Args:
            url: The URL to check.

        Returns:
            CascadeOutcome: The terminal (status, error) pair of this run.
        """
        last_status = 0
        last_error: Optional[ErrorKind] = None
        last_message: Optional[str] = None
        attempts = 0

        for strategy in self._catalog:
            outcome = await self._executor.execute(url, strategy)
            attempts += 1

            if isinstance(outcome, ClassifiedError):
                if outcome.kind not in self._retryable_errors:
                    logger.debug(
                        f"Terminal error {outcome.kind.value} for {url} "
                        f"with strategy '{strategy.name}'"
                    )
                    return CascadeOutcome(0, outcome.kind, outcome.raw_message, attempts)

                last_error, last_message = outcome.kind, outcome.raw_message
                logger.info(
                    f"Strategy '{strategy.name}' encountered {outcome.kind.value} for {url}. Retrying..."
                )
                continue

            status = outcome.code
            if is_success(status):
                logger.debug(f"Strategy '{strategy.name}' succeeded for {url} with status {status}")
                return CascadeOutcome(status, None, None, attempts)

            if status not in self._retryable_statuses:
                logger.debug(f"Terminal status {status} for {url} with strategy '{strategy.name}'")
                return CascadeOutcome(status, None, None, attempts)

            last_status = status
            logger.info(f"Strategy '{strategy.name}' failed with status {status} for {url}. Retrying...")

        if last_status:
            return CascadeOutcome(last_status, None, None, attempts)
        return CascadeOutcome(0, last_error, last_message, attempts)
