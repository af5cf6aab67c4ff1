"""
Delegating result processor implementation.

This module provides a composite implementation of the ResultProcessor interface
that delegates processing to multiple child processors concurrently. It ensures
that failures in one processor don't affect the others.
"""

import asyncio
import logging
from typing import List

from availability_checker.contracts import ResultProcessor
from availability_checker.domain import CheckResult, Target

# Module logger
logger = logging.getLogger(__name__)


class DelegatingResultProcessor(ResultProcessor):
    """
    A concrete implementation of ResultProcessor that follows the Composite pattern.

    This class holds a list of other ResultProcessor instances and delegates the
    'process' and 'flush' calls to each of them concurrently. If one processor
    fails, the others are still executed.
    """

    def __init__(self, processors: List[ResultProcessor]) -> None:
        """
        Initializes the delegator with a list of processors to delegate to.

        Args:
            processors: A list of objects that adhere to the ResultProcessor interface.
        """
        self._processors: List[ResultProcessor] = processors

    async def _process_with_one(
        self, processor: ResultProcessor, target: Target, result: CheckResult
    ) -> None:
        try:
            await processor.process(target, result)
        except Exception as e:
            logger.exception(
                f"Processor '{type(processor).__name__}' failed for target {target.url} with error: {e}",
            )

    async def _flush_one(self, processor: ResultProcessor) -> None:
        try:
            await processor.flush()
        except Exception as e:
            logger.exception(f"Processor '{type(processor).__name__}' failed to flush: {e}")

    async def process(self, target: Target, result: CheckResult) -> None:
        """
        Processes a single CheckResult by delegating to all child processors.

        Args:
            target: The target that was checked.
            result: The result to be processed by all child processors.

        Returns:
            None
        """
        if not self._processors:
            return

        await asyncio.gather(
            *(self._process_with_one(processor, target, result) for processor in self._processors)
        )

    async def flush(self) -> None:
        """Flushes every child processor."""
        if not self._processors:
            return

        await asyncio.gather(*(self._flush_one(processor) for processor in self._processors))
