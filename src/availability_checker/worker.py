"""
Concurrent runner for a batch of checks.

This module provides the CheckWorker class, which checks many targets
concurrently by coordinating the checker and the result processor. It
implements a producer-consumer pattern with a bounded queue, so the number
of checks in flight never exceeds the number of executor tasks.
"""

import asyncio
import logging
from asyncio import Queue, Task
from typing import Iterable, List, Tuple

from .checker import AvailabilityChecker
from .contracts import ResultProcessor
from .domain import CheckResult, Target


class CheckWorker:
    """
    Checks a batch of targets using a pool of executor tasks.

    Each executor task takes a target from the queue, runs one complete check,
    and hands the result to the processor. Checks of different targets share
    nothing but the checker, which holds no per-check state.
    """

    def __init__(
        self,
        checker: AvailabilityChecker,
        processor: ResultProcessor,
        num_workers: int,
        queue_size: int,
    ) -> None:
        """
        Initializes a new CheckWorker instance.

        Args:
            checker: Performs the checks.
            processor: Component that consumes the results of checks.
            num_workers: Number of concurrent executor tasks to create.
            queue_size: Maximum size of the work queue before backpressure is applied.
        """
        if num_workers < 1:
            raise ValueError("At least one worker is required.")
        self._checker: AvailabilityChecker = checker
        self._processor: ResultProcessor = processor
        self._num_workers: int = num_workers
        self._queue_size: int = queue_size
        self._logger: logging.Logger = logging.getLogger(__name__)

    async def _executor(
        self,
        worker_num: int,
        queue: "Queue[Target]",
        results: List[Tuple[Target, CheckResult]],
    ) -> None:
        """
        Consumer task that checks targets from the queue.

        Args:
            worker_num: The identifier number of this executor task.
            queue: The shared work queue.
            results: Collects (target, result) pairs in completion order.

        Returns:
            None
        """
        worker_logger: logging.Logger = logging.getLogger(f"executor-{worker_num}")

        while True:
            try:
                # 1. Wait for an item from the queue
                target: Target = await queue.get()

                # 2. Check the target and hand the result over
                try:
                    result = await self._checker.check(target)
                    results.append((target, result))
                    await self._processor.process(target, result)
                except Exception as e:
                    worker_logger.exception(f"Pipeline failed for target {target.id} with error: {e}")

                # 3. Notify the queue that the item is done
                queue.task_done()

            except asyncio.CancelledError:
                worker_logger.debug("Stopping.")
                break

    async def run(self, targets: Iterable[Target]) -> List[Tuple[Target, CheckResult]]:
        """
        Checks every active target and waits for all checks to finish.

        Inactive targets are skipped. The processor is flushed once all
        checks are done.

        Args:
            targets: The targets to check.

        Returns:
            List[Tuple[Target, CheckResult]]: The results in completion order.
        """
        queue: "Queue[Target]" = Queue(maxsize=self._queue_size)
        results: List[Tuple[Target, CheckResult]] = []

        self._logger.info(f"Starting check run with {self._num_workers} workers.")

        # 1. Start all the consumer tasks in the background
        worker_tasks: List[Task] = [
            asyncio.create_task(self._executor(i + 1, queue, results))
            for i in range(self._num_workers)
        ]

        try:
            # 2. Produce; the queue applies backpressure when full
            for target in targets:
                if not target.is_active:
                    self._logger.debug(f"Skipping inactive target {target.id}")
                    continue
                await queue.put(target)

            # 3. Wait for all the pending checks
            await queue.join()
        finally:
            # 4. Cancel the consumers and wait for them to exit
            for task in worker_tasks:
                task.cancel()
            await asyncio.gather(*worker_tasks, return_exceptions=True)

            self._logger.info("Flushing results processor...")
            await self._processor.flush()

        self._logger.info(f"Check run complete: {len(results)} targets checked.")
        return results
