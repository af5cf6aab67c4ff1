"""
Result processor that reports check results through the logging system.
"""

import logging

from availability_checker.contracts import ResultProcessor
from availability_checker.domain import CheckResult, Target

# Module logger
logger = logging.getLogger(__name__)


class LoggingResultProcessor(ResultProcessor):
    """Logs healthy targets at INFO and failing targets at WARNING."""

    async def process(self, target: Target, result: CheckResult) -> None:
        if result.is_ok:
            logger.info(
                f"Target {target.id} ({target.url}) is up: status {result.status} in {result.latency}ms"
            )
        else:
            logger.warning(
                f"Target {target.id} ({target.url}) is down: {result.result} "
                f"(status {result.status}, {result.latency}ms)"
            )

    async def flush(self) -> None:
        # Nothing is buffered
        pass
