"""
Main entry point of the availability checker.

This module checks the URLs given on the command line. It sets up logging,
creates the HTTP session, the checker and the worker, writes one JSON line
per result to standard output, and exits with a non-zero code if any target
is down.
"""

import asyncio
import logging
import sys
from typing import List, Optional

import aiohttp

from availability_checker.checker import AvailabilityChecker
from availability_checker.config import CheckerContext, get_context
from availability_checker.config.http_config import get_http_session
from availability_checker.config.logging_config import configure_logging
from availability_checker.domain import Target
from availability_checker.processor.delegating_processor import DelegatingResultProcessor
from availability_checker.processor.jsonlines_processor import JsonLinesResultProcessor
from availability_checker.processor.logging_processor import LoggingResultProcessor
from availability_checker.strategies import StrategyCatalog, default_catalog, load_strategies
from availability_checker.worker import CheckWorker


def build_targets(urls: List[str]) -> List[Target]:
    """
    Turns command line URLs into targets.

    Args:
        urls: The URLs to check, in order.

    Returns:
        List[Target]: One active target per URL, numbered from 1.
    """
    return [Target(id=i + 1, url=url) for i, url in enumerate(urls)]


async def main(context: CheckerContext) -> int:
    """
    Check every URL of the context.

    Args:
        context: Configuration context containing all application settings.

    Returns:
        int: 0 if every target is up, 1 otherwise.
    """
    logger: logging.Logger = logging.getLogger(__name__)

    catalog: StrategyCatalog = (
        load_strategies(context.strategies_file) if context.strategies_file else default_catalog()
    )
    logger.info(f"Using {catalog}")

    http_session: aiohttp.ClientSession = get_http_session(context)
    logger.info("configured: http_session")

    try:
        checker = AvailabilityChecker.with_session(http_session, catalog=catalog, locale=context.locale)
        worker = CheckWorker(
            checker=checker,
            processor=DelegatingResultProcessor(
                [LoggingResultProcessor(), JsonLinesResultProcessor(sys.stdout)]
            ),
            num_workers=context.worker_number,
            queue_size=context.queue_size,
        )
        results = await worker.run(build_targets(context.urls))
    finally:
        logger.info("Shutting down resources...")
        await http_session.close()

    down = [target for target, result in results if not result.is_ok]
    logger.info(f"{len(results) - len(down)} up, {len(down)} down.")
    return 1 if down else 0


def run(argv: Optional[List[str]] = None) -> int:
    # Parse command-line arguments and environment variables
    context: CheckerContext = get_context(argv)

    # Configure logging based on the context
    configure_logging(context)

    if not context.urls:
        logging.error("No URLs to check.")
        return 2

    try:
        return asyncio.run(main(context))
    except KeyboardInterrupt:
        logging.info("Shutdown initiated by user (Ctrl+C).")
        return 130


if __name__ == "__main__":
    sys.exit(run())
