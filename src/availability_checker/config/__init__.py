"""
Configuration module for the availability checker.

This module provides functionality to parse command-line arguments and environment
variables to create a configuration context for a checker run. It defines
default values and help text for all configurable parameters.
"""

import argparse
import os
from typing import Any, List, Optional
from uuid import uuid4

from availability_checker.config.checker_context import CheckerContext
from availability_checker.config.constants import (
    DEFAULT_CHECKER_ID_PREFIX,
    DEFAULT_CONNECTION_LIMIT,
    DEFAULT_LOCALE,
    DEFAULT_LOGGING_CONFIG_FILE,
    DEFAULT_LOGGING_TYPE,
    DEFAULT_QUEUE_SIZE,
    DEFAULT_STRATEGIES_FILE,
    DEFAULT_WORKER_NUMBER,
)


def _split_urls(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [url for url in value.replace(",", " ").split() if url]


def get_context(argv: Optional[List[str]] = None) -> CheckerContext:
    """
    Parse command-line arguments and environment variables to create a configuration context.

    For each option, it first checks for a command-line argument, then falls back
    to an environment variable, and finally uses a default value.

    Args:
        argv: Arguments to parse. Defaults to sys.argv[1:].

    Returns:
        CheckerContext: A configuration context object containing all parsed settings.
    """
    parser = argparse.ArgumentParser(
        description="Checks whether public web endpoints are reachable and healthy."
    )

    parser.add_argument(
        "urls",
        nargs="*",
        default=_split_urls(os.getenv("AVAILABILITY_CHECKER_URLS")),
        help="The URLs to check.\n"
        "If not provided, the value is read from the AVAILABILITY_CHECKER_URLS environment variable\n"
        "as a comma or whitespace separated list.",
    )

    parser.add_argument(
        "-cid",
        "--checker-id",
        type=str,
        default=os.getenv("AVAILABILITY_CHECKER_ID", f"{DEFAULT_CHECKER_ID_PREFIX}{uuid4()}"),
        help="Specifies the identifier of this checker instance, added to every log record.\n"
        "If not provided, the value is read from the AVAILABILITY_CHECKER_ID environment variable.\n"
        f"If that is also absent, the default value will be {DEFAULT_CHECKER_ID_PREFIX}uuid4().",
    )

    parser.add_argument(
        "-wn",
        "--worker-number",
        type=int,
        default=int(os.getenv("AVAILABILITY_CHECKER_WORKER_NUMBER", DEFAULT_WORKER_NUMBER)),
        help="Specifies the maximum number of targets checked concurrently.\n"
        "If not provided, the value is read from the AVAILABILITY_CHECKER_WORKER_NUMBER environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_WORKER_NUMBER} is used.",
    )

    parser.add_argument(
        "-qs",
        "--queue-size",
        type=int,
        default=int(os.getenv("AVAILABILITY_CHECKER_QUEUE_SIZE", DEFAULT_QUEUE_SIZE)),
        help="Specifies the maximum number of targets waiting in the work queue.\n"
        "If not provided, the value is read from the AVAILABILITY_CHECKER_QUEUE_SIZE environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_QUEUE_SIZE} is used.",
    )

    parser.add_argument(
        "-cl",
        "--connection-limit",
        type=int,
        default=int(os.getenv("AVAILABILITY_CHECKER_CONNECTION_LIMIT", DEFAULT_CONNECTION_LIMIT)),
        help="Specifies the maximum number of simultaneous HTTP connections.\n"
        "If not provided, the value is read from the AVAILABILITY_CHECKER_CONNECTION_LIMIT environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_CONNECTION_LIMIT} is used.",
    )

    parser.add_argument(
        "-l",
        "--locale",
        type=str,
        default=os.getenv("AVAILABILITY_CHECKER_LOCALE", DEFAULT_LOCALE),
        help="Specifies the language of failure reasons. Allowed values: en, ko.\n"
        "If not provided, the value is read from the AVAILABILITY_CHECKER_LOCALE environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_LOCALE} is used.",
    )

    parser.add_argument(
        "-sf",
        "--strategies-file",
        type=str,
        default=os.getenv("AVAILABILITY_CHECKER_STRATEGIES_FILE", DEFAULT_STRATEGIES_FILE),
        help="Path to a JSON file describing the strategy catalog.\n"
        "If not provided, the value is read from the AVAILABILITY_CHECKER_STRATEGIES_FILE environment variable.\n"
        "If that is also absent, the built-in catalog is used.",
    )

    parser.add_argument(
        "-lt",
        "--logging-type",
        type=str,
        default=os.getenv("AVAILABILITY_CHECKER_LOGGING_TYPE", DEFAULT_LOGGING_TYPE),
        help="Specifies the logging configuration type to use.\n"
        "Allowed values: dev, prod, custom (case insensitive).\n"
        "For 'dev' and 'prod', system will use built-in configurations.\n"
        "For 'custom', the --logging-config-file argument is required.",
    )

    parser.add_argument(
        "-lcf",
        "--logging-config-file",
        type=str,
        default=os.getenv("AVAILABILITY_CHECKER_LOGGING_CONFIG_FILE", DEFAULT_LOGGING_CONFIG_FILE),
        help="Path to custom logging configuration file.\n"
        "Required when --logging-type is set to 'custom'.",
    )

    # Parse the command-line arguments
    args: Any = parser.parse_args(argv)

    # Create and return a CheckerContext with the parsed settings
    return CheckerContext(
        urls=list(args.urls),
        checker_id=args.checker_id,
        logging_type=args.logging_type,
        logging_config_file=args.logging_config_file,
        worker_number=args.worker_number,
        queue_size=args.queue_size,
        connection_limit=args.connection_limit,
        locale=args.locale,
        strategies_file=args.strategies_file,
    )
