"""
Configuration context for the availability checker.

This module defines a data structure that holds all configuration parameters
of a checker run. It serves as a central point for passing configuration
throughout the application.
"""

from typing import List, NamedTuple


class CheckerContext(NamedTuple):
    """
    A data structure containing all configuration parameters of the checker.

    This class is immutable and is created by parsing command-line arguments
    and environment variables.

    Attributes:
        urls: The URLs to check.
        checker_id: Unique identifier for this checker instance.
        logging_type: Type of logging configuration to use (dev, prod, or custom).
        logging_config_file: Path to custom logging configuration file (if logging_type is 'custom').
        worker_number: Number of targets checked concurrently.
        queue_size: Maximum size of the work queue before backpressure is applied.
        connection_limit: Maximum number of simultaneous connections of the HTTP session.
        locale: Language of the failure reasons (en or ko).
        strategies_file: Path to a JSON strategy catalog; empty for the built-in one.
    """

    urls: List[str]
    checker_id: str
    logging_type: str
    logging_config_file: str
    worker_number: int
    queue_size: int
    connection_limit: int
    locale: str
    strategies_file: str
