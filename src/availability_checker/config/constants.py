"""
Constants for the availability checker.

This module defines default values for all configurable parameters of the
checker. These constants are used as fallback values when neither
command-line arguments nor environment variables are provided.
"""

# Concurrency defaults
DEFAULT_WORKER_NUMBER = 10
DEFAULT_QUEUE_SIZE = 50
DEFAULT_CONNECTION_LIMIT = 100

# Checker configuration defaults
DEFAULT_CHECKER_ID_PREFIX = "availability-checker-"
DEFAULT_LOCALE = "en"
DEFAULT_STRATEGIES_FILE = ""

# Logging configuration defaults
DEFAULT_LOGGING_TYPE = "prod"
DEFAULT_LOGGING_CONFIG_FILE = ""
