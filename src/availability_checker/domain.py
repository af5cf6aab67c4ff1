"""
Domain models for the availability checker.

This module defines the core data structures used throughout the application,
including check targets, request strategies, per-attempt outcomes, and the
final check result. These models serve as the foundation for the engine's
data flow.
"""

from datetime import timedelta
from enum import Enum
from typing import Mapping, NamedTuple, Optional, Union


class ErrorKind(str, Enum):
    """
    Closed taxonomy of transport failures.

    Inheriting from 'str' allows enum members to behave like strings,
    making them usable directly in log messages and JSON output.
    """

    TIMEOUT = "timeout"
    CONNECTION_RESET = "connection_reset"
    CONNECTION_REFUSED = "connection_refused"
    HANG_UP = "hang_up"
    PROTOCOL_ERROR = "protocol_error"
    TLS_ERROR = "tls_error"
    DNS_FAILURE = "dns_failure"
    INVALID_URL = "invalid_url"
    UNKNOWN = "unknown"


class Target(NamedTuple):
    """
    Represents a single endpoint to check.

    Targets are owned by an external store. The engine only reads 'url'
    and never mutates the record.

    Attributes:
        id: The unique identifier of the target.
        url: The absolute http/https URL to check.
        name: Human readable name of the site.
        category: Free-form grouping label.
        interval: How frequently the owner intends to check the target.
        is_active: Whether the owner considers the target enabled.
    """

    id: int
    url: str
    name: str = ""
    category: str = ""
    interval: timedelta = timedelta(minutes=5)
    is_active: bool = True


class Strategy(NamedTuple):
    """
    A named request persona: headers plus a timeout budget.

    Attributes:
        name: Identifier used in logs.
        timeout: Hard wall-clock budget for one attempt.
        headers: Request headers sent with this strategy.
        connection: Value of the Connection header (keep-alive or close).
    """

    name: str
    timeout: timedelta
    headers: Mapping[str, str]
    connection: str = "close"


class HttpStatus(NamedTuple):
    """An attempt that received a response status line."""

    code: int


class ClassifiedError(NamedTuple):
    """An attempt that failed before any response was received."""

    kind: ErrorKind
    raw_message: str


AttemptOutcome = Union[HttpStatus, ClassifiedError]


class CascadeOutcome(NamedTuple):
    """
    The terminal outcome of one run through the strategy catalog.

    Attributes:
        status: The final HTTP status, or 0 if no response was obtained.
        error: The final error kind when status is 0, otherwise None.
        raw_message: The transport message behind 'error', if any.
        attempts: Number of attempts performed in this run.
    """

    status: int
    error: Optional[ErrorKind]
    raw_message: Optional[str] = None
    attempts: int = 0


class CheckResult(NamedTuple):
    """
    The result of a single top-level check, including any fallback run.

    Attributes:
        status: The HTTP status code, or 0 if no response was ever obtained.
        latency: Elapsed time of the whole check in milliseconds.
        result: "OK" or "FAIL:<reason>".
        details: Raw transport error message, when there is one.
        url: The URL that produced the final outcome.
    """

    status: int
    latency: int
    result: str
    details: Optional[str] = None
    url: Optional[str] = None

    @property
    def is_ok(self) -> bool:
        return self.result == "OK"
