"""
Classification of raw transport failures.

Transport libraries report failures as exceptions whose types and messages
differ between implementations. This module maps them onto the closed
ErrorKind taxonomy. Exception types are checked first, against the error and
the OS level error it wraps. Case-insensitive message tokens are the fallback
for anything the type table does not know.
"""

import asyncio
import socket
import ssl
from typing import Iterable, List, Optional, Sequence, Tuple, Type, Union

import aiohttp

from availability_checker.domain import ErrorKind

TypeRule = Tuple[Tuple[Type[BaseException], ...], ErrorKind]
TokenRule = Tuple[Tuple[str, ...], ErrorKind]

# First matching row wins. aiohttp's connector errors subclass OSError, so the
# specific rows come before the generic OS error rows.
DEFAULT_TYPE_TABLE: Tuple[TypeRule, ...] = (
    ((asyncio.TimeoutError, TimeoutError, socket.timeout), ErrorKind.TIMEOUT),
    ((aiohttp.ClientSSLError, ssl.SSLError, ssl.CertificateError), ErrorKind.TLS_ERROR),
    ((aiohttp.ClientConnectorDNSError, socket.gaierror), ErrorKind.DNS_FAILURE),
    ((ConnectionRefusedError,), ErrorKind.CONNECTION_REFUSED),
    ((ConnectionResetError, BrokenPipeError), ErrorKind.CONNECTION_RESET),
    ((aiohttp.ServerDisconnectedError,), ErrorKind.HANG_UP),
    ((aiohttp.ClientPayloadError, aiohttp.ClientResponseError), ErrorKind.PROTOCOL_ERROR),
    ((aiohttp.InvalidURL,), ErrorKind.INVALID_URL),
)

# Only matched against messages that do not embed the target host, see describe.
DEFAULT_TOKEN_TABLE: Tuple[TokenRule, ...] = (
    (("timeout", "timed out", "timedout", "etimedout"), ErrorKind.TIMEOUT),
    (
        (
            "certificate",
            "cert_",
            "sslerror",
            "[ssl",
            "tls",
            "handshake",
            "wrong version number",
        ),
        ErrorKind.TLS_ERROR,
    ),
    (
        (
            "dns",
            "name or service not known",
            "nodename nor servname",
            "name resolution",
            "getaddrinfo",
            "enotfound",
            "eai_again",
            "no address associated",
            "host not found",
        ),
        ErrorKind.DNS_FAILURE,
    ),
    (("refused", "econnrefused", "connect call failed"), ErrorKind.CONNECTION_REFUSED),
    (("reset", "econnreset", "broken pipe"), ErrorKind.CONNECTION_RESET),
    (
        ("hang up", "server disconnected", "serverdisconnected", "remote end closed"),
        ErrorKind.HANG_UP,
    ),
    (
        (
            "hpe_",
            "protocol",
            "payload",
            "bad status line",
            "badstatusline",
            "badhttpmessage",
            "invalid constant string",
            "clientresponseerror",
        ),
        ErrorKind.PROTOCOL_ERROR,
    ),
    (
        ("invalidurl", "invalid url", "invalid_url", "nonhttpurl", "no scheme"),
        ErrorKind.INVALID_URL,
    ),
)


def transport_cause(raw_error: BaseException) -> Optional[BaseException]:
    """
    Returns the lower level error wrapped by a transport exception.

    aiohttp's connector errors keep the OS error in 'os_error' and also chain
    it as '__cause__'.

    Args:
        raw_error: The exception raised by the transport.

    Returns:
        Optional[BaseException]: The wrapped error, or None.
    """
    cause = getattr(raw_error, "os_error", None)
    if isinstance(cause, BaseException):
        return cause
    return raw_error.__cause__


def describe(raw_error: Union[BaseException, str]) -> str:
    """
    Builds the text that classification tokens are matched against.

    For an exception that wraps a lower level error only the class name of
    the wrapper is kept, since aiohttp's connector messages start with
    "Cannot connect to host <host>:<port>" and a host name must never decide
    the classification.

    Args:
        raw_error: An exception or a plain error message.

    Returns:
        str: A single line describing the error.
    """
    if isinstance(raw_error, str):
        return raw_error

    cause = transport_cause(raw_error)
    if cause is None:
        parts = [type(raw_error).__name__, str(raw_error)]
    else:
        parts = [type(raw_error).__name__, type(cause).__name__, str(cause)]
    return " ".join(part for part in parts if part)


class ErrorClassifier:
    """
    Maps a raw transport failure to an ErrorKind.

    Exceptions are matched against a type table, looking at the error and at
    the error it wraps. Plain messages, and exceptions no type row covers,
    are matched against a token table. Both tables can be replaced to support
    a different transport library without touching the orchestration logic.
    """

    def __init__(
        self,
        token_table: Iterable[TokenRule] = DEFAULT_TOKEN_TABLE,
        type_table: Iterable[TypeRule] = DEFAULT_TYPE_TABLE,
    ) -> None:
        self._rules: Sequence[TokenRule] = tuple(
            (tuple(token.lower() for token in tokens), kind) for tokens, kind in token_table
        )
        self._type_rules: Sequence[TypeRule] = tuple(type_table)

    def classify(self, raw_error: Union[BaseException, str]) -> ErrorKind:
        """
        Classifies an error.

        Args:
            raw_error: The exception raised by the transport, or its message.

        Returns:
            ErrorKind: The kind of the first matching type row, else of the
                first token row whose tokens occur in the error text, else
                ErrorKind.UNKNOWN.
        """
        if isinstance(raw_error, BaseException):
            candidates: List[BaseException] = [raw_error]
            cause = transport_cause(raw_error)
            if cause is not None:
                candidates.append(cause)
            for types, kind in self._type_rules:
                if any(isinstance(candidate, types) for candidate in candidates):
                    return kind

        haystack = describe(raw_error).lower()
        for tokens, kind in self._rules:
            if any(token in haystack for token in tokens):
                return kind
        return ErrorKind.UNKNOWN
