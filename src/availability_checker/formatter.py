"""
Formatting of cascade outcomes into check results.

This module maps the terminal (status, error) pair into a localized result
string and computes the elapsed latency of the whole check.
"""

import time
from typing import Callable, Dict, Mapping, NamedTuple, Optional

from availability_checker.domain import CheckResult, ErrorKind

OK_RESULT = "OK"
FAIL_PREFIX = "FAIL:"


class ReasonTable(NamedTuple):
    """
    Localized failure reasons.

    Attributes:
        statuses: Reasons for known failing HTTP statuses.
        http_error: Template for other statuses, formatted with 'code'.
        errors: Reasons for transport failures.
        unreachable: Template for unknown failures, formatted with 'message'.
    """

    statuses: Mapping[int, str]
    http_error: str
    errors: Mapping[ErrorKind, str]
    unreachable: str


ENGLISH = ReasonTable(
    statuses={
        400: "bad request (400)",
        403: "access denied (403)",
        404: "page not found (404)",
        410: "page gone (410)",
        500: "server error (500)",
        502: "bad gateway (502)",
        503: "service unavailable (503)",
        504: "gateway timeout (504)",
    },
    http_error="HTTP error ({code})",
    errors={
        ErrorKind.TIMEOUT: "timed out",
        ErrorKind.CONNECTION_REFUSED: "connection refused",
        ErrorKind.CONNECTION_RESET: "connection reset",
        ErrorKind.HANG_UP: "connection closed by server",
        ErrorKind.PROTOCOL_ERROR: "malformed HTTP response",
        ErrorKind.TLS_ERROR: "certificate/TLS error",
        ErrorKind.DNS_FAILURE: "address resolution failed",
        ErrorKind.INVALID_URL: "invalid address",
    },
    unreachable="unreachable ({message})",
)

KOREAN = ReasonTable(
    statuses={
        400: "잘못된 요청 (400)",
        403: "접근 권한 없음 (403)",
        404: "페이지 없음 (404)",
        410: "페이지 삭제됨 (410)",
        500: "서버 오류 (500)",
        502: "게이트웨이 오류 (502)",
        503: "서비스 점검 중 (503)",
        504: "응답 시간 초과 (504)",
    },
    http_error="HTTP 오류 ({code})",
    errors={
        ErrorKind.TIMEOUT: "시간 초과",
        ErrorKind.CONNECTION_REFUSED: "연결 거부됨",
        ErrorKind.CONNECTION_RESET: "연결 초기화됨",
        ErrorKind.HANG_UP: "연결 끊김",
        ErrorKind.PROTOCOL_ERROR: "잘못된 응답",
        ErrorKind.TLS_ERROR: "인증서 오류 (SSL)",
        ErrorKind.DNS_FAILURE: "주소 찾기 실패",
        ErrorKind.INVALID_URL: "잘못된 주소",
    },
    unreachable="접속 불가 ({message})",
)

LOCALES: Dict[str, ReasonTable] = {"en": ENGLISH, "ko": KOREAN}


class ResultFormatter:
    """Turns a terminal (status, error) pair into a CheckResult."""

    def __init__(self, locale: str = "en", clock: Callable[[], float] = time.monotonic) -> None:
        """
        Initializes the formatter.

        Args:
            locale: Key into LOCALES selecting the reason table.
            clock: Monotonic clock in seconds, shared with whoever records
                the start time.

        Raises:
            ValueError: If the locale is not supported.
        """
        try:
            self._reasons: ReasonTable = LOCALES[locale.lower()]
        except KeyError:
            raise ValueError(
                f"Unsupported locale: {locale}. Allowed values are: {', '.join(sorted(LOCALES))}"
            ) from None
        self._clock: Callable[[], float] = clock

    def now(self) -> float:
        """
        Reads the clock used for latency.

        Returns:
            float: The current clock value in seconds, to be passed to format
                as start_time.
        """
        return self._clock()

    def reason(
        self, status: int, error: Optional[ErrorKind], raw_message: Optional[str] = None
    ) -> str:
        """
        Picks the localized reason for a terminal outcome.

        Args:
            status: The final HTTP status, or 0 when no response was received.
            error: The error kind when no response was received.
            raw_message: Transport message used by the unreachable fallback.

        Returns:
            str: The reason text, without the "FAIL:" prefix.
        """
        if status:
            known = self._reasons.statuses.get(status)
            return known if known is not None else self._reasons.http_error.format(code=status)

        if error is not None and error in self._reasons.errors:
            return self._reasons.errors[error]
        return self._reasons.unreachable.format(message=raw_message or "Unknown")

    def format(
        self,
        status: int,
        error: Optional[ErrorKind],
        start_time: float,
        raw_message: Optional[str] = None,
        url: Optional[str] = None,
    ) -> CheckResult:
        """
        Builds the final result of a check.

        Args:
            status: The final HTTP status, or 0 if none was obtained.
            error: The final error kind when no status was obtained.
            start_time: Value of the formatter's clock when the check began.
            raw_message: The transport message behind 'error', if any.
            url: The URL that produced the outcome.

        Returns:
            CheckResult: The formatted result.
        """
        latency = max(0, int(round((self._clock() - start_time) * 1000)))

        if 200 <= status < 400:
            return CheckResult(status=status, latency=latency, result=OK_RESULT, url=url)

        return CheckResult(
            status=status,
            latency=latency,
            result=FAIL_PREFIX + self.reason(status, error, raw_message),
            details=raw_message,
            url=url,
        )
