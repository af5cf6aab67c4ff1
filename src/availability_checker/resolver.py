"""
DNS fallback on top of the strategy cascade.

Some sites only publish a record for their 'www.' host. When a cascade ends
with an address resolution failure on a bare host, the check is repeated once
against the 'www.'-prefixed URL, and that second run is final.
"""

import ipaddress
import logging
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from availability_checker.cascade import CascadeOrchestrator
from availability_checker.domain import CascadeOutcome, CheckResult, ErrorKind, Target
from availability_checker.formatter import ResultFormatter

# Module logger
logger = logging.getLogger(__name__)

WWW_PREFIX = "www."


def with_www_prefix(url: str) -> Optional[str]:
    """
    Inserts 'www.' in front of the URL's host.

    Scheme, credentials, port, path, and query are preserved.

    Args:
        url: An absolute http/https URL.

    Returns:
        Optional[str]: The rewritten URL, or None if the URL cannot be parsed,
            has no host, is an IP literal, or already starts with 'www.'.
    """
    try:
        parts = urlsplit(url)
        host = parts.hostname
        port = parts.port
    except ValueError:
        return None

    if parts.scheme.lower() not in ("http", "https") or not host:
        return None
    if host.startswith(WWW_PREFIX):
        return None
    try:
        ipaddress.ip_address(host)
        return None
    except ValueError:
        pass

    netloc = f"{WWW_PREFIX}{host}"
    if port is not None:
        netloc = f"{netloc}:{port}"
    userinfo, separator, _ = parts.netloc.rpartition("@")
    if separator:
        netloc = f"{userinfo}@{netloc}"

    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))


class DnsFallbackResolver:
    """
    Runs the cascade for a target with at most one 'www.' fallback run.

    The fallback is a bounded loop: the URL of the last run is the one whose
    outcome is formatted, and a fallback run is never followed by another.
    """

    def __init__(
        self,
        orchestrator: CascadeOrchestrator,
        formatter: ResultFormatter,
        max_fallbacks: int = 1,
    ) -> None:
        self._orchestrator: CascadeOrchestrator = orchestrator
        self._formatter: ResultFormatter = formatter
        self._max_fallbacks: int = max_fallbacks

    async def resolve(self, target: Target) -> CheckResult:
        """
        Checks a target, applying the 'www.' fallback when it applies.

        Args:
            target: The target to check. It is not modified.

        Returns:
            CheckResult: The formatted result of the last cascade run.
        """
        start_time = self._formatter.now()
        url = target.url
        outcome: CascadeOutcome = await self._orchestrator.run(url)

        fallbacks = 0
        while outcome.error is ErrorKind.DNS_FAILURE and fallbacks < self._max_fallbacks:
            fallback_url = with_www_prefix(url)
            if fallback_url is None:
                break
            fallbacks += 1
            logger.info(f"Address resolution failed for {url}. Retrying as {fallback_url}")
            url = fallback_url
            outcome = await self._orchestrator.run(url)

        return self._formatter.format(
            outcome.status,
            outcome.error,
            start_time,
            raw_message=outcome.raw_message,
            url=url,
        )
