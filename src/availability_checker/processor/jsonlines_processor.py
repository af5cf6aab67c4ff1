"""
JSON Lines result processor.

This module defines a processor that writes every check result as one JSON
object per line to a text stream, which makes the output of the command line
entry point easy to pipe into other tools.
"""

import json
import logging
import sys
from typing import Any, Dict, Optional, TextIO

from availability_checker.contracts import ResultProcessor
from availability_checker.domain import CheckResult, Target

# Module logger
logger = logging.getLogger(__name__)


def to_record(target: Target, result: CheckResult) -> Dict[str, Any]:
    """
    Builds the JSON record of one result.

    Args:
        target: The target that was checked.
        result: Its check result.

    Returns:
        Dict[str, Any]: The serializable record. 'details' is omitted when empty.
    """
    record: Dict[str, Any] = {
        "target_id": target.id,
        "url": target.url,
        "checked_url": result.url or target.url,
        "status": result.status,
        "latency": result.latency,
        "result": result.result,
    }
    if result.details:
        record["details"] = result.details
    return record


class JsonLinesResultProcessor(ResultProcessor):
    """Writes one JSON line per result to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        """
        Initializes the processor.

        Args:
            stream: Destination of the lines. Defaults to standard output.
        """
        self._stream: TextIO = stream if stream is not None else sys.stdout

    async def process(self, target: Target, result: CheckResult) -> None:
        self._stream.write(json.dumps(to_record(target, result), ensure_ascii=False) + "\n")

    async def flush(self) -> None:
        self._stream.flush()
        logger.debug("JSON lines output flushed.")
