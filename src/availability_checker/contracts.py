"""
Core interfaces for the availability checker.

This module defines the abstract base classes that form the seams of the
check engine. They establish a clear contract for implementations: the
transport used for a single attempt, and the external collaborator that
persists or displays the final results.
"""

import abc

from .domain import AttemptOutcome, CheckResult, Strategy, Target


class AttemptExecutor(abc.ABC):
    """
    Abstract interface for a component that performs one request attempt.

    Its responsibility is to issue a single GET request under one strategy
    and report either the received status or a classified error.
    """

    @abc.abstractmethod
    async def execute(self, url: str, strategy: Strategy) -> AttemptOutcome:
        """
        Performs one attempt against the given URL.

        Args:
            url: The absolute URL to request.
            strategy: The strategy whose headers and timeout apply.

        Returns:
            AttemptOutcome: HttpStatus when a response was received, otherwise
                ClassifiedError.

        Raises:
            Exception: Implementations should handle transport errors internally
                and report them as ClassifiedError rather than raising them.
        """
        pass


class ResultProcessor(abc.ABC):
    """
    Abstract interface for a component that consumes check results.

    This enables a pipeline pattern where multiple processors can act on the
    outcome of a check, such as persisting it, logging it, or printing it.
    """

    @abc.abstractmethod
    async def process(self, target: Target, result: CheckResult) -> None:
        """
        Processes or buffers a single CheckResult.

        Args:
            target: The target that was checked.
            result: The result of one top-level check.

        Returns:
            None
        """
        pass

    @abc.abstractmethod
    async def flush(self) -> None:
        """
        Forces the output of any buffered results.

        For processors that do not buffer data, this method can be a no-op.

        Returns:
            None
        """
        pass
