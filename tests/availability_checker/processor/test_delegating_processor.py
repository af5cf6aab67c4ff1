"""
Unit tests for the DelegatingResultProcessor class.

This module ensures that the processor delegates processing to multiple child
processors concurrently and handles failures gracefully.

The tests follow the Arrange-Act-Assert (AAA) pattern and use proper mocking
of all external dependencies to ensure true unit testing.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from availability_checker.contracts import ResultProcessor
from availability_checker.domain import CheckResult
from availability_checker.processor.delegating_processor import DelegatingResultProcessor


@pytest.fixture
def sample_result() -> CheckResult:
    return CheckResult(status=200, latency=120, result="OK", url="http://example.org/x")


@pytest.mark.asyncio
async def test_process_should_delegate_to_all_processors(sample_target, sample_result) -> None:
    # Arrange
    children = [AsyncMock(spec=ResultProcessor), AsyncMock(spec=ResultProcessor)]
    processor = DelegatingResultProcessor(children)

    # Act
    await processor.process(sample_target, sample_result)

    # Assert
    for child in children:
        child.process.assert_awaited_once_with(sample_target, sample_result)


@pytest.mark.asyncio
async def test_process_should_isolate_a_failing_processor(sample_target, sample_result, caplog) -> None:
    """
    Tests that one failing child does not stop the others and is logged.
    """
    # Arrange
    failing = AsyncMock(spec=ResultProcessor)
    failing.process.side_effect = RuntimeError("boom")
    healthy = AsyncMock(spec=ResultProcessor)
    processor = DelegatingResultProcessor([failing, healthy])

    # Act
    await processor.process(sample_target, sample_result)

    # Assert
    healthy.process.assert_awaited_once_with(sample_target, sample_result)
    assert "failed for target http://example.org/x with error: boom" in caplog.text


@pytest.mark.asyncio
async def test_process_should_run_children_concurrently(sample_target, sample_result) -> None:
    # Arrange
    started = []
    release = asyncio.Event()

    async def wait_for_release(target, result):
        started.append(target.id)
        await release.wait()

    children = [AsyncMock(spec=ResultProcessor), AsyncMock(spec=ResultProcessor)]
    for child in children:
        child.process.side_effect = wait_for_release
    processor = DelegatingResultProcessor(children)

    # Act
    task = asyncio.ensure_future(processor.process(sample_target, sample_result))
    for _ in range(5):
        await asyncio.sleep(0)
    both_started = len(started) == 2
    release.set()
    await task

    # Assert
    assert both_started


@pytest.mark.asyncio
async def test_process_should_do_nothing_without_processors(sample_target, sample_result) -> None:
    await DelegatingResultProcessor([]).process(sample_target, sample_result)
    await DelegatingResultProcessor([]).flush()


@pytest.mark.asyncio
async def test_flush_should_flush_every_processor_even_if_one_fails(caplog) -> None:
    # Arrange
    failing = AsyncMock(spec=ResultProcessor)
    failing.flush.side_effect = OSError("closed")
    healthy = AsyncMock(spec=ResultProcessor)
    processor = DelegatingResultProcessor([failing, healthy])

    # Act
    await processor.flush()

    # Assert
    failing.flush.assert_awaited_once()
    healthy.flush.assert_awaited_once()
    assert "failed to flush: closed" in caplog.text
