"""Deadline-bounded upstream calls.

``race_with_timeout`` never raises for a failing or slow operation: the
outcome carries either the value or the fallback. A call that misses its
deadline is not cancelled; it is detached and its eventual result is
discarded (the upstream reads are side-effect free).
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from loguru import logger

from app.errors import DeadlineExceeded, TransportFailure
from app.models.common import FetchOutcome

Operation = Callable[[], Awaitable[Any]]

# Strong references keep detached tasks alive until they finish
_detached: set[asyncio.Future] = set()


def _discard_result(task: asyncio.Future) -> None:
    _detached.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("Abandoned call failed after its deadline: {!r}", exc)
    else:
        logger.debug("Abandoned call finished after its deadline, result discarded")


def detach(task: asyncio.Future) -> None:
    """Let an abandoned task run to completion without joining it."""
    _detached.add(task)
    task.add_done_callback(_discard_result)


def detached_count() -> int:
    return len(_detached)


async def race_with_timeout(
    operation: Operation,
    deadline_ms: float,
    fallback: Any,
    name: str = "",
) -> FetchOutcome:
    """Run ``operation`` against a deadline.

    Success(value) if it finishes in time, Failed(fallback) as soon as it
    raises, TimedOut(fallback) once the deadline elapses.
    """
    try:
        task = asyncio.ensure_future(operation())
    except Exception as e:
        logger.warning("{} failed to start: {!r}", name or "call", e)
        return FetchOutcome.failed(fallback, TransportFailure(name, e))

    try:
        done, _ = await asyncio.wait({task}, timeout=deadline_ms / 1000)
    except asyncio.CancelledError:
        detach(task)
        raise

    if not done:
        detach(task)
        logger.warning("{} timed out after {} ms, using fallback", name or "call", deadline_ms)
        return FetchOutcome.timed_out(fallback, DeadlineExceeded(name, deadline_ms))

    if task.cancelled():
        logger.warning("{} was cancelled, using fallback", name or "call")
        return FetchOutcome.failed(fallback, TransportFailure(name, asyncio.CancelledError()))

    exc = task.exception()
    if exc is not None:
        logger.warning("{} failed, using fallback: {!r}", name or "call", exc)
        return FetchOutcome.failed(fallback, TransportFailure(name, exc))

    return FetchOutcome.success(task.result())
