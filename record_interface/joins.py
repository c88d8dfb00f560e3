"""Fire-all-then-join helper for the asynchronous iteration methods."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Iterable, List

log = logging.getLogger("record_interface.joins")


async def _resolved(value: Any) -> Any:
    return value


def _as_awaitable(value: Any):
    return value if inspect.isawaitable(value) else _resolved(value)


def _report_late_failure(task: "asyncio.Future[Any]") -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        log.warning("callback failed after the join had already failed: %r", exc)


def _detach(tasks: List["asyncio.Future[Any]"]) -> None:
    # Siblings keep running; only their late failures are surfaced.
    for t in tasks:
        if not t.done():
            t.add_done_callback(_report_late_failure)


async def fan_out(invocations: Iterable[Callable[[], Any]]) -> List[Any]:
    """Invoke every thunk in order, then await all results.

    Each invocation is scheduled as a task as soon as it returns, before the
    next one is called. Results come back in invocation order. The first
    failure propagates as-is; other tasks are not cancelled.
    """
    tasks: List["asyncio.Future[Any]"] = []
    try:
        for invoke in invocations:
            tasks.append(asyncio.ensure_future(_as_awaitable(invoke())))
    except Exception:
        _detach(tasks)
        raise

    log.debug("fan_out: joining %d callbacks", len(tasks))
    try:
        return list(await asyncio.gather(*tasks))
    except Exception as e:
        log.debug("fan_out: join failed: %r", e)
        _detach(tasks)
        raise
