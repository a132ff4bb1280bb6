"""Detached background work for deferred interaction responses.

Handlers that cannot answer within Discord's 3 second window return a
deferred response and hand the slow part to `ExecutionContext.wait_until`.
The coroutine runs on its own event loop in a worker thread, so it outlives
the request that spawned it. Tasks are fire-and-forget: they cannot be
cancelled, are never retried, and their exceptions are logged here instead of
reaching the caller.
"""
import asyncio
import threading
from concurrent.futures import Future, ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Any, Coroutine, List, Optional

from .observability import get_logger

logger = get_logger('interaction-router-background')


class TaskHandle:
    """Read-only view of a background task. There is no cancel()."""

    def __init__(self, name: str, future: Future):
        self.name = name
        self._future = future

    def done(self) -> bool:
        return self._future.done()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the task finishes; False on timeout."""
        try:
            self._future.result(timeout=timeout)
        except FutureTimeout:
            return False
        return True

    def __repr__(self) -> str:
        state = 'done' if self.done() else 'running'
        return f"<TaskHandle {self.name} {state}>"


def _run_detached(name: str, coro: Coroutine[Any, Any, Any]) -> None:
    try:
        asyncio.run(coro)
        logger.debug("Background task finished", task=name)
    except Exception as e:
        logger.error("Background task failed", error=e, task=name)


class ExecutionContext:
    """Owns the background tasks spawned while handling interactions.

    Worker threads are joined at interpreter exit, which keeps the process
    alive until every task has completed.
    """

    def __init__(self, max_workers: int = 4):
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='interaction-bg')
        self._tasks: List[TaskHandle] = []
        self._lock = threading.Lock()

    def wait_until(self, coro: Coroutine[Any, Any, Any], name: Optional[str] = None) -> TaskHandle:
        """Schedule `coro` to run after the current request returns."""
        name = name or getattr(coro, '__qualname__', 'task')
        future = self._executor.submit(_run_detached, name, coro)
        handle = TaskHandle(name, future)
        with self._lock:
            self._tasks = [task for task in self._tasks if not task.done()]
            self._tasks.append(handle)
        logger.debug("Background task scheduled", task=name)
        return handle

    def pending(self) -> List[TaskHandle]:
        with self._lock:
            return [task for task in self._tasks if not task.done()]

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for every scheduled task; False if any is still running."""
        with self._lock:
            tasks = list(self._tasks)
        return all(task.wait(timeout) for task in tasks)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)
