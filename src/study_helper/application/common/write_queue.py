"""Single-worker FIFO queue for local store writes."""

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, TypeVar

import structlog

logger = structlog.get_logger(__name__)

R = TypeVar("R")


class WriteQueue:
    """
    Runs submitted tasks one at a time, in submission order, on one thread.

    A failing task is logged and its exception is set on the returned
    Future; later tasks still run.
    """

    def __init__(self, name: str = "study-writer") -> None:
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)
        self._worker = threading.local()

    def submit(self, task: Callable[..., R], *args: Any, **kwargs: Any) -> Future[R]:
        return self._executor.submit(self._run, task, args, kwargs)

    def on_worker(self) -> bool:
        """Whether the caller is running on this queue's worker thread."""
        return getattr(self._worker, "active", False)

    def wait_idle(self, timeout: float | None = None) -> None:
        """
        Block until every task submitted so far has finished.

        Returns at once when called from a task (or a subscriber it
        notifies) on the worker itself, which could never see the queue
        drain behind it.
        """
        if self.on_worker():
            return
        self._executor.submit(lambda: None).result(timeout=timeout)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _run(self, task: Callable[..., R], args: tuple[Any, ...], kwargs: dict[str, Any]) -> R:
        self._worker.active = True
        try:
            return task(*args, **kwargs)
        except Exception:
            logger.exception("write_failed", task=getattr(task, "__name__", repr(task)))
            raise
