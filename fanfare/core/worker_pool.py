"""Bounded worker pool for batch tasks.

A ``ThreadPoolExecutor`` has an unbounded work queue.  ``BoundedWorkerPool``
caps the number of accepted-but-unfinished tasks at
``workers + queue_capacity`` with a semaphore, and applies a fixed
backpressure policy when that cap is reached:

``block``
    ``submit`` waits until a running task finishes.
``reject``
    ``submit`` raises ``PoolSaturatedError`` immediately.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Callable, Literal, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

BackpressurePolicy = Literal["block", "reject"]

THREAD_NAME_PREFIX = "notification-batch"


class PoolSaturatedError(RuntimeError):
    """Raised by ``submit`` under the ``reject`` policy when the pool is full."""


class PoolShutdownError(RuntimeError):
    """Raised by ``submit`` after ``shutdown`` has been called."""


class BoundedWorkerPool:
    """Fixed-size thread pool with a bounded queue.

    Parameters
    ----------
    workers:
        Number of worker threads.
    queue_capacity:
        Tasks that may wait for a free worker.
    policy:
        What ``submit`` does when ``workers + queue_capacity`` tasks are
        already accepted: ``"block"`` or ``"reject"``.
    """

    def __init__(
        self,
        workers: int = 5,
        queue_capacity: int = 100,
        policy: BackpressurePolicy = "block",
    ) -> None:
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        if queue_capacity < 0:
            raise ValueError(f"queue_capacity must be non-negative, got {queue_capacity}")
        if policy not in ("block", "reject"):
            raise ValueError(f"Unknown backpressure policy: {policy!r}")

        self._workers = workers
        self._capacity = workers + queue_capacity
        self._policy = policy
        self._slots = threading.BoundedSemaphore(self._capacity)
        self._executor = ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix=THREAD_NAME_PREFIX
        )
        self._pending: set[Future[Any]] = set()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def workers(self) -> int:
        return self._workers

    @property
    def capacity(self) -> int:
        """Maximum number of accepted-but-unfinished tasks."""
        return self._capacity

    @property
    def policy(self) -> BackpressurePolicy:
        return self._policy

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> Future[T]:
        """Schedule ``fn(*args, **kwargs)`` and return its future.

        Raises
        ------
        PoolSaturatedError
            Under the ``reject`` policy, if the pool is at capacity.
        PoolShutdownError
            If the pool has been shut down.
        """
        if self._closed:
            raise PoolShutdownError("Worker pool is shut down")

        if self._policy == "reject":
            if not self._slots.acquire(blocking=False):
                raise PoolSaturatedError(
                    f"Worker pool saturated ({self._capacity} tasks accepted)"
                )
        else:
            self._slots.acquire()

        try:
            future = self._executor.submit(fn, *args, **kwargs)
        except RuntimeError as exc:
            self._slots.release()
            raise PoolShutdownError("Worker pool is shut down") from exc

        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._on_done)
        return future

    def _on_done(self, future: Future[Any]) -> None:
        self._slots.release()
        with self._lock:
            self._pending.discard(future)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def shutdown(self, timeout: float | None = 60.0) -> bool:
        """Stop accepting work and wait up to *timeout* seconds for tasks.

        Tasks still running when the wait expires are left to finish on
        their own; nothing is cancelled.  Returns ``True`` if every task
        finished within the timeout.

        The bound applies to this call, not to the process: worker threads
        are joined at interpreter exit, so a process whose drain timed out
        stays alive until its in-flight tasks end.  Every outbound provider
        call carries ``request_timeout_seconds``, which bounds how long that
        can take.
        """
        self._closed = True
        self._executor.shutdown(wait=False)
        with self._lock:
            pending = set(self._pending)

        if not pending:
            logger.info("Worker pool shut down cleanly")
            return True

        _, not_done = wait(pending, timeout=timeout)
        if not_done:
            logger.warning(
                "Worker pool shutdown timed out after %ss with %d batch task(s) still running",
                timeout,
                len(not_done),
            )
            return False

        logger.info("Worker pool shut down after draining %d task(s)", len(pending))
        return True

    def __enter__(self) -> "BoundedWorkerPool":
        return self

    def __exit__(self, *exc: object) -> None:
        self.shutdown()
