"""Fixed-size worker pool handle shared by every parallel run."""

from __future__ import annotations

import logging
import os
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, TypeVar


__all__ = ["BACKENDS", "DEFAULT_WORKERS", "WORKERS_ENV_VAR", "WorkerPool", "resolve_worker_count"]


logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_WORKERS = 4
WORKERS_ENV_VAR = "PI_BENCH_WORKERS"
BACKENDS = ("process", "thread")


def resolve_worker_count(explicit: Optional[int] = None) -> int:
    """Return the pool size: explicit value, then ``PI_BENCH_WORKERS``, then 4."""
    if explicit is not None:
        value = explicit
        source = "--workers"
    else:
        raw = os.environ.get(WORKERS_ENV_VAR)
        if raw is None or raw.strip() == "":
            return DEFAULT_WORKERS
        source = WORKERS_ENV_VAR
        try:
            value = int(raw)
        except ValueError:
            raise ValueError(f"{WORKERS_ENV_VAR} must be an integer, got {raw!r}") from None

    if value <= 0:
        raise ValueError(f"{source} must be positive, got {value}")
    return value


def _noop(index: int) -> int:
    return index


class WorkerPool:
    """Explicit handle around a process or thread executor.

    The pool size is fixed at construction and independent of how many tasks
    are dispatched to it. Use it as a context manager so the workers are shut
    down when the benchmark finishes.

    Args:
        num_workers: Number of workers to start
        backend: ``"process"`` (default) or ``"thread"``
    """

    def __init__(self, num_workers: int, backend: str = "process"):
        if num_workers <= 0:
            raise ValueError(f"num_workers must be positive, got {num_workers}")
        if backend not in BACKENDS:
            raise ValueError(f"backend must be one of {BACKENDS}, got {backend!r}")

        self.num_workers = num_workers
        self.backend = backend
        self._executor: Optional[Executor] = None

    @property
    def executor(self) -> Executor:
        if self._executor is None:
            raise RuntimeError("WorkerPool is not running; use it inside a 'with' block")
        return self._executor

    def start(self) -> "WorkerPool":
        if self._executor is None:
            if self.backend == "process":
                self._executor = ProcessPoolExecutor(max_workers=self.num_workers)
            else:
                self._executor = ThreadPoolExecutor(max_workers=self.num_workers)
            logger.debug("Started %s pool with %d workers", self.backend, self.num_workers)
        return self

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
            logger.debug("Shut down %s pool", self.backend)

    def __enter__(self) -> "WorkerPool":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def warm_up(self) -> None:
        """Bring every worker up before the first timed run."""
        self.map_tasks(_noop, range(self.num_workers))

    def map_tasks(self, fn: Callable[[T], R], items: Iterable[T]) -> List[R]:
        """Dispatch ``fn`` over ``items`` and block until every call returns.

        Results come back in submission order. The first failing call re-raises
        its exception here; nothing is retried.
        """
        futures = [self.executor.submit(fn, item) for item in items]
        return [future.result() for future in futures]
