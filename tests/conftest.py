"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

from typing import Callable, Iterator, List

import pytest

from pi_bench.pool import WORKERS_ENV_VAR, WorkerPool


@pytest.fixture
def thread_pool() -> Iterator[WorkerPool]:
    """Return a running two-worker thread pool."""
    with WorkerPool(2, backend="thread") as pool:
        yield pool


@pytest.fixture
def fake_timer() -> Callable[[List[float]], Callable[[], float]]:
    """Return a factory for clocks that replay the given readings in order."""

    def factory(readings: List[float]) -> Callable[[], float]:
        values = iter(readings)
        return lambda: next(values)

    return factory


@pytest.fixture(autouse=True)
def clear_worker_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's environment from leaking into worker-count tests."""
    monkeypatch.delenv(WORKERS_ENV_VAR, raising=False)
