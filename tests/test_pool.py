"""Unit tests for the worker pool handle."""

import pytest

from pi_bench.pool import DEFAULT_WORKERS, WORKERS_ENV_VAR, WorkerPool, resolve_worker_count
from pi_bench.runners import Task, execute_task


def _square(x):
    return x * x


def _fail_on_three(x):
    if x == 3:
        raise ArithmeticError("domain error in task 3")
    return x


class TestResolveWorkerCount:

    def test_default(self):
        assert resolve_worker_count() == DEFAULT_WORKERS == 4

    def test_environment(self, monkeypatch):
        monkeypatch.setenv(WORKERS_ENV_VAR, "6")
        assert resolve_worker_count() == 6

    def test_explicit_wins_over_environment(self, monkeypatch):
        monkeypatch.setenv(WORKERS_ENV_VAR, "6")
        assert resolve_worker_count(2) == 2

    def test_blank_environment_falls_back(self, monkeypatch):
        monkeypatch.setenv(WORKERS_ENV_VAR, " ")
        assert resolve_worker_count() == DEFAULT_WORKERS

    @pytest.mark.parametrize("raw", ["zero", "1.5"])
    def test_non_integer_environment_raises(self, monkeypatch, raw):
        monkeypatch.setenv(WORKERS_ENV_VAR, raw)
        with pytest.raises(ValueError, match="must be an integer"):
            resolve_worker_count()

    def test_non_positive_raises(self, monkeypatch):
        monkeypatch.setenv(WORKERS_ENV_VAR, "0")
        with pytest.raises(ValueError, match="must be positive"):
            resolve_worker_count()
        with pytest.raises(ValueError, match="must be positive"):
            resolve_worker_count(-1)


class TestWorkerPool:

    def test_rejects_bad_configuration(self):
        with pytest.raises(ValueError):
            WorkerPool(0)
        with pytest.raises(ValueError, match="backend"):
            WorkerPool(2, backend="gpu")

    def test_not_running_outside_context(self):
        pool = WorkerPool(2, backend="thread")
        with pytest.raises(RuntimeError, match="not running"):
            pool.map_tasks(_square, [1])

    def test_map_preserves_submission_order(self, thread_pool):
        assert thread_pool.map_tasks(_square, range(10)) == [x * x for x in range(10)]

    def test_failure_propagates(self, thread_pool):
        with pytest.raises(ArithmeticError, match="task 3"):
            thread_pool.map_tasks(_fail_on_three, range(5))

    def test_reusable_across_calls(self, thread_pool):
        thread_pool.warm_up()
        assert thread_pool.map_tasks(_square, [2]) == [4]
        assert thread_pool.map_tasks(_square, [3]) == [9]

    def test_shutdown_on_exit(self):
        with WorkerPool(1, backend="thread") as pool:
            pool.warm_up()
        with pytest.raises(RuntimeError):
            pool.executor

    def test_process_backend_failure_propagates(self):
        tasks = [Task(100, 1), Task(0, 2), Task(100, 3)]
        with WorkerPool(2, backend="process") as pool:
            assert len(pool.map_tasks(execute_task, tasks[:1])) == 1
            with pytest.raises(ValueError, match="iterations must be positive"):
                pool.map_tasks(execute_task, tasks)
