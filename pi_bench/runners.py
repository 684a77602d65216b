"""Serial and parallel execution of the partitioned pi workload."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import List, Tuple

import numpy as np

from .pool import WorkerPool
from .sampler import DEFAULT_CHUNK_SIZE, heavy_pi_sample


__all__ = [
    "PARALLEL_SEED_OFFSET",
    "SERIAL_SEED_OFFSET",
    "RunResult",
    "Task",
    "execute_task",
    "partition",
    "run_parallel",
    "run_serial",
]


logger = logging.getLogger(__name__)

SERIAL_SEED_OFFSET = 0
# Parallel tasks draw from a disjoint seed range
PARALLEL_SEED_OFFSET = 1000


@dataclass(frozen=True)
class Task:
    """One unit of work: a sample count and the seed for its generator."""
    iterations: int
    seed: int


@dataclass(frozen=True)
class RunResult:
    """Per-task estimates in task order and their mean."""
    mean: float
    estimates: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.estimates)


def partition(total_iterations: int, num_tasks: int, seed_offset: int = SERIAL_SEED_OFFSET) -> List[Task]:
    """Split ``total_iterations`` into ``num_tasks`` equal tasks.

    The remainder of the integer division is dropped. Task ids run from 1 to
    ``num_tasks`` and each task is seeded with ``task_id + seed_offset``.

    Raises:
        ValueError: If ``num_tasks`` is not positive or the split leaves zero
            iterations per task.
    """
    if num_tasks <= 0:
        raise ValueError(f"num_tasks must be positive, got {num_tasks}")

    iterations_per_task = total_iterations // num_tasks
    if iterations_per_task <= 0:
        raise ValueError(
            f"total_iterations={total_iterations} is too small for {num_tasks} tasks "
            f"(iterations per task would be {iterations_per_task})"
        )

    return [Task(iterations_per_task, task_id + seed_offset) for task_id in range(1, num_tasks + 1)]


def execute_task(task: Task, chunk_size: int = DEFAULT_CHUNK_SIZE) -> float:
    """Run a single task; module-level so process workers can unpickle it."""
    return heavy_pi_sample(task.iterations, task.seed, chunk_size)


def _collect(estimates: List[float]) -> RunResult:
    return RunResult(mean=float(np.mean(estimates)), estimates=tuple(estimates))


def run_serial(total_iterations: int, num_tasks: int, chunk_size: int = DEFAULT_CHUNK_SIZE) -> RunResult:
    """Execute every task one after another in task-id order."""
    tasks = partition(total_iterations, num_tasks, SERIAL_SEED_OFFSET)
    estimates = []
    for task in tasks:
        estimates.append(execute_task(task, chunk_size))
        logger.debug("Serial task seed=%d -> %.6f", task.seed, estimates[-1])
    return _collect(estimates)


def run_parallel(
    pool: WorkerPool,
    total_iterations: int,
    num_tasks: int,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> RunResult:
    """Fan the tasks out to ``pool`` and wait for all of them.

    Returns only once every task has produced its estimate; a failing task
    propagates its exception to the caller.
    """
    tasks = partition(total_iterations, num_tasks, PARALLEL_SEED_OFFSET)
    estimates = pool.map_tasks(partial(execute_task, chunk_size=chunk_size), tasks)
    logger.debug("Parallel run collected %d estimates", len(estimates))
    return _collect(estimates)
