"""Serial vs parallel timing harness and its console report.

For every problem size the driver times the serial runner, then the parallel
runner, and derives:

    Speedup    S = T_serial / T_parallel
    Efficiency E = S / N * 100      (N = number of tasks)

Each measurement is also mapped back through Amdahl's Law,

    S(p, N) = 1 / [(1 - p) + p / N]

to report the parallel fraction ``p`` that would explain the observed speedup.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import asdict, dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, TextIO

from .pool import WorkerPool
from .runners import run_parallel, run_serial
from .sampler import DEFAULT_CHUNK_SIZE


__all__ = [
    "BenchmarkRecord",
    "amdahl",
    "compute_efficiency",
    "compute_speedup",
    "format_record",
    "format_summary",
    "implied_parallel_fraction",
    "print_banner",
    "run_benchmark",
    "verdict",
]


logger = logging.getLogger(__name__)

_RULE_WIDTH = 60
_SUB_RULE_WIDTH = 50


def compute_speedup(serial_seconds: float, parallel_seconds: float) -> float:
    """Return ``serial_seconds / parallel_seconds``."""
    if parallel_seconds <= 0:
        raise ValueError(f"parallel_seconds must be positive, got {parallel_seconds}")
    return serial_seconds / parallel_seconds


def compute_efficiency(speedup: float, num_tasks: int) -> float:
    """Return parallel efficiency as a percentage of ideal linear speedup."""
    if num_tasks <= 0:
        raise ValueError(f"num_tasks must be positive, got {num_tasks}")
    return speedup / num_tasks * 100


def amdahl(parallel_fraction: float, devices: int) -> float:
    """Calculate theoretical speedup using Amdahl's Law.

    Examples:
        amdahl(0.95, 4) = 3.48x
        amdahl(0.50, 4) = 1.6x
    """
    return 1.0 / ((1 - parallel_fraction) + parallel_fraction / devices)


def implied_parallel_fraction(speedup: float, devices: int) -> Optional[float]:
    """Invert Amdahl's Law: the ``p`` for which ``amdahl(p, devices) == speedup``.

    Returns ``None`` for a single device, where every ``p`` gives speedup 1.
    Superlinear or sub-unit speedups give values outside [0, 1].
    """
    if devices <= 1 or speedup <= 0:
        return None
    return (1.0 - 1.0 / speedup) / (1.0 - 1.0 / devices)


def verdict(speedup: float) -> str:
    if speedup > 1.0:
        return f"🎉 Effective parallelism! {speedup:.2f}x faster"
    return "⚠️  Overhead still dominating"


@dataclass(frozen=True)
class BenchmarkRecord:
    """Timings and estimates for one problem size.

    Attributes:
        problem_size: Total iterations requested for this size
        num_tasks: Number of equal tasks the iterations were split into
        num_workers: Size of the worker pool used by the parallel run
        serial_seconds: Wall-clock time of the serial run
        parallel_seconds: Wall-clock time of the parallel run
        serial_pi: Mean estimate from the serial run
        parallel_pi: Mean estimate from the parallel run
    """
    problem_size: int
    num_tasks: int
    num_workers: int
    serial_seconds: float
    parallel_seconds: float
    serial_pi: float
    parallel_pi: float

    @property
    def iterations_per_task(self) -> int:
        return self.problem_size // self.num_tasks

    @property
    def speedup(self) -> float:
        return compute_speedup(self.serial_seconds, self.parallel_seconds)

    @property
    def efficiency(self) -> float:
        return compute_efficiency(self.speedup, self.num_tasks)

    @property
    def parallel_fraction(self) -> Optional[float]:
        return implied_parallel_fraction(self.speedup, self.num_tasks)

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data.update(
            iterations_per_task=self.iterations_per_task,
            speedup=self.speedup,
            efficiency=self.efficiency,
            parallel_fraction=self.parallel_fraction,
        )
        return data


def format_record(record: BenchmarkRecord) -> List[str]:
    """Render one record as the report block printed after each size."""
    lines = [
        f"Serial:   {record.serial_seconds:.3f}s - π ≈ {record.serial_pi:.6f}",
        f"Parallel: {record.parallel_seconds:.3f}s - π ≈ {record.parallel_pi:.6f}",
        f"Speedup: {record.speedup:.2f}x - Efficiency: {record.efficiency:.1f}%",
    ]
    if record.parallel_fraction is not None:
        lines.append(f"Implied parallel fraction (Amdahl): p = {record.parallel_fraction:.3f}")
    lines.append(verdict(record.speedup))
    return lines


def format_summary(records: Sequence[BenchmarkRecord]) -> List[str]:
    """Render the closing table: one row per problem size."""
    lines = [f"{'size':>14}  {'T_serial':>9}  {'T_parallel':>10}  {'speedup':>7}  {'eff %':>6}"]
    for record in records:
        lines.append(
            f"{record.problem_size:>14,}  {record.serial_seconds:>8.3f}s  "
            f"{record.parallel_seconds:>9.3f}s  {record.speedup:>6.2f}x  {record.efficiency:>6.1f}"
        )
    return lines


def print_banner(title: str, stream: Optional[TextIO] = None) -> None:
    stream = stream or sys.stdout
    print("=" * _RULE_WIDTH, file=stream)
    print(title, file=stream)
    print("=" * _RULE_WIDTH, file=stream)


def _validate_sizes(sizes: Sequence[int]) -> None:
    if not sizes:
        raise ValueError("at least one problem size is required")
    for size in sizes:
        if size <= 0:
            raise ValueError(f"problem sizes must be positive, got {size}")
    for previous, current in zip(sizes, sizes[1:]):
        if current <= previous:
            raise ValueError(f"problem sizes must be strictly ascending, got {list(sizes)}")


def run_benchmark(
    pool: WorkerPool,
    sizes: Iterable[int],
    num_tasks: int,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    timer: Callable[[], float] = time.perf_counter,
    stream: Optional[TextIO] = None,
    quiet: bool = False,
    on_record: Optional[Callable[[BenchmarkRecord], None]] = None,
) -> List[BenchmarkRecord]:
    """Time serial and parallel runs for each problem size, in order.

    Parameters:
        pool: Running worker pool handed to the parallel runner
        sizes: Strictly ascending total iteration counts
        num_tasks: Number of tasks each size is split into
        chunk_size: Samples per vectorised step inside each task
        timer: Clock returning seconds; injectable for tests
        stream: Where the per-size report is printed (defaults to stdout)
        quiet: Suppress the per-size report
        on_record: Optional callback invoked with each finished record

    Returns:
        One BenchmarkRecord per size, in the order given.

    Runner failures are not caught and abort the whole benchmark.
    """
    sizes = list(sizes)
    _validate_sizes(sizes)
    if num_tasks <= 0:
        raise ValueError(f"num_tasks must be positive, got {num_tasks}")
    out =None if quiet else (stream or sys.stdout)

    records = []
    for size in sizes:
        if out is not None:
            print("\n" + "─" * _SUB_RULE_WIDTH, file=out)
            print(f"Problem size: {size:,} iterations ({num_tasks} tasks)", file=out)
            print(f"Iterations per task: {size // num_tasks:,}", file=out)

        logger.info("Running serial (size=%d)...", size)
        start = timer()
        serial = run_serial(size, num_tasks, chunk_size)
        serial_seconds = timer() - start

        logger.info("Running parallel (size=%d, workers=%d)...", size, pool.num_workers)
        start = timer()
        parallel = run_parallel(pool, size, num_tasks, chunk_size)
        parallel_seconds = timer() - start

        record = BenchmarkRecord(
            problem_size=size,
            num_tasks=num_tasks,
            num_workers=pool.num_workers,
            serial_seconds=serial_seconds,
            parallel_seconds=parallel_seconds,
            serial_pi=serial.mean,
            parallel_pi=parallel.mean,
        )
        records.append(record)

        if out is not None:
            for line in format_record(record):
                print(line, file=out)
        if on_record is not None:
            on_record(record)

    return records
