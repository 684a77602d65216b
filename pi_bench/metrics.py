"""Benchmark record export helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable

from .benchmark import BenchmarkRecord


_CSV_COLUMNS = (
    "problem_size",
    "num_tasks",
    "num_workers",
    "serial_seconds",
    "parallel_seconds",
    "serial_pi",
    "parallel_pi",
    "speedup",
    "efficiency",
)


def append_metrics_jsonl(path: Path, record: Dict[str, Any]) -> None:
    """Append ``record`` as a JSON line to ``path``."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(record) + "\n")


def write_records_csv(path: Path, records: Iterable[BenchmarkRecord]) -> None:
    """Write one CSV row per record, overwriting ``path``."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as f:
        f.write(",".join(_CSV_COLUMNS) + "\n")
        for r in records:
            f.write(
                f"{r.problem_size},{r.num_tasks},{r.num_workers},"
                f"{r.serial_seconds:.6f},{r.parallel_seconds:.6f},"
                f"{r.serial_pi:.6f},{r.parallel_pi:.6f},"
                f"{r.speedup:.6f},{r.efficiency:.6f}\n"
            )
