"""Command-line interface helpers for the benchmark entry point."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Tuple

from .pool import BACKENDS, WORKERS_ENV_VAR, resolve_worker_count
from .sampler import DEFAULT_CHUNK_SIZE


# Heavy (production) defaults
_HEAVY_DEFAULTS = {
    "sizes": [10_000_000, 50_000_000, 100_000_000],
    "tasks": 4,
}

# Lightweight (test) defaults for fast validation runs
_TEST_DEFAULTS = {
    "sizes": [200_000, 400_000, 800_000],
    "tasks": 4,
}


def _positive_int(text: str) -> int:
    try:
        value = int(text.replace("_", ""))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return value


def add_benchmark_args(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Attach the benchmark's arguments to ``parser``."""

    # Workload
    parser.add_argument(
        "--sizes",
        type=_positive_int,
        nargs="+",
        default=list(_HEAVY_DEFAULTS["sizes"]),
        help="Strictly ascending total iteration counts to benchmark",
    )
    parser.add_argument(
        "--tasks",
        type=_positive_int,
        default=_HEAVY_DEFAULTS["tasks"],
        help="Number of equal tasks each problem size is split into",
    )
    parser.add_argument(
        "--chunk-size",
        type=_positive_int,
        default=DEFAULT_CHUNK_SIZE,
        help="Samples drawn per vectorised step inside a task",
    )

    # Worker pool
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help=f"Worker pool size (defaults to ${WORKERS_ENV_VAR} or 4)",
    )
    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        default="process",
        help="Executor backing the worker pool",
    )

    # Output handling
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory for the log file, records.jsonl, records.csv and scaling.png",
    )
    parser.add_argument(
        "--plot",
        dest="plot",
        action="store_true",
        default=True,
        help="Save a speedup/efficiency plot when --output-dir is set",
    )
    parser.add_argument(
        "--no-plot",
        dest="plot",
        action="store_false",
        help="Skip the speedup/efficiency plot",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Activate lightweight defaults suitable for quick testing",
    )

    return parser


def finalize_benchmark_args(args: argparse.Namespace) -> argparse.Namespace:
    """Apply test-mode overrides and resolve the worker count."""

    if getattr(args, "test_mode", False):
        if args.sizes == _HEAVY_DEFAULTS["sizes"]:
            args.sizes = list(_TEST_DEFAULTS["sizes"])
        if args.tasks == _HEAVY_DEFAULTS["tasks"]:
            args.tasks = _TEST_DEFAULTS["tasks"]
    args.workers = resolve_worker_count(args.workers)
    return args


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pi-bench",
        description="Serial vs parallel Monte Carlo π benchmark",
    )
    return add_benchmark_args(parser)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse and finalise command-line arguments."""
    return finalize_benchmark_args(build_parser().parse_args(argv))


def resolve_output_paths(
    args: argparse.Namespace,
) -> Tuple[Optional[Path], Optional[Path], Optional[Path], Optional[Path]]:
    """Resolve (output_dir, jsonl, csv, plot) paths; all ``None`` without --output-dir."""

    if not args.output_dir:
        return None, None, None, None

    output_dir = Path(args.output_dir).expanduser().resolve()
    output_dir.mkdir(parents=True, exist_ok=True)
    args.output_dir = str(output_dir)

    plot_path = output_dir / "scaling.png" if args.plot else None
    return output_dir, output_dir / "records.jsonl", output_dir / "records.csv", plot_path
