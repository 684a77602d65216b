"""Entry point: serial vs parallel Monte Carlo π benchmark."""

import logging
import time
from typing import List, Optional

from .benchmark import BenchmarkRecord, format_summary, print_banner, run_benchmark
from .cli import parse_args, resolve_output_paths
from .logging_utils import format_timespan, setup_logging
from .metrics import append_metrics_jsonl, write_records_csv
from .plotting import plot_scaling
from .pool import WorkerPool


def main(argv: Optional[List[str]] = None) -> List[BenchmarkRecord]:
    """Run the full benchmark and return its records.

    Any failure (bad configuration, a crashing worker) propagates so the
    process exits with a non-zero status.
    """
    args = parse_args(argv)

    output_dir, jsonl_path, csv_path, plot_path = resolve_output_paths(args)
    log_path = setup_logging(output_dir, verbose=args.verbose)
    wall_start = time.perf_counter()
    if log_path is not None:
        logging.info(f"Logging to {log_path}")

    print("🚀 SERIAL vs PARALLEL MONTE CARLO π BENCHMARK")
    print_banner("INTENSIVE ANALYSIS: SERIAL vs PARALLEL")

    logging.debug("Configuration:")
    for arg, value in vars(args).items():
        logging.debug(f"  {arg}: {value}")

    def export(record: BenchmarkRecord) -> None:
        if jsonl_path is not None:
            append_metrics_jsonl(jsonl_path, record.to_dict())

    with WorkerPool(args.workers, backend=args.backend) as pool:
        pool.warm_up()
        print(f"Workers available: {pool.num_workers} ({pool.backend} backend)")
        records = run_benchmark(
            pool,
            args.sizes,
            args.tasks,
            chunk_size=args.chunk_size,
            on_record=export,
        )

    print("\n" + "=" * 60)
    print("FINAL RESULT")
    print("=" * 60)
    for line in format_summary(records):
        print(line)

    if csv_path is not None:
        write_records_csv(csv_path, records)
        logging.info(f"Records written to {csv_path} and {jsonl_path}")
    if plot_path is not None:
        plot_scaling(records, plot_path)
        logging.info(f"✓ Scaling plot saved to: {plot_path}")

    print(
        "\nParallel speedup depends on problem size and on the ratio between\n"
        "compute time and dispatch overhead."
    )
    print(f"Total runtime: {format_timespan(time.perf_counter() - wall_start)}")
    return records


def run() -> None:
    """Console-script wrapper that discards the returned records."""
    main()


if __name__ == "__main__":
    run()
