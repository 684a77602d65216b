"""Unit tests for record export and plotting."""

import json

from pi_bench.benchmark import BenchmarkRecord
from pi_bench.metrics import append_metrics_jsonl, write_records_csv
from pi_bench.plotting import plot_scaling


def _records():
    return [
        BenchmarkRecord(1_000, 4, 4, 2.0, 1.0, 3.14, 3.15),
        BenchmarkRecord(2_000, 4, 4, 4.0, 1.6, 3.141, 3.142),
    ]


def test_append_metrics_jsonl(tmp_path):
    path = tmp_path / "nested" / "records.jsonl"
    for record in _records():
        append_metrics_jsonl(path, record.to_dict())

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert first["problem_size"] == 1_000
    assert first["speedup"] == 2.0
    assert first["efficiency"] == 50.0


def test_write_records_csv(tmp_path):
    path = tmp_path / "records.csv"
    write_records_csv(path, _records())

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("problem_size,num_tasks,num_workers")
    assert len(lines) == 3
    assert lines[2].split(",")[-2] == "2.500000"


def test_csv_overwrites(tmp_path):
    path = tmp_path / "records.csv"
    write_records_csv(path, _records())
    write_records_csv(path, _records()[:1])
    assert len(path.read_text(encoding="utf-8").splitlines()) == 2


def test_plot_scaling(tmp_path):
    out = plot_scaling(_records(), tmp_path / "plots" / "scaling.png")
    assert out.exists()
    assert out.stat().st_size > 0
