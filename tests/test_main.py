"""End-to-end runs of the entry point with tiny problem sizes."""

import json
import logging

import pytest

from pi_bench import main as main_module
from pi_bench.main import main


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


def test_console_run(capsys):
    records = main(["--sizes", "40000", "80000", "--workers", "2", "--backend", "thread"])

    assert [r.problem_size for r in records] == [40_000, 80_000]
    assert all(r.num_workers == 2 for r in records)

    out = capsys.readouterr().out
    assert "Workers available: 2" in out
    assert "FINAL RESULT" in out
    assert "Total runtime:" in out
    assert out.count("Efficiency:") == 2


def test_output_dir_artifacts(tmp_path):
    out_dir = tmp_path / "run"
    main([
        "--sizes", "40000",
        "--workers", "2",
        "--backend", "thread",
        "--output-dir", str(out_dir),
    ])

    assert (out_dir / "pi_bench.log").exists()
    assert (out_dir / "records.csv").exists()
    assert (out_dir / "scaling.png").exists()
    rows = (out_dir / "records.jsonl").read_text(encoding="utf-8").splitlines()
    assert json.loads(rows[0])["problem_size"] == 40_000


def test_process_backend_run():
    records = main(["--sizes", "40000", "--tasks", "2", "--workers", "2", "--no-plot"])
    assert len(records) == 1
    assert records[0].num_tasks == 2


def test_failure_propagates(monkeypatch):
    def boom(*args, **kwargs):
        raise FloatingPointError("numeric domain error")

    monkeypatch.setattr(main_module, "run_benchmark", boom)
    with pytest.raises(FloatingPointError):
        main(["--sizes", "40000", "--backend", "thread"])


def test_descending_sizes_rejected():
    with pytest.raises(ValueError, match="ascending"):
        main(["--sizes", "80000", "40000", "--backend", "thread"])
