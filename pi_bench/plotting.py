"""Speedup and efficiency plot for a finished benchmark."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend (for headless environments)
import matplotlib.pyplot as plt

from .benchmark import BenchmarkRecord


def plot_scaling(records: Sequence[BenchmarkRecord], out_path: Path) -> Path:
    """Plot speedup and efficiency against problem size and save to ``out_path``."""
    if not records:
        raise ValueError("no benchmark records to plot")

    sizes = [r.problem_size for r in records]
    speedups = [r.speedup for r in records]
    efficiencies = [r.efficiency / 100 for r in records]
    num_tasks = records[0].num_tasks

    fig, ax = plt.subplots(figsize=(10, 6))

    # Ideal linear speedup for this task count
    ax.axhline(num_tasks, color='k', linestyle='--', linewidth=2, alpha=0.4,
               label=f'Ideal speedup ({num_tasks}x)')
    ax.axhline(1.0, color='gray', linestyle=':', linewidth=1, alpha=0.5)

    ax.plot(sizes, speedups, marker='o', linewidth=2, label='Speedup S = T_serial / T_parallel')
    ax.plot(sizes, efficiencies, marker='s', linewidth=2, label='Efficiency E = S / N')

    ax.set_xscale('log')
    ax.set_xlabel('Problem size (iterations)', fontsize=12)
    ax.set_ylabel('Value', fontsize=12)
    ax.set_title(f'Serial vs Parallel Monte Carlo π ({num_tasks} tasks, '
                 f'{records[0].num_workers} workers)')
    ax.grid(True, which='both', linestyle=':', alpha=0.3)
    ax.legend(loc='best', fontsize=10)

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(out_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return out_path
