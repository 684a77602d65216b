"""CPU-heavy Monte Carlo kernel used as the unit of work in every benchmark.

Each sample draws four uniforms ``x, y, z, w`` in [0, 1). A sample is accepted
when both ``(x, y)`` and ``(z, w)`` fall inside the unit quarter circle. The two
tests are independent, so the accepted fraction converges to ``(pi / 4) ** 2``
and ``4 * sqrt(fraction)`` converges to pi.

On top of the acceptance test every sample also evaluates a handful of
transcendental expressions whose results are thrown away. They exist only to
make a sample expensive enough that the serial/parallel comparison measures
compute rather than dispatch overhead, so do not remove them.
"""

from __future__ import annotations

import math

import numpy as np


__all__ = ["DEFAULT_CHUNK_SIZE", "hit_fraction", "heavy_pi_sample"]


# Samples drawn per vectorised step; bounds memory to a few tens of MB per task
DEFAULT_CHUNK_SIZE = 1 << 18


def _burn_cycles(x: np.ndarray, y: np.ndarray, z: np.ndarray, w: np.ndarray) -> None:
    """Evaluate the padding expressions for one chunk and discard them."""
    np.sin(x) * np.cos(y) + np.tan(z)
    np.log1p(w) + np.sqrt(x * y)
    x ** 3 + y ** 3 + z ** 2


def _count_hits(iterations: int, seed: int, chunk_size: int) -> int:
    if iterations <= 0:
        raise ValueError(f"iterations must be positive, got {iterations}")
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    rng = np.random.default_rng(seed)
    inside = 0
    remaining = iterations
    while remaining > 0:
        n = min(chunk_size, remaining)
        x, y, z, w = rng.random((4, n))

        _burn_cycles(x, y, z, w)

        accepted = (x * x + y * y <= 1.0) & (z * z + w * w <= 1.0)
        inside += int(np.count_nonzero(accepted))
        remaining -= n

    return inside


def hit_fraction(iterations: int, seed: int = 1, chunk_size: int = DEFAULT_CHUNK_SIZE) -> float:
    """Return the fraction of samples passing both quarter-circle tests."""
    return _count_hits(iterations, seed, chunk_size) / iterations


def heavy_pi_sample(iterations: int, seed: int = 1, chunk_size: int = DEFAULT_CHUNK_SIZE) -> float:
    """Estimate pi from ``iterations`` seeded samples.

    Parameters:
        iterations: Number of samples to draw (must be positive)
        seed: Seed for this task's private generator
        chunk_size: Samples drawn per vectorised step

    Returns:
        A pi estimate in [0, 4]. Identical arguments give a bit-identical value.

    Raises:
        ValueError: If ``iterations`` or ``chunk_size`` is not positive.
    """
    return 4.0 * math.sqrt(hit_fraction(iterations, seed, chunk_size))
