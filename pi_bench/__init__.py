"""Serial vs parallel Monte Carlo π benchmark."""

from . import benchmark
from . import cli
from . import logging_utils
from . import metrics
from . import pool
from . import runners
from . import sampler

__all__ = [
    'benchmark',
    'cli',
    'logging_utils',
    'metrics',
    'pool',
    'runners',
    'sampler',
]
