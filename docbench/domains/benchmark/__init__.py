"""
Benchmark Domain - Repeated conversion timing.

This domain handles:
- Repeated runs of one converter on one file
- Mean, min, max and population standard deviation of run times
- Reports spanning every strategy over a directory of documents
"""

from .driver import BenchmarkDriver
from .models import (
    BenchmarkFailure,
    BenchmarkOutcome,
    BenchmarkReport,
    BenchmarkSample,
    BenchmarkStats,
    system_info,
)

__all__ = [
    # Models
    "BenchmarkSample",
    "BenchmarkStats",
    "BenchmarkFailure",
    "BenchmarkOutcome",
    "BenchmarkReport",
    "system_info",
    # Implementations
    "BenchmarkDriver",
]
