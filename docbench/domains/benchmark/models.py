"""
Benchmark Models - Samples, summary statistics, and benchmark reports.
"""

from __future__ import annotations

import platform
import statistics
import sys
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any, Literal, Union

from pydantic import BaseModel, Field

from docbench.config.errors import StatisticsError


class BenchmarkSample(BaseModel):
    """One successful benchmark iteration."""

    iteration: int = Field(ge=1)
    time_ms: float = Field(ge=0.0)
    memory_bytes: int | None = None

    model_config = {"frozen": True}


class BenchmarkStats(BaseModel):
    """Summary of repeated runs of one converter on one file."""

    converter_id: str
    file_label: str
    iterations: int = Field(ge=1)
    failed_iterations: int = Field(default=0, ge=0)
    samples: list[BenchmarkSample]
    avg_time_ms: float
    min_time_ms: float
    max_time_ms: float
    std_dev_time_ms: float
    avg_memory_bytes: float | None = None
    success: Literal[True] = True

    model_config = {"frozen": True}

    @classmethod
    def from_samples(
        cls,
        converter_id: str,
        file_label: str,
        iterations: int,
        samples: Sequence[BenchmarkSample],
    ) -> BenchmarkStats:
        """
        Compute statistics over successful samples.

        Standard deviation is the population standard deviation.

        Raises:
            StatisticsError: If there are no samples
        """
        if not samples:
            raise StatisticsError(
                "No successful samples to summarize",
                details={"converter_id": converter_id, "file": file_label},
            )

        times = [sample.time_ms for sample in samples]
        memory = [s.memory_bytes for s in samples if s.memory_bytes is not None]

        return cls(
            converter_id=converter_id,
            file_label=file_label,
            iterations=iterations,
            failed_iterations=iterations - len(samples),
            samples=list(samples),
            avg_time_ms=statistics.fmean(times),
            min_time_ms=min(times),
            max_time_ms=max(times),
            std_dev_time_ms=statistics.pstdev(times),
            avg_memory_bytes=statistics.fmean(memory) if memory else None,
        )


class BenchmarkFailure(BaseModel):
    """Every iteration of a benchmark failed."""

    converter_id: str
    file_label: str
    iterations: int = 0
    success: Literal[False] = False
    error: str
    errors: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}


BenchmarkOutcome = Union[BenchmarkStats, BenchmarkFailure]


def system_info() -> dict[str, Any]:
    """Host details recorded with benchmark reports."""
    return {
        "platform": platform.platform(),
        "machine": platform.machine(),
        "processor": platform.processor(),
        "python": sys.version.split()[0],
        "implementation": platform.python_implementation(),
    }


class BenchmarkReport(BaseModel):
    """Benchmarks of every strategy over a set of files, grouped by direction."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    iterations: int = Field(ge=1)
    system: dict[str, Any] = Field(default_factory=system_info)
    results: dict[str, list[BenchmarkOutcome]] = Field(default_factory=dict)

    @property
    def failure_count(self) -> int:
        return sum(
            1 for outcomes in self.results.values() for outcome in outcomes if not outcome.success
        )
