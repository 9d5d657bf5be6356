"""
Benchmark Driver - Repeated timed runs of one converter on one file.

Failed iterations are logged and excluded from the statistics. When every
iteration fails the driver returns a BenchmarkFailure instead of stats.
"""

from __future__ import annotations

import logging
import tempfile
from contextlib import nullcontext
from pathlib import Path

from docbench.config.errors import ConfigurationError, ErrorCode, StatisticsError
from docbench.domains.conversion import Converter, ConverterRunner, ConversionType
from docbench.domains.extraction import detect_document_kind

from .models import BenchmarkFailure, BenchmarkOutcome, BenchmarkSample, BenchmarkStats

logger = logging.getLogger(__name__)

__all__ = ["BenchmarkDriver"]


class BenchmarkDriver:
    """
    Runs benchmarks through a ConverterRunner.

    Example:
        >>> driver = BenchmarkDriver(ConverterRunner())
        >>> outcome = await driver.run("fast", fast_converter, Path("a.pdf"), iterations=5)
        >>> if outcome.success:
        ...     print(outcome.avg_time_ms, outcome.std_dev_time_ms)
    """

    def __init__(
        self,
        runner: ConverterRunner | None = None,
        max_iterations: int = 100,
    ) -> None:
        """
        Initialize driver.

        Args:
            runner: Runner used for every iteration
            max_iterations: Upper bound applied to requested iterations
        """
        self._runner = runner or ConverterRunner()
        self._max_iterations = max_iterations

    async def run(
        self,
        converter_id: str,
        converter: Converter,
        file_path: Path,
        iterations: int = 3,
        conversion_type: ConversionType | None = None,
        keep_outputs: bool = False,
        output_dir: Path | None = None,
    ) -> BenchmarkOutcome:
        """
        Benchmark a converter.

        Args:
            converter_id: Strategy name for the report
            converter: Converter callable
            file_path: Input document
            iterations: Number of runs (at least 1)
            conversion_type: Direction; inferred from the extension when omitted
            keep_outputs: Keep iteration outputs instead of deleting them
            output_dir: Where kept outputs go (a fresh temp dir otherwise)

        Returns:
            Statistics, or a failure when no iteration succeeded

        Raises:
            ConfigurationError: If iterations < 1 or the file type is unsupported
        """
        if iterations < 1:
            raise ConfigurationError(
                f"Iterations must be at least 1, got {iterations}",
                details={"iterations": iterations},
                code=ErrorCode.CONFIG_INVALID_VALUE,
            )
        if iterations > self._max_iterations:
            logger.warning(
                "Capping benchmark iterations at %d (requested %d)",
                self._max_iterations,
                iterations,
            )
            iterations = self._max_iterations

        file_path = Path(file_path)
        if conversion_type is None:
            source = detect_document_kind(file_path)
            conversion_type = next(t for t in ConversionType if t.source is source)

        if keep_outputs:
            workspace = nullcontext(
                str(output_dir or tempfile.mkdtemp(prefix="docbench-benchmark-"))
            )
        else:
            workspace = tempfile.TemporaryDirectory(prefix="docbench-benchmark-")

        samples: list[BenchmarkSample] = []
        errors: list[str] = []

        with workspace as work_dir:
            for iteration in range(1, iterations + 1):
                result = await self._runner.run(
                    converter_id,
                    converter,
                    file_path,
                    Path(work_dir) / f"iteration-{iteration}",
                    conversion_type,
                )
                if result.success:
                    samples.append(
                        BenchmarkSample(
                            iteration=iteration,
                            time_ms=result.conversion_time_ms,
                            memory_bytes=result.memory_bytes,
                        )
                    )
                else:
                    errors.append(result.error_message or "unknown error")
                    logger.warning(
                        "Benchmark iteration %d/%d of %s failed: %s",
                        iteration,
                        iterations,
                        converter_id,
                        result.error_message,
                    )

        try:
            stats = BenchmarkStats.from_samples(
                converter_id, file_path.name, iterations, samples
            )
        except StatisticsError:
            logger.warning("All %d iterations of %s failed", iterations, converter_id)
            return BenchmarkFailure(
                converter_id=converter_id,
                file_label=file_path.name,
                iterations=iterations,
                error="All iterations failed",
                errors=errors,
            )

        logger.info(
            "Benchmark %s on %s: avg=%.1fms min=%.1fms max=%.1fms std=%.1fms (%d/%d ok)",
            converter_id,
            file_path.name,
            stats.avg_time_ms,
            stats.min_time_ms,
            stats.max_time_ms,
            stats.std_dev_time_ms,
            len(samples),
            iterations,
        )
        return stats
