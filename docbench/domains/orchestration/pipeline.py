"""
Conversion Pipeline - Orchestrates conversion, scoring, and benchmarking.

Coordinates the converter registry, the runner, the quality evaluator and the
benchmark driver behind the library entry points.
"""

from __future__ import annotations

import asyncio
import logging
import tempfile
import uuid
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from docbench.config.errors import ConfigurationError, ErrorCode, ExtractionError
from docbench.config.settings import Settings, get_settings
from docbench.domains.benchmark import BenchmarkDriver, BenchmarkOutcome, BenchmarkReport
from docbench.domains.conversion import (
    DEFAULT_STRATEGY,
    ConversionResult,
    ConversionType,
    Converter,
    ConverterRegistry,
    ConverterRunner,
    determine_conversion_type,
    resolve_output_kind,
)
from docbench.domains.extraction import DocumentKind, detect_document_kind
from docbench.domains.scoring import QualityAssessor, QualityEvaluator

from .models import ComparisonResult, ConversionOptions
from .preprocessing import preprocess_pdf

logger = logging.getLogger(__name__)

__all__ = ["ConversionPipeline", "new_run_id"]

SUPPORTED_SUFFIXES = (".pdf", ".docx")


def new_run_id() -> str:
    """``<UTC timestamp>-<short uuid>``, unique per pipeline call."""
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
    return f"{timestamp}-{uuid.uuid4().hex[:8]}"


class ConversionPipeline:
    """
    Main conversion orchestration pipeline.

    Coordinates:
    - Input type detection and direction resolution
    - Optional PDF preprocessing in a temporary directory
    - Timed converter execution in a run-scoped output directory
    - Quality assessment of successful conversions
    - Benchmarks of single strategies and whole directories

    Conversions within one call run sequentially in registration order.

    Example:
        >>> registry = ConverterRegistry()
        >>> registry.register(ConversionType.PDF_TO_DOCX, "default", my_converter)
        >>> pipeline = ConversionPipeline(registry)
        >>> comparison = await pipeline.compare_converters(Path("sample.pdf"))
    """

    def __init__(
        self,
        registry: ConverterRegistry,
        runner: ConverterRunner | None = None,
        evaluator: QualityAssessor | None = None,
        driver: BenchmarkDriver | None = None,
        settings: Settings | None = None,
    ) -> None:
        """
        Initialize pipeline.

        Args:
            registry: Converter strategies
            runner: Converter runner (built from settings when omitted)
            evaluator: Quality assessor (built from settings when omitted)
            driver: Benchmark driver (built from settings when omitted)
            settings: Engine settings
        """
        self._settings = settings or get_settings()
        self._registry = registry
        self._runner = runner or ConverterRunner(
            timeout_seconds=self._settings.converter_timeout_seconds,
            trace_memory=self._settings.trace_memory,
        )
        self._evaluator = evaluator or QualityEvaluator(
            score_layout_axes=self._settings.score_layout_axes,
            text_sample_chars=self._settings.text_sample_chars,
        )
        self._driver = driver or BenchmarkDriver(
            self._runner,
            max_iterations=self._settings.benchmark_max_iterations,
        )

    @property
    def registry(self) -> ConverterRegistry:
        return self._registry

    # --- Conversion ---

    async def convert_document(
        self,
        input_path: Path,
        output_type: DocumentKind | str | None = None,
        options: ConversionOptions | None = None,
    ) -> ConversionResult:
        """
        Convert one document with the selected strategy.

        Args:
            input_path: Source document (.pdf or .docx)
            output_type: Target kind; the opposite of the input when omitted
            options: Strategy, quality and preprocessing overrides

        Returns:
            Conversion result, with quality when assessment was requested

        Raises:
            ConfigurationError: Unsupported type or direction, or no converter
        """
        options = options or ConversionOptions()
        return await self._convert(
            Path(input_path), output_type, options, self._run_dir(options)
        )

    async def convert_pdf_to_docx(
        self,
        input_path: Path,
        options: ConversionOptions | None = None,
    ) -> ConversionResult:
        return await self.convert_document(input_path, DocumentKind.DOCX, options)

    async def convert_docx_to_pdf(
        self,
        input_path: Path,
        options: ConversionOptions | None = None,
    ) -> ConversionResult:
        return await self.convert_document(input_path, DocumentKind.PDF, options)

    async def batch_convert(
        self,
        file_paths: Sequence[Path],
        options: ConversionOptions | None = None,
        output_type: DocumentKind | str | None = None,
    ) -> list[ConversionResult]:
        """
        Convert several documents into one shared run directory.

        A file that cannot be converted at all (unsupported type, no
        converter) yields a failed result rather than aborting the batch.
        """
        options = options or ConversionOptions()
        run_dir = self._run_dir(options)
        results: list[ConversionResult] = []

        for file_path in file_paths:
            file_path = Path(file_path)
            try:
                result = await self._convert(file_path, output_type, options, run_dir)
            except ConfigurationError as e:
                logger.warning("Skipping %s: %s", file_path.name, e.message)
                result = ConversionResult.failure(
                    options.strategy or DEFAULT_STRATEGY,
                    file_path,
                    e.message,
                    error_code=e.code,
                )
            results.append(result)

        succeeded = sum(1 for r in results if r.success)
        logger.info("Batch conversion finished: %d/%d succeeded", succeeded, len(results))
        return results

    async def compare_converters(
        self,
        file_path: Path,
        options: ConversionOptions | None = None,
    ) -> ComparisonResult:
        """
        Run every registered strategy for the file's direction.

        Quality is assessed unless ``options.assess_quality`` is False. One
        converter failing never stops the others. Results keep registration
        order.

        Raises:
            ConfigurationError: Unsupported file type or no strategies registered
        """
        options = options or ConversionOptions()
        file_path = Path(file_path)
        input_kind = detect_document_kind(file_path)
        output_kind = input_kind.opposite
        conversion_type = determine_conversion_type(input_kind, output_kind)

        strategies = self._registry.strategies(conversion_type)
        if not strategies:
            raise ConfigurationError(
                f"No converters registered for {conversion_type.value}",
                details={"conversion_type": conversion_type.value},
                code=ErrorCode.CONFIG_NO_DEFAULT_CONVERTER,
            )

        assess = True if options.assess_quality is None else options.assess_quality
        run_dir = self._run_dir(options)
        results: list[ConversionResult] = []

        for strategy_name, converter in strategies:
            result = await self._run_converter(
                strategy_name,
                converter,
                file_path,
                input_kind,
                output_kind,
                conversion_type,
                run_dir / strategy_name,
                assess=assess,
                preprocess=self._should_preprocess(options),
            )
            results.append(result)

        logger.info(
            "Compared %d converters on %s (%d succeeded)",
            len(results),
            file_path.name,
            sum(1 for r in results if r.success),
        )

        return ComparisonResult(
            input_path=file_path,
            input_type=input_kind,
            output_type=output_kind,
            conversion_type=conversion_type,
            run_dir=run_dir,
            results=results,
        )

    # --- Benchmarking ---

    async def run_benchmark(
        self,
        converter_id: str,
        file_path: Path,
        iterations: int | None = None,
        output_type: DocumentKind | str | None = None,
    ) -> BenchmarkOutcome:
        """
        Benchmark one strategy on one file.

        The strategy falls back to the default converter like any other lookup.

        Raises:
            ConfigurationError: Bad iteration count, type, or missing converter
        """
        file_path = Path(file_path)
        input_kind = detect_document_kind(file_path)
        conversion_type = determine_conversion_type(
            input_kind, resolve_output_kind(input_kind, output_type)
        )
        converter = self._registry.resolve(conversion_type, converter_id)

        return await self._driver.run(
            converter_id,
            converter,
            file_path,
            iterations=self._settings.benchmark_iterations if iterations is None else iterations,
            conversion_type=conversion_type,
        )

    async def benchmark_directory(
        self,
        directory: Path,
        iterations: int | None = None,
    ) -> BenchmarkReport:
        """
        Benchmark every registered strategy against every document in a directory.

        Results are grouped by conversion direction.
        """
        directory = Path(directory)
        if iterations is None:
            iterations = self._settings.benchmark_iterations
        report = BenchmarkReport(iterations=iterations)

        files = sorted(
            path
            for path in directory.iterdir()
            if path.is_file() and path.suffix.lower() in SUPPORTED_SUFFIXES
        )
        if not files:
            logger.warning("No .pdf or .docx files found in %s", directory)
            return report

        for file_path in files:
            input_kind = detect_document_kind(file_path)
            conversion_type = determine_conversion_type(input_kind, input_kind.opposite)
            outcomes = report.results.setdefault(conversion_type.value, [])
            for strategy_name, converter in self._registry.strategies(conversion_type):
                outcome = await self._driver.run(
                    strategy_name,
                    converter,
                    file_path,
                    iterations=iterations,
                    conversion_type=conversion_type,
                )
                outcomes.append(outcome)

        logger.info(
            "Benchmarked %d files in %s (%d failures)",
            len(files),
            directory,
            report.failure_count,
        )
        return report

    # --- Internals ---

    async def _convert(
        self,
        input_path: Path,
        output_type: DocumentKind | str | None,
        options: ConversionOptions,
        run_dir: Path,
    ) -> ConversionResult:
        input_kind = detect_document_kind(input_path)
        output_kind = resolve_output_kind(input_kind, output_type)
        conversion_type = determine_conversion_type(input_kind, output_kind)
        converter = self._registry.resolve(conversion_type, options.strategy)

        strategy_name = options.strategy
        if strategy_name not in self._registry.names(conversion_type):
            strategy_name = DEFAULT_STRATEGY

        assess = (
            self._settings.assess_quality
            if options.assess_quality is None
            else options.assess_quality
        )
        return await self._run_converter(
            strategy_name,
            converter,
            input_path,
            input_kind,
            output_kind,
            conversion_type,
            run_dir,
            assess=assess,
            preprocess=self._should_preprocess(options),
        )

    async def _run_converter(
        self,
        converter_id: str,
        converter: Converter,
        input_path: Path,
        input_kind: DocumentKind,
        output_kind: DocumentKind,
        conversion_type: ConversionType,
        output_dir: Path,
        assess: bool,
        preprocess: bool,
    ) -> ConversionResult:
        async with self._prepared_input(input_path, input_kind, preprocess) as prepared:
            result = await self._runner.run(
                converter_id, converter, prepared, output_dir, conversion_type
            )

        # Report against the caller's file, not the temporary copy
        result = result.model_copy(update={"input_path": input_path})

        if not (assess and result.success and result.output_path is not None):
            return result

        try:
            quality = await self._evaluator.evaluate(
                input_path, input_kind, result.output_path, output_kind
            )
        except ExtractionError as e:
            logger.warning(
                "Quality unavailable for %s on %s: %s",
                converter_id,
                input_path.name,
                e.message,
            )
            return result.with_quality(None, e.message)

        return result.with_quality(quality)

    @asynccontextmanager
    async def _prepared_input(
        self,
        input_path: Path,
        input_kind: DocumentKind,
        preprocess: bool,
    ) -> AsyncIterator[Path]:
        if not preprocess or input_kind is not DocumentKind.PDF:
            yield input_path
            return

        with tempfile.TemporaryDirectory(prefix="docbench-input-") as temp_dir:
            prepared = await asyncio.to_thread(
                preprocess_pdf, input_path, Path(temp_dir) / input_path.name
            )
            yield prepared

    def _should_preprocess(self, options: ConversionOptions) -> bool:
        if options.preprocess is None:
            return self._settings.preprocess_input
        return options.preprocess

    def _run_dir(self, options: ConversionOptions) -> Path:
        base = options.output_dir or self._settings.output_dir
        return Path(base) / new_run_id()
