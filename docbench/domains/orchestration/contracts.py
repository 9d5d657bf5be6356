"""
Orchestration Contracts - Interfaces for orchestration domain.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from docbench.domains.benchmark import BenchmarkOutcome
from docbench.domains.conversion import ConversionResult
from docbench.domains.extraction import DocumentKind

from .models import ComparisonResult, ConversionOptions


@runtime_checkable
class ConversionOrchestrator(Protocol):
    """Contract for the library entry points."""

    async def convert_document(
        self,
        input_path: Path,
        output_type: DocumentKind | str | None = None,
        options: ConversionOptions | None = None,
    ) -> ConversionResult:
        """
        Convert one document with the selected (or default) strategy.

        Raises:
            ConfigurationError: Unsupported file type or direction, or no converter
        """
        ...

    async def batch_convert(
        self,
        file_paths: Sequence[Path],
        options: ConversionOptions | None = None,
    ) -> list[ConversionResult]:
        """Convert many documents; one result per input, in input order."""
        ...

    async def compare_converters(
        self,
        file_path: Path,
        options: ConversionOptions | None = None,
    ) -> ComparisonResult:
        """
        Run every registered strategy for the file's direction.

        Raises:
            ConfigurationError: Unsupported file type or no strategies registered
        """
        ...

    async def run_benchmark(
        self,
        converter_id: str,
        file_path: Path,
        iterations: int | None = None,
    ) -> BenchmarkOutcome:
        """Benchmark one strategy on one file."""
        ...
