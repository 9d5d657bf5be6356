"""
Orchestration Models - Options and comparison results.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field

from docbench.domains.conversion import ConversionResult, ConversionType
from docbench.domains.extraction import DocumentKind


class ConversionOptions(BaseModel):
    """Per-call options; None means "use the configured default"."""

    strategy: str | None = None
    assess_quality: bool | None = None
    preprocess: bool | None = None
    output_dir: Path | None = None


class ComparisonResult(BaseModel):
    """Every registered strategy run against one input, in registration order."""

    input_path: Path
    input_type: DocumentKind
    output_type: DocumentKind
    conversion_type: ConversionType
    run_dir: Path | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    results: list[ConversionResult] = Field(default_factory=list)

    @property
    def successful(self) -> list[ConversionResult]:
        return [result for result in self.results if result.success]

    def ranked(self) -> list[ConversionResult]:
        """Successful results with quality, best overall score first."""
        scored = [r for r in self.successful if r.quality is not None]
        return sorted(scored, key=lambda r: r.quality.overall, reverse=True)

    def fastest(self) -> ConversionResult | None:
        return min(self.successful, key=lambda r: r.conversion_time_ms, default=None)
