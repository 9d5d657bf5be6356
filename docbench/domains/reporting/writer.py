"""
Report Writer - Persist comparison and benchmark reports.

Reports are write-once: a file name that already exists is an error rather
than being overwritten. Every comparison report carries an output manifest
with SHA-256 checksums of the converter outputs.

Files:
- comparison-<ts>.json: results, scores and output manifest
- comparison-<ts>.txt: side-by-side human-readable summary
- benchmark-<ts>.json: benchmark report grouped by direction
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from docbench.config.errors import DocBenchError, ErrorCode
from docbench.config.manifest import OutputManifest
from docbench.domains.benchmark import BenchmarkReport
from docbench.domains.orchestration import ComparisonResult

logger = logging.getLogger(__name__)

__all__ = ["ReportWriter", "build_comparison_manifest", "render_comparison_text"]

RULE = "=" * 72
THIN_RULE = "-" * 72


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")


def build_comparison_manifest(comparison: ComparisonResult) -> OutputManifest:
    """Checksums of every output file a comparison produced."""
    run_id = comparison.run_dir.name if comparison.run_dir else _timestamp()
    manifest = OutputManifest(run_id=run_id)
    for result in comparison.successful:
        if result.output_path is not None:
            manifest.add_item(result.output_path, converter_id=result.converter_id)
    return manifest


def render_comparison_text(comparison: ComparisonResult) -> str:
    """Plain-text comparison of every converter's result."""
    lines = [
        RULE,
        "CONVERTER COMPARISON",
        RULE,
        f"Input:      {comparison.input_path}",
        f"Direction:  {comparison.conversion_type.value}",
        f"Generated:  {comparison.timestamp.isoformat()}",
        f"Converters: {len(comparison.results)} ({len(comparison.successful)} succeeded)",
        "",
    ]

    for result in comparison.results:
        lines.append(THIN_RULE)
        lines.append(f"[{result.converter_id}] {'OK' if result.success else 'FAILED'}")
        lines.append(f"  Time:    {result.conversion_time_ms:.1f} ms")
        if result.memory_bytes is not None:
            lines.append(f"  Memory:  {result.memory_bytes / 1024:.1f} KiB")
        if not result.success:
            lines.append(f"  Error:   {result.error_message}")
            continue

        lines.append(f"  Output:  {result.output_path}")
        if result.quality is None:
            if result.quality_error:
                lines.append(f"  Quality: unavailable ({result.quality_error})")
            continue

        lines.append(f"  Overall: {result.quality.overall:.1f}")
        for axis, score in result.quality.scores.items():
            lines.append(f"    {axis:<14} {score:6.1f}")
        sample = result.quality.text_sample
        if sample is not None:
            lines.append("  Original text:")
            lines.append(f"    {sample.original!r}")
            lines.append("  Converted text:")
            lines.append(f"    {sample.converted!r}")

    ranked = comparison.ranked()
    lines.append(RULE)
    if ranked:
        best = ranked[0]
        lines.append(f"Best quality: {best.converter_id} ({best.quality.overall:.1f})")
    fastest = comparison.fastest()
    if fastest is not None:
        lines.append(f"Fastest:      {fastest.converter_id} ({fastest.conversion_time_ms:.1f} ms)")
    lines.append(RULE)

    return "\n".join(lines) + "\n"


class ReportWriter:
    """
    Writes reports into a reports directory.

    Example:
        >>> writer = ReportWriter(Path("reports"))
        >>> json_path = writer.write_comparison(comparison)
        >>> text_path = writer.write_comparison_text(comparison)
    """

    def __init__(self, reports_dir: Path) -> None:
        self._reports_dir = Path(reports_dir)

    def write_comparison(self, comparison: ComparisonResult) -> Path:
        """Write the JSON comparison report with its output manifest."""
        payload: dict[str, Any] = comparison.model_dump(mode="json")
        payload["manifest"] = build_comparison_manifest(comparison).to_dict()
        return self._write_once(f"comparison-{_timestamp()}.json", _dump(payload))

    def write_comparison_text(self, comparison: ComparisonResult) -> Path:
        return self._write_once(
            f"comparison-{_timestamp()}.txt", render_comparison_text(comparison)
        )

    def write_benchmark(self, report: BenchmarkReport) -> Path:
        """Write the JSON benchmark report."""
        return self._write_once(
            f"benchmark-{_timestamp()}.json", _dump(report.model_dump(mode="json"))
        )

    def _write_once(self, name: str, content: str) -> Path:
        path = self._reports_dir / name
        try:
            self._reports_dir.mkdir(parents=True, exist_ok=True)
            with open(path, "x", encoding="utf-8") as f:
                f.write(content)
        except FileExistsError as e:
            raise DocBenchError(
                ErrorCode.REPORT_WRITE_FAILED,
                f"Report already exists: {path}",
                details={"path": str(path)},
            ) from e
        except OSError as e:
            raise DocBenchError(
                ErrorCode.REPORT_WRITE_FAILED,
                f"Cannot write report {path}: {e}",
                details={"path": str(path)},
            ) from e

        logger.info("Report written: %s", path)
        return path


def _dump(payload: dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
