"""
Tests for reporting domain and output manifests.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from docbench.config.errors import DocBenchError, ErrorCode
from docbench.config.manifest import OutputManifest, compute_file_checksum
from docbench.domains.benchmark import BenchmarkFailure, BenchmarkReport
from docbench.domains.conversion import ConversionResult, ConversionType
from docbench.domains.extraction import DocumentKind
from docbench.domains.orchestration import ComparisonResult
from docbench.domains.scoring import QualityScoreSet, TextSample

from . import writer as writer_module
from .writer import ReportWriter, build_comparison_manifest, render_comparison_text


@pytest.fixture
def comparison(tmp_path: Path) -> ComparisonResult:
    run_dir = tmp_path / "outputs" / "20250101T000000000000Z-abcd1234"
    run_dir.mkdir(parents=True)
    output = run_dir / "sample.docx"
    output.write_bytes(b"converted bytes")

    quality = QualityScoreSet.from_scores(
        {"textAccuracy": 100.0, "structure": 90.0},
        text_sample=TextSample(original="Hello World", converted="Hello World"),
    )
    return ComparisonResult(
        input_path=tmp_path / "sample.pdf",
        input_type=DocumentKind.PDF,
        output_type=DocumentKind.DOCX,
        conversion_type=ConversionType.PDF_TO_DOCX,
        run_dir=run_dir,
        results=[
            ConversionResult(
                converter_id="good",
                input_path=tmp_path / "sample.pdf",
                output_path=output,
                conversion_time_ms=12.5,
                memory_bytes=2048,
                success=True,
                quality=quality,
            ),
            ConversionResult.failure("bad", tmp_path / "sample.pdf", "engine crashed"),
        ],
    )


def test_manifest_checksums_outputs(comparison: ComparisonResult) -> None:
    manifest = build_comparison_manifest(comparison)

    assert manifest.run_id == "20250101T000000000000Z-abcd1234"
    assert len(manifest.items) == 1
    item = manifest.items[0]
    assert item.converter_id == "good"
    assert item.checksum == compute_file_checksum(Path(item.path))
    assert manifest.verify() == []


def test_manifest_detects_changed_output(comparison: ComparisonResult) -> None:
    manifest = build_comparison_manifest(comparison)
    Path(manifest.items[0].path).write_bytes(b"tampered")

    errors = manifest.verify()

    assert len(errors) == 1
    assert "Checksum mismatch" in errors[0]


def test_manifest_from_dict(comparison: ComparisonResult) -> None:
    manifest = build_comparison_manifest(comparison)
    restored = OutputManifest.from_dict(manifest.to_dict())
    assert restored.items[0].checksum == manifest.items[0].checksum


def test_render_comparison_text(comparison: ComparisonResult) -> None:
    text = render_comparison_text(comparison)

    assert "[good] OK" in text
    assert "[bad] FAILED" in text
    assert "engine crashed" in text
    assert "'Hello World'" in text
    assert "Best quality: good" in text


def test_write_comparison_json(comparison: ComparisonResult, tmp_path: Path) -> None:
    path = ReportWriter(tmp_path / "reports").write_comparison(comparison)

    assert path.name.startswith("comparison-") and path.suffix == ".json"
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert [r["converter_id"] for r in payload["results"]] == ["good", "bad"]
    assert payload["results"][1]["error_message"] == "engine crashed"
    assert len(payload["manifest"]["items"]) == 1


def test_write_comparison_text(comparison: ComparisonResult, tmp_path: Path) -> None:
    path = ReportWriter(tmp_path).write_comparison_text(comparison)
    assert path.suffix == ".txt"
    assert "CONVERTER COMPARISON" in path.read_text(encoding="utf-8")


def test_write_benchmark(tmp_path: Path) -> None:
    report = BenchmarkReport(
        iterations=2,
        results={
            "pdf-to-docx": [
                BenchmarkFailure(
                    converter_id="bad", file_label="a.pdf", error="All iterations failed"
                )
            ]
        },
    )

    path = ReportWriter(tmp_path).write_benchmark(report)

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert path.name.startswith("benchmark-")
    assert payload["results"]["pdf-to-docx"][0]["success"] is False
    assert payload["iterations"] == 2


def test_reports_are_write_once(
    comparison: ComparisonResult,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(writer_module, "_timestamp", lambda: "fixed")
    writer = ReportWriter(tmp_path)
    writer.write_comparison(comparison)

    with pytest.raises(DocBenchError) as exc_info:
        writer.write_comparison(comparison)

    assert exc_info.value.code == ErrorCode.REPORT_WRITE_FAILED
