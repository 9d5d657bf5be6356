"""Tests for the CLI."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import docx
import pytest
from typer.testing import CliRunner

from docbench.config import get_settings
from docbench.domains.conversion import ConversionType, ConverterRegistry

from .main import app

PLUGIN = f"{__name__}:register_test_converters"


def plain_docx(input_path: Path, output_dir: Path) -> dict:
    target = output_dir / f"{input_path.stem}.docx"
    document = docx.Document()
    document.add_paragraph("Hello World")
    document.save(str(target))
    return {"output_path": target}


def crashing(input_path: Path, output_dir: Path) -> dict:
    raise RuntimeError("crash")


def register_test_converters(registry: ConverterRegistry) -> None:
    registry.register(ConversionType.PDF_TO_DOCX, "default", plain_docx)
    registry.register(ConversionType.PDF_TO_DOCX, "crashing", crashing)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Point outputs and reports at the test's temp directory."""
    monkeypatch.setenv("DOCBENCH_OUTPUT_DIR", str(tmp_path / "outputs"))
    monkeypatch.setenv("DOCBENCH_REPORTS_DIR", str(tmp_path / "reports"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "DocBench v" in result.stdout


def test_convert(runner: CliRunner, hello_pdf: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, ["--plugin", PLUGIN, "convert", str(hello_pdf), "--quality"])

    assert result.exit_code == 0, result.stdout
    assert list((tmp_path / "outputs").glob("*/sample.docx"))


def test_convert_missing_file(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["convert", str(tmp_path / "nope.pdf")])
    assert result.exit_code == 1
    assert "File not found" in result.stdout


def test_convert_unsupported_type(runner: CliRunner, tmp_path: Path) -> None:
    notes = tmp_path / "notes.txt"
    notes.write_text("hi")

    result = runner.invoke(app, ["--plugin", PLUGIN, "convert", str(notes)])

    assert result.exit_code == 1
    assert "Unsupported file type" in result.stdout


def test_invalid_plugin(runner: CliRunner, hello_pdf: Path) -> None:
    result = runner.invoke(app, ["--plugin", "not-a-plugin", "compare", str(hello_pdf)])
    assert result.exit_code == 1
    assert "Error" in result.stdout


def test_compare_writes_reports(runner: CliRunner, hello_pdf: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, ["--plugin", PLUGIN, "compare", str(hello_pdf)])

    assert result.exit_code == 0, result.stdout
    reports = tmp_path / "reports"
    assert len(list(reports.glob("comparison-*.json"))) == 1
    assert len(list(reports.glob("comparison-*.txt"))) == 1


def test_benchmark_failure_exit_code(runner: CliRunner, hello_pdf: Path) -> None:
    result = runner.invoke(
        app,
        ["--plugin", PLUGIN, "benchmark", str(hello_pdf), "-c", "crashing", "-n", "2"],
    )
    assert result.exit_code == 1
    assert "crash" in result.stdout


def test_benchmark_suite(runner: CliRunner, hello_pdf: Path, tmp_path: Path) -> None:
    result = runner.invoke(
        app,
        ["--plugin", PLUGIN, "benchmark-suite", str(hello_pdf.parent), "-n", "1"],
    )

    assert result.exit_code == 0, result.stdout
    assert len(list((tmp_path / "reports").glob("benchmark-*.json"))) == 1


def test_batch_convert(runner: CliRunner, hello_pdf: Path) -> None:
    pattern = str(hello_pdf.parent / "*.pdf")
    result = runner.invoke(app, ["--plugin", PLUGIN, "batch-convert", pattern])
    assert result.exit_code == 0, result.stdout
