"""
Tests for conversion domain.
"""

from __future__ import annotations

import asyncio
import time
from pathlib import Path

import pytest

from docbench.config.errors import ConfigurationError, ErrorCode
from docbench.domains.extraction import DocumentKind
from docbench.domains.scoring import QualityScoreSet

from .contracts import Converter
from .models import (
    ConversionResult,
    ConversionType,
    ConverterOutput,
    determine_conversion_type,
    resolve_output_kind,
)
from .registry import ConverterRegistry
from .runner import TIMEOUT_MESSAGE, ConverterRunner, accepts_output_dir


def copy_converter(input_path: Path, output_dir: Path) -> dict:
    target = output_dir / f"{input_path.stem}.out"
    target.write_bytes(input_path.read_bytes())
    return {"output_path": target, "file_name": target.name, "page_count": 1}


async def async_copy_converter(input_path: Path, output_dir: Path) -> ConverterOutput:
    target = output_dir / f"{input_path.stem}.async.out"
    target.write_bytes(input_path.read_bytes())
    return ConverterOutput(file_name=target.name)


def failing_converter(input_path: Path, output_dir: Path) -> dict:
    raise RuntimeError("engine crashed")


def sibling_converter(input_path: Path) -> dict:
    """Takes only the input and writes next to it."""
    target = input_path.with_suffix(".sibling.out")
    target.write_bytes(input_path.read_bytes())
    return {"output_path": target}


def register_echo_converter(registry: ConverterRegistry) -> None:
    """Plugin hook used by the plugin loading test."""
    registry.register(ConversionType.PDF_TO_DOCX, "echo", copy_converter)


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    path = tmp_path / "input.pdf"
    path.write_bytes(b"%PDF-1.4 fake")
    return path


# --- Model Tests ---


def test_determine_conversion_type() -> None:
    assert (
        determine_conversion_type(DocumentKind.PDF, DocumentKind.DOCX)
        is ConversionType.PDF_TO_DOCX
    )
    assert (
        determine_conversion_type(DocumentKind.DOCX, DocumentKind.PDF)
        is ConversionType.DOCX_TO_PDF
    )


def test_determine_conversion_type_rejects_same_kind() -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        determine_conversion_type(DocumentKind.PDF, DocumentKind.PDF)
    assert exc_info.value.code == ErrorCode.CONFIG_UNSUPPORTED_CONVERSION


def test_resolve_output_kind() -> None:
    assert resolve_output_kind(DocumentKind.PDF) is DocumentKind.DOCX
    assert resolve_output_kind(DocumentKind.PDF, ".DOCX") is DocumentKind.DOCX
    with pytest.raises(ConfigurationError):
        resolve_output_kind(DocumentKind.PDF, "odt")


def test_converter_output_requires_location() -> None:
    with pytest.raises(ValueError):
        ConverterOutput(page_count=2)
    assert ConverterOutput(file_name="a.docx").resolve_path(Path("/out")) == Path("/out/a.docx")


def test_failed_result_invariants() -> None:
    with pytest.raises(ValueError):
        ConversionResult(converter_id="x", input_path=Path("a.pdf"), success=False)
    with pytest.raises(ValueError):
        ConversionResult(
            converter_id="x",
            input_path=Path("a.pdf"),
            success=False,
            error_message="boom",
            output_path=Path("a.docx"),
        )
    with pytest.raises(ValueError):
        ConversionResult(
            converter_id="x",
            input_path=Path("a.pdf"),
            success=True,
            error_message="boom",
        )
    with pytest.raises(ValueError):
        ConversionResult(
            converter_id="x",
            input_path=Path("a.pdf"),
            success=True,
            error_code=ErrorCode.CONVERSION_FAILED,
        )


def test_failure_carries_error_code() -> None:
    failed = ConversionResult.failure("x", Path("a.pdf"), "boom")
    assert failed.error_code == ErrorCode.CONVERSION_FAILED

    timed_out = ConversionResult.failure(
        "x", Path("a.pdf"), TIMEOUT_MESSAGE, error_code=ErrorCode.CONVERSION_TIMEOUT
    )
    assert timed_out.model_dump(mode="json")["error_code"] == "CONVERSION_TIMEOUT"


def test_with_quality_is_a_copy() -> None:
    result = ConversionResult(
        converter_id="x",
        input_path=Path("a.pdf"),
        output_path=Path("a.docx"),
        success=True,
    )
    quality = QualityScoreSet.from_scores({"textAccuracy": 80.0})

    updated = result.with_quality(quality)

    assert result.quality is None
    assert updated.quality == quality


def test_with_quality_ignored_on_failure() -> None:
    failed = ConversionResult.failure("x", Path("a.pdf"), "boom")
    assert failed.with_quality(QualityScoreSet.from_scores({})).quality is None


# --- Registry Tests ---


def test_resolve_falls_back_to_default() -> None:
    registry = ConverterRegistry()
    registry.register(ConversionType.PDF_TO_DOCX, "default", copy_converter)

    assert registry.resolve(ConversionType.PDF_TO_DOCX, "missing") is copy_converter
    assert registry.resolve("pdf-to-docx") is copy_converter


def test_resolve_without_default_raises() -> None:
    registry = ConverterRegistry()
    registry.register(ConversionType.PDF_TO_DOCX, "fast", copy_converter)

    with pytest.raises(ConfigurationError) as exc_info:
        registry.resolve(ConversionType.PDF_TO_DOCX, "missing")

    assert exc_info.value.code == ErrorCode.CONFIG_NO_DEFAULT_CONVERTER
    assert registry.resolve(ConversionType.PDF_TO_DOCX, "fast") is copy_converter


def test_strategies_keep_registration_order() -> None:
    registry = ConverterRegistry()
    registry.register(ConversionType.PDF_TO_DOCX, "b", copy_converter)
    registry.register(ConversionType.PDF_TO_DOCX, "a", async_copy_converter)

    assert [name for name, _ in registry.strategies("pdf-to-docx")] == ["b", "a"]
    assert registry.strategies(ConversionType.DOCX_TO_PDF) == []


def test_strategies_skip_aliased_default() -> None:
    registry = ConverterRegistry()
    registry.register(ConversionType.PDF_TO_DOCX, "default", copy_converter)
    registry.register(ConversionType.PDF_TO_DOCX, "copy", copy_converter)
    registry.register(ConversionType.PDF_TO_DOCX, "async", async_copy_converter)

    assert [name for name, _ in registry.strategies("pdf-to-docx")] == ["copy", "async"]


def test_strategies_keep_unique_default() -> None:
    registry = ConverterRegistry()
    registry.register(ConversionType.PDF_TO_DOCX, "default", copy_converter)
    registry.register(ConversionType.PDF_TO_DOCX, "async", async_copy_converter)

    assert [name for name, _ in registry.strategies("pdf-to-docx")] == ["default", "async"]


def test_register_rejects_non_callable() -> None:
    with pytest.raises(ConfigurationError):
        ConverterRegistry().register(ConversionType.PDF_TO_DOCX, "bad", "nope")  # type: ignore


def test_load_plugin() -> None:
    registry = ConverterRegistry()
    registry.load_plugin(f"{__name__}:register_echo_converter")

    assert registry.resolve(ConversionType.PDF_TO_DOCX, "echo") is copy_converter


@pytest.mark.parametrize("target", ["no_colon", "docbench.missing_module:hook", f"{__name__}:nope"])
def test_load_plugin_invalid(target: str) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        ConverterRegistry().load_plugin(target)
    assert exc_info.value.code == ErrorCode.CONFIG_INVALID_PLUGIN


def test_load_entry_points_without_installed_plugins() -> None:
    assert ConverterRegistry().load_entry_points("docbench.tests.no_such_group") == 0


class _BrokenEntryPoint:
    name = "broken"
    value = "docbench.missing_module:register"

    def load(self) -> None:
        raise ImportError("No module named 'docbench.missing_module'")


class _NotCallableEntryPoint:
    name = "constant"
    value = "docbench.domains.conversion.registry:DEFAULT_STRATEGY"

    def load(self) -> str:
        return "default"


@pytest.mark.parametrize("entry_point", [_BrokenEntryPoint(), _NotCallableEntryPoint()])
def test_load_entry_points_invalid(entry_point, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "docbench.domains.conversion.registry.entry_points",
        lambda group: [entry_point],
    )

    with pytest.raises(ConfigurationError) as exc_info:
        ConverterRegistry().load_entry_points()
    assert exc_info.value.code == ErrorCode.CONFIG_INVALID_PLUGIN
    assert exc_info.value.details["entry_point"] == entry_point.name


def test_load_entry_points_calls_hooks(monkeypatch: pytest.MonkeyPatch) -> None:
    class EchoEntryPoint:
        name = "echo"
        value = f"{__name__}:register_echo_converter"

        def load(self):
            return register_echo_converter

    monkeypatch.setattr(
        "docbench.domains.conversion.registry.entry_points",
        lambda group: [EchoEntryPoint()],
    )
    registry = ConverterRegistry()

    assert registry.load_entry_points() == 1
    assert registry.resolve(ConversionType.PDF_TO_DOCX, "echo") is copy_converter


def test_converters_satisfy_contract() -> None:
    assert isinstance(copy_converter, Converter)
    assert isinstance(async_copy_converter, Converter)


# --- Runner Tests ---


async def test_run_sync_converter(source_file: Path, tmp_path: Path) -> None:
    result = await ConverterRunner().run(
        "copy",
        copy_converter,
        source_file,
        tmp_path / "out",
        ConversionType.PDF_TO_DOCX,
    )

    assert result.success is True
    assert result.output_path == tmp_path / "out" / "input.out"
    assert result.output_path.exists()
    assert result.page_count == 1
    assert result.memory_bytes is not None and result.memory_bytes >= 0
    assert result.conversion_type is ConversionType.PDF_TO_DOCX


async def test_run_async_converter_with_file_name_only(
    source_file: Path, tmp_path: Path
) -> None:
    result = await ConverterRunner(trace_memory=False).run(
        "async", async_copy_converter, source_file, tmp_path / "out"
    )

    assert result.success is True
    assert result.output_path == tmp_path / "out" / "input.async.out"
    assert result.memory_bytes is None


async def test_run_uses_injected_clock(source_file: Path, tmp_path: Path) -> None:
    ticks = iter([10.0, 10.25])
    runner = ConverterRunner(clock=lambda: next(ticks))

    result = await runner.run("copy", copy_converter, source_file, tmp_path)

    assert result.conversion_time_ms == pytest.approx(250.0)


async def test_run_converter_exception_becomes_failure(
    source_file: Path, tmp_path: Path
) -> None:
    result = await ConverterRunner().run("broken", failing_converter, source_file, tmp_path)

    assert result.success is False
    assert result.error_message == "engine crashed"
    assert result.error_code == ErrorCode.CONVERSION_FAILED
    assert result.output_path is None
    assert result.quality is None


async def test_run_invalid_shape_is_failure(source_file: Path, tmp_path: Path) -> None:
    def returns_string(input_path: Path, output_dir: Path) -> str:
        return "done"

    def returns_empty(input_path: Path, output_dir: Path) -> dict:
        return {"page_count": 3}

    for converter in (returns_string, returns_empty):
        result = await ConverterRunner().run("bad", converter, source_file, tmp_path)
        assert result.success is False
        assert result.error_message
        assert result.error_code == ErrorCode.CONVERSION_INVALID_OUTPUT


async def test_run_missing_output_is_failure(source_file: Path, tmp_path: Path) -> None:
    def phantom(input_path: Path, output_dir: Path) -> dict:
        return {"file_name": "never-written.docx"}

    result = await ConverterRunner().run("phantom", phantom, source_file, tmp_path)

    assert result.success is False
    assert "not found" in result.error_message
    assert result.error_code == ErrorCode.CONVERSION_INVALID_OUTPUT


async def test_run_timeout(source_file: Path, tmp_path: Path) -> None:
    async def slow(input_path: Path, output_dir: Path) -> dict:
        await asyncio.sleep(5)
        return {"file_name": "late.docx"}

    start = time.perf_counter()
    result = await ConverterRunner(timeout_seconds=0.05).run(
        "slow", slow, source_file, tmp_path
    )

    assert result.success is False
    assert result.error_message == TIMEOUT_MESSAGE
    assert result.error_code == ErrorCode.CONVERSION_TIMEOUT
    assert time.perf_counter() - start < 2


async def test_run_single_argument_converter(source_file: Path, tmp_path: Path) -> None:
    """A converter taking only the input path is called without the output dir."""
    result = await ConverterRunner().run(
        "sibling", sibling_converter, source_file, tmp_path / "out"
    )

    assert result.success is True
    assert result.output_path == tmp_path / "input.sibling.out"
    assert result.output_path.read_bytes() == source_file.read_bytes()


async def test_run_single_argument_async_converter(source_file: Path, tmp_path: Path) -> None:
    async def sibling(input_path: Path) -> dict:
        return sibling_converter(input_path)

    result = await ConverterRunner(trace_memory=False).run(
        "sibling", sibling, source_file, tmp_path / "out"
    )

    assert result.success is True
    assert result.output_path == tmp_path / "input.sibling.out"


class CallableConverter:
    def __call__(self, input_path: Path) -> dict:
        return sibling_converter(input_path)


def test_accepts_output_dir() -> None:
    def variadic(*args: Path) -> dict:
        return {}

    def keyword_dir(input_path: Path, *, output_dir: Path) -> dict:
        return {}

    assert accepts_output_dir(copy_converter) is True
    assert accepts_output_dir(async_copy_converter) is True
    assert accepts_output_dir(variadic) is True
    assert accepts_output_dir(sibling_converter) is False
    assert accepts_output_dir(keyword_dir) is False
    assert accepts_output_dir(CallableConverter()) is False
