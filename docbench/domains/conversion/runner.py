"""
Converter Runner - Runs one converter once and measures it.

Features:
- High-resolution timing with an injectable clock
- Python heap growth via tracemalloc
- Sync converters run in a worker thread, async ones are awaited
- Optional per-call timeout
- Shape validation of the converter's return value
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
import tracemalloc
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from docbench.config.errors import ConversionError, ErrorCode

from .contracts import Converter
from .models import ConversionResult, ConversionType, ConverterOutput

logger = logging.getLogger(__name__)

__all__ = ["ConverterRunner", "TIMEOUT_MESSAGE", "accepts_output_dir"]

TIMEOUT_MESSAGE = "timeout"


def accepts_output_dir(converter: Converter) -> bool:
    """
    Whether a converter takes the output directory as a second argument.

    Single-argument converters get only the input path and must report an
    absolute ``output_path``. Callables without an introspectable signature
    receive both arguments.
    """
    try:
        parameters = inspect.signature(converter).parameters.values()
    except (TypeError, ValueError):
        return True

    positional = 0
    for parameter in parameters:
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            positional += 1
    return positional >= 2


class ConverterRunner:
    """
    Executes converters and records time, memory, and outcome.

    Converter exceptions never escape ``run``; they become failed results.

    Example:
        >>> runner = ConverterRunner(timeout_seconds=60)
        >>> result = await runner.run("fast", fast_converter, Path("a.pdf"), Path("out"))
        >>> result.success, result.conversion_time_ms
    """

    def __init__(
        self,
        timeout_seconds: float | None = None,
        trace_memory: bool = True,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        """
        Initialize runner.

        Args:
            timeout_seconds: Per-call limit; None waits indefinitely
            trace_memory: Measure heap growth with tracemalloc
            clock: Monotonic clock returning seconds
        """
        self._timeout = timeout_seconds
        self._trace_memory = trace_memory
        self._clock = clock

    async def run(
        self,
        converter_id: str,
        converter: Converter,
        input_path: Path,
        output_dir: Path,
        conversion_type: ConversionType | None = None,
    ) -> ConversionResult:
        """
        Run a converter once.

        Args:
            converter_id: Strategy name recorded in the result
            converter: Converter callable
            input_path: File handed to the converter
            output_dir: Directory the converter writes into
            conversion_type: Direction, recorded in the result

        Returns:
            Successful or failed conversion result
        """
        input_path = Path(input_path)
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        started_tracing = False
        baseline = 0
        if self._trace_memory:
            started_tracing = not tracemalloc.is_tracing()
            if started_tracing:
                tracemalloc.start()
            tracemalloc.reset_peak()
            baseline = tracemalloc.get_traced_memory()[0]

        start = self._clock()
        try:
            raw = await self._call(converter, input_path, output_dir)
        except asyncio.TimeoutError:
            elapsed_ms = (self._clock() - start) * 1000
            logger.warning(
                "Converter %s timed out after %.1fms on %s",
                converter_id,
                elapsed_ms,
                input_path.name,
            )
            return ConversionResult.failure(
                converter_id,
                input_path,
                TIMEOUT_MESSAGE,
                conversion_type,
                elapsed_ms,
                error_code=ErrorCode.CONVERSION_TIMEOUT,
            )
        except Exception as e:
            elapsed_ms = (self._clock() - start) * 1000
            logger.warning("Converter %s failed on %s: %s", converter_id, input_path.name, e)
            return ConversionResult.failure(
                converter_id,
                input_path,
                str(e) or type(e).__name__,
                conversion_type,
                elapsed_ms,
            )
        finally:
            memory_bytes = None
            if self._trace_memory:
                peak = tracemalloc.get_traced_memory()[1]
                memory_bytes = max(0, peak - baseline)
                if started_tracing:
                    tracemalloc.stop()

        elapsed_ms = (self._clock() - start) * 1000

        try:
            output = self._validate(raw)
        except ConversionError as e:
            logger.warning("Converter %s returned an invalid result: %s", converter_id, e.message)
            return ConversionResult.failure(
                converter_id, input_path, e.message, conversion_type, elapsed_ms, e.code
            )

        output_path = output.resolve_path(output_dir)
        if not output_path.exists():
            logger.warning("Converter %s reported missing file %s", converter_id, output_path)
            return ConversionResult.failure(
                converter_id,
                input_path,
                f"Converter output not found: {output_path}",
                conversion_type,
                elapsed_ms,
                ErrorCode.CONVERSION_INVALID_OUTPUT,
            )

        logger.info(
            "Converter %s finished %s in %.1fms",
            converter_id,
            input_path.name,
            elapsed_ms,
        )

        return ConversionResult(
            converter_id=converter_id,
            input_path=input_path,
            conversion_type=conversion_type,
            output_path=output_path,
            conversion_time_ms=elapsed_ms,
            memory_bytes=memory_bytes,
            page_count=output.page_count,
            success=True,
        )

    async def _call(self, converter: Converter, input_path: Path, output_dir: Path) -> Any:
        if self._timeout is None:
            return await self._invoke(converter, input_path, output_dir)
        return await asyncio.wait_for(
            self._invoke(converter, input_path, output_dir),
            timeout=self._timeout,
        )

    @staticmethod
    async def _invoke(converter: Converter, input_path: Path, output_dir: Path) -> Any:
        args = (input_path, output_dir) if accepts_output_dir(converter) else (input_path,)
        if inspect.iscoroutinefunction(converter):
            return await converter(*args)

        # A timed-out thread keeps running; only the wait is abandoned.
        result = await asyncio.to_thread(converter, *args)
        if inspect.isawaitable(result):
            result = await result
        return result

    @staticmethod
    def _validate(raw: Any) -> ConverterOutput:
        if isinstance(raw, ConverterOutput):
            return raw
        if not isinstance(raw, Mapping):
            raise ConversionError(
                f"Converter returned {type(raw).__name__}, expected a mapping",
                code=ErrorCode.CONVERSION_INVALID_OUTPUT,
            )
        try:
            return ConverterOutput.model_validate(dict(raw))
        except ValidationError as e:
            raise ConversionError(
                f"Invalid converter output: {e.errors()[0]['msg']}",
                details={"output": {k: str(v) for k, v in raw.items()}},
                code=ErrorCode.CONVERSION_INVALID_OUTPUT,
            ) from e
