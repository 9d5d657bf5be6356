"""
Conversion Contracts - Interfaces for conversion domain.
"""

from __future__ import annotations

from collections.abc import Awaitable, Mapping
from pathlib import Path
from typing import Any, Protocol, Union, runtime_checkable

from .models import ConverterOutput

ConverterReturn = Union[ConverterOutput, Mapping[str, Any]]


@runtime_checkable
class Converter(Protocol):
    """
    Contract for a pluggable converter.

    A converter is any callable taking the input file and, optionally, the
    directory it should write into. The directory is passed only when the
    callable accepts a second positional argument; a one-argument converter
    picks its own location and reports it as ``output_path``. It may be sync
    or async and may return a ConverterOutput or a mapping with the same keys.

    Example:
        >>> async def my_converter(input_path: Path, output_dir: Path) -> dict:
        ...     target = output_dir / (input_path.stem + ".docx")
        ...     ...
        ...     return {"output_path": target, "file_name": target.name}
    """

    def __call__(
        self,
        input_path: Path,
        output_dir: Path,
    ) -> ConverterReturn | Awaitable[ConverterReturn]:
        ...


@runtime_checkable
class ConverterPlugin(Protocol):
    """Hook loaded from ``module:function`` that registers converters."""

    def __call__(self, registry: Any) -> None:
        ...
