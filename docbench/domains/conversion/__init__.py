"""
Conversion Domain - Pluggable converters and their execution.

This domain handles:
- Conversion directions and converter output validation
- The converter registry with default fallback and plugin loading
- Timed, memory-traced converter execution
"""

from .contracts import Converter, ConverterPlugin
from .models import (
    ConversionResult,
    ConversionType,
    ConverterOutput,
    determine_conversion_type,
    resolve_output_kind,
)
from .registry import DEFAULT_STRATEGY, ENTRY_POINT_GROUP, ConverterRegistry
from .runner import TIMEOUT_MESSAGE, ConverterRunner

__all__ = [
    # Contracts
    "Converter",
    "ConverterPlugin",
    # Models
    "ConversionType",
    "ConverterOutput",
    "ConversionResult",
    "determine_conversion_type",
    "resolve_output_kind",
    # Implementations
    "ConverterRegistry",
    "ConverterRunner",
    "DEFAULT_STRATEGY",
    "ENTRY_POINT_GROUP",
    "TIMEOUT_MESSAGE",
]
