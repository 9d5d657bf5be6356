"""
Error Taxonomy - Consistent error codes across the engine.

Usage:
    from docbench.config.errors import ErrorCode, DocBenchError

    raise DocBenchError(ErrorCode.EXTRACTION_FAILED, "PDF parsing failed")

Extraction and conversion errors are caught by the component that produced
them and turned into result data. Configuration errors propagate to the caller.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes for machine-readable error payloads."""

    # Extraction errors
    EXTRACTION_FAILED = "EXTRACTION_FAILED"
    EXTRACTION_FILE_NOT_FOUND = "EXTRACTION_FILE_NOT_FOUND"
    EXTRACTION_INVALID_DOCUMENT = "EXTRACTION_INVALID_DOCUMENT"

    # Conversion errors
    CONVERSION_FAILED = "CONVERSION_FAILED"
    CONVERSION_INVALID_OUTPUT = "CONVERSION_INVALID_OUTPUT"
    CONVERSION_TIMEOUT = "CONVERSION_TIMEOUT"

    # Configuration errors
    CONFIG_UNSUPPORTED_FILE_TYPE = "CONFIG_UNSUPPORTED_FILE_TYPE"
    CONFIG_UNSUPPORTED_CONVERSION = "CONFIG_UNSUPPORTED_CONVERSION"
    CONFIG_NO_DEFAULT_CONVERTER = "CONFIG_NO_DEFAULT_CONVERTER"
    CONFIG_INVALID_PLUGIN = "CONFIG_INVALID_PLUGIN"
    CONFIG_INVALID_VALUE = "CONFIG_INVALID_VALUE"

    # Benchmark errors
    STATISTICS_NO_SAMPLES = "STATISTICS_NO_SAMPLES"

    # Report errors
    REPORT_WRITE_FAILED = "REPORT_WRITE_FAILED"


class DocBenchError(Exception):
    """Base exception with error code support."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to report-friendly dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


# Domain-specific exceptions for cleaner imports
class ExtractionError(DocBenchError):
    """Content could not be extracted from a document at all."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.EXTRACTION_FAILED,
    ) -> None:
        super().__init__(code, message, details)


class ConversionError(DocBenchError):
    """A converter raised or returned an invalid result."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.CONVERSION_FAILED,
    ) -> None:
        super().__init__(code, message, details)


class ConfigurationError(DocBenchError):
    """Unsupported direction, missing default converter, or bad settings."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.CONFIG_UNSUPPORTED_CONVERSION,
    ) -> None:
        super().__init__(code, message, details)


class StatisticsError(DocBenchError):
    """Statistics requested over an empty sample set."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.STATISTICS_NO_SAMPLES, message, details)
