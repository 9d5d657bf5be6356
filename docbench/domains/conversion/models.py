"""
Conversion Models - Directions, converter outputs, and conversion results.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from docbench.config.errors import ConfigurationError, ErrorCode
from docbench.domains.extraction import DocumentKind
from docbench.domains.scoring import QualityScoreSet


class ConversionType(str, Enum):
    """Supported conversion directions."""

    PDF_TO_DOCX = "pdf-to-docx"
    DOCX_TO_PDF = "docx-to-pdf"

    @property
    def source(self) -> DocumentKind:
        return DocumentKind.PDF if self is ConversionType.PDF_TO_DOCX else DocumentKind.DOCX

    @property
    def target(self) -> DocumentKind:
        return self.source.opposite


def determine_conversion_type(
    input_kind: DocumentKind,
    output_kind: DocumentKind,
) -> ConversionType:
    """
    Map an input/output pair to a conversion direction.

    Raises:
        ConfigurationError: If the pair is not a supported direction
    """
    for conversion_type in ConversionType:
        if conversion_type.source is input_kind and conversion_type.target is output_kind:
            return conversion_type
    raise ConfigurationError(
        f"Unsupported conversion: {input_kind.value} -> {output_kind.value}",
        details={"input_type": input_kind.value, "output_type": output_kind.value},
        code=ErrorCode.CONFIG_UNSUPPORTED_CONVERSION,
    )


def resolve_output_kind(
    input_kind: DocumentKind,
    output_type: DocumentKind | str | None = None,
) -> DocumentKind:
    """Requested output kind, or the opposite of the input when omitted."""
    if output_type is None:
        return input_kind.opposite
    if isinstance(output_type, DocumentKind):
        return output_type
    try:
        return DocumentKind(output_type.lower().lstrip("."))
    except ValueError:
        raise ConfigurationError(
            f"Unsupported output type: {output_type}",
            details={"output_type": output_type},
            code=ErrorCode.CONFIG_UNSUPPORTED_FILE_TYPE,
        ) from None


class ConverterOutput(BaseModel):
    """What a converter reports back about the file it produced."""

    output_path: Path | None = None
    file_name: str | None = None
    page_count: int | None = Field(default=None, ge=0)

    model_config = {"extra": "ignore"}

    @model_validator(mode="after")
    def _require_location(self) -> ConverterOutput:
        if self.output_path is None and not self.file_name:
            raise ValueError("converter output needs output_path or file_name")
        return self

    def resolve_path(self, output_dir: Path) -> Path:
        """Absolute location of the produced file."""
        if self.output_path is not None:
            return Path(self.output_path)
        return Path(output_dir) / str(self.file_name)


class ConversionResult(BaseModel):
    """
    Outcome of running one converter on one input.

    A failed result carries an error message and code but neither an output
    path nor quality scores. A successful result carries neither. Quality can
    still be missing on success, with ``quality_error`` saying why.
    """

    converter_id: str
    input_path: Path
    conversion_type: ConversionType | None = None
    output_path: Path | None = None
    conversion_time_ms: float = Field(default=0.0, ge=0.0)
    memory_bytes: int | None = None
    page_count: int | None = None
    success: bool
    error_message: str | None = None
    error_code: ErrorCode | None = None
    quality: QualityScoreSet | None = None
    quality_error: str | None = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_outcome(self) -> ConversionResult:
        if self.success:
            if self.error_message is not None or self.error_code is not None:
                raise ValueError("successful result cannot carry an error")
        else:
            if not self.error_message:
                raise ValueError("failed result needs an error message")
            if self.output_path is not None or self.quality is not None:
                raise ValueError("failed result cannot carry output or quality")
        return self

    @classmethod
    def failure(
        cls,
        converter_id: str,
        input_path: Path,
        error_message: str,
        conversion_type: ConversionType | None = None,
        conversion_time_ms: float = 0.0,
        error_code: ErrorCode = ErrorCode.CONVERSION_FAILED,
    ) -> ConversionResult:
        return cls(
            converter_id=converter_id,
            input_path=input_path,
            conversion_type=conversion_type,
            conversion_time_ms=conversion_time_ms,
            success=False,
            error_message=error_message,
            error_code=error_code,
        )

    def with_quality(
        self,
        quality: QualityScoreSet | None,
        quality_error: str | None = None,
    ) -> ConversionResult:
        """Copy with quality scores (or the reason they are missing) attached."""
        if not self.success:
            return self
        return self.model_copy(update={"quality": quality, "quality_error": quality_error})
