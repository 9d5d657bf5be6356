"""
Extraction Models - Data types for extraction domain.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from docbench.config.errors import ConfigurationError, ErrorCode


class DocumentKind(str, Enum):
    """Supported document representations."""

    PDF = "pdf"
    DOCX = "docx"

    @property
    def extension(self) -> str:
        return f".{self.value}"

    @property
    def opposite(self) -> DocumentKind:
        """The kind a document of this kind converts into."""
        return DocumentKind.DOCX if self is DocumentKind.PDF else DocumentKind.PDF


def detect_document_kind(path: str | Path) -> DocumentKind:
    """
    Detect document kind from the file extension.

    Raises:
        ConfigurationError: If the extension is neither .pdf nor .docx
    """
    ext = Path(path).suffix.lower()
    for kind in DocumentKind:
        if ext == kind.extension:
            return kind
    raise ConfigurationError(
        f"Unsupported file type: {ext or '<none>'}",
        details={"path": str(path)},
        code=ErrorCode.CONFIG_UNSUPPORTED_FILE_TYPE,
    )


class DocumentStructure(BaseModel):
    """Coarse structural counts. Fields are independent, no nesting."""

    heading_counts: dict[int, int] = Field(default_factory=dict)
    paragraph_count: int = Field(default=0, ge=0)
    table_count: int = Field(default=0, ge=0)
    list_item_count: int = Field(default=0, ge=0)
    image_count: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def heading_total(self) -> int:
        return sum(self.heading_counts.values())


class FormattingInfo(BaseModel):
    """Coarse formatting counts, one per stylistic run detected."""

    bold_count: int = Field(default=0, ge=0)
    italic_count: int = Field(default=0, ge=0)
    underline_count: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def has_signal(self) -> bool:
        """Whether any bold or italic run was detected."""
        return self.bold_count > 0 or self.italic_count > 0


class ExtractedContent(BaseModel):
    """
    Representation-agnostic content of a document.

    Counts are heuristic approximations meant for comparing two documents
    against each other, not ground truth about either one.
    """

    kind: DocumentKind
    text: str = ""
    paragraphs: list[str] = Field(default_factory=list)
    structure: DocumentStructure = Field(default_factory=DocumentStructure)
    formatting: FormattingInfo = Field(default_factory=FormattingInfo)
    page_count: int | None = None

    model_config = {"frozen": True}

    def sample(self, length: int = 200) -> str:
        """Leading text sample for reports."""
        if len(self.text) <= length:
            return self.text
        return self.text[:length] + "..."
