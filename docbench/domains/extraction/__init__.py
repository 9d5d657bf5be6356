"""
Extraction Domain - Document content extraction.

This domain handles:
- PDF text, block and span analysis (PyMuPDF)
- DOCX paragraph, style and run analysis (python-docx)
- A representation-agnostic result shape for the scorer
"""

from .contracts import ContentExtractor
from .docx_extractor import extract_docx_content
from .extractor import DocumentExtractor, extract_content
from .models import (
    DocumentKind,
    DocumentStructure,
    ExtractedContent,
    FormattingInfo,
    detect_document_kind,
)
from .pdf_extractor import extract_pdf_content

__all__ = [
    # Contracts
    "ContentExtractor",
    # Models
    "DocumentKind",
    "DocumentStructure",
    "ExtractedContent",
    "FormattingInfo",
    "detect_document_kind",
    # Implementations
    "DocumentExtractor",
    "extract_content",
    "extract_pdf_content",
    "extract_docx_content",
]
