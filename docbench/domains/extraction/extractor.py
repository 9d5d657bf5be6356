"""
Document Extractor - Dispatches extraction to the PDF or DOCX implementation.

Parsing libraries are blocking, so extraction runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from pathlib import Path

from .docx_extractor import extract_docx_content
from .models import DocumentKind, ExtractedContent
from .pdf_extractor import extract_pdf_content

logger = logging.getLogger(__name__)

__all__ = ["DocumentExtractor", "extract_content"]

_EXTRACTORS: dict[DocumentKind, Callable[[Path], ExtractedContent]] = {
    DocumentKind.PDF: extract_pdf_content,
    DocumentKind.DOCX: extract_docx_content,
}


class DocumentExtractor:
    """
    Extracts content from PDF and DOCX documents.

    Example:
        >>> extractor = DocumentExtractor()
        >>> content = await extractor.extract(Path("sample.pdf"), DocumentKind.PDF)
        >>> content.structure.paragraph_count
    """

    async def extract(self, path: Path, kind: DocumentKind) -> ExtractedContent:
        """
        Extract content from a document.

        Args:
            path: Document on disk
            kind: Representation of the document

        Returns:
            Extracted content

        Raises:
            ExtractionError: If the document cannot be parsed at all
        """
        start_time = time.perf_counter()
        content = await asyncio.to_thread(_EXTRACTORS[kind], Path(path))
        logger.debug(
            "Extracted %s (%s) in %.1fms",
            Path(path).name,
            kind.value,
            (time.perf_counter() - start_time) * 1000,
        )
        return content


async def extract_content(path: str | Path, kind: DocumentKind) -> ExtractedContent:
    """Extract content with the default extractor."""
    return await DocumentExtractor().extract(Path(path), kind)
