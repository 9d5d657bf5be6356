"""
Extraction Contracts - Interfaces for extraction domain.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from .models import DocumentKind, ExtractedContent


@runtime_checkable
class ContentExtractor(Protocol):
    """
    Contract for document content extraction.

    Example:
        >>> class MyExtractor:
        ...     async def extract(self, path: Path, kind: DocumentKind) -> ExtractedContent:
        ...         ...
        >>> assert isinstance(MyExtractor(), ContentExtractor)
    """

    async def extract(self, path: Path, kind: DocumentKind) -> ExtractedContent:
        """
        Extract content from a document.

        Args:
            path: Document on disk
            kind: Representation of the document

        Returns:
            Representation-agnostic extracted content

        Raises:
            ExtractionError: If the document cannot be parsed at all
        """
        ...
