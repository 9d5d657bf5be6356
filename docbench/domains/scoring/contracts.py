"""
Scoring Contracts - Interfaces for scoring domain.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from docbench.domains.extraction import DocumentKind

from .models import QualityScoreSet


@runtime_checkable
class QualityAssessor(Protocol):
    """
    Contract for conversion quality assessment.

    Example:
        >>> class MyAssessor:
        ...     async def evaluate(self, original_path, original_kind,
        ...                        converted_path, converted_kind) -> QualityScoreSet:
        ...         ...
    """

    async def evaluate(
        self,
        original_path: Path,
        original_kind: DocumentKind,
        converted_path: Path,
        converted_kind: DocumentKind,
    ) -> QualityScoreSet:
        """
        Score a converted document against its original.

        Args:
            original_path: Source document
            original_kind: Representation of the source
            converted_path: Converted document
            converted_kind: Representation of the converted document

        Returns:
            Quality scores

        Raises:
            ExtractionError: If either side cannot be parsed
        """
        ...
