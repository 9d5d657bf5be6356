"""
Quality Evaluator - Scores a conversion by extracting both documents.

Extracts the original and the converted artifact, scores every axis with the
similarity functions and aggregates them into a QualityScoreSet.
"""

from __future__ import annotations

import logging
from pathlib import Path

from docbench.domains.extraction import (
    ContentExtractor,
    DocumentExtractor,
    DocumentKind,
    ExtractedContent,
)

from .models import FORMATTING, IMAGES, STRUCTURE, TABLES, TEXT_ACCURACY
from .models import QualityScoreSet, TextSample
from .similarity import (
    calculate_formatting_similarity,
    calculate_image_similarity,
    calculate_structure_similarity,
    calculate_table_similarity,
    calculate_text_similarity,
)

logger = logging.getLogger(__name__)

__all__ = ["QualityEvaluator", "score_contents"]


def score_contents(
    original: ExtractedContent,
    converted: ExtractedContent,
    score_layout_axes: bool = True,
    text_sample_chars: int = 200,
) -> QualityScoreSet:
    """
    Score two extracted documents against each other.

    Args:
        original: Content of the source document
        converted: Content of the converted document
        score_layout_axes: Include the coarse table/image count axes; when
            False they are left out and the overall score re-normalizes
        text_sample_chars: Length of the text samples kept for reports

    Returns:
        Per-axis scores and the weighted overall score
    """
    scores = {
        TEXT_ACCURACY.id: calculate_text_similarity(original.text, converted.text),
        STRUCTURE.id: calculate_structure_similarity(original, converted),
        FORMATTING.id: calculate_formatting_similarity(
            original.formatting, converted.formatting
        ),
    }
    if score_layout_axes:
        scores[TABLES.id] = calculate_table_similarity(
            original.structure, converted.structure
        )
        scores[IMAGES.id] = calculate_image_similarity(
            original.structure, converted.structure
        )

    sample = TextSample(
        original=original.sample(text_sample_chars),
        converted=converted.sample(text_sample_chars),
    )
    return QualityScoreSet.from_scores(scores, text_sample=sample)


class QualityEvaluator:
    """
    Evaluates conversion quality from the files on disk.

    Example:
        >>> evaluator = QualityEvaluator()
        >>> quality = await evaluator.evaluate(
        ...     Path("sample.pdf"), DocumentKind.PDF,
        ...     Path("sample.docx"), DocumentKind.DOCX,
        ... )
        >>> print(f"Quality: {quality.overall:.1f}")
    """

    def __init__(
        self,
        extractor: ContentExtractor | None = None,
        score_layout_axes: bool = True,
        text_sample_chars: int = 200,
    ) -> None:
        """
        Initialize evaluator.

        Args:
            extractor: Content extractor (defaults to DocumentExtractor)
            score_layout_axes: Score the coarse table/image count axes
            text_sample_chars: Length of text samples kept in the score set
        """
        self._extractor = extractor or DocumentExtractor()
        self._score_layout_axes = score_layout_axes
        self._text_sample_chars = text_sample_chars

    async def evaluate(
        self,
        original_path: Path,
        original_kind: DocumentKind,
        converted_path: Path,
        converted_kind: DocumentKind,
    ) -> QualityScoreSet:
        """
        Evaluate how faithfully ``converted_path`` reproduces ``original_path``.

        Raises:
            ExtractionError: If either document cannot be parsed
        """
        original = await self._extractor.extract(original_path, original_kind)
        converted = await self._extractor.extract(converted_path, converted_kind)

        quality = score_contents(
            original,
            converted,
            score_layout_axes=self._score_layout_axes,
            text_sample_chars=self._text_sample_chars,
        )

        logger.info(
            "Quality %s -> %s: text=%.1f, structure=%.1f, overall=%.1f",
            Path(original_path).name,
            Path(converted_path).name,
            quality.scores[TEXT_ACCURACY.id],
            quality.scores[STRUCTURE.id],
            quality.overall,
        )

        return quality
