"""
Similarity Scorer - Pure functions scoring two extracted documents (0-100).

Every function is deterministic and symmetric in how it treats empty input.
"""

from __future__ import annotations

from docbench.domains.extraction.heuristics import normalize_whitespace
from docbench.domains.extraction.models import (
    DocumentStructure,
    ExtractedContent,
    FormattingInfo,
)

__all__ = [
    "count_similarity",
    "calculate_text_similarity",
    "calculate_structure_similarity",
    "calculate_formatting_similarity",
    "calculate_table_similarity",
    "calculate_image_similarity",
]

LENGTH_WEIGHT = 0.4
WORD_WEIGHT = 0.6
PARAGRAPH_COUNT_WEIGHT = 0.3
PARAGRAPH_CONTENT_WEIGHT = 0.7
AMBIGUOUS_FORMATTING_SCORE = 50.0


def count_similarity(first: int | float, second: int | float) -> float:
    """``100 * (1 - |a - b| / max(a, b))``; 100 when both are zero."""
    largest = max(first, second)
    if largest <= 0:
        return 100.0
    return 100.0 * (1 - abs(first - second) / largest)


def calculate_text_similarity(text1: str, text2: str) -> float:
    """
    Blend of length similarity and word-set Jaccard similarity.

    Both texts are lowercased with whitespace collapsed first. Two empty texts
    match perfectly (100); exactly one empty text scores 0.
    """
    normalized1 = normalize_whitespace(text1).lower()
    normalized2 = normalize_whitespace(text2).lower()

    if not normalized1 and not normalized2:
        return 100.0
    if not normalized1 or not normalized2:
        return 0.0

    length_similarity = count_similarity(len(normalized1), len(normalized2))

    words1 = set(normalized1.split())
    words2 = set(normalized2.split())
    word_similarity = 100.0 * len(words1 & words2) / len(words1 | words2)

    return length_similarity * LENGTH_WEIGHT + word_similarity * WORD_WEIGHT


def calculate_structure_similarity(
    original: ExtractedContent,
    converted: ExtractedContent,
) -> float:
    """
    Paragraph count similarity blended with positional paragraph similarity.

    Paragraphs are aligned by index up to the shorter list. When either side
    has no paragraphs the count part is 100 and the content part is 0.
    """
    original_paragraphs = original.paragraphs
    converted_paragraphs = converted.paragraphs

    if not original_paragraphs or not converted_paragraphs:
        paragraph_similarity = 100.0
        content_similarity = 0.0
    else:
        paragraph_similarity = count_similarity(
            len(original_paragraphs), len(converted_paragraphs)
        )
        pairs = list(zip(original_paragraphs, converted_paragraphs))
        content_similarity = sum(
            calculate_text_similarity(a, b) for a, b in pairs
        ) / len(pairs)

    return (
        paragraph_similarity * PARAGRAPH_COUNT_WEIGHT
        + content_similarity * PARAGRAPH_CONTENT_WEIGHT
    )


def _feature_ratio(original_count: int, converted_count: int) -> float:
    if original_count > 0:
        return min(100.0, 100.0 * converted_count / original_count)
    return 100.0 if converted_count == 0 else AMBIGUOUS_FORMATTING_SCORE


def calculate_formatting_similarity(
    original: FormattingInfo,
    converted: FormattingInfo,
) -> float:
    """
    Compare bold and italic run counts.

    No signal on either side scores 100. Signal on only one side scores 50,
    since stripped and lost formatting cannot be told apart. Otherwise each
    feature scores ``converted / original`` capped at 100 and the two are
    averaged.
    """
    if not original.has_signal and not converted.has_signal:
        return 100.0
    if not original.has_signal or not converted.has_signal:
        return AMBIGUOUS_FORMATTING_SCORE

    bold = _feature_ratio(original.bold_count, converted.bold_count)
    italic = _feature_ratio(original.italic_count, converted.italic_count)
    return bold * 0.5 + italic * 0.5


def calculate_table_similarity(
    original: DocumentStructure,
    converted: DocumentStructure,
) -> float:
    """
    Coarse table score: compares table counts only.

    This says nothing about cell content or layout. Treat it as a sanity
    signal, not a measurement of table fidelity.
    """
    return count_similarity(original.table_count, converted.table_count)


def calculate_image_similarity(
    original: DocumentStructure,
    converted: DocumentStructure,
) -> float:
    """
    Coarse image score: compares embedded image counts only.

    Image placement and quality are not inspected.
    """
    return count_similarity(original.image_count, converted.image_count)
