"""
Scoring Domain - Conversion fidelity scores.

This domain handles:
- Per-axis similarity (text, structure, formatting, tables, images)
- Weighted aggregation with re-normalization over present axes
- End-to-end quality evaluation of a converted file
"""

from .aggregator import calculate_overall_score
from .contracts import QualityAssessor
from .evaluator import QualityEvaluator, score_contents
from .models import METRICS, QualityMetric, QualityScoreSet, TextSample
from .similarity import (
    calculate_formatting_similarity,
    calculate_image_similarity,
    calculate_structure_similarity,
    calculate_table_similarity,
    calculate_text_similarity,
    count_similarity,
)

__all__ = [
    # Contracts
    "QualityAssessor",
    # Models
    "METRICS",
    "QualityMetric",
    "QualityScoreSet",
    "TextSample",
    # Scoring functions
    "count_similarity",
    "calculate_text_similarity",
    "calculate_structure_similarity",
    "calculate_formatting_similarity",
    "calculate_table_similarity",
    "calculate_image_similarity",
    "calculate_overall_score",
    # Implementations
    "QualityEvaluator",
    "score_contents",
]
