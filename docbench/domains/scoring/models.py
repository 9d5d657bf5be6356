"""
Scoring Models - Quality axes, weights, and score sets.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, Field


class QualityMetric(BaseModel):
    """One independently scored dimension of conversion fidelity."""

    id: str
    name: str
    description: str
    weight: float = Field(gt=0.0, le=1.0)

    model_config = {"frozen": True}


TEXT_ACCURACY = QualityMetric(
    id="textAccuracy",
    name="Text Accuracy",
    description="How accurately text content is preserved",
    weight=0.4,
)
STRUCTURE = QualityMetric(
    id="structure",
    name="Structure Preservation",
    description="How well paragraphs and their order are maintained",
    weight=0.2,
)
FORMATTING = QualityMetric(
    id="formatting",
    name="Formatting Preservation",
    description="How well bold and italic runs are preserved",
    weight=0.15,
)
TABLES = QualityMetric(
    id="tables",
    name="Table Quality",
    description="Whether the number of tables matches (coarse count)",
    weight=0.15,
)
IMAGES = QualityMetric(
    id="images",
    name="Image Preservation",
    description="Whether the number of images matches (coarse count)",
    weight=0.1,
)

# Weights sum to 1.0 when every axis is present
METRICS: dict[str, QualityMetric] = {
    m.id: m for m in (TEXT_ACCURACY, STRUCTURE, FORMATTING, TABLES, IMAGES)
}


class TextSample(BaseModel):
    """Leading text of both documents, for eyeballing a report."""

    original: str
    converted: str

    model_config = {"frozen": True}


class QualityScoreSet(BaseModel):
    """Per-axis scores (0-100) and their weighted overall score."""

    scores: dict[str, float] = Field(default_factory=dict)
    overall: float = Field(ge=0.0, le=100.0)
    text_sample: TextSample | None = None

    model_config = {"frozen": True}

    @classmethod
    def from_scores(
        cls,
        scores: Mapping[str, float],
        text_sample: TextSample | None = None,
    ) -> QualityScoreSet:
        """Build a score set, computing ``overall`` from whichever axes are present."""
        from .aggregator import calculate_overall_score

        return cls(
            scores=dict(scores),
            overall=calculate_overall_score(scores),
            text_sample=text_sample,
        )
