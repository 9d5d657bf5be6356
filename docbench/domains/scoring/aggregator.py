"""
Quality Aggregator - Weighted combination of per-axis scores.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

from .models import METRICS, QualityMetric

logger = logging.getLogger(__name__)

__all__ = ["calculate_overall_score"]

SCORE_DIGITS = 9


def calculate_overall_score(
    scores: Mapping[str, float],
    metrics: Mapping[str, QualityMetric] = METRICS,
) -> float:
    """
    Weighted mean of the axes actually present, clamped to [0, 100].

    A missing axis is left out of both the numerator and the denominator, so
    it never drags the overall score towards zero. Unknown keys are ignored.

    Args:
        scores: Per-axis scores keyed by metric id
        metrics: Weight table

    Returns:
        Overall score; 0 when no known axis is present
    """
    weighted: list[float] = []
    weights: list[float] = []

    for metric_id, metric in metrics.items():
        score = scores.get(metric_id)
        if score is None:
            continue
        weighted.append(score * metric.weight)
        weights.append(metric.weight)

    unknown = set(scores) - set(metrics)
    if unknown:
        logger.debug("Ignoring unknown quality axes: %s", sorted(unknown))

    total_weight = math.fsum(weights)
    if total_weight == 0:
        return 0.0

    # Rounding drops float residue so equal axes give back exactly that score
    overall = round(math.fsum(weighted) / total_weight, SCORE_DIGITS)
    return max(0.0, min(100.0, overall))
