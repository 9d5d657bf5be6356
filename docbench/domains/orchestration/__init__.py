"""
Orchestration Domain - Conversion pipeline coordination.

This domain handles:
- Library entry points (convert, batch convert, compare, benchmark)
- Run-scoped output directories
- Optional PDF preprocessing
- Quality assessment of successful conversions
"""

from .contracts import ConversionOrchestrator
from .models import ComparisonResult, ConversionOptions
from .pipeline import ConversionPipeline, new_run_id
from .preprocessing import preprocess_pdf

__all__ = [
    # Contracts
    "ConversionOrchestrator",
    # Models
    "ConversionOptions",
    "ComparisonResult",
    # Implementations
    "ConversionPipeline",
    "new_run_id",
    "preprocess_pdf",
]
