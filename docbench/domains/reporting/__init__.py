"""
Reporting Domain - Persisted comparison and benchmark reports.
"""

from .writer import ReportWriter, build_comparison_manifest, render_comparison_text

__all__ = [
    "ReportWriter",
    "build_comparison_manifest",
    "render_comparison_text",
]
