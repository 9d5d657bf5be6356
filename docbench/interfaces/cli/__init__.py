"""
CLI Interface - Command-line tools for DocBench.

Provides commands for:
- Single and batch conversion
- Converter comparison with reports
- Benchmarks of one converter or a whole directory
"""

from .main import app, main

__all__ = ["app", "main"]
