"""
Shared counting heuristics for the PDF and DOCX extractors.

These are deliberately approximate. Counts from both sides go through the same
rules so the scorer compares like with like.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

__all__ = ["LIST_MARKER", "count_runs", "normalize_whitespace"]

# "•", "-", "*", "1.", "2)", "a)", "iv." at the start of a line
LIST_MARKER = re.compile(
    r"^\s*(?:[•‣▪●◦⁃∙\-\*]\s+"
    r"|(?:\d{1,3}|[a-zA-Z]|[ivxlcdm]{1,6})[.)]\s+)"
)

_WHITESPACE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and strip."""
    return _WHITESPACE.sub(" ", text).strip()


def count_runs(flags: Iterable[bool]) -> int:
    """
    Count maximal runs of consecutive True values.

    Adjacent pieces with the same style count once, the way a renderer
    would merge them into a single bold or italic span.
    """
    runs = 0
    previous = False
    for flag in flags:
        if flag and not previous:
            runs += 1
        previous = flag
    return runs
