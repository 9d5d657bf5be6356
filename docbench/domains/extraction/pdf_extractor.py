"""
PDF Extractor - Content extraction from PDF files using PyMuPDF.

Paragraphs are PyMuPDF text blocks in reading order. Bold and italic runs come
from span flags with a font-name fallback, headings from blocks set in a font
noticeably larger than the body text. All of it is heuristic.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import fitz

from docbench.config.errors import ErrorCode, ExtractionError

from .heuristics import LIST_MARKER, count_runs, normalize_whitespace
from .models import DocumentKind, DocumentStructure, ExtractedContent, FormattingInfo

logger = logging.getLogger(__name__)

__all__ = ["extract_pdf_content"]

# Span flag bits as documented by PyMuPDF
FLAG_ITALIC = 2
FLAG_BOLD = 16

HEADING_SIZE_RATIO = 1.2
MAX_HEADING_CHARS = 200
MAX_HEADING_LEVEL = 3

_BOLD_FONT_HINTS = ("bold", "heavy", "black", "semibold")
_ITALIC_FONT_HINTS = ("italic", "oblique")


@dataclass
class _Block:
    text: str
    max_size: float


def _is_bold(span: dict[str, Any]) -> bool:
    font = span.get("font", "").lower()
    return bool(span.get("flags", 0) & FLAG_BOLD) or any(
        hint in font for hint in _BOLD_FONT_HINTS
    )


def _is_italic(span: dict[str, Any]) -> bool:
    font = span.get("font", "").lower()
    return bool(span.get("flags", 0) & FLAG_ITALIC) or any(
        hint in font for hint in _ITALIC_FONT_HINTS
    )


def _body_size(size_weights: Counter[float]) -> float:
    """Most common font size weighted by character count."""
    if not size_weights:
        return 0.0
    return size_weights.most_common(1)[0][0]


def _heading_counts(blocks: list[_Block], body_size: float) -> dict[int, int]:
    """Assign heading levels by descending font size among oversized blocks."""
    if body_size <= 0:
        return {}

    threshold = body_size * HEADING_SIZE_RATIO
    headings = [
        b for b in blocks if b.max_size >= threshold and len(b.text) <= MAX_HEADING_CHARS
    ]
    sizes = sorted({round(b.max_size, 1) for b in headings}, reverse=True)
    level_for_size = {
        size: min(rank, MAX_HEADING_LEVEL) for rank, size in enumerate(sizes, 1)
    }

    counts: dict[int, int] = {}
    for block in headings:
        level = level_for_size[round(block.max_size, 1)]
        counts[level] = counts.get(level, 0) + 1
    return counts


def _count_tables(page: fitz.Page) -> int:
    try:
        return len(page.find_tables().tables)
    except Exception as e:
        # Table detection is best effort; the rest of the page is still valid
        logger.debug("Table detection failed on page %d: %s", page.number, e)
        return 0


def extract_pdf_content(path: Path) -> ExtractedContent:
    """
    Extract text, paragraphs, structure and formatting counts from a PDF.

    Args:
        path: Path to the PDF file

    Returns:
        Extracted content

    Raises:
        ExtractionError: If the file is missing or cannot be parsed as a PDF
    """
    path = Path(path)
    if not path.is_file():
        raise ExtractionError(
            f"File not found: {path}",
            details={"path": str(path)},
            code=ErrorCode.EXTRACTION_FILE_NOT_FOUND,
        )

    try:
        document = fitz.open(path)
    except (RuntimeError, ValueError) as e:
        raise ExtractionError(
            f"Could not parse PDF {path.name}: {e}",
            details={"path": str(path)},
            code=ErrorCode.EXTRACTION_INVALID_DOCUMENT,
        ) from e

    with document:
        if not document.is_pdf or document.page_count == 0:
            raise ExtractionError(
                f"Not a readable PDF document: {path.name}",
                details={"path": str(path)},
                code=ErrorCode.EXTRACTION_INVALID_DOCUMENT,
            )

        try:
            return _read_pdf(document, path)
        except Exception as e:
            raise ExtractionError(
                f"Failed while reading PDF {path.name}: {e}",
                details={"path": str(path)},
                code=ErrorCode.EXTRACTION_INVALID_DOCUMENT,
            ) from e


def _read_pdf(document: fitz.Document, path: Path) -> ExtractedContent:
    page_texts: list[str] = []
    paragraphs: list[str] = []
    blocks: list[_Block] = []
    size_weights: Counter[float] = Counter()
    bold_runs = italic_runs = 0
    list_items = tables = images = 0

    for page in document:
        page_texts.append(page.get_text("text"))
        tables += _count_tables(page)
        images += len(page.get_images(full=True))

        page_dict = page.get_text("dict", sort=True)
        for block in page_dict.get("blocks", []):
            if block.get("type") != 0:
                continue

            line_texts: list[str] = []
            spans: list[dict[str, Any]] = []
            for line in block.get("lines", []):
                line_spans = [s for s in line.get("spans", []) if s.get("text", "").strip()]
                line_text = "".join(s["text"] for s in line.get("spans", []))
                if line_text.strip():
                    line_texts.append(line_text)
                    if LIST_MARKER.match(line_text):
                        list_items += 1
                spans.extend(line_spans)

            text = normalize_whitespace(" ".join(line_texts))
            if not text:
                continue

            paragraphs.append(text)
            for span in spans:
                size_weights[round(span.get("size", 0.0), 1)] += len(span["text"])
            blocks.append(
                _Block(text=text, max_size=max(s.get("size", 0.0) for s in spans))
            )
            bold_runs += count_runs(_is_bold(s) for s in spans)
            italic_runs += count_runs(_is_italic(s) for s in spans)

    page_count = document.page_count

    structure = DocumentStructure(
        heading_counts=_heading_counts(blocks, _body_size(size_weights)),
        paragraph_count=len(paragraphs),
        table_count=tables,
        list_item_count=list_items,
        image_count=images,
    )
    # PDF has no reliable underline signal
    formatting = FormattingInfo(bold_count=bold_runs, italic_count=italic_runs)

    logger.debug(
        "Extracted PDF %s: %d pages, %d paragraphs, %d tables",
        path.name,
        page_count,
        len(paragraphs),
        tables,
    )

    return ExtractedContent(
        kind=DocumentKind.PDF,
        text="\n".join(page_texts),
        paragraphs=paragraphs,
        structure=structure,
        formatting=formatting,
        page_count=page_count,
    )
