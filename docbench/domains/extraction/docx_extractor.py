"""
DOCX Extractor - Content extraction from Word documents using python-docx.

Walks the document body in order so paragraphs come out in reading order.
Headings come from paragraph styles, list items from list styles or numbering
properties, formatting from run properties.
"""

from __future__ import annotations

import logging
import re
import zipfile
from pathlib import Path

import docx
from docx.document import Document as DocxDocument
from docx.enum.text import WD_UNDERLINE
from docx.opc.exceptions import PackageNotFoundError
from docx.oxml.ns import qn
from docx.oxml.xmlchemy import BaseOxmlElement
from docx.table import Table
from docx.text.paragraph import Paragraph
from docx.text.run import Run

from docbench.config.errors import ErrorCode, ExtractionError

from .heuristics import count_runs, normalize_whitespace
from .models import DocumentKind, DocumentStructure, ExtractedContent, FormattingInfo

logger = logging.getLogger(__name__)

__all__ = ["extract_docx_content"]

_HEADING_STYLE = re.compile(r"^heading\s+(\d)", re.IGNORECASE)


def _heading_level(paragraph: Paragraph) -> int | None:
    style = paragraph.style
    name = style.name if style is not None and style.name else ""
    if name.lower() == "title":
        return 1
    match = _HEADING_STYLE.match(name)
    return int(match.group(1)) if match else None


def _is_list_item(paragraph: Paragraph, element: BaseOxmlElement) -> bool:
    style = paragraph.style
    name = style.name if style is not None and style.name else ""
    if name.lower().startswith("list"):
        return True
    return bool(element.xpath("./w:pPr/w:numPr"))


def _is_underlined(run: Run) -> bool:
    underline = run.underline
    if underline is None or underline is False:
        return False
    return underline is True or underline != WD_UNDERLINE.NONE


def _table_texts(table: Table) -> list[str]:
    texts = []
    for row in table.rows:
        for cell in row.cells:
            text = normalize_whitespace(cell.text)
            if text:
                texts.append(text)
    return texts


def extract_docx_content(path: Path) -> ExtractedContent:
    """
    Extract text, paragraphs, structure and formatting counts from a DOCX.

    Table cell text is part of ``text`` but not of ``paragraphs``.

    Args:
        path: Path to the DOCX file

    Returns:
        Extracted content

    Raises:
        ExtractionError: If the file is missing or is not a readable DOCX package
    """
    path = Path(path)
    if not path.is_file():
        raise ExtractionError(
            f"File not found: {path}",
            details={"path": str(path)},
            code=ErrorCode.EXTRACTION_FILE_NOT_FOUND,
        )

    try:
        document = docx.Document(str(path))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError, SyntaxError) as e:
        raise ExtractionError(
            f"Could not parse DOCX {path.name}: {e}",
            details={"path": str(path)},
            code=ErrorCode.EXTRACTION_INVALID_DOCUMENT,
        ) from e

    try:
        return _read_docx(document, path)
    except Exception as e:
        raise ExtractionError(
            f"Failed while reading DOCX {path.name}: {e}",
            details={"path": str(path)},
            code=ErrorCode.EXTRACTION_INVALID_DOCUMENT,
        ) from e


def _read_docx(document: DocxDocument, path: Path) -> ExtractedContent:
    text_parts: list[str] = []
    paragraphs: list[str] = []
    heading_counts: dict[int, int] = {}
    list_items = tables = 0
    bold_runs = italic_runs = underline_runs = 0

    for child in document.element.body.iterchildren():
        if child.tag == qn("w:tbl"):
            tables += 1
            text_parts.extend(_table_texts(Table(child, document)))
            continue
        if child.tag != qn("w:p"):
            continue

        paragraph = Paragraph(child, document)
        text = normalize_whitespace(paragraph.text)
        if not text:
            continue

        text_parts.append(text)
        paragraphs.append(text)

        level = _heading_level(paragraph)
        if level is not None:
            heading_counts[level] = heading_counts.get(level, 0) + 1
        if _is_list_item(paragraph, child):
            list_items += 1

        runs = [r for r in paragraph.runs if r.text.strip()]
        bold_runs += count_runs(bool(r.bold) for r in runs)
        italic_runs += count_runs(bool(r.italic) for r in runs)
        underline_runs += count_runs(_is_underlined(r) for r in runs)

    structure = DocumentStructure(
        heading_counts=heading_counts,
        paragraph_count=len(paragraphs),
        table_count=tables,
        list_item_count=list_items,
        image_count=len(document.inline_shapes),
    )
    formatting = FormattingInfo(
        bold_count=bold_runs,
        italic_count=italic_runs,
        underline_count=underline_runs,
    )

    logger.debug(
        "Extracted DOCX %s: %d paragraphs, %d tables",
        path.name,
        len(paragraphs),
        tables,
    )

    # Word does not store a reliable page count
    return ExtractedContent(
        kind=DocumentKind.DOCX,
        text="\n".join(text_parts),
        paragraphs=paragraphs,
        structure=structure,
        formatting=formatting,
    )
