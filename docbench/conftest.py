"""
Shared fixtures - Small PDF and DOCX documents built at test time.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import docx
import fitz
import pytest
from docx.oxml.ns import qn

# (text, base-14 font name, font size)
PdfLine = tuple[str, str, float]


def write_pdf(path: Path, lines: Sequence[PdfLine]) -> Path:
    """Write a one-page PDF with each line placed well apart from the next."""
    document = fitz.open()
    page = document.new_page()
    y = 72.0
    for text, fontname, fontsize in lines:
        page.insert_text((72, y), text, fontname=fontname, fontsize=fontsize)
        y += fontsize * 3
    document.save(path)
    document.close()
    return path


def write_docx(
    path: Path,
    paragraphs: Sequence[str],
    heading: str | None = None,
    bold: Sequence[str] = (),
    italic: Sequence[str] = (),
    list_items: Sequence[str] = (),
    table: Sequence[Sequence[str]] | None = None,
) -> Path:
    """Write a DOCX with an optional heading, plain and styled paragraphs."""
    document = docx.Document()
    if heading:
        document.add_heading(heading, level=1)
    for text in paragraphs:
        document.add_paragraph(text)
    for text in bold:
        document.add_paragraph().add_run(text).bold = True
    for text in italic:
        document.add_paragraph().add_run(text).italic = True
    for text in list_items:
        document.add_paragraph(text, style="List Bullet")
    if table:
        grid = document.add_table(rows=len(table), cols=len(table[0]))
        for r, row in enumerate(table):
            for c, value in enumerate(row):
                grid.cell(r, c).text = value
    document.save(str(path))
    return path


def write_docx_with_invalid_underline(path: Path, text: str = "Hello World") -> Path:
    """DOCX that opens fine but carries an underline value Word does not define."""
    document = docx.Document()
    run = document.add_paragraph().add_run(text)
    run.underline = True
    run._r.rPr.u.set(qn("w:val"), "bogus")
    document.save(str(path))
    return path


@pytest.fixture
def make_pdf(tmp_path: Path) -> Callable[..., Path]:
    """Factory for PDFs in the test's temp directory."""

    def _make(name: str, lines: Sequence[PdfLine]) -> Path:
        return write_pdf(tmp_path / name, lines)

    return _make


@pytest.fixture
def make_docx(tmp_path: Path) -> Callable[..., Path]:
    """Factory for DOCX files in the test's temp directory."""

    def _make(name: str, paragraphs: Sequence[str], **kwargs) -> Path:
        return write_docx(tmp_path / name, paragraphs, **kwargs)

    return _make


@pytest.fixture
def hello_pdf(make_pdf: Callable[..., Path]) -> Path:
    """sample.pdf containing the text "Hello World"."""
    return make_pdf("sample.pdf", [("Hello World", "helv", 12)])
