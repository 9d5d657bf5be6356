"""
Input Preprocessing - Repair minor PDF damage before conversion.

The PDF is re-saved through PyMuPDF with garbage collection and stream
compression. Any failure falls back to the untouched original.
"""

from __future__ import annotations

import logging
from pathlib import Path

import fitz

logger = logging.getLogger(__name__)

__all__ = ["preprocess_pdf"]


def preprocess_pdf(source: Path, target: Path) -> Path:
    """
    Write a cleaned copy of ``source`` to ``target``.

    Returns:
        ``target`` on success, ``source`` if the file could not be rewritten
    """
    try:
        with fitz.open(str(source)) as document:
            if not document.is_pdf:
                logger.warning("Skipping preprocessing of non-PDF %s", source.name)
                return source
            document.save(str(target), garbage=4, deflate=True, clean=True)
    except (RuntimeError, ValueError) as e:
        logger.warning("Preprocessing failed for %s, using original: %s", source.name, e)
        return source

    logger.debug("Preprocessed %s -> %s", source.name, target)
    return target
