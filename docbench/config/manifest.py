"""
Output Manifest - Track converter output files for reproducible reports.

A manifest is attached to every persisted comparison or benchmark report so a
later reader can tell whether the output files on disk are still the ones
that were scored.

Usage:
    from docbench.config.manifest import OutputManifest

    manifest = OutputManifest(run_id="20250101T120000Z-1a2b3c4d")
    manifest.add_item("outputs/run/sample.docx", converter_id="pdfjs")
    errors = manifest.verify()
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


@dataclass
class ManifestItem:
    """Single output file in the manifest."""

    path: str
    checksum: str
    converter_id: str = ""
    bytes: int | None = None
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )


@dataclass
class OutputManifest:
    """
    Manifest for the output files produced during one run.

    Provides:
    - SHA-256 checksums of every converter output
    - Run id and timestamps for correlating with reports
    """

    run_id: str
    schema_version: str = "1.0.0"
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    items: list[ManifestItem] = field(default_factory=list)

    def add_item(
        self,
        path: str | Path,
        converter_id: str = "",
        checksum: str | None = None,
    ) -> ManifestItem:
        """
        Add an output file to the manifest.

        Args:
            path: Path to the output file
            converter_id: Converter that produced the file
            checksum: Pre-computed checksum (computed when omitted and the file exists)

        Returns:
            The created ManifestItem
        """
        path = Path(path)

        if checksum is None and path.exists():
            checksum = compute_file_checksum(path)

        item = ManifestItem(
            path=str(path),
            checksum=checksum or "",
            converter_id=converter_id,
            bytes=path.stat().st_size if path.exists() else None,
        )
        self.items.append(item)
        return item

    def verify(self) -> list[str]:
        """
        Verify all items exist and checksums match.

        Returns:
            List of verification errors (empty if all valid)
        """
        errors = []

        for item in self.items:
            path = Path(item.path)

            if not path.exists():
                errors.append(f"File not found: {item.path}")
                continue

            if item.checksum:
                actual = compute_file_checksum(path)
                if actual != item.checksum:
                    errors.append(
                        f"Checksum mismatch for {item.path}: "
                        f"expected {item.checksum[:16]}..., got {actual[:16]}..."
                    )

        return errors

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "run_id": self.run_id,
            "schema_version": self.schema_version,
            "created_at": self.created_at,
            "items": [
                {
                    "path": item.path,
                    "checksum": item.checksum,
                    "converter_id": item.converter_id,
                    "bytes": item.bytes,
                    "created_at": item.created_at,
                }
                for item in self.items
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OutputManifest:
        """Create manifest from dictionary."""
        items = [
            ManifestItem(
                path=item["path"],
                checksum=item["checksum"],
                converter_id=item.get("converter_id", ""),
                bytes=item.get("bytes"),
                created_at=item.get("created_at", ""),
            )
            for item in data.get("items", [])
        ]

        return cls(
            run_id=data["run_id"],
            schema_version=data.get("schema_version", "1.0.0"),
            created_at=data.get("created_at", ""),
            items=items,
        )


def compute_file_checksum(path: Path, algorithm: str = "sha256") -> str:
    """
    Compute checksum of a file.

    Args:
        path: Path to file
        algorithm: Hash algorithm (default: sha256)

    Returns:
        Hex digest of the file
    """
    hasher = hashlib.new(algorithm)

    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            hasher.update(chunk)

    return hasher.hexdigest()
