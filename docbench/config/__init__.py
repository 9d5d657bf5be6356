"""
Configuration - Engine settings, error taxonomy, and output manifests.
"""

from .errors import (
    ConfigurationError,
    ConversionError,
    DocBenchError,
    ErrorCode,
    ExtractionError,
    StatisticsError,
)
from .manifest import ManifestItem, OutputManifest, compute_file_checksum
from .settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Errors
    "ErrorCode",
    "DocBenchError",
    "ExtractionError",
    "ConversionError",
    "ConfigurationError",
    "StatisticsError",
    # Manifests
    "OutputManifest",
    "ManifestItem",
    "compute_file_checksum",
]
