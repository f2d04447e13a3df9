"""Core utilities for catalog conversion.

This package contains manifest type definitions, schema validation,
the error hierarchy and the outcome values shared by every stage
of the pipeline.
"""

from .errors import (
    CatalogError,
    CodecError,
    ConfigurationError,
    DiscoveryError,
    ManifestError,
    WriteError,
)
from .results import BatchSummary, ConvertedAsset, DiscoveryResult, ErrorKind, StepFailure
from .types import ImageEntry, Manifest, ManifestInfo
from .validator import is_valid_manifest, manifest_problems

__all__ = [
    "BatchSummary",
    "CatalogError",
    "CodecError",
    "ConfigurationError",
    "ConvertedAsset",
    "DiscoveryError",
    "DiscoveryResult",
    "ErrorKind",
    "ImageEntry",
    "Manifest",
    "ManifestError",
    "ManifestInfo",
    "StepFailure",
    "WriteError",
    "is_valid_manifest",
    "manifest_problems",
]
