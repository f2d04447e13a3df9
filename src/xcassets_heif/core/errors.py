"""Exception hierarchy for catalog conversion.

Each exception carries the path it concerns so the pipeline can turn it into
a StepFailure at the asset boundary.
"""

from pathlib import Path


class CatalogError(Exception):
    """Base class for every error raised while converting a catalog."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class DiscoveryError(CatalogError):
    """Bad or missing catalog path, wrong container extension, listing failure."""


class CodecError(CatalogError):
    """Source image unreadable or encoding failed."""


class WriteError(CatalogError):
    """Destination write or original deletion failed."""


class ManifestError(CatalogError):
    """Manifest could not be parsed, validated or saved."""


class ConfigurationError(CatalogError):
    """Invalid run configuration (quality out of range, no paths, unknown format)."""
