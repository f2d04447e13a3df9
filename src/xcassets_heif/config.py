"""Configuration objects and constants for catalog conversion."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .core.errors import ConfigurationError

DEFAULT_COMPRESSION_QUALITY = 0.76
DEFAULT_DESTINATION_FORMAT = "heic"

CONTAINER_EXTENSION = "xcassets"
GROUP_EXTENSION = "imageset"
SOURCE_EXTENSION = "png"
MANIFEST_EXTENSION = "json"


class CatalogShape(str, Enum):
    """Caller-declared structural kind of an input path."""

    CONTAINER = "xcassets"
    IMAGE_GROUP = "imageset"
    SINGLE_IMAGE = "image"


@dataclass(frozen=True)
class ConversionConfig:
    """Settings shared by discovery, conversion and manifest rewriting."""

    compression_quality: float = DEFAULT_COMPRESSION_QUALITY
    delete_original: bool = False
    destination_extension: str = DEFAULT_DESTINATION_FORMAT
    source_extension: str = SOURCE_EXTENSION
    container_extension: str = CONTAINER_EXTENSION
    group_extension: str = GROUP_EXTENSION
    manifest_extension: str = MANIFEST_EXTENSION
    strict_extension_rewrite: bool = False
    jobs: int = 1

    @property
    def source_suffix(self) -> str:
        return f".{self.source_extension}"

    @property
    def destination_suffix(self) -> str:
        return f".{self.destination_extension}"

    def validate(self) -> None:
        """Reject settings no run could honour.

        Raises:
            ConfigurationError: If any setting is out of range
        """
        if not 0.0 <= self.compression_quality <= 1.0:
            raise ConfigurationError(
                f"Compression quality must be within [0.0, 1.0], got {self.compression_quality}"
            )
        if self.jobs < 1:
            raise ConfigurationError(f"Jobs must be at least 1, got {self.jobs}")
        if self.source_extension == self.destination_extension:
            raise ConfigurationError(
                f"Source and destination extensions are both '{self.source_extension}'"
            )
