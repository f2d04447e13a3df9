"""Type definitions for asset catalog manifests.

This module defines TypedDict classes that mirror the JSON schema structure
defined in schemas/contents.schema.json (an imageset's Contents.json).
"""

from typing import NotRequired, TypedDict


class ImageEntry(TypedDict):
    """One image variant within an image group.

    Xcode may add further keys (appearances, subtype, ...); they are kept
    as-is when the manifest is rewritten.
    """

    filename: NotRequired[str]  # Physical file inside the group, absent for empty slots
    idiom: str  # Device family (e.g., 'universal', 'iphone')
    scale: str  # Scale factor (e.g., '1x', '2x', '3x')


class ManifestInfo(TypedDict):
    """Opaque metadata block, passed through unchanged."""

    author: str  # Tool that wrote the manifest (usually 'xcode')
    version: int  # Manifest format version


class Manifest(TypedDict):
    """Complete Contents.json document for an image group."""

    images: list[ImageEntry]  # Ordered image variants, duplicates allowed
    info: ManifestInfo  # Authoring metadata
