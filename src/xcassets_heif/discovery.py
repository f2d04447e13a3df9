"""Catalog traversal and convertible image collection.

This module walks catalog paths according to their declared shape and
collects the raster files that should be converted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .config import CatalogShape, ConversionConfig
from .core.errors import DiscoveryError
from .core.results import DiscoveryResult, StepFailure
from .filesystem import FileSystem, LocalFileSystem

logger = logging.getLogger("xcassets_heif.discovery")


@dataclass(frozen=True)
class CatalogPath:
    """A filesystem location plus its caller-declared shape."""

    path: Path
    shape: CatalogShape


class AssetDiscoverer:
    """Produce the ordered sequence of convertible images for catalog paths.

    Each shape is handled by its own strategy; a failing path is reported
    and contributes no images while discovery continues with the rest.

    Example:
        >>> discoverer = AssetDiscoverer()
        >>> result = discoverer.discover([CatalogPath(Path('Assets.xcassets'), CatalogShape.CONTAINER)])
        >>> result.images
        (PosixPath('Assets.xcassets/icon.imageset/icon.png'),)
    """

    def __init__(self, config: ConversionConfig | None = None, filesystem: FileSystem | None = None):
        self.config = config or ConversionConfig()
        self.filesystem = filesystem or LocalFileSystem()
        self._strategies: dict[CatalogShape, Callable[[Path, list[StepFailure]], list[Path]]] = {
            CatalogShape.CONTAINER: self._discover_container,
            CatalogShape.IMAGE_GROUP: self._discover_group,
            CatalogShape.SINGLE_IMAGE: self._discover_single_image,
        }

    def discover(self, paths: Sequence[CatalogPath]) -> DiscoveryResult:
        """Collect images across all paths, in the order the paths were supplied.

        Args:
            paths: Catalog paths with their shapes

        Returns:
            DiscoveryResult with the images found and the paths that failed
        """
        images: list[Path] = []
        failures: list[StepFailure] = []

        for catalog_path in paths:
            strategy = self._strategies[catalog_path.shape]
            found = strategy(catalog_path.path, failures)
            logger.debug("Found %d image(s) in %s", len(found), catalog_path.path)
            images.extend(found)

        return DiscoveryResult(images=tuple(images), failures=tuple(failures))

    def _discover_single_image(self, path: Path, failures: list[StepFailure]) -> list[Path]:
        # No extension check; the caller asserted this is an image
        return [path]

    def _discover_group(self, path: Path, failures: list[StepFailure]) -> list[Path]:
        children = self._list_children(path, failures)
        source_suffix = self.config.source_suffix
        return [
            child
            for child in children
            if child.suffix == source_suffix and not self.filesystem.is_dir(child)
        ]

    def _discover_container(self, path: Path, failures: list[StepFailure]) -> list[Path]:
        if path.suffix != f".{self.config.container_extension}":
            self._report(
                DiscoveryError(f"Path is not a .{self.config.container_extension} container", path),
                failures,
            )
            return []

        group_suffix = f".{self.config.group_extension}"
        images: list[Path] = []
        for child in self._list_children(path, failures):
            if child.suffix == group_suffix:
                images.extend(self._discover_group(child, failures))
        return images

    def _list_children(self, path: Path, failures: list[StepFailure]) -> list[Path]:
        try:
            return self.filesystem.list_dir(path)
        except OSError as e:
            self._report(DiscoveryError(f"Cannot list directory: {e}", path), failures)
            return []

    @staticmethod
    def _report(error: DiscoveryError, failures: list[StepFailure]) -> None:
        failure = StepFailure.from_error(error)
        logger.warning("Skipping %s: %s", error.path, error)
        failures.append(failure)
