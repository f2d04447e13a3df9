"""Conversion of a single image and its manifest reference."""

from __future__ import annotations

import logging
from pathlib import Path

from .codecs.base import ImageCodec
from .config import ConversionConfig
from .core.errors import CatalogError, CodecError, ManifestError, WriteError
from .core.results import ConvertedAsset, StepFailure
from .filesystem import FileSystem, LocalFileSystem
from .manifest import ManifestStore

logger = logging.getLogger("xcassets_heif.converter")


def destination_path(source: Path, destination_extension: str) -> Path:
    """Return ``dir/name.<destination_extension>`` for ``dir/name.<ext>``."""
    return source.with_suffix(f".{destination_extension}")


class ConversionWorker:
    """Convert one image, optionally delete the original, update the manifest.

    Steps run in order and each is attempted once:
    read/decode -> encode -> write -> delete original -> manifest rewrite.
    A failure before the write leaves the original and the manifest alone;
    failures after the write are recorded without undoing it.
    """

    def __init__(
        self,
        codec: ImageCodec,
        config: ConversionConfig | None = None,
        filesystem: FileSystem | None = None,
        manifest_store: ManifestStore | None = None,
    ):
        self.codec = codec
        self.config = config or ConversionConfig()
        self.filesystem = filesystem or LocalFileSystem()
        self.manifest_store = manifest_store or ManifestStore(self.config, self.filesystem)

    def convert(self, image_path: Path) -> ConvertedAsset:
        """Convert a single image.

        Args:
            image_path: Source raster file

        Returns:
            ConvertedAsset describing what happened; never raises for
            per-asset failures
        """
        destination = image_path
        try:
            destination = self._destination_for(image_path)
            encoded = self._encode(image_path)
            self._write(destination, encoded)
        except CatalogError as e:
            failure = self._report(e)
            return ConvertedAsset(
                source=image_path,
                destination=destination,
                success=False,
                errors=(failure,),
            )

        logger.info("Converted %s -> %s", image_path, destination.name)
        errors: list[StepFailure] = []

        deleted = False
        if self.config.delete_original:
            try:
                self._delete(image_path)
                deleted = True
            except WriteError as e:
                errors.append(self._report(e))

        manifest_updated = False
        try:
            manifest_updated = self.manifest_store.update_for_image(image_path)
        except ManifestError as e:
            errors.append(self._report(e))

        return ConvertedAsset(
            source=image_path,
            destination=destination,
            success=True,
            deleted_original=deleted,
            manifest_updated=manifest_updated,
            errors=tuple(errors),
        )

    def _destination_for(self, image_path: Path) -> Path:
        try:
            destination = destination_path(image_path, self.config.destination_extension)
        except ValueError as e:
            raise CodecError(f"Not an image file name: {e}", image_path) from e

        # Writing over the source and then deleting it destroys the only copy
        if destination == image_path:
            raise CodecError(
                f"Source already has the .{self.config.destination_extension} extension",
                image_path,
            )
        return destination

    def _encode(self, image_path: Path) -> bytes:
        try:
            data = self.filesystem.read_bytes(image_path)
        except OSError as e:
            raise CodecError(f"Cannot read source image: {e}", image_path) from e

        try:
            image = self.codec.decode(data)
            return self.codec.encode(image, self.config.compression_quality)
        except CodecError as e:
            e.path = image_path
            raise

    def _write(self, destination: Path, data: bytes) -> None:
        try:
            self.filesystem.write_atomic(destination, data)
        except OSError as e:
            raise WriteError(f"Cannot write converted image: {e}", destination) from e

    def _delete(self, image_path: Path) -> None:
        try:
            self.filesystem.remove(image_path)
        except OSError as e:
            raise WriteError(f"Cannot delete original image: {e}", image_path) from e

    @staticmethod
    def _report(error: CatalogError) -> StepFailure:
        failure = StepFailure.from_error(error)
        logger.warning("Failed %s: %s", error.path, error)
        return failure
