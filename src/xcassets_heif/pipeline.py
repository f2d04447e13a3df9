"""Batch conversion pipeline for asset catalogs.

This module provides the main interface for converting every image in
one or more catalogs. Discovery runs to completion first, then each
image is converted; a failing image never stops the batch.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from pathlib import Path

from .codecs.base import ImageCodec
from .config import CatalogShape, ConversionConfig
from .converter import ConversionWorker
from .core.errors import ConfigurationError
from .core.results import BatchSummary, ConvertedAsset, ErrorKind, StepFailure
from .discovery import AssetDiscoverer, CatalogPath
from .filesystem import FileSystem, LocalFileSystem
from .manifest import ManifestStore
from .registry import CodecRegistry

logger = logging.getLogger("xcassets_heif.pipeline")


class BatchPipeline:
    """Main interface for catalog conversion.

    The pipeline is codec-agnostic: it works with any ImageCodec, either
    passed in directly or created from the CodecRegistry by destination
    extension.

    Example:
        >>> pipeline = BatchPipeline(ConversionConfig(compression_quality=0.8))
        >>> summary = pipeline.run([Path('Assets.xcassets')], CatalogShape.CONTAINER)
        >>> summary.succeeded
        12
    """

    def __init__(
        self,
        config: ConversionConfig | None = None,
        codec: ImageCodec | None = None,
        filesystem: FileSystem | None = None,
    ):
        """Initialize the pipeline.

        Args:
            config: Conversion settings (defaults to ConversionConfig())
            codec: Codec to encode with; created from the registry when omitted
            filesystem: File access (defaults to the local disk)
        """
        self.config = config or ConversionConfig()
        self._codec = codec
        self.filesystem = filesystem or LocalFileSystem()
        self._cancel_event = threading.Event()

    def cancel(self) -> None:
        """Stop the current run after the images already in progress.

        Each call to run() starts uncancelled.
        """
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def run(
        self,
        paths: Sequence[Path],
        shape: CatalogShape = CatalogShape.CONTAINER,
        quality: float | None = None,
        delete_original: bool | None = None,
    ) -> BatchSummary:
        """Discover and convert every image under the given paths.

        Args:
            paths: Catalog paths, all of the same shape
            shape: Structural kind of every path
            quality: Override for the configured compression quality
            delete_original: Override for the configured delete flag

        Returns:
            BatchSummary with one ConvertedAsset per discovered image, in
            discovery order, plus discovery and configuration failures
        """
        summary = BatchSummary()
        self._cancel_event.clear()

        config = self.config
        if quality is not None:
            config = replace(config, compression_quality=quality)
        if delete_original is not None:
            config = replace(config, delete_original=delete_original)

        try:
            if not paths:
                raise ConfigurationError("No catalog paths supplied")
            config.validate()
            codec = self._codec or CodecRegistry.create(config.destination_extension)
        except ConfigurationError as e:
            logger.error("Configuration error: %s", e)
            summary.failures.append(StepFailure.from_error(e))
            return summary

        discoverer = AssetDiscoverer(config, self.filesystem)
        discovery = discoverer.discover([CatalogPath(Path(p), shape) for p in paths])
        summary.discovered = len(discovery.images)
        summary.failures.extend(discovery.failures)
        logger.info("Discovered %d image(s) in %d path(s)", summary.discovered, len(paths))

        worker = ConversionWorker(
            codec,
            config,
            self.filesystem,
            ManifestStore(config, self.filesystem),
        )

        if config.jobs > 1:
            summary.assets = self._run_parallel(worker, discovery.images, config.jobs)
        else:
            summary.assets = self._run_sequential(worker, discovery.images)

        summary.cancelled = self.cancelled
        self._log_summary(summary)
        return summary

    def _run_sequential(
        self, worker: ConversionWorker, images: Sequence[Path]
    ) -> list[ConvertedAsset]:
        assets: list[ConvertedAsset] = []
        for image in images:
            if self.cancelled:
                logger.warning("Cancelled; %d image(s) not converted", len(images) - len(assets))
                break
            assets.append(self._convert_one(worker, image))
        return assets

    def _run_parallel(
        self, worker: ConversionWorker, images: Sequence[Path], jobs: int
    ) -> list[ConvertedAsset]:
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            futures = [executor.submit(self._convert_if_not_cancelled, worker, image) for image in images]
            results = [future.result() for future in futures]
        return [asset for asset in results if asset is not None]

    def _convert_if_not_cancelled(
        self, worker: ConversionWorker, image: Path
    ) -> ConvertedAsset | None:
        if self.cancelled:
            return None
        return self._convert_one(worker, image)

    @staticmethod
    def _convert_one(worker: ConversionWorker, image: Path) -> ConvertedAsset:
        try:
            return worker.convert(image)
        except Exception as e:
            # Unexpected errors stay contained to the asset
            logger.exception("Unexpected error converting %s", image)
            return ConvertedAsset(
                source=image,
                destination=image,
                success=False,
                errors=(StepFailure(ErrorKind.INTERNAL, image, f"{type(e).__name__}: {e}"),),
            )

    @staticmethod
    def _log_summary(summary: BatchSummary) -> None:
        failures = summary.all_failures
        logger.info(
            "Finished: %d/%d converted, %d failed, %d problem(s) reported",
            summary.succeeded,
            summary.discovered,
            summary.failed,
            len(failures),
        )
        for failure in failures:
            logger.debug("  %s", failure)
