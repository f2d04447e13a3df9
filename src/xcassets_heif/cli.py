"""Command-line interface for the catalog conversion tool.

This module provides the CLI entry point for converting the images of
asset catalogs and keeping their Contents.json manifests in sync.
"""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from .config import (
    DEFAULT_COMPRESSION_QUALITY,
    DEFAULT_DESTINATION_FORMAT,
    CatalogShape,
    ConversionConfig,
)
from .core.results import ErrorKind
from .pipeline import BatchPipeline
from .registry import CodecRegistry

logger = logging.getLogger("xcassets_heif.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="xcassets-heif",
        description="Convert PNG images in asset catalogs to HEIC and update Contents.json",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert every imageset in a catalog
  xcassets-heif App/Assets.xcassets

  # Convert single imagesets and remove the PNGs
  xcassets-heif --imageset -d App/Assets.xcassets/icon.imageset

  # Convert loose images with a custom quality
  xcassets-heif --image -c 0.9 banner.png splash.png
        """,
    )

    parser.add_argument("paths", nargs="+", type=Path, help="Catalog, imageset or image paths")

    parser.add_argument(
        "-c",
        "--compression-quality",
        type=float,
        default=DEFAULT_COMPRESSION_QUALITY,
        help=f"Lossy compression quality in [0.0, 1.0] (default: {DEFAULT_COMPRESSION_QUALITY})",
    )

    path_type = parser.add_mutually_exclusive_group()
    path_type.add_argument(
        "--xcassets",
        dest="path_type",
        action="store_const",
        const=CatalogShape.CONTAINER,
        help="Paths are .xcassets catalogs (default)",
    )
    path_type.add_argument(
        "--imageset",
        dest="path_type",
        action="store_const",
        const=CatalogShape.IMAGE_GROUP,
        help="Paths are .imageset directories",
    )
    path_type.add_argument(
        "--image",
        dest="path_type",
        action="store_const",
        const=CatalogShape.SINGLE_IMAGE,
        help="Paths are individual image files",
    )
    parser.set_defaults(path_type=CatalogShape.CONTAINER)

    parser.add_argument(
        "-d",
        "--delete-original-image",
        action="store_true",
        help="Delete original images after a successful conversion",
    )

    parser.add_argument(
        "-f",
        "--format",
        default=DEFAULT_DESTINATION_FORMAT,
        help=f"Destination format (default: {DEFAULT_DESTINATION_FORMAT})",
    )

    parser.add_argument(
        "--strict-extension-rewrite",
        action="store_true",
        help="Only replace the trailing extension of manifest filenames",
    )

    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=1,
        help="Number of images to convert concurrently (default: 1)",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for the conversion tool."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logger.debug("Available formats: %s", ", ".join(CodecRegistry.list_codecs()) or "none")

    config = ConversionConfig(
        compression_quality=args.compression_quality,
        delete_original=args.delete_original_image,
        destination_extension=args.format,
        strict_extension_rewrite=args.strict_extension_rewrite,
        jobs=args.jobs,
    )

    summary = BatchPipeline(config).run(args.paths, args.path_type)

    # Per-asset failures are reported but never change the exit status
    if any(failure.kind is ErrorKind.CONFIG for failure in summary.failures):
        sys.exit(1)


if __name__ == "__main__":
    main()
