"""xcassets-heif - asset catalog image conversion.

This package converts the raster images of asset catalogs (.xcassets
containers, .imageset groups or loose images) to HEIC and rewrites the
filename references in each group's Contents.json manifest.
"""

# Core library interface
from .pipeline import BatchPipeline
from .discovery import AssetDiscoverer, CatalogPath
from .converter import ConversionWorker, destination_path
from .manifest import ManifestStore, rewrite_filename, rewrite_manifest
from .config import CatalogShape, ConversionConfig
from .filesystem import FileSystem, LocalFileSystem
from .registry import CodecRegistry
from .codecs import ImageCodec

# Core utilities
from .core import BatchSummary, ConvertedAsset, ErrorKind, Manifest, StepFailure
from .core import CatalogError, CodecError, DiscoveryError, ManifestError, WriteError

# CLI
from .cli import main

__version__ = "0.1.0"

# Auto-discover and register all codecs
CodecRegistry.discover_codecs()

__all__ = [
    # Primary library interface
    "BatchPipeline",
    "AssetDiscoverer",
    "CatalogPath",
    "ConversionWorker",
    "ManifestStore",
    "CatalogShape",
    "ConversionConfig",
    "FileSystem",
    "LocalFileSystem",
    "CodecRegistry",
    "ImageCodec",
    "destination_path",
    "rewrite_filename",
    "rewrite_manifest",
    # Core utilities
    "BatchSummary",
    "ConvertedAsset",
    "ErrorKind",
    "Manifest",
    "StepFailure",
    "CatalogError",
    "CodecError",
    "DiscoveryError",
    "ManifestError",
    "WriteError",
    "main",
]
