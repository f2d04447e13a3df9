"""Codec implementations for the conversion worker.

Each codec module registers itself with the CodecRegistry when imported.
"""

from .base import ImageCodec

# Concrete codec modules are imported dynamically by CodecRegistry.discover_codecs()
# to handle missing imaging dependencies gracefully

__all__ = ["ImageCodec"]
