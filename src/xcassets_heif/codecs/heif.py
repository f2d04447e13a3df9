"""HEIF/HEIC codec via the pillow-heif plugin.

Importing this module registers the HEIF opener and saver with Pillow
and makes the 'heic' and 'heif' formats available from the registry.
"""

from pillow_heif import register_heif_opener

from ..registry import CodecRegistry
from .pillow import PillowCodec

register_heif_opener()


def _create_heic_codec(**kwargs) -> PillowCodec:
    return PillowCodec("heic", "HEIF")


def _create_heif_codec(**kwargs) -> PillowCodec:
    return PillowCodec("heif", "HEIF")


# Auto-register at module import
CodecRegistry.register_factory("heic", _create_heic_codec)
CodecRegistry.register_factory("heif", _create_heif_codec)
