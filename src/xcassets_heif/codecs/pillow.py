"""Pillow-backed codecs.

Registers the formats Pillow can write out of the box. HEIF support
lives in the heif module because it needs the pillow-heif plugin.
"""

import io
from typing import Any

from PIL import Image

from ..core.errors import CodecError
from ..registry import CodecRegistry
from .base import ImageCodec

# Modes every lossy target accepts without conversion
_NATIVE_MODES = ("RGB", "RGBA")


def _has_alpha(image: Image.Image) -> bool:
    return image.mode.endswith("A") or "transparency" in image.info


class PillowCodec(ImageCodec):
    """Codec that decodes with Pillow and saves in a Pillow-registered format.

    Example:
        >>> codec = PillowCodec("webp", "WEBP")
        >>> data = codec.encode(codec.decode(png_bytes), 0.76)
    """

    def __init__(self, extension: str, pil_format: str):
        """Initialize the codec.

        Args:
            extension: File extension written by this codec (e.g., 'webp')
            pil_format: Pillow format name passed to Image.save (e.g., 'WEBP')
        """
        self.extension = extension
        self.pil_format = pil_format

    def decode(self, data: bytes) -> Image.Image:
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise CodecError(f"Cannot decode image: {e}") from e
        return image

    def encode(self, image: Any, quality: float) -> bytes:
        if image.mode not in _NATIVE_MODES:
            image = image.convert("RGBA" if _has_alpha(image) else "RGB")

        buffer = io.BytesIO()
        try:
            image.save(buffer, format=self.pil_format, quality=to_pillow_quality(quality))
        except (OSError, ValueError, KeyError) as e:
            raise CodecError(f"Cannot encode {self.pil_format}: {e}") from e
        return buffer.getvalue()


def to_pillow_quality(quality: float) -> int:
    """Map a [0.0, 1.0] quality onto Pillow's 0-100 scale."""
    return max(0, min(100, round(quality * 100)))


def _create_webp_codec(**kwargs) -> PillowCodec:
    return PillowCodec("webp", "WEBP")


# Auto-register at module import
CodecRegistry.register_factory("webp", _create_webp_codec)
