"""Base abstraction for image codecs.

This module defines the interface every codec must implement to be used
by the conversion worker. The worker only ever sees bytes going in and
bytes coming out; pixel handling stays inside the codec.
"""

from abc import ABC, abstractmethod
from typing import Any


class ImageCodec(ABC):
    """Abstract base class for all destination codecs.

    Implementations decode a source raster (whatever format the imaging
    library recognises) and encode it into their own format.

    Attributes:
        extension: File extension written by this codec, without the dot
    """

    extension: str

    @abstractmethod
    def decode(self, data: bytes) -> Any:
        """Decode a source raster into an in-memory image.

        Args:
            data: Raw bytes of the source file

        Returns:
            Codec-specific image object accepted by encode()

        Raises:
            CodecError: If the bytes are not a readable image
        """
        pass

    @abstractmethod
    def encode(self, image: Any, quality: float) -> bytes:
        """Encode an image with lossy compression.

        Args:
            image: Image returned by decode()
            quality: Compression quality in [0.0, 1.0]

        Returns:
            Encoded file contents

        Raises:
            CodecError: If encoding fails
        """
        pass
