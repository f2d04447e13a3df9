"""Codec registry for factory-based codec creation.

This module provides a central registry for codec factories,
keyed by the destination file extension, with automatic discovery
of the codec modules whose imaging dependencies are installed.
"""

import importlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from .core.errors import ConfigurationError

if TYPE_CHECKING:
    from .codecs.base import ImageCodec

logger = logging.getLogger("xcassets_heif.registry")


class CodecRegistry:
    """Central registry for codec factories.

    Codec modules register themselves when imported, and the registry
    can automatically discover all available codecs.
    """

    _factories: dict[str, Callable[..., "ImageCodec"]] = {}

    @classmethod
    def register_factory(cls, name: str, factory: Callable[..., "ImageCodec"]) -> None:
        """Register a factory function for creating codecs.

        Args:
            name: Destination extension handled by the codec (e.g., 'heic')
            factory: Callable that creates an ImageCodec instance

        Example:
            >>> CodecRegistry.register_factory('webp', lambda **kw: PillowCodec('webp', 'WEBP'))
        """
        cls._factories[name] = factory

    @classmethod
    def create(cls, name: str, **kwargs) -> "ImageCodec":
        """Create a codec from a registered factory.

        Args:
            name: Name of the registered codec
            **kwargs: Arguments passed to the codec factory

        Returns:
            ImageCodec instance

        Raises:
            ConfigurationError: If name is not registered
        """
        if name not in cls._factories:
            available = ", ".join(sorted(cls._factories)) or "none"
            raise ConfigurationError(
                f"Unknown or unavailable format: '{name}'. Available formats: {available}"
            )
        return cls._factories[name](**kwargs)

    @classmethod
    def list_codecs(cls) -> list[str]:
        """List all registered codec names.

        Example:
            >>> CodecRegistry.list_codecs()
            ['heic', 'heif', 'webp']
        """
        return sorted(cls._factories)

    @classmethod
    def discover_codecs(cls) -> None:
        """Auto-discover and import all codec modules.

        Modules whose imaging library is not installed are skipped;
        their formats simply stay unregistered.
        """
        codecs_dir = Path(__file__).parent / "codecs"

        if not codecs_dir.exists():
            return

        for module_path in sorted(codecs_dir.glob("*.py")):
            if module_path.stem in ("__init__", "base"):
                continue

            try:
                importlib.import_module(f".codecs.{module_path.stem}", package="xcassets_heif")
            except ImportError as e:
                logger.debug("Codec module %s unavailable: %s", module_path.stem, e)
