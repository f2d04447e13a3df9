"""Loading, rewriting and saving imageset manifests.

A manifest (Contents.json) maps the logical variants of an image to
physical filenames. After an image is converted, every entry that names
the original file must name the converted file instead.

Rewriting is a pure transform: load() returns a fresh document,
rewrite_manifest() returns a new one, and save() writes it back.
"""

import copy
import json
import logging
import threading
from pathlib import Path

from .config import ConversionConfig
from .core.errors import ManifestError
from .core.types import ImageEntry, Manifest
from .core.validator import manifest_problems
from .filesystem import FileSystem, LocalFileSystem

logger = logging.getLogger("xcassets_heif.manifest")


def rewrite_filename(
    entry: ImageEntry, old_ext: str, new_ext: str, strict: bool = False
) -> ImageEntry:
    """Return a copy of an entry whose filename references the new extension.

    Only entries whose filename ends with ``old_ext`` are changed. By default
    every literal occurrence of ``old_ext`` in the filename is replaced, so
    ``icon.png.png`` becomes ``icon.heic.heic``; with ``strict`` only the
    trailing extension is swapped.

    Args:
        entry: Image entry from a manifest
        old_ext: Source extension including the dot (e.g., '.png')
        new_ext: Destination extension including the dot (e.g., '.heic')
        strict: Replace only the trailing extension

    Returns:
        New entry; the input is never modified
    """
    updated = copy.deepcopy(entry)
    filename = entry.get("filename")
    if not filename or not filename.endswith(old_ext):
        return updated

    if strict:
        updated["filename"] = filename[: -len(old_ext)] + new_ext
    else:
        updated["filename"] = filename.replace(old_ext, new_ext)
    return updated


def rewrite_manifest(
    manifest: Manifest,
    source_name: str,
    old_ext: str,
    new_ext: str,
    strict: bool = False,
) -> tuple[Manifest, int]:
    """Rewrite every entry that references ``source_name``.

    Entries without a filename, or naming other files, are copied unchanged.
    Duplicate entries are each rewritten.

    Returns:
        Tuple of (new manifest, number of entries changed)
    """
    updated = copy.deepcopy(manifest)
    images: list[ImageEntry] = []
    changed = 0

    for entry in manifest["images"]:
        if entry.get("filename") == source_name:
            new_entry = rewrite_filename(entry, old_ext, new_ext, strict=strict)
            if new_entry != entry:
                changed += 1
            images.append(new_entry)
        else:
            images.append(copy.deepcopy(entry))

    updated["images"] = images
    return updated, changed


def serialize_manifest(manifest: Manifest) -> bytes:
    """Serialize a manifest deterministically (sorted keys, Xcode-style spacing)."""
    text = json.dumps(
        manifest,
        indent=2,
        sort_keys=True,
        separators=(",", " : "),
        ensure_ascii=False,
    )
    return (text + "\n").encode("utf-8")


class ManifestStore:
    """Find, load, rewrite and save the manifest of an image group.

    Updates for the same group directory are serialized so that
    concurrent conversions never lose each other's rewrites.
    """

    def __init__(self, config: ConversionConfig | None = None, filesystem: FileSystem | None = None):
        self.config = config or ConversionConfig()
        self.filesystem = filesystem or LocalFileSystem()
        self._locks: dict[Path, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def find_manifest(self, group_dir: Path) -> Path | None:
        """Locate the manifest inside a group directory.

        If several candidates exist the first one listed wins.

        Returns:
            Path to the manifest, or None if the group has none
        """
        try:
            children = self.filesystem.list_dir(group_dir)
        except OSError as e:
            logger.warning("Cannot list %s while looking for a manifest: %s", group_dir, e)
            return None

        manifest_suffix = f".{self.config.manifest_extension}"
        for child in children:
            if child.suffix == manifest_suffix and not self.filesystem.is_dir(child):
                return child
        return None

    def load(self, path: Path) -> Manifest:
        """Read and strictly validate a manifest.

        Raises:
            ManifestError: If the file is unreadable, not JSON, or not a valid manifest
        """
        try:
            raw = self.filesystem.read_bytes(path)
        except OSError as e:
            raise ManifestError(f"Cannot read manifest: {e}", path) from e

        try:
            document = json.loads(raw)
        except ValueError as e:
            raise ManifestError(f"Invalid JSON: {e}", path) from e

        problems = manifest_problems(document)
        if problems:
            raise ManifestError("; ".join(problems), path)

        return document  # type: ignore[no-any-return]

    def save(self, manifest: Manifest, path: Path) -> None:
        """Atomically replace the manifest at ``path``.

        Raises:
            ManifestError: If the file cannot be written
        """
        try:
            self.filesystem.write_atomic(path, serialize_manifest(manifest))
        except OSError as e:
            raise ManifestError(f"Cannot save manifest: {e}", path) from e

    def update_for_image(self, image_path: Path) -> bool:
        """Point the group's manifest at the converted version of an image.

        Keyed by the image's original filename; works even if the original
        has already been deleted.

        Args:
            image_path: Path of the source image that was converted

        Returns:
            True if the manifest was rewritten, False if the group has no
            manifest or no entry referenced the image

        Raises:
            ManifestError: If the manifest cannot be loaded or saved
        """
        group_dir = image_path.parent
        with self._lock_for(group_dir):
            manifest_path = self.find_manifest(group_dir)
            if manifest_path is None:
                logger.debug("No manifest in %s", group_dir)
                return False

            manifest = self.load(manifest_path)
            rewritten, changed = rewrite_manifest(
                manifest,
                image_path.name,
                self.config.source_suffix,
                self.config.destination_suffix,
                strict=self.config.strict_extension_rewrite,
            )
            if not changed:
                logger.debug("No entry in %s references %s", manifest_path, image_path.name)
                return False

            self.save(rewritten, manifest_path)
            logger.debug(
                "Rewrote %d reference(s) to %s in %s", changed, image_path.name, manifest_path
            )
            return True

    def _lock_for(self, group_dir: Path) -> threading.Lock:
        key = group_dir.absolute()
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock
