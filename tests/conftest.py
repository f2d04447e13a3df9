"""Shared fixtures: an in-memory file system, a fake codec and catalog builders."""

import json
from pathlib import Path
from typing import Any

import pytest

from xcassets_heif.codecs.base import ImageCodec
from xcassets_heif.core.errors import CodecError
from xcassets_heif.registry import CodecRegistry


class MemoryFileSystem:
    """In-memory FileSystem with switchable failures."""

    def __init__(self) -> None:
        self.files: dict[Path, bytes] = {}
        self.dirs: set[Path] = set()
        self.unlistable: set[Path] = set()
        self.unwritable: set[Path] = set()
        self.undeletable: set[Path] = set()

    def add_dir(self, path: Path) -> None:
        self.dirs.add(path)
        self.dirs.update(path.parents)

    def add_file(self, path: Path, data: bytes = b"") -> None:
        self.add_dir(path.parent)
        self.files[path] = data

    def list_dir(self, path: Path) -> list[Path]:
        if path in self.unlistable:
            raise PermissionError(f"Permission denied: '{path}'")
        if path in self.files:
            raise NotADirectoryError(f"Not a directory: '{path}'")
        if path not in self.dirs:
            raise FileNotFoundError(f"No such file or directory: '{path}'")
        entries = [p for p in self.files if p.parent == path]
        entries += [p for p in self.dirs if p.parent == path and p != path]
        return sorted(entries)

    def is_dir(self, path: Path) -> bool:
        return path in self.dirs

    def read_bytes(self, path: Path) -> bytes:
        if path not in self.files:
            raise FileNotFoundError(f"No such file or directory: '{path}'")
        return self.files[path]

    def write_atomic(self, path: Path, data: bytes) -> None:
        if path in self.unwritable:
            raise PermissionError(f"Permission denied: '{path}'")
        if path.parent not in self.dirs:
            raise FileNotFoundError(f"No such file or directory: '{path.parent}'")
        self.files[path] = data

    def remove(self, path: Path) -> None:
        if path in self.undeletable:
            raise PermissionError(f"Operation not permitted: '{path}'")
        if path not in self.files:
            raise FileNotFoundError(f"No such file or directory: '{path}'")
        del self.files[path]

    def read_json(self, path: Path) -> Any:
        return json.loads(self.files[path])


class FakeCodec(ImageCodec):
    """Codec that 'encodes' by prefixing the source bytes.

    Source payloads listed in ``corrupt`` fail to decode; payloads listed in
    ``unencodable`` fail to encode.
    """

    extension = "heic"

    def __init__(self, corrupt: set[bytes] | None = None, unencodable: set[bytes] | None = None):
        self.corrupt = corrupt or set()
        self.unencodable = unencodable or set()
        self.qualities: list[float] = []

    def decode(self, data: bytes) -> bytes:
        if data in self.corrupt:
            raise CodecError("cannot identify image file")
        return data

    def encode(self, image: Any, quality: float) -> bytes:
        self.qualities.append(quality)
        if image in self.unencodable:
            raise CodecError("encoder rejected image")
        return b"HEIC:" + image


def make_contents(*filenames: str | None) -> dict[str, Any]:
    """Build a Contents.json document with one entry per filename."""
    images = []
    for index, filename in enumerate(filenames, start=1):
        entry: dict[str, Any] = {"idiom": "universal", "scale": f"{index}x"}
        if filename is not None:
            entry["filename"] = filename
        images.append(entry)
    return {"images": images, "info": {"author": "xcode", "version": 1}}


def encode_contents(document: dict[str, Any]) -> bytes:
    return json.dumps(document, indent=2).encode("utf-8")


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    return MemoryFileSystem()


@pytest.fixture
def fake_codec() -> FakeCodec:
    return FakeCodec()


@pytest.fixture
def memory_catalog(memory_fs: MemoryFileSystem) -> MemoryFileSystem:
    """/Assets.xcassets with two imagesets and some noise, held in memory."""
    root = Path("/Assets.xcassets")
    icon = root / "icon.imageset"
    logo = root / "logo.imageset"

    memory_fs.add_file(root / "Contents.json", encode_contents({"info": {"author": "xcode", "version": 1}}))
    memory_fs.add_file(icon / "icon.png", b"icon-1x")
    memory_fs.add_file(icon / "icon@2x.png", b"icon-2x")
    memory_fs.add_file(icon / "notes.txt", b"not an image")
    memory_fs.add_file(icon / "Contents.json", encode_contents(make_contents("icon.png", "icon@2x.png", None)))
    memory_fs.add_file(logo / "logo.png", b"logo")
    memory_fs.add_file(logo / "Contents.json", encode_contents(make_contents("logo.png")))
    memory_fs.add_file(root / "AppIcon.appiconset" / "app.png", b"app icon")
    memory_fs.add_file(root / "Colors" / "stray.png", b"stray")
    return memory_fs


@pytest.fixture
def disk_catalog(tmp_path: Path) -> Path:
    """A.xcassets/B.imageset/{icon.png, Contents.json} on disk."""
    imageset = tmp_path / "A.xcassets" / "B.imageset"
    imageset.mkdir(parents=True)
    (imageset / "icon.png").write_bytes(b"png bytes")
    (imageset / "Contents.json").write_bytes(encode_contents(make_contents("icon.png")))
    return tmp_path / "A.xcassets"


@pytest.fixture
def registered_fake_codec():
    """Register FakeCodec under the 'fake' format for the duration of a test."""
    codec = FakeCodec()
    CodecRegistry.register_factory("fake", lambda **kwargs: codec)
    yield codec
    CodecRegistry._factories.pop("fake", None)
