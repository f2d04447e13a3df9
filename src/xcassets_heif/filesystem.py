"""File system access used by every stage of the pipeline.

Discovery, conversion and manifest rewriting never touch ``os`` or
``pathlib`` I/O directly; they go through a FileSystem so tests can
swap in an in-memory implementation.
"""

import os
import stat
import tempfile
import threading
from pathlib import Path
from typing import Protocol, runtime_checkable

_umask_lock = threading.Lock()


def _current_umask() -> int:
    with _umask_lock:
        mask = os.umask(0)
        os.umask(mask)
    return mask


def _target_mode(path: Path) -> int:
    """Mode a file written to ``path`` should end up with."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        return 0o666 & ~_current_umask()


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for the file operations the pipeline needs.

    Every method raises OSError (or a subclass) on failure.
    """

    def list_dir(self, path: Path) -> list[Path]:
        """Return the direct children of a directory."""
        ...

    def is_dir(self, path: Path) -> bool:
        ...

    def read_bytes(self, path: Path) -> bytes:
        ...

    def write_atomic(self, path: Path, data: bytes) -> None:
        """Replace ``path`` with ``data`` so readers never see a partial file."""
        ...

    def remove(self, path: Path) -> None:
        ...


class LocalFileSystem:
    """FileSystem backed by the local disk.

    Directory listings are sorted by name so repeated runs process
    images in the same order on every platform.
    """

    def list_dir(self, path: Path) -> list[Path]:
        return sorted(path.iterdir())

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def write_atomic(self, path: Path, data: bytes) -> None:
        # Temp file must live in the same directory for os.replace to be atomic
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            # mkstemp creates 0600; keep the replaced file's mode or the umask default
            os.chmod(tmp_name, _target_mode(path))
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise

    def remove(self, path: Path) -> None:
        path.unlink()
