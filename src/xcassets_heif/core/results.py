"""Outcome values for discovery, conversion and whole batches."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .errors import (
    CatalogError,
    CodecError,
    ConfigurationError,
    DiscoveryError,
    ManifestError,
    WriteError,
)


class ErrorKind(str, Enum):
    """Category of a failed step."""

    DISCOVERY = "discovery"
    CODEC = "codec"
    WRITE = "write"
    MANIFEST = "manifest"
    CONFIG = "config"
    INTERNAL = "internal"


_KIND_BY_ERROR: dict[type[CatalogError], ErrorKind] = {
    DiscoveryError: ErrorKind.DISCOVERY,
    CodecError: ErrorKind.CODEC,
    WriteError: ErrorKind.WRITE,
    ManifestError: ErrorKind.MANIFEST,
    ConfigurationError: ErrorKind.CONFIG,
}


@dataclass(frozen=True)
class StepFailure:
    """A single failed step, naming the offending path and its cause."""

    kind: ErrorKind
    path: Path | None
    message: str

    @classmethod
    def from_error(cls, error: CatalogError) -> StepFailure:
        for error_type, kind in _KIND_BY_ERROR.items():
            if isinstance(error, error_type):
                return cls(kind=kind, path=error.path, message=str(error))
        return cls(kind=ErrorKind.INTERNAL, path=error.path, message=str(error))

    def __str__(self) -> str:
        location = f" {self.path}" if self.path is not None else ""
        return f"[{self.kind.value}]{location}: {self.message}"


@dataclass(frozen=True)
class DiscoveryResult:
    """Images found across all catalog paths plus the paths that failed."""

    images: tuple[Path, ...] = ()
    failures: tuple[StepFailure, ...] = ()


@dataclass(frozen=True)
class ConvertedAsset:
    """Outcome of converting one image.

    ``success`` is True once the destination file has been written; deletion
    and manifest failures are recorded in ``errors`` without clearing it.
    """

    source: Path
    destination: Path
    success: bool
    deleted_original: bool = False
    manifest_updated: bool = False
    errors: tuple[StepFailure, ...] = ()


@dataclass
class BatchSummary:
    """Accumulated outcome of a whole pipeline run."""

    discovered: int = 0
    assets: list[ConvertedAsset] = field(default_factory=list)
    failures: list[StepFailure] = field(default_factory=list)
    cancelled: bool = False

    @property
    def succeeded(self) -> int:
        return sum(1 for asset in self.assets if asset.success)

    @property
    def failed(self) -> int:
        return sum(1 for asset in self.assets if not asset.success)

    @property
    def all_failures(self) -> list[StepFailure]:
        """Batch-level failures followed by every per-asset failure."""
        failures = list(self.failures)
        for asset in self.assets:
            failures.extend(asset.errors)
        return failures

    @property
    def ok(self) -> bool:
        return not self.all_failures and not self.cancelled
