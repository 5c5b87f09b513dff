"""Core dataclasses and the physical store interface.

Defines mount mappings, content index entries and the minimal protocol
that physical stores (DiskStore, MemoryStore) implement.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Protocol, Union, runtime_checkable

from .paths import LogicalPath, PathLike

if TYPE_CHECKING:
    from .writer import WriteLayer

EMPTY_PROPERTIES: Mapping[str, str] = MappingProxyType({})


def freeze_properties(properties: Mapping[str, str] | None) -> Mapping[str, str]:
    """Return a read-only, insertion-ordered copy of ``properties``."""
    if not properties:
        return EMPTY_PROPERTIES
    return MappingProxyType(dict(properties))


def now_iso() -> str:
    """Current UTC timestamp as ISO 8601."""
    return datetime.now(timezone.utc).isoformat()


class Provenance(enum.Enum):
    """Where the content behind an entry lives."""

    INPUT = "input"
    OUTPUT = "output"


@dataclass(frozen=True)
class FileMetadata:
    """Metadata for a single indexed file.

    Attributes:
        size: File size in bytes.
        created_at: ISO 8601 timestamp of the first write (UTC).
        modified_at: ISO 8601 timestamp of the latest write (UTC).
    """

    size: int
    created_at: str
    modified_at: str


MountTarget = Union[str, "WriteLayer"]


@dataclass(frozen=True, eq=False)
class PathMapping:
    """Binding of a logical folder prefix to a physical directory or write layer.

    Attributes:
        prefix: Logical folder the mapping is mounted at (``~/`` for root).
        target: Absolute real directory, or the WriteLayer of another FAL.
        properties: String properties inherited by every file under the mount.
    """

    prefix: LogicalPath
    target: MountTarget
    properties: Mapping[str, str] = field(default_factory=lambda: EMPTY_PROPERTIES)

    def __init__(
        self,
        prefix: PathLike,
        target: MountTarget,
        properties: Mapping[str, str] | None = None,
    ):
        object.__setattr__(self, "prefix", LogicalPath.folder(prefix))
        object.__setattr__(self, "target", target)
        object.__setattr__(self, "properties", freeze_properties(properties))

    def __repr__(self) -> str:
        return f"PathMapping({str(self.prefix)!r}, {self.target!r})"


@dataclass(frozen=True)
class ContentEntry:
    """One logical file and where its bytes live.

    Attributes:
        path: Canonical logical path.
        location: Physical location inside the owning store.
        properties: Properties attached to the file.
        provenance: INPUT for read-layer files, OUTPUT for write-layer files.
        metadata: Size and timestamps, when known.
    """

    path: LogicalPath
    location: str
    properties: Mapping[str, str] = field(default_factory=lambda: EMPTY_PROPERTIES)
    provenance: Provenance = Provenance.OUTPUT
    metadata: FileMetadata | None = None


@runtime_checkable
class FileStore(Protocol):
    """Physical storage the layers persist to and read from.

    Paths are POSIX-style and relative to the store's root.
    """

    def exists(self, path: str) -> bool:
        """Check if a file exists."""
        ...

    def read(self, path: str) -> bytes:
        """Read an entire file. Raises FileNotFoundError if absent."""
        ...

    def write(self, path: str, content: bytes) -> None:
        """Write a file, creating parents and overwriting existing content."""
        ...

    def copy(self, src: str, dst: str) -> None:
        """Copy a file within the store."""
        ...

    def list_files(self, path: str = ".") -> list[str]:
        """List every file below ``path`` as relative POSIX paths."""
        ...

    def remove(self, path: str) -> None:
        """Remove a file."""
        ...

    def physical_path(self, path: str) -> str:
        """Describe where ``path`` lives (a real path for disk stores)."""
        ...

    def destroy(self) -> None:
        """Delete everything the store holds."""
        ...
