"""What a mount mapping points at.

A mapping targets either a physical directory or the write layer of an
earlier FAL. Both are wrapped in a small adapter so the read layer can
treat every mount the same way.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Mapping, Protocol, Union

from .base import EMPTY_PROPERTIES, FileMetadata, PathMapping
from .disk import DiskStore
from .paths import LogicalPath
from .writer import WriteLayer


class MountSource(Protocol):
    """Read-only access to the files behind one mapping."""

    def exists(self, suffix: LogicalPath) -> bool: ...

    def read(self, suffix: LogicalPath) -> bytes: ...

    def list_files(self) -> list[LogicalPath]: ...

    def properties(self, suffix: LogicalPath) -> Mapping[str, str]: ...

    def physical_path(self, suffix: LogicalPath) -> str | None: ...

    def metadata(self, suffix: LogicalPath) -> FileMetadata | None: ...


class DirectorySource:
    """Files of a real directory."""

    def __init__(self, directory: str | os.PathLike[str]):
        self.store = DiskStore(directory)

    def __repr__(self) -> str:
        return f"DirectorySource({str(self.store.root)!r})"

    def exists(self, suffix: LogicalPath) -> bool:
        return bool(suffix.parts) and self.store.exists(suffix.as_posix())

    def read(self, suffix: LogicalPath) -> bytes:
        return self.store.read(suffix.as_posix())

    def list_files(self) -> list[LogicalPath]:
        return [LogicalPath(tuple(rel.split("/"))) for rel in self.store.list_files()]

    def properties(self, suffix: LogicalPath) -> Mapping[str, str]:
        return EMPTY_PROPERTIES

    def physical_path(self, suffix: LogicalPath) -> str | None:
        return self.store.physical_path(suffix.as_posix())

    def metadata(self, suffix: LogicalPath) -> FileMetadata | None:
        try:
            st = os.stat(self.store.physical_path(suffix.as_posix()))
        except OSError:
            return None
        return FileMetadata(
            size=st.st_size,
            created_at=datetime.fromtimestamp(st.st_ctime, tz=timezone.utc).isoformat(),
            modified_at=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc).isoformat(),
        )


class OutputSource:
    """The index of another FAL's write layer, viewed read-only.

    The view is live: entries written to the layer later are visible too.
    """

    def __init__(self, layer: WriteLayer):
        self._layer = layer

    def __repr__(self) -> str:
        return f"OutputSource({self._layer!r})"

    def exists(self, suffix: LogicalPath) -> bool:
        return bool(suffix.parts) and self._layer.exists(suffix)

    def read(self, suffix: LogicalPath) -> bytes:
        return self._layer.read_bytes(suffix)

    def list_files(self) -> list[LogicalPath]:
        return list(self._layer.enumerate())

    def properties(self, suffix: LogicalPath) -> Mapping[str, str]:
        entry = self._layer.get_entry(suffix)
        return entry.properties if entry is not None else EMPTY_PROPERTIES

    def physical_path(self, suffix: LogicalPath) -> str | None:
        return self._layer.get_physical_path(suffix)

    def metadata(self, suffix: LogicalPath) -> FileMetadata | None:
        entry = self._layer.get_entry(suffix)
        return entry.metadata if entry is not None else None


AnySource = Union[DirectorySource, OutputSource]


def source_for(mapping: PathMapping) -> AnySource:
    """Wrap a mapping's target in the matching source adapter."""
    if isinstance(mapping.target, WriteLayer):
        return OutputSource(mapping.target)
    return DirectorySource(mapping.target)
