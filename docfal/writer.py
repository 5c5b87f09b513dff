"""Write layer: staged or direct output with a content index.

A staged layer keeps every write in private storage (a temporary
directory or memory) and only records its publish directory. A direct
layer writes straight into the publish directory. Either way the layer
keeps an index from logical path to the physical location of the latest
bytes; that index is what a later stage reads through
``ReadLayer.from_output``.
"""

from __future__ import annotations

import logging
import tempfile
import threading
import uuid
import weakref
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from .base import (
    ContentEntry,
    FileMetadata,
    FileStore,
    Provenance,
    freeze_properties,
    now_iso,
)
from .disk import DiskStore
from .errors import PathNotFoundError, PropertyNotFoundError
from .memory import MemoryStore
from .paths import LogicalPath, PathLike
from .stream import PendingFile

if TYPE_CHECKING:
    from .reader import ReadLayer

logger = logging.getLogger(__name__)

Staging = Literal["disk", "memory"]


class WriteLayer:
    """Append/overwrite view backed by staged or real storage.

    The variant is fixed at construction. Writes to distinct logical paths
    may run in parallel; writes to the same path are serialized by a
    per-path lock and the index entry is swapped in only after the bytes
    are fully persisted.

    Example:
        >>> layer = WriteLayer("/tmp/site", staged=True, staging="memory")
        >>> layer.write_bytes("index.html", b"<html/>")
        >>> layer.read_bytes("~/index.html")
        b'<html/>'
    """

    def __init__(
        self,
        output_dir: str | Path,
        staged: bool = True,
        staging: Staging = "disk",
    ):
        """Initialize a write layer.

        Args:
            output_dir: Publish directory. Written directly for a direct
                layer; only recorded (until ``flush``) for a staged one.
            staged: True for private staging, False to write directly.
            staging: Private storage for staged layers, "disk" (temporary
                directory) or "memory".

        Raises:
            ValueError: If staging is not a known kind.
        """
        self.publish_dir = Path(output_dir).expanduser().resolve()
        self.staged = staged
        self._index: dict[LogicalPath, ContentEntry] = {}
        self._index_lock = threading.Lock()
        self._path_locks: dict[LogicalPath, threading.Lock] = {}

        self._store: FileStore
        if not staged:
            self._store = DiskStore(self.publish_dir, create=True)
        elif staging == "disk":
            self._store = DiskStore(tempfile.mkdtemp(prefix="docfal-"), create=True)
        elif staging == "memory":
            self._store = MemoryStore()
        else:
            raise ValueError(f"Unsupported staging: {staging}. Use 'disk' or 'memory'.")

        # Private staging storage lives as long as this layer (or an explicit close()).
        self._finalizer = weakref.finalize(self, self._store.destroy) if staged else None
        logger.debug("Created %s write layer on %r (publish to %s)",
                     "staged" if staged else "direct", self._store, self.publish_dir)

    def __repr__(self) -> str:
        kind = "staged" if self.staged else "direct"
        return f"WriteLayer({str(self.publish_dir)!r}, {kind})"

    @property
    def store(self) -> FileStore:
        """The physical store holding this layer's bytes."""
        return self._store

    # -------------------------------------------------------------------------
    # Locking
    # -------------------------------------------------------------------------

    def _lock_for(self, path: LogicalPath) -> threading.Lock:
        with self._index_lock:
            lock = self._path_locks.get(path)
            if lock is None:
                lock = self._path_locks[path] = threading.Lock()
            return lock

    def _file_path(self, path: PathLike) -> LogicalPath:
        logical = LogicalPath.parse(path)
        if not logical.parts or logical.is_folder:
            raise IsADirectoryError(f"Not a file path: '{path}'")
        return logical

    def _location_for(self, path: LogicalPath) -> str:
        if not self.staged:
            return path.as_posix()
        # Fresh location per write, so superseded bytes are never reachable.
        return f"{uuid.uuid4().hex}-{path.name}"

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def write_bytes(
        self,
        path: PathLike,
        content: bytes,
        properties: Mapping[str, str] | None = None,
    ) -> ContentEntry:
        """Write bytes under a logical path (last write wins).

        Args:
            path: Logical path to write.
            content: Content to write (must be bytes).
            properties: Properties for the new entry; replaces any prior ones.

        Returns:
            The committed index entry.

        Raises:
            TypeError: If content is not bytes.
            IsADirectoryError: If path names the root or a folder.
        """
        if not isinstance(content, bytes):
            raise TypeError(f"Expected bytes, got {type(content).__name__}")
        logical = self._file_path(path)

        with self._lock_for(logical):
            previous = self._index.get(logical)
            location = self._location_for(logical)
            self._store.write(location, content)

            now = now_iso()
            entry = ContentEntry(
                path=logical,
                location=location,
                properties=freeze_properties(properties),
                provenance=Provenance.OUTPUT,
                metadata=FileMetadata(
                    size=len(content),
                    created_at=previous.metadata.created_at if previous and previous.metadata else now,
                    modified_at=now,
                ),
            )
            with self._index_lock:
                self._index[logical] = entry

            if previous is not None and previous.location != location:
                self._store.remove(previous.location)

        logger.debug("Wrote %s (%d bytes) to %s", logical, len(content), location)
        return entry

    def copy(self, src: PathLike, dst: PathLike, read_layer: "ReadLayer | None") -> ContentEntry:
        """Copy a file from ``read_layer`` into this layer.

        The source bytes are read first; nothing is written if that fails.
        The source's backing storage is never modified. The new entry
        inherits the source's properties.

        Raises:
            PathNotFoundError: If ``src`` does not resolve in ``read_layer``.
        """
        if read_layer is None:
            raise PathNotFoundError(LogicalPath.parse(src))
        content = read_layer.read_bytes(src)
        properties = read_layer.get_properties(src)
        entry = self.write_bytes(dst, content, properties)
        logger.debug("Copied %s -> %s", LogicalPath.parse(src), entry.path)
        return entry

    def open(
        self,
        path: PathLike,
        mode: str = "wb",
        encoding: str = "utf-8",
        properties: Mapping[str, str] | None = None,
    ) -> PendingFile:
        """Open a logical file for writing; content is committed on close."""
        return PendingFile(self, self._file_path(path), mode, encoding, properties)

    # -------------------------------------------------------------------------
    # Index queries
    # -------------------------------------------------------------------------

    def get_entry(self, path: PathLike) -> ContentEntry | None:
        """Return the index entry for ``path``, or None."""
        logical = LogicalPath.parse(path)
        with self._index_lock:
            return self._index.get(logical)

    def exists(self, path: PathLike) -> bool:
        return self.get_entry(path) is not None

    def read_bytes(self, path: PathLike) -> bytes:
        """Read the latest bytes written under ``path``.

        Raises:
            PathNotFoundError: If nothing was written under ``path``.
        """
        logical = LogicalPath.parse(path)
        with self._lock_for(logical):
            entry = self.get_entry(logical)
            if entry is None:
                raise PathNotFoundError(logical)
            return self._store.read(entry.location)

    def snapshot(self) -> dict[LogicalPath, ContentEntry]:
        """Return a copy of the index (only fully committed entries)."""
        with self._index_lock:
            return dict(self._index)

    def enumerate(self) -> Iterator[LogicalPath]:
        """Iterate over every indexed logical path, as of this call."""
        return iter(list(self.snapshot()))

    def get_physical_path(self, path: PathLike) -> str | None:
        entry = self.get_entry(path)
        if entry is None:
            return None
        return self._store.physical_path(entry.location)

    def get_properties(self, path: PathLike) -> Mapping[str, str]:
        """Return the properties recorded with ``path``.

        Raises:
            PathNotFoundError: If nothing was written under ``path``.
        """
        entry = self.get_entry(path)
        if entry is None:
            raise PathNotFoundError(LogicalPath.parse(path))
        return entry.properties

    def has_property(self, path: PathLike, key: str) -> bool:
        entry = self.get_entry(path)
        return entry is not None and key in entry.properties

    def get_property(self, path: PathLike, key: str) -> str:
        properties = self.get_properties(path)
        try:
            return properties[key]
        except KeyError:
            raise PropertyNotFoundError(LogicalPath.parse(path), key) from None

    # -------------------------------------------------------------------------
    # Lifetime
    # -------------------------------------------------------------------------

    def flush(self) -> list[LogicalPath]:
        """Publish staged content into the publish directory.

        Direct layers already write there, so this is a no-op for them.

        Returns:
            The logical paths written to the publish directory, sorted.
        """
        if not self.staged:
            return []
        target = DiskStore(self.publish_dir, create=True)
        published = []
        for path in sorted(self.snapshot()):
            target.write(path.as_posix(), self.read_bytes(path))
            published.append(path)
        logger.info("Published %d staged files to %s", len(published), self.publish_dir)
        return published

    def close(self) -> None:
        """Discard staged storage and forget every entry.

        Layers chained to this one through ``ReadLayer.from_output`` see an
        empty output afterwards. Direct layers keep their files on disk.
        """
        with self._index_lock:
            self._index.clear()
        if self._finalizer is not None:
            self._finalizer()
