"""The file abstract layer: one logical namespace over input and output.

Combines an optional ReadLayer and an optional WriteLayer. Content written
in this session shadows input at the same logical path; everything else
falls through to the read layer.
"""

from __future__ import annotations

import io
from collections.abc import Iterable, Mapping

from .base import ContentEntry
from .errors import PathNotFoundError, PropertyNotFoundError, WriteUnsupportedError
from .paths import LogicalPath, PathLike
from .reader import ReadLayer
from .stream import PendingFile
from .writer import WriteLayer


class FileAbstractLayer:
    """Facade over a read layer and a write layer.

    Instances are normally produced by ``FileAbstractLayerBuilder.create()``.
    The facade keeps no index of its own. Each call looks at the write
    layer's index once and decides from that snapshot whether the write
    layer or the read layer answers it.

    Example:
        >>> fal = (FileAbstractLayerBuilder()
        ...        .read_from_real_file_system("/src/docs")
        ...        .write_to_link("/out/site")
        ...        .create())
        >>> fal.copy("index.md", "index.html")
        >>> fal.read_all_text("index.html")
    """

    def __init__(self, reader: ReadLayer | None = None, writer: WriteLayer | None = None):
        """Initialize the facade.

        Raises:
            ValueError: If neither layer is given.
        """
        if reader is None and writer is None:
            raise ValueError("A file abstract layer needs a read layer, a write layer, or both")
        self._reader = reader
        self._writer = writer

    def __repr__(self) -> str:
        return f"FileAbstractLayer(reader={self._reader!r}, writer={self._writer!r})"

    @property
    def read_layer(self) -> ReadLayer | None:
        return self._reader

    @property
    def write_layer(self) -> WriteLayer | None:
        return self._writer

    @property
    def can_read(self) -> bool:
        """True when the layer has input (a read layer)."""
        return self._reader is not None

    @property
    def can_write(self) -> bool:
        return self._writer is not None

    def _require_writer(self, operation: str) -> WriteLayer:
        if self._writer is None:
            raise WriteUnsupportedError(operation)
        return self._writer

    def _written(self, path: LogicalPath) -> ContentEntry | None:
        if self._writer is None:
            return None
        return self._writer.get_entry(path)

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def exists(self, path: PathLike) -> bool:
        logical = LogicalPath.parse(path)
        if self._written(logical) is not None:
            return True
        return self._reader is not None and self._reader.exists(logical)

    def get_entry(self, path: PathLike) -> ContentEntry:
        """Describe the file behind ``path``.

        Written files come back with OUTPUT provenance, input files with INPUT.

        Raises:
            PathNotFoundError: If neither layer has the file.
        """
        logical = LogicalPath.parse(path)
        entry = self._written(logical)
        if entry is not None:
            return entry
        if self._reader is None:
            raise PathNotFoundError(logical)
        return self._reader.get_entry(logical)

    def read_all_bytes(self, path: PathLike) -> bytes:
        """Read a whole file.

        Raises:
            PathNotFoundError: If neither layer has the file.
        """
        logical = LogicalPath.parse(path)
        if self._written(logical) is not None:
            return self._writer.read_bytes(logical)  # type: ignore[union-attr]
        if self._reader is None:
            raise PathNotFoundError(logical)
        return self._reader.read_bytes(logical)

    def read_all_text(self, path: PathLike, encoding: str = "utf-8") -> str:
        return self.read_all_bytes(path).decode(encoding)

    def read_all_lines(self, path: PathLike, encoding: str = "utf-8") -> list[str]:
        return self.read_all_text(path, encoding).splitlines()

    def open_read(self, path: PathLike) -> io.BytesIO:
        """Open a file for binary reading (a snapshot of its current bytes)."""
        return io.BytesIO(self.read_all_bytes(path))

    def get_properties(self, path: PathLike) -> Mapping[str, str]:
        """Return the properties attached to ``path``.

        Raises:
            PathNotFoundError: If neither layer has the file.
        """
        logical = LogicalPath.parse(path)
        entry = self._written(logical)
        if entry is not None:
            return entry.properties
        if self._reader is None:
            raise PathNotFoundError(logical)
        return self._reader.get_properties(logical)

    def has_property(self, path: PathLike, key: str) -> bool:
        try:
            return key in self.get_properties(path)
        except PathNotFoundError:
            return False

    def get_property(self, path: PathLike, key: str) -> str:
        """Return one property value.

        Raises:
            PathNotFoundError: If neither layer has the file.
            PropertyNotFoundError: If the file has no such property.
        """
        properties = self.get_properties(path)
        try:
            return properties[key]
        except KeyError:
            raise PropertyNotFoundError(LogicalPath.parse(path), key) from None

    def get_physical_path(self, path: PathLike) -> str | None:
        """Return where the bytes behind ``path`` live, or None."""
        logical = LogicalPath.parse(path)
        if self._written(logical) is not None:
            return self._writer.get_physical_path(logical)  # type: ignore[union-attr]
        if self._reader is None:
            return None
        return self._reader.get_physical_path(logical)

    def get_all_input_files(self) -> list[LogicalPath]:
        """Every logical path visible through this layer, sorted and duplicate-free.

        Written files plus every input file they do not shadow, taken from
        one snapshot of the write index.
        """
        written = self._writer.snapshot() if self._writer is not None else {}
        files = list(written)
        if self._reader is not None:
            files.extend(p for p in self._reader.enumerate() if p not in written)
        return sorted(files)

    def get_all_output_files(self) -> list[LogicalPath]:
        """Logical paths written through this layer, sorted."""
        if self._writer is None:
            return []
        return sorted(self._writer.enumerate())

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def write_all_bytes(
        self,
        path: PathLike,
        content: bytes,
        properties: Mapping[str, str] | None = None,
    ) -> None:
        """Write a whole file (last write wins).

        Raises:
            WriteUnsupportedError: If this layer has no write layer.
        """
        self._require_writer("write_all_bytes").write_bytes(path, content, properties)

    def write_all_text(
        self,
        path: PathLike,
        text: str,
        encoding: str = "utf-8",
        properties: Mapping[str, str] | None = None,
    ) -> None:
        self._require_writer("write_all_text").write_bytes(path, text.encode(encoding), properties)

    def write_all_lines(
        self,
        path: PathLike,
        lines: Iterable[str],
        encoding: str = "utf-8",
        properties: Mapping[str, str] | None = None,
    ) -> None:
        text = "".join(line + "\n" for line in lines)
        self._require_writer("write_all_lines").write_bytes(path, text.encode(encoding), properties)

    def create(
        self,
        path: PathLike,
        properties: Mapping[str, str] | None = None,
    ) -> PendingFile:
        """Open ``path`` for binary writing; the file appears when closed.

        Raises:
            WriteUnsupportedError: If this layer has no write layer.
        """
        return self._require_writer("create").open(path, "wb", properties=properties)

    def copy(self, src: PathLike, dst: PathLike) -> None:
        """Copy an input file to ``dst`` in the output.

        The source is always taken from the read layer; its storage is
        never modified.

        Raises:
            WriteUnsupportedError: If this layer has no write layer.
            PathNotFoundError: If ``src`` is not an input file.
        """
        self._require_writer("copy").copy(src, dst, self._reader)

    def flush(self) -> list[LogicalPath]:
        """Publish staged output to its publish directory (no-op when direct)."""
        return self._require_writer("flush").flush()
