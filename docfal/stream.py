"""Writable file handle that commits to a write layer on close."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Mapping

from .paths import LogicalPath

if TYPE_CHECKING:
    from .writer import WriteLayer


class PendingFile:
    """File-like object that writes to a write layer on close.

    Buffers content during write operations, then commits it as a single
    ``write_bytes`` call when the file is closed (either explicitly or via
    context manager). Nothing is visible under the logical path until then.

    Attributes:
        path: The logical path being written.
        mode: The file mode ('w', 'wb', 'a', 'ab').
    """

    def __init__(
        self,
        layer: "WriteLayer",
        path: LogicalPath,
        mode: str = "wb",
        encoding: str = "utf-8",
        properties: Mapping[str, str] | None = None,
    ):
        """Initialize a writable pending file.

        Args:
            layer: The WriteLayer that receives the content on close.
            path: Canonical logical path.
            mode: File open mode.
            encoding: Text encoding for text modes.
            properties: Properties recorded with the committed entry.

        Raises:
            ValueError: If mode is not a write or append mode.
        """
        if not mode or mode[0] not in "wa" or set(mode) - set("wab"):
            raise ValueError(f"Invalid mode: {mode}")
        self._layer = layer
        self.path = path
        self.mode = mode
        self._encoding = encoding
        self._properties = properties
        self._closed = False

        # Use BytesIO for binary, StringIO for text
        if "b" in mode:
            self._buffer: io.BytesIO | io.StringIO = io.BytesIO()
        else:
            self._buffer = io.StringIO()

        # For append mode, load existing content
        if "a" in mode and layer.exists(path):
            existing = layer.read_bytes(path)
            if "b" in mode:
                self._buffer.write(existing)
            else:
                self._buffer.write(existing.decode(encoding))

    def write(self, data: str | bytes) -> int:
        """Write data to the buffer.

        Raises:
            ValueError: If file is already closed.
        """
        if self._closed:
            raise ValueError(f"I/O operation on closed file: {self.path}")
        return self._buffer.write(data)  # type: ignore[arg-type]

    def writelines(self, lines: list[str] | list[bytes]) -> None:
        if self._closed:
            raise ValueError(f"I/O operation on closed file: {self.path}")
        self._buffer.writelines(lines)  # type: ignore[arg-type]

    def read(self, size: int = -1) -> str | bytes:
        """Read is not supported for write-only files."""
        raise io.UnsupportedOperation("read")

    def tell(self) -> int:
        if self._closed:
            raise ValueError(f"I/O operation on closed file: {self.path}")
        return self._buffer.tell()

    def writable(self) -> bool:
        return not self._closed

    def readable(self) -> bool:
        return False

    def flush(self) -> None:
        """Flush is a no-op (content committed on close)."""
        pass

    def close(self) -> None:
        """Close the file and commit the buffered content to the layer."""
        if self._closed:
            return

        content = self._buffer.getvalue()
        if isinstance(content, str):
            content = content.encode(self._encoding)

        self._closed = True
        self._layer.write_bytes(self.path, content, self._properties)

    def discard(self) -> None:
        """Close without committing anything."""
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "PendingFile":
        return self

    def __exit__(self, exc_type: object, *args: object) -> None:
        # An exception inside the with block must not leave a partial file.
        if exc_type is not None:
            self.discard()
        else:
            self.close()
