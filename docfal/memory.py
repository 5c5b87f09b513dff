"""In-memory file store implementation."""

from __future__ import annotations

import errno as _errno
import posixpath
import threading


class MemoryStore:
    """Simple in-memory file store.

    Stores files as ``bytes`` in a plain dict keyed by normalized POSIX
    path. Directories are implicit. Implements the ``FileStore`` protocol
    so a staged write layer can keep its output entirely in process.
    """

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"MemoryStore({len(self.files)} files)"

    def read(self, path: str) -> bytes:
        path = self._resolve(path)
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(_errno.ENOENT, "No such file", path) from None

    def write(self, path: str, content: bytes) -> None:
        if not isinstance(content, bytes):
            raise TypeError(f"Expected bytes, got {type(content).__name__}")
        path = self._resolve(path)
        with self._lock:
            self.files[path] = content

    def copy(self, src: str, dst: str) -> None:
        self.write(dst, self.read(src))

    def exists(self, path: str) -> bool:
        return self._resolve(path) in self.files

    def list_files(self, path: str = ".") -> list[str]:
        """List every file below ``path`` as paths relative to it."""
        path = self._resolve(path)
        with self._lock:
            keys = list(self.files)
        if path == "":
            return sorted(keys)
        prefix = path + "/"
        return sorted(k[len(prefix):] for k in keys if k.startswith(prefix))

    def remove(self, path: str) -> None:
        path = self._resolve(path)
        with self._lock:
            if path not in self.files:
                raise FileNotFoundError(_errno.ENOENT, "No such file", path)
            del self.files[path]

    def physical_path(self, path: str) -> str:
        return "memory:///" + self._resolve(path)

    def destroy(self) -> None:
        with self._lock:
            self.files.clear()

    def _resolve(self, path: str) -> str:
        """Normalize . and .. components; the result has no leading slash."""
        path = posixpath.normpath("/" + path.replace("\\", "/"))
        return path.lstrip("/")
