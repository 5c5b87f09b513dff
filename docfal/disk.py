"""Real filesystem store restricted to a root directory.

Backs mount mappings onto physical directories, direct write layers, and
staged write layers that keep their bytes in a private temporary folder.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class DiskStore:
    """File store rooted at a real directory.

    All paths are validated to stay within the configured root:
    - Rejects paths outside root directory
    - Normalizes path variations (../, ./, backslashes)
    - Writes land atomically (temporary sibling, then os.replace)
    """

    def __init__(self, root: str | os.PathLike[str], create: bool = False):
        """Initialize a disk store.

        Args:
            root: Path to the root directory.
            create: Create the root if it does not exist yet.

        Raises:
            ValueError: If root exists but is not a directory.
        """
        root_path = Path(root).expanduser().resolve()
        if create:
            root_path.mkdir(parents=True, exist_ok=True)
        if root_path.exists() and not root_path.is_dir():
            raise ValueError(f"Root must be a directory: {root}")
        self.root = root_path

    def __repr__(self) -> str:
        return f"DiskStore({str(self.root)!r})"

    def _validate_path(self, path: str) -> Path:
        """Resolve ``path`` against the root and ensure it stays inside.

        Raises:
            PermissionError: If the path escapes the root directory.
        """
        rel = path.replace("\\", "/").lstrip("/")
        resolved = (self.root / rel).resolve()
        try:
            resolved.relative_to(self.root)
        except ValueError:
            raise PermissionError(f"Path outside root: {resolved} (root: {self.root})")
        return resolved

    def exists(self, path: str) -> bool:
        """Check if a file exists."""
        return self._validate_path(path).is_file()

    def read(self, path: str) -> bytes:
        """Read entire file as bytes."""
        resolved = self._validate_path(path)
        if not resolved.is_file():
            raise FileNotFoundError(f"No such file: {resolved}")
        return resolved.read_bytes()

    def write(self, path: str, content: bytes) -> None:
        """Write bytes to a file, creating parent directories if needed.

        The content is written to a temporary file next to the target and
        moved into place, so readers see either the old or the new bytes.
        """
        if not isinstance(content, bytes):
            raise TypeError(f"Expected bytes, got {type(content).__name__}")
        resolved = self._validate_path(path)
        resolved.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{resolved.name}.", suffix=".tmp", dir=resolved.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
            os.replace(tmp_name, resolved)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug("Wrote %d bytes to %s", len(content), resolved)

    def copy(self, src: str, dst: str) -> None:
        """Copy a file within the store."""
        src_resolved = self._validate_path(src)
        if not src_resolved.is_file():
            raise FileNotFoundError(f"No such file: {src_resolved}")
        self.write(dst, src_resolved.read_bytes())

    def list_files(self, path: str = ".") -> list[str]:
        """List every file below ``path`` recursively.

        Returns:
            Sorted POSIX paths relative to ``path``; empty if it is not a directory.
        """
        resolved = self._validate_path(path)
        if not resolved.is_dir():
            return []
        return sorted(p.relative_to(resolved).as_posix() for p in resolved.rglob("*") if p.is_file())

    def remove(self, path: str) -> None:
        """Remove a file."""
        resolved = self._validate_path(path)
        if resolved.is_dir():
            raise IsADirectoryError(f"Is a directory: {path}")
        resolved.unlink()

    def physical_path(self, path: str) -> str:
        """Return the real absolute path backing ``path``."""
        return str(self._validate_path(path))

    def destroy(self) -> None:
        """Delete the root directory and everything below it."""
        shutil.rmtree(self.root, ignore_errors=True)
        logger.debug("Removed store root %s", self.root)
