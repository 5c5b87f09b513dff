"""Logical path type and normalization.

Logical paths are root-relative and always anchored at the virtual
root ``~/``. Spellings that reduce to the same segments compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

ROOT_MARKER = "~"


@dataclass(frozen=True)
class LogicalPath:
    """Canonical root-relative path.

    Attributes:
        parts: Path segments below ``~/`` (empty for the root itself).
        is_folder: True for folder-like paths such as mount prefixes.
            Not part of equality or hashing.
    """

    parts: tuple[str, ...] = ()
    is_folder: bool = field(default=False, compare=False)

    @classmethod
    def parse(cls, path: "PathLike") -> "LogicalPath":
        """Normalize text (or an existing LogicalPath) into canonical form.

        ``"~/a"``, ``"a"``, ``"./a"``, ``"b/../a"`` and ``"~\\a"`` all
        produce the same path.

        Raises:
            ValueError: If the path climbs above ``~/``.
        """
        if isinstance(path, LogicalPath):
            return path
        if not isinstance(path, str):
            raise TypeError(f"Expected str or LogicalPath, got {type(path).__name__}")

        text = path.replace("\\", "/")
        is_folder = text.endswith("/") or text in ("", ".", ROOT_MARKER)

        segments = text.split("/")
        if segments and segments[0] == ROOT_MARKER:
            segments = segments[1:]

        parts: list[str] = []
        for segment in segments:
            if segment in ("", "."):
                continue
            if segment == "..":
                if not parts:
                    raise ValueError(f"Path escapes the logical root: '{path}'")
                parts.pop()
                continue
            parts.append(segment)

        return cls(tuple(parts), is_folder=is_folder or not parts)

    @classmethod
    def folder(cls, path: "PathLike") -> "LogicalPath":
        """Parse ``path`` as a folder (mount prefixes are always folders)."""
        return cls(cls.parse(path).parts, is_folder=True)

    @property
    def name(self) -> str:
        return self.parts[-1] if self.parts else ""

    @property
    def parent(self) -> "LogicalPath":
        return LogicalPath(self.parts[:-1], is_folder=True)

    def is_under(self, prefix: "LogicalPath") -> bool:
        """Check segment-wise whether ``prefix`` is an ancestor of (or equal to) this path."""
        n = len(prefix.parts)
        return self.parts[:n] == prefix.parts

    def relative_to(self, prefix: "LogicalPath") -> "LogicalPath":
        """Return the suffix of this path below ``prefix``.

        Raises:
            ValueError: If ``prefix`` is not an ancestor.
        """
        if not self.is_under(prefix):
            raise ValueError(f"{self} is not under {prefix}")
        return LogicalPath(self.parts[len(prefix.parts) :], is_folder=self.is_folder)

    def joinpath(self, other: "PathLike") -> "LogicalPath":
        child = LogicalPath.parse(other)
        return LogicalPath(self.parts + child.parts, is_folder=child.is_folder)

    def __truediv__(self, other: "PathLike") -> "LogicalPath":
        return self.joinpath(other)

    def as_posix(self) -> str:
        """Relative POSIX form without the root marker (``a/b.txt``)."""
        return "/".join(self.parts)

    def __str__(self) -> str:
        text = f"{ROOT_MARKER}/" + self.as_posix()
        if self.is_folder and self.parts:
            text += "/"
        return text

    def __repr__(self) -> str:
        return f"LogicalPath('{self}')"

    def __lt__(self, other: "LogicalPath") -> bool:
        if not isinstance(other, LogicalPath):
            return NotImplemented
        return self.parts < other.parts


PathLike = Union[str, LogicalPath]

ROOT = LogicalPath((), is_folder=True)


def normalize_path(path: PathLike) -> str:
    """Return the canonical text form of ``path`` (e.g. ``~/a/b.txt``)."""
    return str(LogicalPath.parse(path))
