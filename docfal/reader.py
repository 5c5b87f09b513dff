"""Read layer: a read-only overlay of mount mappings.

Mappings are ranked deepest prefix first, then by registration order.
A logical path is served by the best ranked mapping that actually holds
the file, so a second root on the same mount point fills gaps left by
the first one without ever overriding it.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping, Sequence

from .base import ContentEntry, PathMapping, Provenance, freeze_properties
from .errors import PathNotFoundError
from .paths import ROOT, LogicalPath, PathLike
from .resolver import candidates, ordered, resolve
from .sources import AnySource, source_for
from .writer import WriteLayer

logger = logging.getLogger(__name__)


class ReadLayer:
    """Read-only view over an ordered sequence of mount mappings.

    The mount table is fixed at construction.

    Example:
        >>> layer = ReadLayer([
        ...     PathMapping("~/api/", "/src/generated"),
        ...     PathMapping("~/", "/src/docs"),
        ... ])
        >>> layer.read_bytes("api/index.md")  # served from /src/generated
    """

    def __init__(self, mappings: Sequence[PathMapping]):
        """Initialize from mappings in registration order.

        Raises:
            ValueError: If no mapping is given.
        """
        if not mappings:
            raise ValueError("A read layer needs at least one mapping")
        self._mappings: tuple[PathMapping, ...] = tuple(mappings)
        self._sources: dict[PathMapping, AnySource] = {m: source_for(m) for m in self._mappings}
        logger.debug("Mounted %s", ", ".join(f"{m.prefix} -> {self._sources[m]!r}" for m in self._mappings))

    @classmethod
    def from_directory(
        cls,
        directory: str | os.PathLike[str],
        properties: Mapping[str, str] | None = None,
    ) -> "ReadLayer":
        """Mount one real directory at ``~/``, optionally with shared properties."""
        return cls([PathMapping(ROOT, os.fspath(directory), properties)])

    @classmethod
    def from_output(cls, layer: WriteLayer) -> "ReadLayer":
        """Expose another FAL's write layer as input.

        Every path written to ``layer`` (staged or not) becomes readable.
        The view is read-only and follows the layer's index as it changes.
        """
        return cls([PathMapping(ROOT, layer)])

    def __repr__(self) -> str:
        return f"ReadLayer({list(self._mappings)!r})"

    @property
    def mappings(self) -> tuple[PathMapping, ...]:
        return self._mappings

    def _holds(self, mapping: PathMapping, suffix: LogicalPath) -> bool:
        return self._sources[mapping].exists(suffix)

    def _resolve(self, path: PathLike) -> tuple[PathMapping, LogicalPath]:
        return resolve(path, self._mappings, exists=self._holds)

    def exists(self, path: PathLike) -> bool:
        try:
            self._resolve(path)
        except PathNotFoundError:
            return False
        return True

    def read_bytes(self, path: PathLike) -> bytes:
        """Read a file through the winning mapping.

        Raises:
            PathNotFoundError: If no mapping holds the file.
        """
        mapping, suffix = self._resolve(path)
        try:
            return self._sources[mapping].read(suffix)
        except FileNotFoundError as e:
            # Removed from disk between resolution and read.
            raise PathNotFoundError(LogicalPath.parse(path)) from e

    def get_properties(self, path: PathLike) -> Mapping[str, str]:
        """Return the owning mapping's properties.

        For a mapping onto another FAL's output, the properties recorded
        with the written file are layered over the mapping's own.

        Raises:
            PathNotFoundError: If no mapping holds the file.
        """
        mapping, suffix = self._resolve(path)
        own = self._sources[mapping].properties(suffix)
        if not own:
            return mapping.properties
        if not mapping.properties:
            return own
        return freeze_properties({**mapping.properties, **own})

    def get_entry(self, path: PathLike) -> ContentEntry:
        """Describe the file behind ``path``.

        Raises:
            PathNotFoundError: If no mapping holds the file.
        """
        mapping, suffix = self._resolve(path)
        source = self._sources[mapping]
        return ContentEntry(
            path=LogicalPath.parse(path),
            location=source.physical_path(suffix) or "",
            properties=self.get_properties(path),
            provenance=Provenance.INPUT,
            metadata=source.metadata(suffix),
        )

    def get_physical_path(self, path: PathLike) -> str | None:
        """Return the physical file serving ``path``, or None if unresolved."""
        try:
            mapping, suffix = self._resolve(path)
        except PathNotFoundError:
            return None
        return self._sources[mapping].physical_path(suffix)

    def get_expected_physical_paths(self, path: PathLike) -> list[str]:
        """Every physical location ``path`` could be served from, best first.

        Locations are listed whether or not a file exists there.
        """
        results = []
        for mapping, suffix in candidates(path, self._mappings):
            location = self._sources[mapping].physical_path(suffix)
            if location is not None:
                results.append(location)
        return results

    def enumerate(self) -> Iterator[LogicalPath]:
        """Lazily yield each reachable logical path once.

        Mappings are walked in ranking order, so the first mapping that
        lists a path is the one resolution would pick for it.
        """
        seen: set[LogicalPath] = set()
        for mapping in ordered(self._mappings):
            for rel in self._sources[mapping].list_files():
                # Joined by segment; reparsing text would drop a literal "~" directory.
                logical = LogicalPath(mapping.prefix.parts + rel.parts)
                if logical in seen:
                    continue
                seen.add(logical)
                yield logical
