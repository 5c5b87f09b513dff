"""Mount resolution.

A logical path is matched segment-wise against an ordered sequence of
mount mappings. Candidates are ranked by prefix depth (deepest first),
then by registration order (earliest first). That ranking is the only
shadowing policy: it covers two roots on the same mount point as well as
nested mount points.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from .base import PathMapping
from .errors import PathNotFoundError
from .paths import LogicalPath, PathLike

logger = logging.getLogger(__name__)

ExistsPredicate = Callable[[PathMapping, LogicalPath], bool]


def candidates(path: PathLike, mappings: Sequence[PathMapping]) -> list[tuple[PathMapping, LogicalPath]]:
    """Return every mapping whose prefix is an ancestor of ``path``, best first.

    Each item pairs the mapping with the suffix of ``path`` below its prefix.
    """
    logical = LogicalPath.parse(path)
    matches = [
        (index, mapping)
        for index, mapping in enumerate(mappings)
        if logical.is_under(mapping.prefix)
    ]
    matches.sort(key=lambda item: (-len(item[1].prefix.parts), item[0]))
    return [(mapping, logical.relative_to(mapping.prefix)) for _, mapping in matches]


def resolve(
    path: PathLike,
    mappings: Sequence[PathMapping],
    exists: ExistsPredicate | None = None,
) -> tuple[PathMapping, LogicalPath]:
    """Pick the winning mapping for ``path``.

    Args:
        path: Logical path to resolve.
        mappings: Mappings in registration order.
        exists: Optional predicate; when given, the winner is the best
            ranked candidate whose backing file exists.

    Returns:
        The winning mapping and the path suffix relative to its prefix.

    Raises:
        PathNotFoundError: If no candidate matches (or none exists).
    """
    for mapping, suffix in candidates(path, mappings):
        if exists is None or exists(mapping, suffix):
            logger.debug("Resolved %s via %r", path, mapping)
            return mapping, suffix
    raise PathNotFoundError(LogicalPath.parse(path))


def ordered(mappings: Iterable[PathMapping]) -> list[PathMapping]:
    """Return mappings in ranking order (deepest prefix first, then registration)."""
    indexed = list(enumerate(mappings))
    indexed.sort(key=lambda item: (-len(item[1].prefix.parts), item[0]))
    return [mapping for _, mapping in indexed]
