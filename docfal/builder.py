"""Builder that assembles read and write layers into a FileAbstractLayer."""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Mapping
from typing import Literal

from .base import PathMapping
from .config import OutputConfig, RealOutputConfig, StagedOutputConfig
from .layer import FileAbstractLayer
from .paths import ROOT
from .reader import ReadLayer
from .writer import WriteLayer

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class FileAbstractLayerBuilder:
    """Immutable builder: every method returns a new builder.

    Each ``read_from_*`` call replaces the input configured so far, and
    each ``write_to_*`` call replaces the output. ``create()`` can be
    called repeatedly; every call gets a fresh write layer.

    Example:
        >>> stage1 = (FileAbstractLayerBuilder()
        ...           .read_from_real_file_system("/src/docs")
        ...           .write_to_link("/out/site")
        ...           .create())
        >>> stage2 = FileAbstractLayerBuilder().read_from_output(stage1).create()
    """

    mappings: tuple[PathMapping, ...] = ()
    output: OutputConfig | None = None

    def read_from_link(self, *mappings: PathMapping) -> "FileAbstractLayerBuilder":
        """Read through explicit mount mappings, in registration order."""
        if not mappings:
            raise ValueError("read_from_link() needs at least one mapping")
        return dataclasses.replace(self, mappings=tuple(mappings))

    def read_from_real_file_system(
        self,
        directory: str | os.PathLike[str],
        properties: Mapping[str, str] | None = None,
    ) -> "FileAbstractLayerBuilder":
        """Read one real directory mounted at ``~/``."""
        mapping = PathMapping(ROOT, os.fspath(directory), properties)
        return dataclasses.replace(self, mappings=(mapping,))

    def read_from_output(self, fal: FileAbstractLayer) -> "FileAbstractLayerBuilder":
        """Read the output of an earlier layer, including staged content.

        Raises:
            ValueError: If ``fal`` has no write layer.
        """
        if fal.write_layer is None:
            raise ValueError("read_from_output() needs a layer that can write")
        return dataclasses.replace(self, mappings=(PathMapping(ROOT, fal.write_layer),))

    def write_to_link(
        self,
        directory: str | os.PathLike[str],
        staging: Literal["disk", "memory"] = "disk",
    ) -> "FileAbstractLayerBuilder":
        """Stage output privately; ``directory`` is only the publish target."""
        return self.write_to(StagedOutputConfig(publish_dir=os.fspath(directory), staging=staging))

    def write_to_real_file_system(self, directory: str | os.PathLike[str]) -> "FileAbstractLayerBuilder":
        """Write output straight into ``directory``."""
        return self.write_to(RealOutputConfig(output_dir=os.fspath(directory)))

    def write_to(self, config: OutputConfig) -> "FileAbstractLayerBuilder":
        """Configure output from a config made by ``connect_output``."""
        return dataclasses.replace(self, output=config)

    def create(self) -> FileAbstractLayer:
        """Build the layer.

        Raises:
            ValueError: If neither input nor output was configured.
        """
        if not self.mappings and self.output is None:
            raise ValueError("Configure input, output, or both before create()")

        reader = ReadLayer(self.mappings) if self.mappings else None
        writer = None
        if isinstance(self.output, StagedOutputConfig):
            writer = WriteLayer(self.output.publish_dir, staged=True, staging=self.output.staging)
        elif isinstance(self.output, RealOutputConfig):
            writer = WriteLayer(self.output.output_dir, staged=False)

        logger.debug("Created file abstract layer with %d mappings, output=%r",
                     len(self.mappings), self.output)
        return FileAbstractLayer(reader, writer)
