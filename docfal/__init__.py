"""docfal: overlay file abstract layer for multi-stage documentation builds."""

from .base import ContentEntry, FileMetadata, FileStore, PathMapping, Provenance
from .builder import FileAbstractLayerBuilder
from .config import OutputConfig, RealOutputConfig, StagedOutputConfig, connect_output
from .context import current_fal, get_current_fal, use_fal
from .disk import DiskStore
from .errors import FALError, PathNotFoundError, PropertyNotFoundError, WriteUnsupportedError
from .layer import FileAbstractLayer
from .memory import MemoryStore
from .paths import LogicalPath, normalize_path
from .reader import ReadLayer
from .resolver import resolve
from .stream import PendingFile
from .writer import WriteLayer

__all__ = [
    "connect_output",
    "ContentEntry",
    "current_fal",
    "DiskStore",
    "FALError",
    "FileAbstractLayer",
    "FileAbstractLayerBuilder",
    "FileMetadata",
    "FileStore",
    "get_current_fal",
    "LogicalPath",
    "MemoryStore",
    "normalize_path",
    "OutputConfig",
    "PathMapping",
    "PathNotFoundError",
    "PendingFile",
    "PropertyNotFoundError",
    "Provenance",
    "ReadLayer",
    "RealOutputConfig",
    "resolve",
    "StagedOutputConfig",
    "use_fal",
    "WriteLayer",
    "WriteUnsupportedError",
]
