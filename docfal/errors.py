"""Exceptions raised by the file abstract layer.

Each exception also derives from the builtin a filesystem caller would
already handle, so ``except FileNotFoundError`` keeps working.
"""


class FALError(Exception):
    """Base class for file abstract layer errors."""


class PathNotFoundError(FALError, FileNotFoundError):
    """A logical path does not resolve, or its backing file is absent."""

    def __init__(self, path: object, message: str | None = None):
        self.path = path
        super().__init__(message or f"No such logical file: '{path}'")

    def __str__(self) -> str:
        return self.args[0]


class PropertyNotFoundError(FALError, KeyError):
    """A property key is absent for an otherwise resolved path."""

    def __init__(self, path: object, key: str):
        self.path = path
        self.key = key
        super().__init__(f"Property '{key}' not found for '{path}'")

    def __str__(self) -> str:
        return self.args[0]


class WriteUnsupportedError(FALError, PermissionError):
    """A write or copy was requested from a layer without write capability."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation}() requires a write layer; this layer is read-only")

    def __str__(self) -> str:
        return self.args[0]
