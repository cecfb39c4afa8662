"""Error taxonomy for the data loader.

Every public loader operation either returns a value or raises one of these.
Components catch lower-level failures and re-raise a single coarser kind,
chaining the original exception as ``__cause__``.
"""

from __future__ import annotations


class DataLoaderError(Exception):
    """Base class for all data loader errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DataLoaderError, FileNotFoundError):
    """Raised when a vault path does not resolve to a file."""

    def __init__(self, path: str):
        super().__init__(f"File not found: {path}")
        self.path = path


class ParseError(DataLoaderError, ValueError):
    """Raised when JSON content cannot be decoded."""


class DataLoadError(DataLoaderError):
    """Umbrella error for anything that fails while fetching remote data."""


class HttpError(DataLoadError):
    """Raised when a remote response status is outside [200, 300)."""

    def __init__(self, status: int, message: str | None = None):
        super().__init__(message or f"HTTP error! status: {status}")
        self.status = status


class TransportError(DataLoaderError, RuntimeError):
    """Raised by HTTP transports when a request cannot be completed."""


class ScriptExecutionError(DataLoaderError):
    """Raised when a loader script fails to compile or run."""

    def __init__(self, message: str, loader_name: str | None = None):
        super().__init__(message)
        self.loader_name = loader_name
