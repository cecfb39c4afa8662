"""Base file storage contract."""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.core.types import FileRef


class BaseFileStorage(ABC):
    """Abstract vault: resolves, reads, lists and creates text files."""

    @abstractmethod
    def resolve(self, path: str) -> FileRef | None:
        """Return the file at ``path`` or ``None`` when there is none."""

    @abstractmethod
    async def read(self, ref: FileRef) -> str:
        """Read the full text content of ``ref``."""

    @abstractmethod
    def list(self) -> list[FileRef]:
        """List every file in the storage."""

    @abstractmethod
    async def create(self, path: str, text: str) -> FileRef:
        """Create a new file at ``path`` holding ``text``."""
