"""Directory-backed vault storage."""

from __future__ import annotations

import asyncio
from pathlib import Path, PurePosixPath

from src.core.types import FileRef
from src.libs.storage.base_storage import BaseFileStorage


class VaultStorage(BaseFileStorage):
    """Treats a local directory as the vault root.

    Paths are vault-relative and ``/``-separated. A path that would escape the
    root (``..`` segments, absolute paths) never resolves.
    """

    def __init__(self, root: str | Path, encoding: str = "utf-8") -> None:
        self.root = Path(root).resolve()
        self.encoding = encoding

    def _to_local(self, path: str) -> Path | None:
        relative = PurePosixPath(path.strip().lstrip("/"))
        if not relative.parts or ".." in relative.parts:
            return None
        candidate = (self.root / relative).resolve()
        if candidate != self.root and self.root not in candidate.parents:
            return None
        return candidate

    def _to_ref(self, local: Path) -> FileRef:
        relative = local.relative_to(self.root).as_posix()
        return FileRef(path=relative, extension=local.suffix.lstrip("."))

    def resolve(self, path: str) -> FileRef | None:
        local = self._to_local(path)
        if local is None or not local.is_file():
            return None
        return self._to_ref(local)

    async def read(self, ref: FileRef) -> str:
        local = self.root / PurePosixPath(ref.path)
        return await asyncio.to_thread(local.read_text, encoding=self.encoding)

    def list(self) -> list[FileRef]:
        if not self.root.is_dir():
            return []
        files = sorted(p for p in self.root.rglob("*") if p.is_file())
        return [self._to_ref(p) for p in files]

    async def create(self, path: str, text: str) -> FileRef:
        local = self._to_local(path)
        if local is None:
            raise ValueError(f"Path is outside the vault: {path}")
        if local.exists():
            raise FileExistsError(f"File already exists: {path}")

        def _write() -> None:
            local.parent.mkdir(parents=True, exist_ok=True)
            local.write_text(text, encoding=self.encoding)

        await asyncio.to_thread(_write)
        return self._to_ref(local)
