"""Local (vault) file loader."""

from __future__ import annotations

import asyncio
from typing import Any

from src.core.errors import NotFoundError
from src.core.types import FileRef
from src.libs.loader.formats import decode_content, format_for_extension
from src.libs.storage.base_storage import BaseFileStorage
from src.observability.logger import get_logger

logger = get_logger("file-loader")

DATA_FILE_EXTENSIONS = frozenset({"json", "csv", "tsv", "txt"})


class LocalFileLoader:
    """Loads vault files, decoding them according to their extension.

    Read failures from the storage propagate unchanged; only a missing file is
    translated (to ``NotFoundError``).
    """

    def __init__(self, storage: BaseFileStorage) -> None:
        self.storage = storage

    async def load(self, path: str) -> Any:
        ref = self.storage.resolve(path)
        if ref is None:
            raise NotFoundError(path)

        content = await self.storage.read(ref)
        data_format = format_for_extension(ref.extension)
        logger.debug("Loaded %s as %s", ref.path, data_format.value)
        return decode_content(content, data_format)

    @staticmethod
    def is_data_file(ref: FileRef) -> bool:
        return ref.extension.lower() in DATA_FILE_EXTENSIONS

    async def list_data_files(self) -> list[FileRef]:
        refs = await asyncio.to_thread(self.storage.list)
        return [ref for ref in refs if self.is_data_file(ref)]
