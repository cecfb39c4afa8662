"""Data loader manager: the single entry point used by dashboards and the CLI.

Owns one instance of every loader plus a loader registry, so several managers
(e.g. in tests) never share registered loaders.
"""

from __future__ import annotations

import time
from typing import Any

from src.core.dashboard import DASHBOARD_TEMPLATE, extract_dashboard_blocks
from src.core.errors import NotFoundError
from src.core.settings import Settings
from src.core.types import DataSourceDescriptor, FileRef
from src.libs.loader.file_loader import LocalFileLoader
from src.libs.loader.loader_registry import LoaderRegistry
from src.libs.loader.remote_fetcher import OptionsLike, RemoteFetcher
from src.libs.loader.script_sandbox import ScriptSandbox
from src.libs.loader.templates import template_extension, template_for
from src.libs.storage.base_storage import BaseFileStorage
from src.libs.storage.vault_storage import VaultStorage
from src.libs.transport.base_transport import BaseHttpTransport
from src.libs.transport.httpx_transport import HttpxTransport
from src.observability.logger import get_logger


class DataLoaderManager:
    """Loads dashboard data from vault files, APIs and loader scripts."""

    def __init__(
        self,
        settings: Settings,
        *,
        storage: BaseFileStorage | None = None,
        transport: BaseHttpTransport | None = None,
    ) -> None:
        self.settings = settings
        self.logger = get_logger("manager")

        self.storage = storage or VaultStorage(settings.vault.root)
        self.transport = transport or HttpxTransport(timeout=settings.http.timeout)

        self.file_loader = LocalFileLoader(self.storage)
        self.fetcher = RemoteFetcher(
            self.transport,
            allow_external_apis=settings.http.allow_external_apis,
        )
        self.sandbox = ScriptSandbox(self.fetcher, self.file_loader)
        self.registry = LoaderRegistry(self.sandbox)

    async def load_from_file(self, path: str) -> Any:
        return await self.file_loader.load(path)

    async def load_from_api(self, url: str, options: OptionsLike = None) -> Any:
        return await self.fetcher.fetch(url, options)

    async def execute_loader(self, name: str, source_code: str) -> Any:
        return await self.registry.invoke(name, source_code)

    async def get_data_files(self) -> list[FileRef]:
        return await self.file_loader.list_data_files()

    async def load_source(self, descriptor: DataSourceDescriptor) -> Any:
        """Load the data a descriptor points at.

        For ``loader`` descriptors the ``loader`` field names a registered
        loader; when no loader has that name it is read as a vault path to a
        script file, which is then registered under the descriptor's name.
        """

        self.logger.info("Loading data source '%s' (%s)", descriptor.name, descriptor.kind)

        if descriptor.kind == "file":
            return await self.load_from_file(descriptor.path or "")
        if descriptor.kind == "api":
            return await self.load_from_api(descriptor.url or "")

        loader_ref = descriptor.loader or ""
        if loader_ref in self.registry:
            return await self.registry.rerun(loader_ref)

        script_ref = self.storage.resolve(loader_ref)
        if script_ref is None:
            raise NotFoundError(loader_ref)
        source_code = await self.storage.read(script_ref)
        return await self.execute_loader(descriptor.name, source_code)

    def create_loader_template(self, kind: str) -> str:
        return template_for(kind)

    async def create_loader_file(self, kind: str) -> FileRef:
        """Write a new loader template into the configured loader folder."""

        folder = self.settings.vault.data_loader_path.strip("/")
        path = f"{folder}/data-loader.{template_extension(kind)}"
        ref = await self.storage.create(path, template_for(kind))
        self.logger.info("Created %s data loader: %s", kind, ref.path)
        return ref

    async def create_dashboard(self, now: float | None = None) -> FileRef:
        """Write a new dashboard document named after the current time."""

        timestamp_ms = int((time.time() if now is None else now) * 1000)
        ref = await self.storage.create(f"Dashboard {timestamp_ms}.md", DASHBOARD_TEMPLATE)
        self.logger.info("Created new dashboard: %s", ref.path)
        return ref

    async def read_dashboard_blocks(self, path: str) -> list[str]:
        ref = self.storage.resolve(path)
        if ref is None:
            raise NotFoundError(path)
        return extract_dashboard_blocks(await self.storage.read(ref))
