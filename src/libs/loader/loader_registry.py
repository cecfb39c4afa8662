"""Named loader definitions and their invocation."""

from __future__ import annotations

from typing import Any

from src.core.errors import ScriptExecutionError
from src.core.types import LoaderDefinition
from src.libs.loader.script_sandbox import ScriptSandbox
from src.observability.logger import get_logger

logger = get_logger("loader-registry")


class LoaderRegistry:
    """Keyed store of loader scripts, owned by one manager.

    Registering an existing name overwrites it. Entries live as long as the
    registry; there is no removal.
    """

    def __init__(self, sandbox: ScriptSandbox) -> None:
        self.sandbox = sandbox
        self._loaders: dict[str, LoaderDefinition] = {}

    def register(self, name: str, source_code: str) -> LoaderDefinition:
        definition = LoaderDefinition(name=name, source_code=source_code)
        self._loaders[name] = definition
        return definition

    def get(self, name: str) -> LoaderDefinition | None:
        return self._loaders.get(name)

    def names(self) -> list[str]:
        return list(self._loaders)

    def __contains__(self, name: object) -> bool:
        return name in self._loaders

    def __len__(self) -> int:
        return len(self._loaders)

    async def invoke(self, name: str, source_code: str) -> Any:
        """Register ``source_code`` under ``name`` and run it."""

        definition = self.register(name, source_code)
        return await self._run(definition)

    async def rerun(self, name: str) -> Any:
        """Run a previously registered loader again."""

        definition = self._loaders.get(name)
        if definition is None:
            raise ScriptExecutionError(f"Loader '{name}' is not registered", loader_name=name)
        return await self._run(definition)

    async def _run(self, definition: LoaderDefinition) -> Any:
        logger.info("Running loader '%s'", definition.name)
        try:
            return await self.sandbox.run(definition.source_code)
        except ScriptExecutionError as error:
            raise ScriptExecutionError(
                f"Failed to execute loader '{definition.name}': {error.message}",
                loader_name=definition.name,
            ) from error
