"""Restricted execution of user-authored loader scripts.

A loader script is Python source text treated as the body of an implicit
``async def`` with two parameters, ``fetch`` and ``FileAttachment``. A bare
``return <expr>`` in the script becomes the loader's result; a script that
never returns yields ``None``.

Example script::

    response = await fetch("https://api.example.com/data")
    rows = await response.json()
    return [row for row in rows if row["value"] > 10]

Security model: this is capability hiding, not confinement. The script's
globals hold only a curated builtins table and the two capabilities are the
only objects handed to it. Vault handles, the HTTP transport, ``open`` and
``__import__`` are not reachable by name or by plain attribute access on the
capabilities: both are closures, and ``FileAttachment`` instances hold only a
path and a load function. ``print`` writes to the sandbox logger, not stdout.
The script still runs in the host process with the host's privileges, and
Python object introspection (``__closure__``, ``().__class__.__mro__`` and
friends) can reach interpreter internals. Do not run scripts from untrusted
authors; use a separate process if you need real isolation.
"""

from __future__ import annotations

import ast
import builtins
import inspect
from dataclasses import dataclass
from types import CodeType
from typing import Any, Awaitable, Callable

from src.core.errors import ScriptExecutionError
from src.core.types import HttpResponse
from src.libs.loader.file_loader import LocalFileLoader
from src.libs.loader.parsers import parse_json
from src.libs.loader.remote_fetcher import OptionsLike, RemoteFetcher
from src.observability.logger import get_logger

logger = get_logger("sandbox")

ENTRYPOINT_NAME = "__dashboard_loader__"
CAPABILITY_NAMES = ("fetch", "FileAttachment")
SCRIPT_FILENAME = "<loader>"

_SAFE_BUILTIN_NAMES = (
    "abs", "all", "any", "bool", "dict", "divmod", "enumerate", "filter",
    "float", "frozenset", "int", "isinstance", "len", "list", "map", "max",
    "min", "range", "repr", "reversed", "round", "set", "slice", "sorted", "str",
    "sum", "tuple", "zip",
    "__build_class__",
    "ArithmeticError", "AttributeError", "Exception", "IndexError", "KeyError",
    "LookupError", "NameError", "RuntimeError", "StopAsyncIteration",
    "StopIteration", "TypeError", "ValueError", "ZeroDivisionError",
)

# Module name seen by classes a script defines (their ``__module__``).
SCRIPT_MODULE_NAME = "dashboard_loader"


def _script_print(*values: Any, sep: str | None = " ", **_: Any) -> None:
    # stdout is reserved for CLI results.
    logger.info("loader output: %s", (" " if sep is None else sep).join(str(v) for v in values))


SAFE_BUILTINS: dict[str, Any] = {name: getattr(builtins, name) for name in _SAFE_BUILTIN_NAMES}
SAFE_BUILTINS["print"] = _script_print


class FetchResponse:
    """Fetch-style view over an ``HttpResponse``."""

    def __init__(self, response: HttpResponse) -> None:
        self._response = response
        self.ok = response.ok
        self.status = response.status
        self.headers = dict(response.headers)

    async def text(self) -> str:
        return self._response.text

    async def json(self) -> Any:
        return parse_json(self._response.text)

    def __repr__(self) -> str:
        return f"FetchResponse(status={self.status})"


class FileAttachment:
    """Accessor for a vault file from inside a script.

    ``json()``, ``csv()`` and ``text()`` all return what the file loader
    produces for the file's extension; the accessor name does not force a
    format. The attachment holds only the path and a load coroutine function,
    never the loader or the vault storage itself.
    """

    __slots__ = ("path", "_load")

    def __init__(self, path: str, load: Callable[[str], Awaitable[Any]]) -> None:
        self.path = path
        self._load = load

    async def json(self) -> Any:
        return await self._load(self.path)

    async def csv(self) -> Any:
        return await self._load(self.path)

    async def text(self) -> Any:
        return await self._load(self.path)

    def __repr__(self) -> str:
        return f"FileAttachment({self.path!r})"


@dataclass(frozen=True)
class Capabilities:
    """The complete set of values handed to one script run."""

    fetch: Callable[..., Awaitable[FetchResponse]]
    file_attachment: Callable[[str], FileAttachment]

    def as_arguments(self) -> tuple[Any, ...]:
        # Order matches CAPABILITY_NAMES.
        return (self.fetch, self.file_attachment)


def compile_script(source_code: str, filename: str = SCRIPT_FILENAME) -> CodeType:
    """Compile ``source_code`` as the body of the loader coroutine function.

    The parser accepts top-level ``return`` and ``await``; the statements are
    moved into an ``async def`` before bytecode compilation, keeping the
    script's own line numbers.
    """

    script = compile(
        source_code,
        filename,
        "exec",
        flags=ast.PyCF_ONLY_AST | ast.PyCF_ALLOW_TOP_LEVEL_AWAIT,
        dont_inherit=True,
    )
    wrapper = ast.parse(f"async def {ENTRYPOINT_NAME}({', '.join(CAPABILITY_NAMES)}):\n    pass\n")
    function_def = wrapper.body[0]
    if script.body:
        function_def.body = script.body
        function_def.end_lineno = script.body[-1].end_lineno
        function_def.end_col_offset = script.body[-1].end_col_offset
    ast.fix_missing_locations(wrapper)
    return compile(wrapper, filename, "exec", dont_inherit=True)


class ScriptSandbox:
    """Runs loader scripts with exactly two capabilities in scope."""

    def __init__(self, fetcher: RemoteFetcher, file_loader: LocalFileLoader) -> None:
        self._fetcher = fetcher
        self._file_loader = file_loader

    def build_capabilities(self) -> Capabilities:
        """Create a fresh capability object for a single run."""

        fetcher = self._fetcher
        file_loader = self._file_loader

        async def fetch(url: str, options: OptionsLike = None) -> FetchResponse:
            return FetchResponse(await fetcher.request(url, options))

        async def load(path: str) -> Any:
            return await file_loader.load(path)

        def attach(path: str) -> FileAttachment:
            return FileAttachment(path, load)

        return Capabilities(fetch=fetch, file_attachment=attach)

    async def run(self, source_code: str) -> Any:
        """Execute ``source_code`` and return the value it returns."""

        try:
            code = compile_script(source_code)
            namespace: dict[str, Any] = {
                "__builtins__": dict(SAFE_BUILTINS),
                "__name__": SCRIPT_MODULE_NAME,
            }
            exec(code, namespace)
            entrypoint = namespace[ENTRYPOINT_NAME]

            pending = entrypoint(*self.build_capabilities().as_arguments())
            if not inspect.iscoroutine(pending):
                # A body containing ``yield`` compiles to an async generator.
                raise TypeError("loader scripts must return a value, not yield")
            return await pending
        except Exception as error:
            logger.warning("Loader script failed: %s: %s", type(error).__name__, error)
            raise ScriptExecutionError(
                f"Loader script execution failed: {type(error).__name__}: {error}"
            ) from error
