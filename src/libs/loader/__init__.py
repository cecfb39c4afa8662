"""Data loader package.

Exports the format parsers, the three loading paths (vault file, remote API,
sandboxed script), the loader registry and the template generator.
"""

from src.libs.loader.file_loader import DATA_FILE_EXTENSIONS, LocalFileLoader
from src.libs.loader.formats import (
    DataFormat,
    decode_content,
    format_for_content_type,
    format_for_extension,
)
from src.libs.loader.loader_registry import LoaderRegistry
from src.libs.loader.parsers import (
    coerce_cell,
    is_numeric,
    parse_delimited,
    parse_json,
    parse_markdown_table,
)
from src.libs.loader.remote_fetcher import RemoteFetcher, RequestOptions
from src.libs.loader.script_sandbox import (
    Capabilities,
    FetchResponse,
    FileAttachment,
    ScriptSandbox,
    compile_script,
)
from src.libs.loader.templates import loader_kinds, template_extension, template_for

__all__ = [
    "DATA_FILE_EXTENSIONS",
    "Capabilities",
    "DataFormat",
    "FetchResponse",
    "FileAttachment",
    "LoaderRegistry",
    "LocalFileLoader",
    "RemoteFetcher",
    "RequestOptions",
    "ScriptSandbox",
    "coerce_cell",
    "compile_script",
    "decode_content",
    "format_for_content_type",
    "format_for_extension",
    "is_numeric",
    "loader_kinds",
    "parse_delimited",
    "parse_json",
    "parse_markdown_table",
    "template_extension",
    "template_for",
]
