"""Core data types shared by the loaders, the sandbox and the manager.

Rules:
- records are plain dicts so results stay JSON-serializable
- descriptors are validated on construction; loaders never re-check them
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

Scalar = Union[int, float, str]
Record = dict[str, Scalar]
TabularResult = list[Record]

SOURCE_KINDS = ("file", "api", "loader")

_REQUIRED_FIELD = {"file": "path", "api": "url", "loader": "loader"}


@dataclass(frozen=True)
class FileRef:
    """A file inside the vault, addressed by its vault-relative path."""

    path: str
    extension: str

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "extension": self.extension, "name": self.name}


@dataclass(frozen=True)
class HttpResponse:
    """Transport-level response. Header keys are lower-cased."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")


@dataclass(frozen=True)
class LoaderDefinition:
    name: str
    source_code: str


@dataclass(frozen=True)
class DataSourceDescriptor:
    """Declarative pointer used to pick a loading path."""

    name: str
    kind: str
    path: str | None = None
    url: str | None = None
    loader: str | None = None

    def __post_init__(self) -> None:
        if self.kind not in SOURCE_KINDS:
            raise ValueError(
                f"Invalid data source kind '{self.kind}'. "
                f"Expected one of: {', '.join(SOURCE_KINDS)}"
            )
        required = _REQUIRED_FIELD[self.kind]
        value = getattr(self, required)
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"Data source '{self.name}' of kind '{self.kind}' requires '{required}'")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "kind": self.kind}
        for key in ("path", "url", "loader"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DataSourceDescriptor":
        # "type" is accepted as an alias for "kind".
        kind = data.get("kind", data.get("type", ""))
        return cls(
            name=str(data.get("name", "")),
            kind=str(kind),
            path=data.get("path"),
            url=data.get("url"),
            loader=data.get("loader"),
        )
