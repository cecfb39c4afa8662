"""Settings loading and validation.

This module provides a minimal, type-safe configuration loader for the project.

Design principles:
- Fail-fast: missing required fields raise a readable error that includes field path
- No side effects: this module only parses/validates configuration; no network/IO init
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml


class SettingsError(ValueError):
    """Raised when settings are missing or invalid."""


@dataclass(frozen=True)
class VaultSettings:
    root: str
    data_loader_path: str


@dataclass(frozen=True)
class HttpSettings:
    timeout: float
    allow_external_apis: bool


@dataclass(frozen=True)
class ObservabilitySettings:
    log_level: str


@dataclass(frozen=True)
class Settings:
    vault: VaultSettings
    http: HttpSettings
    observability: ObservabilitySettings


_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _require_section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    if value is None or not isinstance(value, Mapping):
        raise SettingsError(f"Missing required section: {key}")
    return value


def _optional_section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise SettingsError(f"Invalid section type: {key}")
    return value


def _require(raw: Mapping[str, Any], key: str, path: str) -> Any:
    if key not in raw:
        raise SettingsError(f"Missing required field: {path}")
    return raw[key]


def _as_str(value: Any, path: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise SettingsError(f"Invalid value for {path}: expected non-empty string")
    return value


def _as_bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise SettingsError(f"Invalid value for {path}: expected bool")
    return value


def _as_float(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SettingsError(f"Invalid value for {path}: expected float")
    return float(value)


def validate_settings(settings: Settings) -> None:
    """Validate basic invariants."""

    if settings.http.timeout <= 0:
        raise SettingsError("Invalid value for http.timeout: expected positive number")
    if settings.observability.log_level.upper() not in _LOG_LEVELS:
        raise SettingsError(
            f"Invalid value for observability.log_level: {settings.observability.log_level}"
        )
    if Path(settings.vault.data_loader_path).is_absolute():
        raise SettingsError("Invalid value for vault.data_loader_path: expected vault-relative path")


def load_settings(path: str | Path) -> Settings:
    """Load settings from a YAML file."""

    settings_path = Path(path)
    if not settings_path.exists():
        raise SettingsError(f"Settings file not found: {settings_path}")

    try:
        raw_obj = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in settings file: {settings_path}") from e

    if raw_obj is None or not isinstance(raw_obj, Mapping):
        raise SettingsError(f"Invalid settings root: expected mapping in {settings_path}")

    vault_raw = _require_section(raw_obj, "vault")
    http_raw = _optional_section(raw_obj, "http")
    observability_raw = _require_section(raw_obj, "observability")

    vault = VaultSettings(
        root=_as_str(_require(vault_raw, "root", "vault.root"), "vault.root"),
        data_loader_path=_as_str(
            vault_raw.get("data_loader_path", "data-loaders"),
            "vault.data_loader_path",
        ),
    )

    http = HttpSettings(
        timeout=_as_float(http_raw.get("timeout", 30.0), "http.timeout"),
        allow_external_apis=_as_bool(
            http_raw.get("allow_external_apis", True),
            "http.allow_external_apis",
        ),
    )

    observability = ObservabilitySettings(
        log_level=_as_str(
            _require(observability_raw, "log_level", "observability.log_level"),
            "observability.log_level",
        ),
    )

    settings = Settings(vault=vault, http=http, observability=observability)

    validate_settings(settings)
    return settings
