"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    DEFAULT_EXTERNAL_DOCUMENT,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_TAINT_SENTINEL,
    GeneratorSettings,
    MarkerSettings,
)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> GeneratorSettings:
    """Load and validate the generator configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.resolve().parent
    catalog_paths = _parse_catalog_paths(parsed.get("catalog"), base_path)
    output_dir = _resolve_path(
        base_path,
        _require_non_empty_string(parsed.get("output_dir", DEFAULT_OUTPUT_DIR), "output_dir"),
    )
    allow_dangerous_types = _require_bool(
        parsed.get("allow_dangerous_types", False), "allow_dangerous_types"
    )
    taint_sentinel = _require_non_empty_string(
        parsed.get("taint_sentinel", DEFAULT_TAINT_SENTINEL), "taint_sentinel"
    )
    external_document_name = _require_non_empty_string(
        parsed.get("external_document", DEFAULT_EXTERNAL_DOCUMENT), "external_document"
    )
    if not external_document_name.endswith(".json"):
        raise ConfigurationError("external_document must end with '.json'.")
    markers = _parse_markers_section(parsed.get("markers"))

    return GeneratorSettings(
        path=path,
        catalog_paths=catalog_paths,
        output_dir=output_dir,
        allow_dangerous_types=allow_dangerous_types,
        taint_sentinel=taint_sentinel,
        external_document_name=external_document_name,
        markers=markers,
    )


def _parse_catalog_paths(value: Any, base_path: Path) -> tuple[Path, ...]:
    if value is None:
        raise ConfigurationError("catalog is required.")
    if isinstance(value, str):
        raw_paths = [value]
    elif isinstance(value, Sequence):
        raw_paths = list(value)
    else:
        raise ConfigurationError("catalog must be a string or list of strings.")
    paths: list[Path] = []
    for item in raw_paths:
        if not isinstance(item, str):
            raise ConfigurationError("catalog entries must be strings.")
        stripped = item.strip()
        if stripped:
            paths.append(_resolve_path(base_path, stripped))
    if not paths:
        raise ConfigurationError("catalog must contain at least one path.")
    return tuple(paths)


def _parse_markers_section(value: Any) -> MarkerSettings:
    if value is None:
        return MarkerSettings()
    section = _require_mapping(value, "markers")
    prefix = section.get("prefix", "")
    if not isinstance(prefix, str):
        raise ConfigurationError("markers.prefix must be a string.")
    schema_marker = _require_non_empty_string(section.get("schema", "schema"), "markers.schema")
    object_marker = _require_non_empty_string(section.get("object", "object"), "markers.object")
    if schema_marker == object_marker:
        raise ConfigurationError("markers.schema and markers.object must differ.")
    return MarkerSettings(
        prefix=prefix.strip(),
        schema_marker=schema_marker,
        object_marker=object_marker,
    )


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value
