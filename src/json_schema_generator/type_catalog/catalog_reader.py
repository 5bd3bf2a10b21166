"""Type catalog loading service."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from json_schema_generator.diagnostics import Diagnostic, DiagnosticKind

from .catalog_models import (
    Field,
    Marker,
    MarkerScope,
    PackageInfo,
    TypeGraph,
    TypeIdent,
    TypeInfo,
)
from .type_expressions import TypeExpressionError, parse_type_expression

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Raised when a type catalog is structurally invalid."""


def load_type_graph(catalog_paths: Sequence[Path | str], markers: Sequence[Marker]) -> TypeGraph:
    """Read catalog files and build one merged type graph."""
    documents: list[tuple[str, Any]] = []
    for raw_path in catalog_paths:
        path = Path(raw_path)
        if not path.exists():
            raise CatalogError(f"Type catalog not found: {path}")
        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise CatalogError(f"Failed to parse type catalog {path}: {exc}") from exc
        logger.debug("loaded type catalog %s", path)
        documents.append((str(path), parsed))
    return build_type_graph(documents, markers)


def build_type_graph(documents: Sequence[tuple[str, Any]], markers: Sequence[Marker]) -> TypeGraph:
    """Build a type graph from already-parsed catalog documents.

    Unrecognized markers do not fail the build; they are reported as
    marker-load diagnostics and leave the owning entity unmarked.
    """
    package_sections: list[tuple[str, Mapping[str, Any]]] = []
    for source, document in documents:
        if document is None:
            continue
        if not isinstance(document, Mapping):
            raise CatalogError(f"{source}: catalog root must be a mapping.")
        packages = document.get("packages") or []
        if not isinstance(packages, Sequence) or isinstance(packages, str):
            raise CatalogError(f"{source}: 'packages' must be a list.")
        for section in packages:
            if not isinstance(section, Mapping):
                raise CatalogError(f"{source}: package entries must be mappings.")
            package_sections.append((source, section))

    builder = _GraphBuilder(markers)
    for source, section in package_sections:
        builder.add_package(source, section)
    for source, section in package_sections:
        builder.add_types(source, section)
    return builder.build()


class _GraphBuilder:
    def __init__(self, markers: Sequence[Marker]) -> None:
        self._vocabulary = {
            scope: frozenset(marker.name for marker in markers if marker.scope == scope)
            for scope in MarkerScope
        }
        self._packages: dict[str, PackageInfo] = {}
        self._imports: dict[str, Mapping[str, str]] = {}
        self._types: dict[TypeIdent, TypeInfo] = {}
        self._diagnostics: list[Diagnostic] = []

    def add_package(self, source: str, section: Mapping[str, Any]) -> None:
        path = _require_string(section.get("path"), f"{source}: package path")
        if path in self._packages:
            raise CatalogError(f"{source}: package {path} is defined more than once.")
        name = section.get("name")
        if name is None:
            name = path.rstrip("/").rsplit("/", 1)[-1]
        name = _require_string(name, f"{source}: package name of {path}")
        imports = section.get("imports") or {}
        if not isinstance(imports, Mapping) or not all(
            isinstance(key, str) and isinstance(value, str) for key, value in imports.items()
        ):
            raise CatalogError(f"{source}: imports of package {path} must map strings to strings.")
        self._imports[path] = dict(imports)
        self._packages[path] = PackageInfo(
            path=path,
            name=name,
            markers=self._markers(section.get("markers"), MarkerScope.PACKAGE, path),
        )

    def add_types(self, source: str, section: Mapping[str, Any]) -> None:
        package = _require_string(section.get("path"), f"{source}: package path")
        types = section.get("types") or []
        if not isinstance(types, Sequence) or isinstance(types, str):
            raise CatalogError(f"{source}: types of package {package} must be a list.")
        for entry in types:
            if not isinstance(entry, Mapping):
                raise CatalogError(f"{source}: type entries of package {package} must be mappings.")
            info = self._type_info(source, package, entry)
            if info.ident in self._types:
                raise CatalogError(f"{source}: type {info.ident} is defined more than once.")
            self._types[info.ident] = info

    def build(self) -> TypeGraph:
        return TypeGraph(
            packages=dict(self._packages),
            types=dict(self._types),
            load_diagnostics=tuple(self._diagnostics),
        )

    def _type_info(self, source: str, package: str, entry: Mapping[str, Any]) -> TypeInfo:
        name = _require_string(entry.get("name"), f"{source}: type name in package {package}")
        ident = TypeIdent(package=package, name=name)
        raw_fields = entry.get("fields") or []
        if not isinstance(raw_fields, Sequence) or isinstance(raw_fields, str):
            raise CatalogError(f"{source}: fields of {ident} must be a list.")
        underlying = None
        if entry.get("type") is not None:
            if raw_fields:
                raise CatalogError(f"{source}: {ident} cannot declare both 'type' and 'fields'.")
            underlying = self._parse_type(source, ident, entry["type"])
        fields = tuple(self._field(source, ident, raw) for raw in raw_fields)
        return TypeInfo(
            ident=ident,
            fields=fields,
            markers=self._markers(entry.get("markers"), MarkerScope.TYPE, str(ident)),
            underlying=underlying,
            doc=_optional_string(entry.get("doc")),
        )

    def _field(self, source: str, ident: TypeIdent, raw: Any) -> Field:
        if not isinstance(raw, Mapping):
            raise CatalogError(f"{source}: field entries of {ident} must be mappings.")
        name = _require_string(raw.get("name"), f"{source}: field name in {ident}")
        alias, omit_empty, inline = _parse_json_tag(raw.get("json"))
        optional = _require_bool(
            raw.get("optional", False), f"{source}: optional flag of {ident}.{name}"
        )
        return Field(
            name=name,
            type=self._parse_type(source, ident, raw.get("type")),
            alias=alias,
            optional=optional or omit_empty,
            embedded=inline,
            doc=_optional_string(raw.get("doc")),
        )

    def _parse_type(self, source: str, ident: TypeIdent, expression: Any):
        try:
            return parse_type_expression(
                expression,
                package=ident.package,
                resolve_qualifier=lambda qualifier: self._resolve_qualifier(
                    ident.package, qualifier
                ),
            )
        except TypeExpressionError as exc:
            raise CatalogError(f"{source}: {ident}: {exc}") from exc

    def _resolve_qualifier(self, package: str, qualifier: str) -> str:
        imported = self._imports.get(package, {}).get(qualifier)
        if imported:
            return imported
        candidates = [info.path for info in self._packages.values() if info.name == qualifier]
        if len(candidates) == 1:
            return candidates[0]
        return qualifier

    def _markers(self, value: Any, scope: MarkerScope, subject: str) -> frozenset[str]:
        if value is None:
            return frozenset()
        names = [value] if isinstance(value, str) else value
        if not isinstance(names, Sequence) or not all(isinstance(name, str) for name in names):
            self._marker_failure(subject, f"markers must be a list of names, got {value!r}")
            return frozenset()
        unknown = sorted(set(names) - self._vocabulary[scope])
        if unknown:
            self._marker_failure(
                subject, f"unrecognized {scope.value} marker(s): {', '.join(unknown)}"
            )
            return frozenset()
        return frozenset(names)

    def _marker_failure(self, subject: str, message: str) -> None:
        self._diagnostics.append(
            Diagnostic(kind=DiagnosticKind.MARKER_LOAD_FAILURE, subject=subject, message=message)
        )


def _parse_json_tag(value: Any) -> tuple[str | None, bool, bool]:
    if value is None:
        return None, False, False
    if not isinstance(value, str):
        raise CatalogError(f"json tag must be a string, got {value!r}")
    alias, *options = value.split(",")
    alias = alias.strip()
    options = [option.strip() for option in options]
    if alias == "-":
        return None, False, False
    return alias or None, "omitempty" in options, "inline" in options


def _require_string(value: Any, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise CatalogError(f"{label} must be a non-empty string.")
    return value.strip()


def _require_bool(value: Any, label: str) -> bool:
    if not isinstance(value, bool):
        raise CatalogError(f"{label} must be a boolean.")
    return value


def _optional_string(value: Any) -> str | None:
    if value is None:
        return None
    return str(value).strip() or None
