"""Type catalog entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from json_schema_generator.diagnostics import Diagnostic


class FieldKind(str, Enum):
    """Structural kind of a declared field type."""

    SCALAR = "scalar"
    ARRAY = "array"
    MAP = "map"
    REFERENCE = "reference"


class MarkerScope(str, Enum):
    """Entity a marker can be attached to."""

    PACKAGE = "package"
    TYPE = "type"


@dataclass(frozen=True, order=True)
class TypeIdent:
    """Identity of a declared type within one run."""

    package: str
    name: str

    def __str__(self) -> str:
        return f"{self.package}.{self.name}" if self.package else self.name


@dataclass(frozen=True)
class FieldType:
    """Structured declared type of a field, with the expression as written."""

    kind: FieldKind
    text: str
    scalar: str | None = None
    element: FieldType | None = None
    ref: TypeIdent | None = None
    pointer: bool = False

    def referenced_type(self) -> TypeIdent | None:
        """Return the type reached through container wrappers, if any."""
        current: FieldType | None = self
        while current is not None:
            if current.kind == FieldKind.REFERENCE:
                return current.ref
            current = current.element
        return None


@dataclass(frozen=True)
class Field:
    """One declared field of a struct type."""

    name: str
    type: FieldType
    alias: str | None
    optional: bool = False
    embedded: bool = False
    doc: str | None = None

    @property
    def serialized(self) -> bool:
        return bool(self.alias) or self.embedded


@dataclass(frozen=True)
class Marker:
    """Presence-only annotation on a package or type."""

    name: str
    scope: MarkerScope


@dataclass(frozen=True)
class TypeInfo:
    """Declaration of one type."""

    ident: TypeIdent
    fields: tuple[Field, ...] = ()
    markers: frozenset[str] = frozenset()
    underlying: FieldType | None = None
    doc: str | None = None

    def has_marker(self, name: str) -> bool:
        return name in self.markers


@dataclass(frozen=True)
class PackageInfo:
    """A namespace of declared types and its markers."""

    path: str
    name: str
    markers: frozenset[str] = frozenset()

    def has_marker(self, name: str) -> bool:
        return name in self.markers


@dataclass(frozen=True)
class TypeGraph:
    """Read-only view over every package and type known to a run."""

    packages: Mapping[str, PackageInfo]
    types: Mapping[TypeIdent, TypeInfo]
    load_diagnostics: tuple[Diagnostic, ...] = field(default=())

    def package(self, path: str) -> PackageInfo | None:
        return self.packages.get(path)

    def lookup(self, ident: TypeIdent) -> TypeInfo | None:
        return self.types.get(ident)

    def package_name(self, path: str) -> str:
        """Return the short name of a package, falling back to its last path segment."""
        info = self.packages.get(path)
        if info is not None:
            return info.name
        return path.rstrip("/").rsplit("/", 1)[-1]
