"""Type catalog exports."""

from .catalog_models import (
    Field,
    FieldKind,
    FieldType,
    Marker,
    MarkerScope,
    PackageInfo,
    TypeGraph,
    TypeIdent,
    TypeInfo,
)
from .catalog_reader import CatalogError, build_type_graph, load_type_graph
from .type_expressions import TypeExpressionError, parse_type_expression

__all__ = [
    "CatalogError",
    "Field",
    "FieldKind",
    "FieldType",
    "Marker",
    "MarkerScope",
    "PackageInfo",
    "TypeExpressionError",
    "TypeGraph",
    "TypeIdent",
    "TypeInfo",
    "build_type_graph",
    "load_type_graph",
    "parse_type_expression",
]
