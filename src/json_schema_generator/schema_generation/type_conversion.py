"""Type declaration to JSON-Schema fragment conversion."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from json_schema_generator.diagnostics import DiagnosticKind
from json_schema_generator.type_catalog.catalog_models import (
    FieldKind,
    FieldType,
    TypeIdent,
    TypeInfo,
)

if TYPE_CHECKING:
    from .generation_context import GenerationContext

_SCALAR_SCHEMAS: dict[str, dict[str, Any]] = {
    "string": {"type": "string"},
    "bool": {"type": "boolean"},
    "int": {"type": "integer"},
    "uint": {"type": "integer"},
    "byte": {"type": "integer"},
    "int8": {"type": "integer", "format": "int32"},
    "int16": {"type": "integer", "format": "int32"},
    "int32": {"type": "integer", "format": "int32"},
    "rune": {"type": "integer", "format": "int32"},
    "uint8": {"type": "integer", "format": "int32"},
    "uint16": {"type": "integer", "format": "int32"},
    "uint32": {"type": "integer", "format": "int32"},
    "int64": {"type": "integer", "format": "int64"},
    "uint64": {"type": "integer", "format": "int64"},
    "any": {},
}
_DANGEROUS_SCALARS = frozenset({"float32", "float64"})
_BYTE_SCALARS = frozenset({"byte", "uint8"})


def convert_type_info(context: GenerationContext, info: TypeInfo) -> dict[str, Any]:
    """Build the JSON-Schema fragment for one declared type.

    Referenced types are requested from ``context`` before their ``$ref`` is
    emitted. Fields that cannot be represented (unknown types, rejected
    floats) are left out of the fragment and reported as diagnostics.
    """
    if info.underlying is not None:
        named = field_type_schema(context, info.ident, info.underlying) or {}
        if info.doc and "$ref" not in named:
            named = {"description": info.doc, **named}
        return named

    schema: dict[str, Any] = {}
    if info.doc:
        schema["description"] = info.doc
    schema["type"] = "object"

    properties: dict[str, Any] = {}
    required: list[str] = []
    all_of: list[dict[str, Any]] = []
    for field in info.fields:
        if not field.serialized:
            continue
        property_schema = field_type_schema(context, info.ident, field.type)
        if property_schema is None:
            continue
        if field.embedded:
            all_of.append(property_schema)
            continue
        if field.doc and "$ref" not in property_schema:
            property_schema = {"description": field.doc, **property_schema}
        properties[field.alias] = property_schema
        if not field.optional:
            required.append(field.alias)

    if properties:
        schema["properties"] = properties
    if required:
        schema["required"] = required
    if all_of:
        schema["allOf"] = all_of
    return schema


def field_type_schema(
    context: GenerationContext, owner: TypeIdent, field_type: FieldType
) -> dict[str, Any] | None:
    """Return the schema of a declared type, or ``None`` when it cannot be represented."""
    if field_type.kind == FieldKind.SCALAR:
        return _scalar_schema(context, owner, field_type.scalar or "any")

    if field_type.kind == FieldKind.ARRAY:
        element = field_type.element
        if (
            element is not None
            and element.kind == FieldKind.SCALAR
            and element.scalar in _BYTE_SCALARS
        ):
            return {"type": "string", "format": "byte"}
        items = field_type_schema(context, owner, element) if element is not None else {}
        if items is None:
            return None
        return {"type": "array", "items": items}

    if field_type.kind == FieldKind.MAP:
        value = field_type_schema(context, owner, field_type.element) if field_type.element else {}
        if value is None:
            return None
        return {"type": "object", "additionalProperties": value}

    target = field_type.ref
    if target is None or not context.ensure_schema(target, referenced_from=owner.package):
        return None
    return {"$ref": context.resolve_reference(owner.package, target)}


def _scalar_schema(
    context: GenerationContext, owner: TypeIdent, scalar: str
) -> dict[str, Any] | None:
    if scalar in _DANGEROUS_SCALARS:
        if context.settings.allow_dangerous_types:
            return {"type": "number"}
        context.diagnostics.record(
            DiagnosticKind.DANGEROUS_TYPE,
            str(owner),
            f"found {scalar}, the usage of which is highly discouraged, "
            "as support for them varies across languages",
        )
        return None
    return dict(_SCALAR_SCHEMAS.get(scalar, {}))
