"""Selection of the fields that survive in filtered object documents."""

from __future__ import annotations

import copy
import logging
from collections.abc import Collection
from typing import Any

from json_schema_generator.type_catalog.catalog_models import Field, TypeGraph, TypeIdent, TypeInfo

from .naming import referenced_type_name

logger = logging.getLogger(__name__)

METADATA_PROPERTY = "metadata"


def collect_relevant(
    graph: TypeGraph, ident: TypeIdent, sentinel: str
) -> tuple[tuple[TypeIdent, ...], bool]:
    """Return the descendants of ``ident`` that lead to a tainted field, and whether it is tainted.

    A field whose declared type text contains ``sentinel`` taints its owner
    and is not descended into. A child type that turns out tainted is kept
    together with everything it collected, and taints its parent in turn.
    """
    relevant, tainted = _collect(graph, ident, sentinel, on_path=frozenset())
    return tuple(dict.fromkeys(relevant)), tainted


def _collect(
    graph: TypeGraph, ident: TypeIdent, sentinel: str, on_path: frozenset[TypeIdent]
) -> tuple[list[TypeIdent], bool]:
    info = graph.lookup(ident)
    if info is None:
        return [], False

    on_path = on_path | {ident}
    relevant: list[TypeIdent] = []
    tainted = False
    for field in info.fields:
        if sentinel in field.type.text:
            tainted = True
            continue
        child = field.type.referenced_type()
        if child is None or graph.lookup(child) is None:
            continue
        if child in on_path:
            logger.debug("skipping cyclic reference %s -> %s", ident, child)
            continue
        child_relevant, child_tainted = _collect(graph, child, sentinel, on_path)
        if child_tainted:
            relevant.append(child)
            relevant.extend(child_relevant)
            tainted = True
    return relevant, tainted


def prune_fragment(
    fragment: dict[str, Any],
    info: TypeInfo,
    graph: TypeGraph,
    relevant_names: Collection[str],
    sentinel: str,
) -> dict[str, Any]:
    """Return a copy of ``fragment`` without properties that lead to irrelevant known types.

    Scalar, opaque and sentinel-typed properties are always kept.
    """
    pruned = copy.deepcopy(fragment)
    properties = pruned.get("properties")
    if not isinstance(properties, dict):
        return pruned

    known_names = {known.name for known in graph.types}
    fields_by_alias = {field.alias: field for field in info.fields if field.alias}
    removed: set[str] = set()
    for alias, property_schema in properties.items():
        field = fields_by_alias.get(alias)
        if field is not None and sentinel in field.type.text:
            continue
        if field is not None and _leads_to_irrelevant_type(field, graph, relevant_names):
            removed.add(alias)
            continue
        ref = _property_ref(property_schema)
        if ref is None or sentinel in ref:
            continue
        name = referenced_type_name(ref)
        if name in known_names and name not in relevant_names:
            removed.add(alias)

    _remove_properties(pruned, removed)
    return pruned


def strip_metadata(fragment: dict[str, Any], info: TypeInfo) -> dict[str, Any]:
    """Drop the ``metadata`` envelope property and compositions that reference its type."""
    stripped = copy.deepcopy(fragment)
    _remove_properties(stripped, {METADATA_PROPERTY})

    metadata_field = next(
        (field for field in info.fields if field.alias == METADATA_PROPERTY), None
    )
    target = metadata_field.type.referenced_type() if metadata_field is not None else None
    all_of = stripped.get("allOf")
    if target is not None and isinstance(all_of, list):
        kept = [
            entry
            for entry in all_of
            if not (
                isinstance(entry, dict)
                and isinstance(entry.get("$ref"), str)
                and referenced_type_name(entry["$ref"]) == target.name
            )
        ]
        if kept:
            stripped["allOf"] = kept
        else:
            del stripped["allOf"]
    return stripped


def _leads_to_irrelevant_type(
    field: Field, graph: TypeGraph, relevant_names: Collection[str]
) -> bool:
    target = field.type.referenced_type()
    return (
        target is not None
        and graph.lookup(target) is not None
        and target.name not in relevant_names
    )


def _property_ref(property_schema: Any) -> str | None:
    if not isinstance(property_schema, dict):
        return None
    for candidate in (
        property_schema,
        property_schema.get("items"),
        property_schema.get("additionalProperties"),
    ):
        if isinstance(candidate, dict) and isinstance(candidate.get("$ref"), str):
            return candidate["$ref"]
    return None


def _remove_properties(schema: dict[str, Any], names: Collection[str]) -> None:
    if not names:
        return
    properties = schema.get("properties")
    if isinstance(properties, dict):
        for name in names:
            properties.pop(name, None)
        if not properties:
            del schema["properties"]
    required = schema.get("required")
    if isinstance(required, list):
        kept = [name for name in required if name not in names]
        if kept:
            schema["required"] = kept
        else:
            del schema["required"]
