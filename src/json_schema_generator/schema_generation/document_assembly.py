"""Partitioning of generated fragments into named schema documents."""

from __future__ import annotations

import copy
import logging
from typing import Any

from json_schema_generator.type_catalog.catalog_models import TypeIdent

from .generation_context import GenerationContext
from .naming import definition_link, qualified_name, split_reference
from .relevance import collect_relevant, prune_fragment, strip_metadata
from .schema_models import SchemaDocument

logger = logging.getLogger(__name__)

_DefinitionIndex = dict[tuple[str, str], TypeIdent]


def assemble_documents(context: GenerationContext) -> tuple[SchemaDocument, ...]:
    """Build primary, external and filtered documents from the populated schema cache.

    Output is independent of traversal order: types are visited in sorted
    order, definitions are sorted by key and documents by name.
    """
    bodies: dict[str, dict[str, Any]] = {}
    index: _DefinitionIndex = {}
    for ident in sorted(context.schemata):
        document_name = context.document_name_for(ident.package)
        body = bodies.setdefault(document_name, _new_document(document_name))
        key = context.definition_key_for(document_name, ident)
        body["definitions"][key] = copy.deepcopy(context.schemata[ident])
        index[(document_name, key)] = ident

    for ident in sorted(context.schemata):
        if context.is_object_type(ident):
            _add_filtered_document(context, bodies, index, ident)

    documents = []
    for name in sorted(bodies):
        body = bodies[name]
        body["definitions"] = dict(sorted(body["definitions"].items()))
        logger.info("assembled %s with %d definitions", name, len(body["definitions"]))
        documents.append(SchemaDocument(name=name, body=body))
    return tuple(documents)


def _new_document(name: str) -> dict[str, Any]:
    return {"title": name, "definitions": {}}


def _add_filtered_document(
    context: GenerationContext,
    bodies: dict[str, dict[str, Any]],
    index: _DefinitionIndex,
    root: TypeIdent,
) -> None:
    graph = context.graph
    sentinel = context.settings.taint_sentinel
    info = graph.types[root]
    relevant, _ = collect_relevant(graph, root, sentinel)
    members = [ident for ident in sorted(relevant) if ident in context.schemata and ident != root]
    relevant_names = {ident.name for ident in relevant}

    document_name = f"{root.name}.json"
    body = bodies.get(document_name)
    if body is None:
        root_fragment = strip_metadata(
            prune_fragment(context.schemata[root], info, graph, relevant_names, sentinel), info
        )
        body = {"title": document_name, **root_fragment, "definitions": {}}
        bodies[document_name] = body
        seeded_root = True
    else:
        logger.warning(
            "%s dropped from filtered document %s, which is taken by another type; "
            "only its members are merged",
            root,
            document_name,
        )
        seeded_root = False

    member_keys: dict[TypeIdent, str] = {}
    for member in members:
        key = member.name
        if key in body["definitions"] or key in member_keys.values():
            key = qualified_name(member.package, member.name)
        member_keys[member] = key

    if seeded_root:
        root_home = context.document_name_for(root.package)
        for key, value in list(body.items()):
            if key not in ("title", "definitions"):
                body[key] = _rewrite_refs(value, root_home, member_keys, index)

    for member, key in member_keys.items():
        fragment = prune_fragment(
            context.schemata[member], graph.types[member], graph, relevant_names, sentinel
        )
        home = context.document_name_for(member.package)
        body["definitions"][key] = _rewrite_refs(fragment, home, member_keys, index)


def _rewrite_refs(
    node: Any, home: str, member_keys: dict[TypeIdent, str], index: _DefinitionIndex
) -> Any:
    """Point references at local members, and pin other local references to their home document."""
    if isinstance(node, list):
        return [_rewrite_refs(item, home, member_keys, index) for item in node]
    if not isinstance(node, dict):
        return node

    rewritten: dict[str, Any] = {}
    for key, value in node.items():
        if key == "$ref" and isinstance(value, str):
            rewritten[key] = _rewrite_ref(value, home, member_keys, index)
        else:
            rewritten[key] = _rewrite_refs(value, home, member_keys, index)
    return rewritten


def _rewrite_ref(
    ref: str, home: str, member_keys: dict[TypeIdent, str], index: _DefinitionIndex
) -> str:
    parts = split_reference(ref)
    if parts is None:
        return ref
    document_name, key = parts
    target_document = document_name or home
    target = index.get((target_document, key))
    if target is not None and target in member_keys:
        return definition_link(member_keys[target])
    if not document_name:
        return definition_link(key, target_document)
    return ref
