"""Taxonomy relevance selection and pruning tests."""

from __future__ import annotations

from json_schema_generator.configuration.runtime_settings import GeneratorSettings, MarkerSettings
from json_schema_generator.schema_generation.generation_context import GenerationContext
from json_schema_generator.schema_generation.relevance import (
    collect_relevant,
    prune_fragment,
    strip_metadata,
)
from json_schema_generator.type_catalog import TypeGraph, TypeIdent, build_type_graph

API = "example.com/api"
TAXONOMY = "example.com/taxonomy"


def _field(name: str, type_expression: str, json_tag: str | None = None) -> dict:
    return {"name": name, "json": json_tag or name.lower(), "type": type_expression}


def _graph(api_types: list[dict]) -> TypeGraph:
    return build_type_graph(
        [
            (
                "catalog.yaml",
                {
                    "packages": [
                        {"path": API, "markers": ["schema"], "types": api_types},
                        {
                            "path": TAXONOMY,
                            "markers": ["schema"],
                            "types": [
                                {"name": "T", "fields": [_field("Value", "string")]},
                                {"name": "Conn", "fields": [_field("URL", "string")]},
                            ],
                        },
                    ]
                },
            )
        ],
        MarkerSettings().definitions(),
    )


def _resource_graph() -> TypeGraph:
    return _graph(
        [
            {
                "name": "R",
                "markers": ["object"],
                "fields": [
                    _field("Metadata", "ObjectMeta"),
                    _field("T", "taxonomy.T"),
                    _field("M", "M"),
                    _field("X", "X"),
                    _field("Name", "string"),
                    _field("Xs", "[]X", "xs,omitempty"),
                ],
            },
            {"name": "M", "fields": [_field("N", "N"), _field("Other", "map[string]X")]},
            {"name": "N", "fields": [_field("Conn", "taxonomy.Conn")]},
            {"name": "X", "fields": [_field("Value", "string")]},
            {"name": "ObjectMeta", "fields": [_field("Name", "string")]},
        ]
    )


def _fragments(graph: TypeGraph) -> GenerationContext:
    context = GenerationContext(graph, GeneratorSettings())
    context.ensure_schema(TypeIdent(API, "R"))
    return context


def test_collect_relevant_keeps_only_chains_leading_to_taxonomy() -> None:
    graph = _resource_graph()

    relevant, tainted = collect_relevant(graph, TypeIdent(API, "R"), "taxonomy")

    assert tainted is True
    assert relevant == (TypeIdent(API, "M"), TypeIdent(API, "N"))


def test_collect_relevant_reports_untainted_types() -> None:
    graph = _resource_graph()

    assert collect_relevant(graph, TypeIdent(API, "X"), "taxonomy") == ((), False)
    assert collect_relevant(graph, TypeIdent(API, "Missing"), "taxonomy") == ((), False)


def test_collect_relevant_terminates_on_cycles() -> None:
    graph = _graph(
        [
            {"name": "A", "fields": [_field("B", "B"), _field("Self", "*A")]},
            {"name": "B", "fields": [_field("A", "A"), _field("T", "taxonomy.T")]},
        ]
    )

    relevant, tainted = collect_relevant(graph, TypeIdent(API, "A"), "taxonomy")

    assert tainted is True
    assert relevant == (TypeIdent(API, "B"),)


def test_prune_fragment_drops_irrelevant_known_types_only() -> None:
    graph = _resource_graph()
    context = _fragments(graph)
    root = TypeIdent(API, "R")

    pruned = prune_fragment(
        context.schemata[root], graph.types[root], graph, {"M", "N"}, "taxonomy"
    )

    assert list(pruned["properties"]) == ["t", "m", "name"]
    assert pruned["required"] == ["t", "m", "name"]
    assert "x" in context.schemata[root]["properties"]
    assert "metadata" in context.schemata[root]["properties"]


def test_prune_fragment_inspects_container_references() -> None:
    graph = _resource_graph()
    context = _fragments(graph)
    m = TypeIdent(API, "M")

    pruned = prune_fragment(context.schemata[m], graph.types[m], graph, {"M", "N"}, "taxonomy")

    assert pruned["properties"] == {"n": {"$ref": "#/definitions/N"}}
    assert pruned["required"] == ["n"]


def test_prune_fragment_removes_unmatched_refs_without_field_information() -> None:
    graph = _resource_graph()
    fragment = {
        "type": "object",
        "properties": {
            "extra": {"type": "array", "items": {"$ref": "#/definitions/X"}},
            "tax": {"$ref": "taxonomy.json#/definitions/T"},
            "plain": {"type": "string"},
        },
        "required": ["extra", "plain"],
    }
    info = graph.types[TypeIdent(API, "X")]

    pruned = prune_fragment(fragment, info, graph, set(), "taxonomy")

    assert pruned == {
        "type": "object",
        "properties": {
            "tax": {"$ref": "taxonomy.json#/definitions/T"},
            "plain": {"type": "string"},
        },
        "required": ["plain"],
    }


def test_strip_metadata_removes_property_and_composition() -> None:
    graph = _resource_graph()
    info = graph.types[TypeIdent(API, "R")]
    fragment = {
        "type": "object",
        "properties": {
            "metadata": {"$ref": "#/definitions/ObjectMeta"},
            "name": {"type": "string"},
        },
        "required": ["metadata", "name"],
        "allOf": [{"$ref": "#/definitions/ObjectMeta"}],
    }

    stripped = strip_metadata(fragment, info)

    assert stripped == {
        "type": "object",
        "properties": {"name": {"type": "string"}},
        "required": ["name"],
    }
    assert "allOf" in fragment


def test_strip_metadata_keeps_unrelated_compositions() -> None:
    graph = _resource_graph()
    info = graph.types[TypeIdent(API, "R")]
    fragment = {
        "properties": {"metadata": {"$ref": "#/definitions/ObjectMeta"}},
        "allOf": [{"$ref": "#/definitions/TypeMeta"}, {"$ref": "#/definitions/ObjectMeta"}],
    }

    stripped = strip_metadata(fragment, info)

    assert stripped == {"allOf": [{"$ref": "#/definitions/TypeMeta"}]}
