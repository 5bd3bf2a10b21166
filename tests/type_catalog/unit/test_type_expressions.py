"""Type expression parser tests."""

from __future__ import annotations

import pytest
from json_schema_generator.type_catalog.catalog_models import FieldKind, TypeIdent
from json_schema_generator.type_catalog.type_expressions import (
    TypeExpressionError,
    parse_type_expression,
)


def _parse(expression: str):
    return parse_type_expression(
        expression,
        package="example.com/api",
        resolve_qualifier=lambda qualifier: f"example.com/{qualifier}",
    )


def test_scalar_names_parse_as_scalars() -> None:
    parsed = _parse("int64")

    assert parsed.kind == FieldKind.SCALAR
    assert parsed.scalar == "int64"
    assert parsed.referenced_type() is None


def test_unqualified_name_refers_to_owning_package() -> None:
    parsed = _parse("Type1")

    assert parsed.kind == FieldKind.REFERENCE
    assert parsed.ref == TypeIdent(package="example.com/api", name="Type1")


def test_qualified_name_uses_qualifier_resolver() -> None:
    parsed = _parse("taxonomy.Connection")

    assert parsed.ref == TypeIdent(package="example.com/taxonomy", name="Connection")
    assert parsed.text == "taxonomy.Connection"


def test_nested_containers_keep_structure_and_text() -> None:
    parsed = _parse("map[string][]*taxonomy.Tag")

    assert parsed.kind == FieldKind.MAP
    assert parsed.text == "map[string][]*taxonomy.Tag"
    assert parsed.element is not None
    assert parsed.element.kind == FieldKind.ARRAY
    assert parsed.element.element is not None
    assert parsed.element.element.pointer is True
    assert parsed.referenced_type() == TypeIdent(package="example.com/taxonomy", name="Tag")


def test_empty_interface_is_opaque_scalar() -> None:
    parsed = _parse("interface{}")

    assert parsed.kind == FieldKind.SCALAR
    assert parsed.scalar == "any"


@pytest.mark.parametrize("expression", ["", "[]", "map[string", "Type1 extra", "1abc"])
def test_malformed_expressions_raise(expression: str) -> None:
    with pytest.raises(TypeExpressionError):
        _parse(expression)
