"""Declared type expression parsing."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import replace

from .catalog_models import FieldKind, FieldType, TypeIdent

SCALAR_TYPES = frozenset(
    {
        "string",
        "bool",
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "byte",
        "rune",
        "float32",
        "float64",
        "any",
        "interface{}",
    }
)

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)?")


class TypeExpressionError(ValueError):
    """Raised when a declared type expression cannot be parsed."""


QualifierResolver = Callable[[str], str]


def parse_type_expression(
    expression: str, *, package: str, resolve_qualifier: QualifierResolver
) -> FieldType:
    """Parse ``T``, ``pkg.T``, ``*T``, ``[]T`` and ``map[K]V`` into a structured type.

    Unqualified non-scalar names refer to ``package``; qualifiers are mapped to
    package paths through ``resolve_qualifier``.
    """
    text = expression.strip() if isinstance(expression, str) else ""
    if not text:
        raise TypeExpressionError("Type expression must be a non-empty string.")
    parser = _Parser(text, package=package, resolve_qualifier=resolve_qualifier)
    parsed = parser.parse_type()
    if parser.position != len(text):
        raise TypeExpressionError(
            f"Unexpected trailing text in type expression {text!r}: {text[parser.position:]!r}"
        )
    return parsed


class _Parser:
    def __init__(self, text: str, *, package: str, resolve_qualifier: QualifierResolver) -> None:
        self.text = text
        self.position = 0
        self.package = package
        self.resolve_qualifier = resolve_qualifier

    def parse_type(self) -> FieldType:
        self._skip_spaces()
        start = self.position
        if self._consume("*"):
            inner = self.parse_type()
            return replace(inner, text=self._slice(start), pointer=True)
        if self._consume("[]"):
            element = self.parse_type()
            return FieldType(kind=FieldKind.ARRAY, text=self._slice(start), element=element)
        if self._consume("map["):
            self.parse_type()
            self._skip_spaces()
            if not self._consume("]"):
                raise TypeExpressionError(f"Unterminated map key in type expression {self.text!r}")
            value = self.parse_type()
            return FieldType(kind=FieldKind.MAP, text=self._slice(start), element=value)
        if self._consume("interface{}"):
            return FieldType(kind=FieldKind.SCALAR, text="interface{}", scalar="any")
        return self._parse_name(start)

    def _parse_name(self, start: int) -> FieldType:
        match = _IDENTIFIER.match(self.text, self.position)
        if match is None:
            raise TypeExpressionError(
                f"Expected a type name at offset {self.position} in {self.text!r}"
            )
        self.position = match.end()
        name = match.group(0)
        if name in SCALAR_TYPES:
            return FieldType(kind=FieldKind.SCALAR, text=name, scalar=name)
        qualifier, _, local_name = name.rpartition(".")
        target_package = self.resolve_qualifier(qualifier) if qualifier else self.package
        return FieldType(
            kind=FieldKind.REFERENCE,
            text=self._slice(start),
            ref=TypeIdent(package=target_package, name=local_name),
        )

    def _consume(self, token: str) -> bool:
        if self.text.startswith(token, self.position):
            self.position += len(token)
            return True
        return False

    def _skip_spaces(self) -> None:
        while self.position < len(self.text) and self.text[self.position] == " ":
            self.position += 1

    def _slice(self, start: int) -> str:
        return self.text[start : self.position].strip()
