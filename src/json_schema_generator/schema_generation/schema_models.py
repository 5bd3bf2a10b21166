"""Schema generation entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from json_schema_generator.diagnostics import Diagnostic


@dataclass(frozen=True)
class SchemaDocument:
    """One named JSON Schema artifact, ready for serialization."""

    name: str
    body: dict[str, Any]

    @property
    def definitions(self) -> dict[str, Any]:
        return self.body.get("definitions", {})


@dataclass(frozen=True)
class GenerationResult:
    """Documents and non-fatal diagnostics produced from one type graph."""

    documents: tuple[SchemaDocument, ...]
    diagnostics: tuple[Diagnostic, ...]

    def document(self, name: str) -> SchemaDocument | None:
        return next((document for document in self.documents if document.name == name), None)
