"""Schema cache and conversion driver for one generation run."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Mapping
from typing import Any

from json_schema_generator.configuration.runtime_settings import GeneratorSettings
from json_schema_generator.diagnostics import DiagnosticKind, DiagnosticLog
from json_schema_generator.type_catalog.catalog_models import TypeGraph, TypeIdent, TypeInfo

from .naming import definition_link, qualified_name
from .type_conversion import convert_type_info

logger = logging.getLogger(__name__)

SchemaFragment = dict[str, Any]
Converter = Callable[["GenerationContext", TypeInfo], SchemaFragment]


class GenerationContext:
    """Owns the schema cache, marker lookups and diagnostics of a single run.

    ``ensure_schema`` is re-entrant: the converter calls it for every
    referenced type while another conversion is in progress. Each requested
    type gets an empty placeholder fragment first and is queued; the queue is
    drained by the outermost call, so self-referential types terminate and no
    type is converted twice.
    """

    def __init__(
        self,
        graph: TypeGraph,
        settings: GeneratorSettings,
        *,
        converter: Converter | None = None,
    ) -> None:
        self.graph = graph
        self.settings = settings
        self.diagnostics = DiagnosticLog(graph.load_diagnostics)
        self._converter = converter or convert_type_info
        self._schemata: dict[TypeIdent, SchemaFragment] = {}
        self._pending: deque[TypeIdent] = deque()
        self._draining = False

    @property
    def schemata(self) -> Mapping[TypeIdent, SchemaFragment]:
        return self._schemata

    def ensure_schema(self, ident: TypeIdent, *, referenced_from: str | None = None) -> bool:
        """Make sure a fragment for ``ident`` exists or is scheduled.

        Returns ``False`` when the type is unknown; the problem is recorded
        against ``referenced_from`` (the referencing package) or the type itself.
        """
        if ident in self._schemata:
            return True
        info = self.graph.lookup(ident)
        if info is None:
            self.diagnostics.record(
                DiagnosticKind.UNKNOWN_TYPE,
                referenced_from or ident.package or str(ident),
                f"unknown type {ident}",
            )
            return False

        self._schemata[ident] = {}
        self._pending.append(ident)
        if not self._draining:
            self._drain()
        return True

    def _drain(self) -> None:
        self._draining = True
        try:
            while self._pending:
                ident = self._pending.popleft()
                info = self.graph.types[ident]
                logger.debug("converting %s", ident)
                self._schemata[ident] = self._converter(self, info)
        finally:
            self._draining = False

    def is_object_type(self, ident: TypeIdent) -> bool:
        info = self.graph.lookup(ident)
        return info is not None and info.has_marker(self.settings.markers.object_name)

    def has_schema_document(self, package_path: str) -> bool:
        package = self.graph.package(package_path)
        return package is not None and package.has_marker(self.settings.markers.schema_name)

    def document_name_for(self, package_path: str) -> str:
        if self.has_schema_document(package_path):
            return f"{self.graph.package_name(package_path)}.json"
        return self.settings.external_document_name

    def definition_key_for(self, document_name: str, ident: TypeIdent) -> str:
        if document_name == self.settings.external_document_name:
            return qualified_name(ident.package, ident.name)
        return ident.name

    def resolve_reference(self, from_package: str, to: TypeIdent) -> str:
        """Return the ``$ref`` a fragment in ``from_package`` uses to reach ``to``."""
        from_document = self.document_name_for(from_package)
        to_document = self.document_name_for(to.package)
        key = self.definition_key_for(to_document, to)
        if from_document == to_document:
            return definition_link(key)
        return definition_link(key, to_document)
