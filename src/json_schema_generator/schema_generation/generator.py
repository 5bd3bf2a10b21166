"""Schema generation use-case service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from json_schema_generator.configuration.runtime_settings import GeneratorSettings
from json_schema_generator.diagnostics import Diagnostic
from json_schema_generator.document_writing import WriteError, write_documents
from json_schema_generator.type_catalog import CatalogError, TypeGraph, load_type_graph

from .document_assembly import assemble_documents
from .generation_context import Converter, GenerationContext
from .schema_models import GenerationResult

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """Raised when a generation run cannot be completed."""


@dataclass(frozen=True)
class GenerationOutcome:
    """Output contract for one completed generation run."""

    written_paths: tuple[Path, ...]
    diagnostics: tuple[Diagnostic, ...]


def generate_documents(
    graph: TypeGraph, settings: GeneratorSettings, *, converter: Converter | None = None
) -> GenerationResult:
    """Generate every schema document for ``graph`` without touching the filesystem."""
    context = GenerationContext(graph, settings, converter=converter)
    for ident in sorted(graph.types):
        if context.is_object_type(ident) or context.has_schema_document(ident.package):
            context.ensure_schema(ident)
    logger.info("generated %d schema fragments", len(context.schemata))

    documents = assemble_documents(context)
    return GenerationResult(documents=documents, diagnostics=tuple(context.diagnostics))


def run_generation(settings: GeneratorSettings) -> GenerationOutcome:
    """Load the configured catalogs, generate the documents and write them out."""
    try:
        graph = load_type_graph(settings.catalog_paths, settings.markers.definitions())
    except CatalogError as exc:
        raise GenerationError(str(exc)) from exc

    result = generate_documents(graph, settings)
    try:
        written_paths = write_documents(result.documents, settings.output_dir)
    except WriteError as exc:
        raise GenerationError(str(exc)) from exc
    return GenerationOutcome(written_paths=written_paths, diagnostics=result.diagnostics)
