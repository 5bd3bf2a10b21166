"""Schema generation exports."""

from .document_assembly import assemble_documents
from .generation_context import GenerationContext
from .generator import GenerationError, GenerationOutcome, generate_documents, run_generation
from .naming import qualified_name, split_qualified_name
from .relevance import collect_relevant, prune_fragment, strip_metadata
from .schema_models import GenerationResult, SchemaDocument
from .type_conversion import convert_type_info

__all__ = [
    "GenerationContext",
    "GenerationError",
    "GenerationOutcome",
    "GenerationResult",
    "SchemaDocument",
    "assemble_documents",
    "collect_relevant",
    "convert_type_info",
    "generate_documents",
    "prune_fragment",
    "qualified_name",
    "run_generation",
    "split_qualified_name",
    "strip_metadata",
]
