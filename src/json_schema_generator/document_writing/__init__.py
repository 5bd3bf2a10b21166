"""Document writing exports."""

from .document_writer import WriteError, render_document, write_documents

__all__ = [
    "WriteError",
    "render_document",
    "write_documents",
]
