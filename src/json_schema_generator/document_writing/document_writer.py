"""Schema document writer service."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from json_schema_generator.schema_generation.schema_models import SchemaDocument

logger = logging.getLogger(__name__)


class WriteError(Exception):
    """Raised when the output directory or a document file cannot be written."""


def render_document(document: SchemaDocument) -> str:
    """Serialize a document as two-space indented JSON with a trailing newline."""
    return json.dumps(document.body, indent=2, ensure_ascii=False) + "\n"


def write_documents(
    documents: Iterable[SchemaDocument], output_dir: Path | str
) -> tuple[Path, ...]:
    """Write each document to ``output_dir/<name>``, overwriting existing files.

    Raises:
      WriteError: On the first directory or file failure; later documents are not written.
    """
    destination = Path(output_dir)
    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WriteError(f"Cannot create output directory {destination}: {exc}") from exc

    written: list[Path] = []
    for document in sorted(documents, key=lambda item: item.name):
        output_path = destination / document.name
        try:
            output_path.write_text(render_document(document), encoding="utf-8")
        except OSError as exc:
            raise WriteError(f"Cannot write schema document {output_path}: {exc}") from exc
        logger.debug("wrote %s", output_path)
        written.append(output_path.resolve())
    return tuple(written)
