"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "schema-generator.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration template for json-schema-generator.
# Replace every <REQUIRED> placeholder before running generate.
# Relative paths are resolved against the directory of this file.

# One type catalog path, or a list of them.
catalog:
  - "<REQUIRED>"

# Directory receiving one JSON document per schema package and per object type.
output_dir: "schemas"

# float32/float64 fields are rejected unless this is enabled.
allow_dangerous_types: false

# Fields whose declared type contains this text mark their owner as relevant
# for filtered per-object documents.
taint_sentinel: "taxonomy"

# Document collecting types from packages without the schema marker.
external_document: "external.json"

markers:
  # Prepended to both marker names, e.g. "example:validation:".
  prefix: ""
  # Package marker: the package gets its own document.
  schema: "schema"
  # Type marker: the type also gets a filtered standalone document.
  object: "object"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
