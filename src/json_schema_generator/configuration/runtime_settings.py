"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path

from json_schema_generator.type_catalog.catalog_models import Marker, MarkerScope

DEFAULT_EXTERNAL_DOCUMENT = "external.json"
DEFAULT_TAINT_SENTINEL = "taxonomy"
DEFAULT_OUTPUT_DIR = "schemas"


@dataclass(frozen=True)
class MarkerSettings:
    """Names of the package-scope and type-scope markers."""

    prefix: str = ""
    schema_marker: str = "schema"
    object_marker: str = "object"

    @property
    def schema_name(self) -> str:
        return f"{self.prefix}{self.schema_marker}"

    @property
    def object_name(self) -> str:
        return f"{self.prefix}{self.object_marker}"

    def definitions(self) -> tuple[Marker, ...]:
        return (
            Marker(name=self.schema_name, scope=MarkerScope.PACKAGE),
            Marker(name=self.object_name, scope=MarkerScope.TYPE),
        )


@dataclass(frozen=True)
class GeneratorSettings:  # pylint: disable=too-many-instance-attributes
    """Top-level configuration aggregate for one generation run."""

    catalog_paths: tuple[Path, ...] = ()
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    allow_dangerous_types: bool = False
    taint_sentinel: str = DEFAULT_TAINT_SENTINEL
    external_document_name: str = DEFAULT_EXTERNAL_DOCUMENT
    markers: MarkerSettings = field(default_factory=MarkerSettings)
    path: Path | None = None

    def with_overrides(
        self,
        *,
        catalog_paths: tuple[Path, ...] | None = None,
        output_dir: Path | None = None,
        allow_dangerous_types: bool | None = None,
    ) -> GeneratorSettings:
        """Return a copy with command-line overrides applied."""
        changes: dict[str, object] = {}
        if catalog_paths:
            changes["catalog_paths"] = catalog_paths
        if output_dir is not None:
            changes["output_dir"] = output_dir
        if allow_dangerous_types:
            changes["allow_dangerous_types"] = True
        return replace(self, **changes)
