"""Configuration scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from json_schema_generator.configuration.config_scaffold_builder import (
    build_placeholder_configuration,
    write_placeholder_configuration,
)


def test_build_placeholder_configuration_contains_all_supported_sections() -> None:
    scaffold = build_placeholder_configuration()

    assert "Configuration template" in scaffold
    assert "catalog:" in scaffold
    assert "output_dir:" in scaffold
    assert "allow_dangerous_types:" in scaffold
    assert "taint_sentinel:" in scaffold
    assert "external_document:" in scaffold
    assert "markers:" in scaffold
    assert "<REQUIRED>" in scaffold


def test_write_placeholder_configuration_writes_file(tmp_path: Path) -> None:
    output_path = tmp_path / "schema-generator.yaml"

    written_path = write_placeholder_configuration(output_path)

    assert written_path == output_path.resolve()
    assert output_path.exists()
    assert "<REQUIRED>" in output_path.read_text(encoding="utf-8")


def test_write_placeholder_configuration_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "schema-generator.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_placeholder_configuration(output_path)
