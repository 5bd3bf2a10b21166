"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from json_schema_generator.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from json_schema_generator.schema_generation import GenerationError, run_generation


class CliError(Exception):
    """Custom CLI error."""


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="json-schema-generator")
@click.option("-v", "--verbose", count=True, help="Increase log output (repeat for debug).")
def cli(verbose: int) -> None:
    """Generate JSON schema documents from annotated type catalogs."""
    _configure_logging(verbose)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML generator configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML generator configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="generate")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON generator configuration file",
)
@click.option(
    "--catalog",
    "catalog_paths",
    multiple=True,
    type=click.Path(path_type=str),
    help="Type catalog to load instead of the configured ones (repeatable)",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Directory for the generated schema documents",
)
@click.option(
    "--allow-dangerous-types",
    is_flag=True,
    default=False,
    help="Map float32/float64 fields to number instead of rejecting them.",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit with an error when any diagnostic was reported.",
)
def generate(
    config_path: str,
    catalog_paths: tuple[str, ...],
    output_dir: str | None,
    allow_dangerous_types: bool,
    strict: bool,
) -> None:
    """Generate schema documents for every marked package and object type."""
    try:
        settings = load_configuration(config_path).with_overrides(
            catalog_paths=tuple(Path(path).resolve() for path in catalog_paths),
            output_dir=Path(output_dir).resolve() if output_dir else None,
            allow_dangerous_types=allow_dangerous_types,
        )
        outcome = run_generation(settings)
    except (ConfigurationError, GenerationError) as exc:
        raise CliError(str(exc)) from exc

    for diagnostic in outcome.diagnostics:
        click.echo(f"warning: {diagnostic}", err=True)
    for path in outcome.written_paths:
        click.echo(str(path))
    if strict and outcome.diagnostics:
        raise CliError(f"{len(outcome.diagnostics)} diagnostic(s) reported in strict mode.")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
