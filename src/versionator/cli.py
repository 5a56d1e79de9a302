"""
versionator CLI - version ordering and field exclusion.

Commands:
    versionator compare     Order two version strings
    versionator check       Check a version against a [since, until] range
    versionator exclusions  List the fields of a schema type hidden at a version
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError

from versionator.calculator import ExclusionCalculator
from versionator.config import get_config
from versionator.errors import VersionatorError
from versionator.loader import SchemaLoader
from versionator.logger import configure_logging
from versionator.provider import RegistrySchemaProvider
from versionator.version import BEGINNING_OF_TIME, END_OF_TIME, Version, compare, is_valid

_SYMBOLS = {-1: "<", 0: "==", 1: ">"}

# click reserves 1 for errors and 2 for usage errors
OUT_OF_RANGE_EXIT_CODE = 3


@click.group()
@click.version_option(package_name="versionator")
def main():
    """versionator - decide which fields exist at a requested version."""
    configure_logging(get_config())


@main.command("compare")
@click.argument("left")
@click.argument("right")
def compare_cmd(left: str, right: str):
    """Order LEFT against RIGHT."""
    try:
        result = compare(Version(left), Version(right))
    except VersionatorError as e:
        raise click.ClickException(str(e))
    click.echo(f"{left} {_SYMBOLS[result]} {right}")


@main.command("check")
@click.argument("version")
@click.option("--since", default=BEGINNING_OF_TIME, show_default=False, help="Inclusive lower bound")
@click.option("--until", default=END_OF_TIME, show_default=False, help="Inclusive upper bound")
def check_cmd(version: str, since: str, until: str):
    """Exit 0 if VERSION lies within [--since, --until], 3 otherwise."""
    try:
        valid = is_valid(Version(version), Version(since), Version(until))
    except VersionatorError as e:
        raise click.ClickException(str(e))
    if valid:
        click.echo(f"{version}: in range")
    else:
        click.echo(f"{version}: out of range")
        sys.exit(OUT_OF_RANGE_EXIT_CODE)


@main.command("exclusions")
@click.argument("schema_file", required=False, type=click.Path(dir_okay=False))
@click.option("--type", "-t", "type_name", required=True, help="Root type name")
@click.option("--version", "-v", "version", required=True, help="Requested version")
@click.option("--format", "output_format", type=click.Choice(["text", "json", "yaml"]), default="text")
def exclusions_cmd(schema_file: Optional[str], type_name: str, version: str, output_format: str):
    """List the property paths of a schema type hidden at a version."""
    config = get_config()
    schema_file = schema_file or config.schema_path
    if not schema_file:
        raise click.UsageError("SCHEMA_FILE is required (or set VERSIONATOR_SCHEMA_PATH)")

    try:
        spec = SchemaLoader().load(Path(schema_file))
    except (FileNotFoundError, TypeError, yaml.YAMLError, ValidationError) as e:
        raise click.ClickException(f"Cannot load schema {schema_file}: {e}")

    provider = RegistrySchemaProvider(spec)
    if spec.get_type(type_name) is None:
        known = ", ".join(provider.type_names()) or "none"
        raise click.ClickException(f"Unknown type {type_name!r} (declared: {known})")

    calculator = ExclusionCalculator.from_config(provider, config)
    try:
        report = calculator.report(type_name, version)
    except VersionatorError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(report.model_dump(), indent=2))
    elif output_format == "yaml":
        click.echo(yaml.dump(report.model_dump(), default_flow_style=False, sort_keys=False))
    else:
        if not report.excluded:
            click.echo(f"No fields of {type_name} are excluded at {version}")
            return
        click.echo(f"Excluded from {type_name} at {version}:")
        for path in report.excluded:
            click.echo(f"  - {path}")


if __name__ == "__main__":
    main()
