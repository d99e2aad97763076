"""Command-line interface for fhir_r4."""

import logging
import sys
from pathlib import Path
from typing import Iterator, Optional, Tuple

import click

from .bundle_assembler import BUNDLE_TYPES, REQUEST_METHODS, BundleAssembler
from .config import BUNDLE_DEFAULTS
from .elements import COMPLEX
from .reader import read_file
from .registry import get_resource_class, get_type_class, resource_names, type_names
from .settings import SettingsParser
from .validator import FHIRValidator


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _describe(cls: type) -> Iterator[str]:
    """Element table lines of a class and of the backbone elements it declares."""
    for info in cls.elements().values():
        yield info.describe()
        if info.kind == COMPLEX and info.model.fhir_path() == info.path:
            yield from _describe(info.model)


def _lookup(name: str) -> type:
    try:
        return get_resource_class(name)
    except KeyError:
        return get_type_class(name)


@click.group()
def main():
    """fhir-r4 - FHIR R4 resource models.

    Validate, convert and describe FHIR R4 resources in JSON and XML.
    """


@main.command()
@click.argument("file_path", type=click.Path(exists=True))
@click.option("--config", type=click.Path(exists=True), help="Path to validator settings YAML/JSON file")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed validation output")
@click.option("--outcome", is_flag=True, help="Print the result as an OperationOutcome")
def validate(file_path: str, config: Optional[str], verbose: bool, outcome: bool):
    """Validate a FHIR resource file.

    FILE_PATH: Path to the .json or .xml file to validate
    """
    _configure_logging(verbose)

    settings = None
    if config:
        try:
            settings = SettingsParser().parse(config)
        except ValueError as e:
            click.echo(f"Error: Invalid configuration - {e}", err=True)
            sys.exit(1)

    validator = FHIRValidator(settings)

    click.echo(f"Validating {file_path}...", err=True)

    result = validator.validate_file(file_path)

    if outcome:
        click.echo(result.to_operation_outcome().to_json(indent=2))
    elif verbose or not result.is_valid:
        click.echo(str(result))
    else:
        click.echo("✓ Validation passed")

    if not result.is_valid:
        sys.exit(1)


@main.command()
@click.argument("file_path", type=click.Path(exists=True))
@click.option("--to", "target", type=click.Choice(["json", "xml"]), required=True, help="Output format")
@click.option("--output", type=click.Path(), help="Output file path (default: stdout)")
@click.option("--indent", type=int, default=2, help="Indentation; 0 writes compact output")
def convert(file_path: str, target: str, output: Optional[str], indent: int):
    """Convert a FHIR resource file between JSON and XML.

    FILE_PATH: Path to the .json or .xml file to convert
    """
    try:
        resource = read_file(file_path)
    except (ValueError, KeyError) as e:
        click.echo(f"Error: Cannot read {file_path} - {e}", err=True)
        sys.exit(1)

    if target == "json":
        text = resource.to_json(indent=indent or None)
    else:
        text = resource.to_xml(pretty=indent > 0)

    if output:
        try:
            Path(output).write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            click.echo(f"Error: Failed to write output - {e}", err=True)
            sys.exit(1)
        click.echo(f"Wrote {resource.get_resource_type()} to {output}", err=True)
    else:
        click.echo(text)


@main.command()
@click.argument("type_name")
def describe(type_name: str):
    """Print the element table of a resource or data type.

    TYPE_NAME: Resource or data type name, e.g. Patient or HumanName
    """
    try:
        cls = _lookup(type_name)
    except KeyError:
        click.echo(f"Error: Unknown or unsupported type: {type_name}", err=True)
        sys.exit(1)

    click.echo(cls.fhir_path())
    for line in _describe(cls):
        click.echo(f"  {line}")
    if cls.is_resource():
        click.echo(f"Search parameters: {', '.join(cls.SEARCH_PARAMS) or '(none)'}")


@main.command("list-types")
def list_types():
    """List the implemented resources and data types."""
    click.echo("Resources:")
    for name in resource_names():
        click.echo(f"  - {name}")
    click.echo("Data types:")
    for name in type_names():
        click.echo(f"  - {name}")


@main.command()
@click.argument("file_paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option(
    "--bundle-type",
    type=click.Choice(BUNDLE_TYPES),
    default=BUNDLE_DEFAULTS["TYPE"],
    help="Type of bundle to assemble"
)
@click.option(
    "--request-method",
    type=click.Choice(REQUEST_METHODS),
    default=BUNDLE_DEFAULTS["REQUEST_METHOD"],
    help="HTTP method for transaction and batch entries"
)
@click.option(
    "--bundle-size",
    type=int,
    default=BUNDLE_DEFAULTS["MAX_SIZE"],
    help="Maximum resources per bundle"
)
@click.option("--output", type=click.Path(), help="Output file or directory (default: stdout)")
def bundle(file_paths: Tuple[str, ...], bundle_type: str, request_method: str, bundle_size: int, output: Optional[str]):
    """Assemble resource files into bundles.

    FILE_PATHS: Paths to .json or .xml resource files
    """
    resources = []
    for file_path in file_paths:
        try:
            resources.append(read_file(file_path))
        except (ValueError, KeyError) as e:
            click.echo(f"Error: Cannot read {file_path} - {e}", err=True)
            sys.exit(1)

    try:
        bundles = BundleAssembler().create_bundles(
            resources,
            bundle_type=bundle_type,
            bundle_size=bundle_size,
            request_method=request_method,
        )
    except ValueError as e:
        click.echo(f"Error: Invalid bundle parameters - {e}", err=True)
        sys.exit(1)

    if not output:
        for result in bundles:
            click.echo(result.to_json(indent=2))
        return

    output_path = Path(output)
    if len(bundles) == 1 and output_path.suffix == ".json":
        output_path.write_text(bundles[0].to_json(indent=2) + "\n", encoding="utf-8")
        click.echo(f"Wrote bundle to {output_path}", err=True)
    else:
        # Directory with multiple files
        output_path.mkdir(parents=True, exist_ok=True)
        for i, result in enumerate(bundles):
            (output_path / f"bundle_{i:04d}.json").write_text(result.to_json(indent=2) + "\n", encoding="utf-8")
        click.echo(f"Wrote {len(bundles)} bundles to {output_path}/", err=True)


if __name__ == "__main__":
    main()
