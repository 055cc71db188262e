"""CLI entry point for resource-graph."""

import logging
from pathlib import Path

import click

from resource_graph.config import DEFAULT_DOCUMENT_SUFFIXES
from resource_graph.errors import ResourceGraphError
from resource_graph.parser.base import Resource
from resource_graph.parser.detect import detect_format
from resource_graph.parser.fetch import (
    ParsedSwaggerDocumentation,
    load_swagger_documentation,
    parse_swagger_documentation,
)


def _load(source: str, suffixes: tuple[str, ...], timeout: float | None) -> ParsedSwaggerDocumentation:
    """Load a documentation from a URL or a local file."""
    suffixes = suffixes or DEFAULT_DOCUMENT_SUFFIXES
    try:
        if source.startswith(("http://", "https://")):
            return parse_swagger_documentation(source, timeout=timeout, suffixes=suffixes)
        path = Path(source)
        if not path.exists():
            raise click.BadParameter(f"{source} is neither a URL nor an existing file", param_hint="SOURCE")
        if detect_format(path) == "unknown":
            raise click.BadParameter(f"{source} is not a Swagger document", param_hint="SOURCE")
        return load_swagger_documentation(path, suffixes=suffixes)
    except ResourceGraphError as e:
        raise click.ClickException(str(e)) from e


def _describe(resource: Resource) -> list[str]:
    operations = ", ".join(f"{o.type}:{o.method}" for o in resource.operations) or "-"
    lines = [f"{resource.title} ({resource.url}) fields={len(resource.fields)} operations=[{operations}]"]
    for field in resource.fields:
        if field.embedded is not None:
            lines.append(f"  {field.name} embeds {field.embedded.title}")
        elif field.reference is not None:
            cardinality = "one" if field.max_cardinality == 1 else "many"
            lines.append(f"  {field.name} -> {field.reference.title} ({cardinality})")
    return lines


source_options = [
    click.argument("source"),
    click.option("--suffix", "suffixes", multiple=True, help="Documentation filename stripped from the entry URL (repeatable)."),
    click.option("--timeout", default=None, type=float, help="HTTP timeout in seconds."),
]


def with_source_options(func):
    for option in reversed(source_options):
        func = option(func)
    return func


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Infer API resources from a Swagger 2.0 document."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@with_source_options
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output JSON file (defaults to stdout).")
def parse(source: str, suffixes: tuple[str, ...], timeout: float | None, output: Path | None):
    """Parse SOURCE and dump the resulting Api as JSON."""
    parsed = _load(source, suffixes, timeout)
    payload = parsed.api.model_dump_json(indent=2)

    if output is None:
        click.echo(payload)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(payload, encoding="utf-8")
    click.echo(f"{len(parsed.api.resources)} resources saved to {output}")


@main.command()
@with_source_options
def resources(source: str, suffixes: tuple[str, ...], timeout: float | None):
    """Print a summary of the resources found in SOURCE."""
    parsed = _load(source, suffixes, timeout)
    click.echo(f"{parsed.api.title or parsed.api.entrypoint}: {len(parsed.api.resources)} resources")
    for resource in parsed.api.resources:
        for line in _describe(resource):
            click.echo(line)
