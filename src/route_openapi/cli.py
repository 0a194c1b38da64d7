"""CLI entry point for route-openapi."""

import json
import logging
from pathlib import Path

import click
import yaml

from route_openapi.errors import RouteOpenApiError
from route_openapi.generator.collector import collect_routes
from route_openapi.generator.handler import render_swagger_json
from route_openapi.generator.operation import convert_path
from route_openapi.registry.base import RegistrySnapshot
from route_openapi.registry.loader import load_flows
from route_openapi.settings import Settings, load_settings


def _load_inputs(flows_path: Path, settings_path: Path | None) -> tuple[RegistrySnapshot, Settings]:
    try:
        return load_flows(flows_path), load_settings(settings_path)
    except RouteOpenApiError as e:
        raise click.ClickException(str(e)) from e


def _dump(document: dict, fmt: str) -> str:
    if fmt == "yaml":
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Route OpenAPI: generate OpenAPI 3.0 documents from HTTP route flows."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@main.command()
@click.argument("flows_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--settings", "settings_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Settings file (YAML or JSON).")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file. Defaults to stdout.")
@click.option("--format", "fmt", default="json", type=click.Choice(["json", "yaml"]), help="Output format.")
@click.option("--base-path", default=None, help="Base path prefix appended to every server url.")
@click.option("--title", default=None, help="Override info.title.")
@click.option("--version", "api_version", default=None, help="Override info.version.")
def generate(
    flows_path: Path,
    settings_path: Path | None,
    output: Path | None,
    fmt: str,
    base_path: str | None,
    title: str | None,
    api_version: str | None,
):
    """Generate the OpenAPI document for the documented routes in a flow export."""
    snapshot, settings = _load_inputs(flows_path, settings_path)
    settings = settings.with_overrides(base_path=base_path, title=title, version=api_version)

    status, body = render_swagger_json(snapshot, settings)
    if status != 200:
        raise click.ClickException(body["error"])

    text = _dump(body, fmt)
    if output is None:
        click.echo(text, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    click.echo(f"Wrote {len(body['paths'])} paths to {output}", err=True)


@main.command()
@click.argument("flows_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def routes(flows_path: Path):
    """List the documented routes in a flow export."""
    snapshot, _ = _load_inputs(flows_path, None)
    documented = collect_routes(snapshot)

    for item in documented:
        click.echo(f"{item.route.method.upper():7} {convert_path(item.route.url_template)}  ({item.doc.id})")
    click.echo(f"{len(documented)} documented of {len(snapshot.routes)} routes.", err=True)
