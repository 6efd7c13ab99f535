"""
Command-line interface for graphql_http.

Serve an SDL schema over GraphQL-over-HTTP, send queries to an endpoint and
render the GraphQL Playground page.
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
from graphql import GraphQLError, build_schema

from .. import __version__
from ..client import gql_fetch
from ..config import ConfigLoader, ConfigLoadError, LogLevel
from ..exceptions import (
    GraphQLHTTPException,
    GraphQLRequestFailedError,
    SchemaValidationError,
)
from ..logging import setup_logging
from ..playground import PlaygroundOptions, render_playground_page
from ..server import create_app, run_server


def _parse_json_object(value: Optional[str], name: str) -> Optional[Dict[str, Any]]:
    if value is None:
        return None
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"invalid JSON: {e}", param_hint=name)
    if not isinstance(parsed, dict):
        raise click.BadParameter("must be a JSON object", param_hint=name)
    return parsed


@click.group()
@click.version_option(version=__version__, prog_name="graphql-http")
def cli() -> None:
    """GraphQL-over-HTTP server and client tools."""
    pass


@cli.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--host", default=None, help="Interface to bind")
@click.option("--port", "-p", type=int, default=None, help="Port to listen on")
@click.option("--path", default=None, help="GraphQL endpoint path")
@click.option("--playground/--no-playground", default=None, help="Serve GraphQL Playground")
@click.option("--root-value", default=None, help="Root value as a JSON object")
@click.option("--config", "-c", "config_file", type=click.Path(exists=True), help="Configuration file path")
@click.option(
    "--log-level",
    type=click.Choice([level.value for level in LogLevel], case_sensitive=False),
    default=None,
    help="Logging level",
)
def serve(
    schema_file: Path,
    host: Optional[str],
    port: Optional[int],
    path: Optional[str],
    playground: Optional[bool],
    root_value: Optional[str],
    config_file: Optional[str],
    log_level: Optional[str],
) -> None:
    """Serve the SDL schema in SCHEMA_FILE over HTTP."""
    try:
        config = ConfigLoader().load_config(config_file)
    except ConfigLoadError as e:
        raise click.ClickException(e.message)

    if host is not None:
        config.server.host = host
    if port is not None:
        config.server.port = port
    if path is not None:
        config.server.path = path if path.startswith("/") else f"/{path}"
    if playground is not None:
        config.playground.enabled = playground
    if log_level is not None:
        config.logging.level = LogLevel(log_level.upper())

    setup_logging(config.logging)

    try:
        schema = build_schema(schema_file.read_text(encoding="utf-8"))
    except GraphQLError as e:
        raise click.ClickException(f"Invalid schema: {e.message}")

    try:
        app = create_app(
            schema,
            path=config.server.path,
            root_value=_parse_json_object(root_value, "--root-value"),
            playground=config.playground.enabled,
            playground_options=config.playground.to_options(config.server.path),
        )
    except SchemaValidationError as e:
        raise click.ClickException(e.message)

    click.echo(
        f"✓ Serving {schema_file.name} at "
        f"http://{config.server.host}:{config.server.port}{config.server.path}"
    )
    if config.playground.enabled:
        click.echo("  Playground enabled")

    run_server(app, host=config.server.host, port=config.server.port)


@cli.command()
@click.argument("url")
@click.argument("query")
@click.option("--variables", "-v", default=None, help="Variables as a JSON object")
@click.option("--operation-name", "-o", default=None, help="Operation to execute")
@click.option(
    "--method",
    "-m",
    type=click.Choice(["GET", "POST"], case_sensitive=False),
    default="POST",
    help="HTTP method",
)
@click.option("--header", "-H", "headers", multiple=True, help="Extra header as 'Name: value'")
@click.option("--timeout", "-t", type=float, default=30.0, help="Request timeout in seconds")
def query(
    url: str,
    query: str,
    variables: Optional[str],
    operation_name: Optional[str],
    method: str,
    headers: tuple,
    timeout: float,
) -> None:
    """Send QUERY to the GraphQL endpoint at URL and print the result."""
    extra_headers: Dict[str, str] = {}
    for header in headers:
        name, sep, value = header.partition(":")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected 'Name: value', got {header!r}", param_hint="--header")
        extra_headers[name.strip()] = value.strip()

    try:
        result = asyncio.run(
            gql_fetch(
                url,
                query,
                variables=_parse_json_object(variables, "--variables"),
                operation_name=operation_name,
                method=method.upper(),
                headers=extra_headers,
                timeout=timeout,
            )
        )
    except GraphQLRequestFailedError as e:
        click.echo(f"✗ {e.message} (status {e.status})", err=True)
        click.echo(json.dumps({"errors": e.errors}, indent=2))
        sys.exit(1)
    except GraphQLHTTPException as e:
        click.echo(f"✗ {e.message}", err=True)
        sys.exit(1)
    except ValueError as e:
        click.echo(f"✗ Invalid response: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(result, indent=2, ensure_ascii=False))


@cli.command()
@click.option("--endpoint", "-e", default="/graphql", help="GraphQL endpoint URL")
@click.option("--title", default="GraphQL Playground", help="Page title")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write the page to a file")
def playground(endpoint: str, title: str, output: Optional[Path]) -> None:
    """Render the GraphQL Playground page."""
    page = render_playground_page(PlaygroundOptions(endpoint=endpoint, title=title))
    if output is None:
        click.echo(page)
        return

    output.write_text(page, encoding="utf-8")
    click.echo(f"✓ Playground page written to {output}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
