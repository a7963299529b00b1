import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import rich_click as click
from graphql import GraphQLSchema
from rich.traceback import install

from gql_drift import __version__, log
from gql_drift.codegen import write_module
from gql_drift.config import (
    ALL_TYPES,
    CONFIG_FILES,
    DEFAULT_DEPTH,
    DEFAULT_OUT_DIR,
    DriftCliConfig,
    load_config_file,
    merge_config,
)
from gql_drift.core.drift import resolve_type
from gql_drift.core.types import DriftConfig, ResolvedType
from gql_drift.discovery import discover_types_from_endpoint, discover_types_from_schema, filter_type_names
from gql_drift.errors import DriftError
from gql_drift.schema_loader import load_schema_from_file, resolve_type_from_schema

STARTER_CONFIG: dict[str, Any] = {
    "endpoint": "http://localhost:4000/graphql",
    "types": [],
    "out": DEFAULT_OUT_DIR,
    "depth": DEFAULT_DEPTH,
}


def split_list(value: str | None) -> list[str] | None:
    """Split a comma-separated option value, dropping blanks."""
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_headers(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for value in values:
        name, sep, header_value = value.partition(":")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected 'Name: value', got '{value}'", ctx=ctx, param=param)
        headers[name.strip()] = header_value.strip()
    return headers


def parse_types(value: str | None) -> list[str] | str | None:
    if value is None:
        return None
    if value.strip() == ALL_TYPES:
        return ALL_TYPES
    return split_list(value)


endpoint_option = click.option(
    "--endpoint",
    "-e",
    type=str,
    help="GraphQL endpoint URL to introspect",
)


schema_option = click.option(
    "--schema",
    "-s",
    type=click.Path(exists=True, path_type=Path),
    help="Local GraphQL schema file or directory, used instead of an endpoint",
)


exclude_option = click.option(
    "--exclude",
    "-x",
    type=str,
    help="Comma-separated glob patterns of types to skip when discovering all types",
)


header_option = click.option(
    "--header",
    "-H",
    "headers",
    multiple=True,
    callback=parse_headers,
    help="HTTP header as 'Name: value'. Can be specified multiple times.",
)


def load_cli_config(cli_args: dict[str, Any]) -> DriftCliConfig:
    config = merge_config(load_config_file(Path.cwd()), cli_args)
    if not config.endpoint and not config.schema_path:
        raise click.UsageError("Either --endpoint or --schema is required (or set one in the config file).")
    return config


def to_drift_config(config: DriftCliConfig) -> DriftConfig:
    return DriftConfig(endpoint=config.endpoint or "", headers=config.headers, max_depth=config.depth)


def select_types(config: DriftCliConfig, discovered: list[str]) -> list[str]:
    if config.types == ALL_TYPES:
        return filter_type_names(discovered, config.exclude)
    return list(config.types)


def resolve_from_schema(config: DriftCliConfig, schema: GraphQLSchema) -> list[ResolvedType]:
    discovered = discover_types_from_schema(schema) if config.types == ALL_TYPES else []
    return [
        resolve_type_from_schema(type_name, schema, max_depth=config.depth)
        for type_name in select_types(config, discovered)
    ]


async def resolve_from_endpoint(config: DriftCliConfig) -> list[ResolvedType]:
    drift_config = to_drift_config(config)
    discovered = await discover_types_from_endpoint(drift_config) if config.types == ALL_TYPES else []
    return [await resolve_type(type_name, drift_config) for type_name in select_types(config, discovered)]


@click.group(context_settings={"auto_envvar_prefix": "gql_drift"})
@click.option(
    "-l",
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="INFO",
    help="Log level",
    show_default=True,
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Log file",
)
@click.version_option(__version__)
def cli(log_level: str, log_file: Path | None) -> None:
    """Generate static field registries from a GraphQL schema."""
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(message)s"))
        log.addHandler(file_handler)

    log.setLevel(log_level.upper())
    if log_level.upper() == "DEBUG":
        _ = install(show_locals=True)


@cli.command()
def init() -> None:
    """Write a starter gql-drift.config.json in the current directory."""
    path = Path.cwd() / CONFIG_FILES[0]
    if path.exists():
        raise click.ClickException(f"{path.name} already exists")

    path.write_text(json.dumps(STARTER_CONFIG, indent=2) + "\n", encoding="utf-8")
    log.success(f"Created {path.name}")
    log.hint("Set the endpoint (or a schema path) and the types to generate, then run 'gql-drift generate'")


@cli.command()
@endpoint_option
@schema_option
@click.option(
    "--types",
    "-t",
    type=str,
    help="Comma-separated type names to generate, or '*' for every object type",
)
@exclude_option
@click.option(
    "--out",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    help=f"Output directory [default: {DEFAULT_OUT_DIR}]",
)
@click.option(
    "--depth",
    "-d",
    type=click.IntRange(min=0),
    help=f"Max nesting depth for object fields [default: {DEFAULT_DEPTH}]",
)
@header_option
def generate(
    endpoint: str | None,
    schema: Path | None,
    types: str | None,
    exclude: str | None,
    out: Path | None,
    depth: int | None,
    headers: dict[str, str],
) -> None:
    """Generate one registry module per GraphQL type.

    Args:
        endpoint: GraphQL endpoint URL
        schema: Local schema file or directory
        types: Type names, comma-separated, or '*'
        exclude: Glob patterns removing types when all types are generated
        out: Output directory
        depth: Max nesting depth
        headers: HTTP headers for endpoint introspection
    """
    try:
        config = load_cli_config(
            {
                "endpoint": endpoint,
                "schema": str(schema) if schema else None,
                "types": parse_types(types),
                "exclude": split_list(exclude),
                "out": str(out) if out else None,
                "depth": depth,
                "headers": headers,
            }
        )
        if not config.types:
            raise click.UsageError("No types given. Pass --types or set 'types' in the config file.")

        if config.schema_path:
            log.info(f"Reading schema from {config.schema_path}")
            resolved_types = resolve_from_schema(config, load_schema_from_file(Path(config.schema_path)))
        else:
            log.info(f"Introspecting {config.endpoint}")
            resolved_types = asyncio.run(resolve_from_endpoint(config))
    except DriftError as e:
        raise click.ClickException(str(e)) from e

    out_dir = Path(config.out)
    log.rule(f"Generating {len(resolved_types)} type(s) into {out_dir}")
    for resolved in resolved_types:
        path = write_module(resolved, out_dir)
        mutations = ", ".join(resolved.mutations.values()) or "none"
        log.success(
            f"{resolved.type_name} -> {path.name} "
            f"({len(resolved.fields)} fields, {len(resolved.editable_fields or [])} editable)"
        )
        log.key_value("  mutations", mutations)

    log.success(f"Generated {len(resolved_types)} module(s) in {out_dir}")


@cli.command()
@endpoint_option
@schema_option
@exclude_option
@header_option
def discover(endpoint: str | None, schema: Path | None, exclude: str | None, headers: dict[str, str]) -> None:
    """List the object types of a schema, minus root and introspection types."""
    try:
        config = load_cli_config(
            {
                "endpoint": endpoint,
                "schema": str(schema) if schema else None,
                "exclude": split_list(exclude),
                "headers": headers,
            }
        )
        if config.schema_path:
            type_names = discover_types_from_schema(load_schema_from_file(Path(config.schema_path)))
        else:
            type_names = asyncio.run(discover_types_from_endpoint(to_drift_config(config)))
    except DriftError as e:
        raise click.ClickException(str(e)) from e

    type_names = filter_type_names(type_names, config.exclude)
    log.rule(f"Discovered {len(type_names)} object type(s)")
    for type_name in type_names:
        log.list_item(type_name)


if __name__ == "__main__":
    cli()
