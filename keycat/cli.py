#!/usr/bin/env python3
"""Main CLI entry point for the KeyCat tool.

This module provides a Click CLI interface to inspect the key type
catalogue, check key sizes and manage the size configuration.
"""

import json
import logging
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from keycat import __version__
from keycat.catalog import KeyTypeCatalog, get_catalog
from keycat.codec import key_type_from_name
from keycat.config import apply as apply_config
from keycat.config import create as create_config
from keycat.config import init as init_config
from keycat.config import validate as validate_config
from keycat.models import KeyTypeDescriptor
from keycat.paths import get_config_file_path, get_log_path, resolve_config_dir
from keycat.result import Failure
from keycat.types import KeyType


def _setup_logging(log_file: Path | None, level: str = "INFO") -> None:
    """Initializes logging for the application."""
    if log_file is None:
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level),
        format="[%(asctime)s] [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _descriptor_dict(descriptor: KeyTypeDescriptor, catalog: KeyTypeCatalog) -> dict[str, Any]:
    return {
        "identifier": descriptor.identifier.value,
        "code": descriptor.code,
        "name": descriptor.display_name,
        "default_size": descriptor.default_size,
        "current_size": catalog.current_size(descriptor.identifier),
        "acceptable_sizes": list(descriptor.acceptable_sizes),
        "output_size": descriptor.output_size,
    }


def _resolve_key_type(ctx: click.Context, name: str) -> KeyType:
    """Resolve a key type argument or exit with an error."""
    result = key_type_from_name(name)
    if isinstance(result, Failure):
        ctx.obj["console"].print(f"[bold red]Error:[/bold red] {result.error}")
        ctx.exit(1)
    return result.unwrap()


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    help="Path to configuration directory",
    envvar="KEYCAT_CONFIG_DIR",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write log messages to this file (default: keycat.log in the configuration directory)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None = None, log_file: Path | None = None) -> None:
    """KeyCat - inspect key types, key sizes and serialization codes."""
    ctx.ensure_object(dict)
    ctx.obj["console"] = Console()
    console = ctx.obj["console"]

    config_dir = resolve_config_dir(config_path)
    ctx.obj["config_dir"] = config_dir
    catalog = get_catalog()
    ctx.obj["catalog"] = catalog

    # `config` subcommands work on the file itself
    if ctx.invoked_subcommand == "config" or not get_config_file_path(config_dir).exists():
        _setup_logging(log_file)
        return

    config_result = init_config(config_dir)
    if isinstance(config_result, Failure):
        console.print(f"[bold red]Error:[/bold red] {config_result.error}")
        ctx.exit(1)
    app_config = config_result.unwrap()
    _setup_logging(log_file or get_log_path(config_dir), app_config.logging.level.value)

    applied = apply_config(app_config, catalog)
    if isinstance(applied, Failure):
        for error in applied.error:
            console.print(f"[bold red]Error:[/bold red] {error}")
        ctx.exit(1)


@cli.command(name="list")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.pass_context
def list_types(ctx: click.Context, json_output: bool) -> None:
    """List all key types."""
    catalog = ctx.obj["catalog"]
    console = ctx.obj["console"]

    if json_output:
        click.echo(json.dumps([_descriptor_dict(d, catalog) for d in catalog.descriptors()], indent=2))
        return

    table = Table(title="Key Types")
    table.add_column("Code", justify="right")
    table.add_column("Identifier")
    table.add_column("Name")
    table.add_column("Current Size", justify="right")
    table.add_column("Acceptable Sizes")
    table.add_column("Output Size", justify="right")

    for descriptor in catalog.descriptors():
        table.add_row(
            str(descriptor.code),
            descriptor.identifier.value,
            descriptor.display_name,
            str(catalog.current_size(descriptor.identifier)),
            ", ".join(str(s) for s in descriptor.acceptable_sizes),
            str(descriptor.output_size),
        )

    console.print(table)


@cli.command()
@click.argument("key_type")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.pass_context
def show(ctx: click.Context, key_type: str, json_output: bool) -> None:
    """Show details of a key type (identifier or name)."""
    catalog = ctx.obj["catalog"]
    console = ctx.obj["console"]
    identifier = _resolve_key_type(ctx, key_type)
    info = _descriptor_dict(catalog.descriptor(identifier), catalog)

    if json_output:
        click.echo(json.dumps(info, indent=2))
        return

    console.print(f"[bold]{info['name']}[/bold] ({info['identifier']})")
    console.print(f"Code: {info['code']}")
    console.print(f"Default size: {info['default_size']}")
    console.print(f"Current size: {info['current_size']}")
    console.print(f"Acceptable sizes: {', '.join(str(s) for s in info['acceptable_sizes'])}")
    console.print(f"Output size: {info['output_size']}")


@cli.command()
@click.argument("code", type=int)
@click.pass_context
def lookup(ctx: click.Context, code: int) -> None:
    """Find the key type for a serialization code."""
    catalog = ctx.obj["catalog"]
    console = ctx.obj["console"]

    result = catalog.identifier_of(code)
    if isinstance(result, Failure):
        console.print(f"[bold red]Error:[/bold red] {result.error}")
        ctx.exit(1)
    identifier = result.unwrap()
    console.print(f"{code}: {identifier.value} ({catalog.display_name(identifier)})")


@cli.command()
@click.argument("key_type")
@click.argument("size", type=int)
@click.pass_context
def check(ctx: click.Context, key_type: str, size: int) -> None:
    """Check whether SIZE is an acceptable key size for KEY_TYPE."""
    catalog = ctx.obj["catalog"]
    console = ctx.obj["console"]
    identifier = _resolve_key_type(ctx, key_type)

    result = catalog.resolve_size(identifier, size)
    if isinstance(result, Failure):
        console.print(f"[bold red]Error:[/bold red] {result.error}")
        ctx.exit(1)
    console.print(f"✅ {size} is an acceptable key size for {catalog.display_name(identifier)}")


# Configuration commands
@cli.group()
def config() -> None:
    """Manage the configuration file."""
    pass


@config.command(name="init")
@click.option("--force", is_flag=True, help="Force overwrite of existing config file")
@click.pass_context
def config_init(ctx: click.Context, force: bool) -> None:
    """Initialize the configuration file."""
    console = ctx.obj["console"]
    result = create_config(ctx.obj["config_dir"], force)
    if isinstance(result, Failure):
        console.print(f"[bold red]Error:[/bold red] {result.error}")
        ctx.exit(1)
    console.print("✅ Configuration initialized successfully")


@config.command(name="validate")
@click.pass_context
def config_validate(ctx: click.Context) -> None:
    """Validate the configuration file."""
    result = validate_config(ctx.obj["config_dir"])
    if isinstance(result, Failure):
        ctx.exit(1)


def main() -> None:
    """Run the CLI."""
    cli()


if __name__ == "__main__":
    main()
