"""CLI entry point for ironpass."""

from __future__ import annotations

import asyncio
import sys
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

import click
from pydantic import ValidationError

from ironpass import __version__
from ironpass.ansi import strip_escape_sequences
from ironpass.config import IronPassConfig
from ironpass.listing import parse_listing
from ironpass.log import setup_logging
from ironpass.paths import get_config_path
from ironpass.store import ListingResult, ListingStatus, PassError, PassStore

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

NO_MATCHES_EXIT = 1
FAILURE_EXIT = 2


def _load_config(config_path: Path | None) -> IronPassConfig:
    try:
        return IronPassConfig.load(config_path)
    except (ValidationError, tomllib.TOMLDecodeError) as exc:
        raise click.UsageError(f"Invalid configuration: {exc}") from exc


def _echo_result(result: ListingResult) -> None:
    if result.status is ListingStatus.NO_MATCHES:
        click.secho("No matching entries.", err=True, fg="yellow")
        sys.exit(NO_MATCHES_EXIT)
    for entry in result.entries:
        click.echo(entry)


def _run_store(
    config: IronPassConfig, request: Callable[[PassStore], Coroutine[Any, Any, ListingResult]]
) -> None:
    try:
        result = asyncio.run(request(PassStore(config)))
    except PassError as exc:
        click.secho(str(exc), err=True, fg="red")
        sys.exit(FAILURE_EXIT)
    _echo_result(result)


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version and exit")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="IRONPASS_CONFIG",
    help="Path to config.toml",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx: click.Context, version: bool, config_path: Path | None, verbose: bool) -> None:
    """Flatten password-store listings into entry paths."""
    if version:
        click.echo(f"ironpass {__version__}")
        ctx.exit(0)

    setup_logging(verbose)
    ctx.obj = config_path

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("terms", nargs=-1, required=True)
@click.pass_context
def find(ctx: click.Context, terms: tuple[str, ...]) -> None:
    """List entries whose names match TERMS."""
    _run_store(_load_config(ctx.obj), lambda store: store.find(*terms))


@cli.command(name="ls")
@click.argument("subfolder", required=False)
@click.pass_context
def ls_cmd(ctx: click.Context, subfolder: str | None) -> None:
    """List every entry in the store, or under SUBFOLDER."""
    _run_store(_load_config(ctx.obj), lambda store: store.ls(subfolder))


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8", errors="replace"), default="-")
@click.pass_context
def parse(ctx: click.Context, source: TextIO) -> None:
    """Flatten a captured listing read from SOURCE (default: stdin)."""
    config = _load_config(ctx.obj)
    entries = parse_listing(
        strip_escape_sequences(source.read()),
        header_prefixes=config.listing.header_prefixes,
    )
    for entry in entries:
        click.echo(entry)


@cli.group(name="config")
def config_group() -> None:
    """Inspect or create the configuration file."""


@config_group.command(name="path")
@click.pass_context
def config_path_cmd(ctx: click.Context) -> None:
    """Print the configuration file location."""
    click.echo(str(ctx.obj or get_config_path()))


@config_group.command(name="init")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def config_init(ctx: click.Context, force: bool) -> None:
    """Write the default configuration file."""
    path: Path = ctx.obj or get_config_path()
    if path.exists() and not force:
        raise click.ClickException(f"{path} already exists (use --force to overwrite)")
    asyncio.run(IronPassConfig().save(path))
    click.secho(f"Wrote {path}", fg="green")


if __name__ == "__main__":
    cli()
