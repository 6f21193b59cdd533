"""gqlbundle command-line interface (CLI).

This module defines the Typer application entry points exposed by gqlbundle.
Commands are thin wrappers around implementations in `gqlbundle.commands.*`.
"""

from pathlib import Path

import typer
from loguru import logger

from gqlbundle import __version__
from gqlbundle.commands.build import FORMATS
from gqlbundle.commands.build import build as build_cmd
from gqlbundle.commands.inspect import inspect as inspect_cmd

app = typer.Typer(help="gqlbundle: compose GraphQL schema modules")


def version_callback(value: bool) -> None:
    """Print the version and exit when ``--version`` is given."""
    if value:
        typer.echo(f"gqlbundle version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show the version and exit",
        callback=version_callback,
        is_eager=True,
    ),
):
    """Compose GraphQL schema modules into one schema and resolver map."""
    logger.enable("gqlbundle")


@app.command()
def build(
    target: str = typer.Argument(..., help="Module tree to bundle, as 'package.module:attribute'"),
    options: Path | None = typer.Option(
        None,
        "--options",
        "-o",
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="YAML file with bundling options (root-keys)",
    ),
    output: Path | None = typer.Option(None, "--output", help="Write the result to this file instead of stdout"),
    output_format: str = typer.Option("sdl", "--format", "-f", help=f"Output format: {', '.join(FORMATS)}"),
):
    """Bundle schema modules and print the resulting SDL.

    Parameters
    ----------
    target:
        Import path of the module tree, e.g. ``app.schema:modules``.
    options:
        Optional YAML options file.
    output:
        Optional output file.
    output_format:
        ``sdl`` or ``json``.
    """
    if output_format not in FORMATS:
        raise typer.BadParameter(f"must be one of {', '.join(FORMATS)}", param_hint="--format")
    if not build_cmd(target, options, output, output_format, search_path=Path.cwd()):
        raise typer.Exit(code=1)


@app.command()
def inspect(
    target: str = typer.Argument(..., help="Module tree to inspect, as 'package.module:attribute'"),
):
    """Show the resolved module order and what each module contributes.

    Parameters
    ----------
    target:
        Import path of the module tree, e.g. ``app.schema:modules``.
    """
    if not inspect_cmd(target, search_path=Path.cwd()):
        raise typer.Exit(code=1)
