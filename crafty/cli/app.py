from __future__ import annotations

import os
from pathlib import Path

import typer

from crafty import __version__
from crafty.cli.commands.ci_cmd import ci_app
from crafty.cli.commands.packages import install, list_packages, remove, search, upgrade
from crafty.core.errors import ErrorCode

app = typer.Typer(
    name="crafty",
    help="Tool to manage ArchCraft packages from GitHub",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(install)
app.command()(upgrade)
app.command()(search)
app.command()(remove)
app.command("list")(list_packages)

# Sub-apps
app.add_typer(ci_app, name="ci")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: ~/.config/crafty/config.toml)",
    ),
) -> None:
    if config is not None:
        path = config.expanduser()
        if not path.is_file():
            typer.echo(f"error: --config '{path}' does not exist", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        os.environ["CRAFTY_CONFIG"] = str(path)


def main() -> None:
    app()
