"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from crafty.core.result import Err, Result
from crafty.output.errors import error_exit_code, print_error

if TYPE_CHECKING:
    from crafty.ci.errors import CiError
    from crafty.cli.context import CLIContext
    from crafty.services.errors import PackageError


def fail(error: PackageError | CiError, ctx: CLIContext) -> NoReturn:
    print_error(error, ctx.console)
    raise typer.Exit(code=error_exit_code(error))


def exit_on_error[T](result: Result[T, PackageError] | Result[T, CiError], ctx: CLIContext) -> T:
    """Return the Ok value, or print the error and exit with its code."""
    if isinstance(result, Err):
        fail(result.error, ctx)
    return result.value
