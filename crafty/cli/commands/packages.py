"""Package commands: install, upgrade, search, remove, list."""

from __future__ import annotations

import typer

from crafty.cli.commands._helpers import exit_on_error
from crafty.cli.context import build_context
from crafty.core.errors import ErrorCode
from crafty.output.console import Style
from crafty.output.errors import error_exit_code
from crafty.services.packages import PackageService


def install(
    package: str = typer.Argument(..., help="Package name, with or without 'archcraft-'"),
) -> None:
    """Install a package from ArchCraft GitHub."""
    ctx = build_context()
    service = PackageService(config=ctx.config, http=ctx.http, console=ctx.console)
    exit_on_error(service.install(package), ctx)


def upgrade(
    package: str | None = typer.Argument(None, help="Package to upgrade (default: all)"),
) -> None:
    """Upgrade a previously installed package (or all of them)."""
    ctx = build_context()
    service = PackageService(config=ctx.config, http=ctx.http, console=ctx.console)
    report = exit_on_error(service.upgrade(package), ctx)

    if report.failed:
        ctx.console.newline()
        ctx.console.error(f"{len(report.failed)} package(s) failed to upgrade")
        for name, error in report.failed:
            ctx.console.print(f"  {name}: {error.message}", Style.DIM)
        raise typer.Exit(code=error_exit_code(report.failed[0][1]))


def search(
    keyword: str = typer.Argument(..., help="Case-insensitive substring of the package name"),
) -> None:
    """Search for a package in the ArchCraft GitHub repository."""
    ctx = build_context()
    service = PackageService(config=ctx.config, http=ctx.http, console=ctx.console)

    ctx.console.print(f"Searching for '{keyword}' in ArchCraft GitHub...")
    found = exit_on_error(service.search(keyword), ctx)
    if not found:
        ctx.console.print(f"No packages found for '{keyword}'")
        return

    ctx.console.print("Found packages:")
    for name in found:
        ctx.console.item(name)


def remove(package: str = typer.Argument(..., help="Installed package name")) -> None:
    """Remove a package from the system."""
    ctx = build_context()
    service = PackageService(config=ctx.config, http=ctx.http, console=ctx.console)
    exit_on_error(service.remove(package), ctx)


def list_packages() -> None:
    """List all packages available in the ArchCraft GitHub repository."""
    ctx = build_context()
    service = PackageService(config=ctx.config, http=ctx.http, console=ctx.console)

    ctx.console.print("Fetching package list from ArchCraft GitHub...")
    packages = exit_on_error(service.list_packages(), ctx)
    if not packages:
        ctx.console.error("Failed to fetch package list.")
        raise typer.Exit(code=int(ErrorCode.NETWORK_ERROR))

    ctx.console.print(f"Available packages ({len(packages)} total):")
    for name in packages:
        ctx.console.item(name)
