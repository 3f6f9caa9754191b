"""CI commands, driven from .github/workflows/ci.yml.

    crafty ci plan              # which jobs run for $GITHUB_EVENT_NAME/$GITHUB_REF
    crafty ci build             # build-and-test job
    crafty ci release           # release job (gated to pushes on main)
    crafty ci run               # build, then release when gated
"""

from __future__ import annotations

import os
from pathlib import Path

import typer

from crafty.ci.events import MAIN_BRANCH, CiEvent, plan, should_release
from crafty.ci.pipeline import run_build
from crafty.ci.release import ReleaseSpec, create_release, short_sha
from crafty.cli.commands._helpers import exit_on_error
from crafty.cli.context import CLIContext, build_context
from crafty.output.console import Style

ci_app = typer.Typer(
    name="ci",
    help="Build, test and release automation.",
    no_args_is_help=True,
)

_BRANCH_OPT = typer.Option(MAIN_BRANCH, "--branch", help="Branch that triggers CI")
_ROOT_OPT = typer.Option(
    Path("."),
    "--root",
    help="Repository checkout",
    file_okay=False,
    dir_okay=True,
)


def _current_event() -> CiEvent:
    return CiEvent.from_env(os.environ)


def _release(
    ctx: CLIContext,
    *,
    root: Path,
    branch: str,
    dry_run: bool,
    force: bool,
) -> None:
    event = _current_event()
    if not force and not should_release(event, branch):
        ctx.console.print(f"release skipped: {event} is not a push to {branch}", Style.DIM)
        return

    sha = exit_on_error(short_sha(cwd=root), ctx)
    spec = ReleaseSpec.for_sha(sha)

    ctx.console.header(f"Release {spec.tag}")
    ctx.console.print(f"title: {spec.title}", Style.DIM)
    ctx.console.print(f"notes: {spec.notes}", Style.DIM)
    if dry_run:
        ctx.console.info("dry-run: release not created")
        return

    url = exit_on_error(
        create_release(spec, cwd=root, token=os.environ.get("GITHUB_TOKEN")),
        ctx,
    )
    ctx.console.success(f"created release {spec.tag}")
    if url:
        ctx.console.print(url, Style.DIM)


@ci_app.command("plan")
def plan_cmd(branch: str = _BRANCH_OPT) -> None:
    """Show which jobs run for the current event."""
    ctx = build_context()
    event = _current_event()
    jobs = plan(event, branch).jobs

    ctx.console.print(f"event: {event}")
    if not jobs:
        ctx.console.print("no jobs", Style.DIM)
        return
    for job in jobs:
        ctx.console.item(job)


@ci_app.command()
def build(root: Path = _ROOT_OPT) -> None:
    """Run the build-and-test job."""
    ctx = build_context()
    exit_on_error(run_build(cwd=root, console=ctx.console), ctx)


@ci_app.command()
def release(
    root: Path = _ROOT_OPT,
    branch: str = _BRANCH_OPT,
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the release, create nothing"),
    force: bool = typer.Option(False, "--force", help="Release even if the event is not gated"),
) -> None:
    """Create the automated release for HEAD."""
    ctx = build_context()
    _release(ctx, root=root, branch=branch, dry_run=dry_run, force=force)


@ci_app.command()
def run(
    root: Path = _ROOT_OPT,
    branch: str = _BRANCH_OPT,
    dry_run: bool = typer.Option(False, "--dry-run", help="Build, but do not create the release"),
) -> None:
    """Build and test, then release when the event is a push to the branch."""
    ctx = build_context()
    exit_on_error(run_build(cwd=root, console=ctx.console), ctx)
    _release(ctx, root=root, branch=branch, dry_run=dry_run, force=False)
