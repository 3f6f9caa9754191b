"""Release job: tag every push to main as ``auto-<short sha>``."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from crafty.ci.errors import CiError
from crafty.ci.timeouts import GH_TIMEOUT_SECONDS, GIT_TIMEOUT_SECONDS
from crafty.core.result import Err, Ok, Result
from crafty.platform.process import run as run_process

__all__ = [
    "ReleaseSpec",
    "TAG_PREFIX",
    "create_release",
    "ensure_gh_available",
    "gh_release_cmd",
    "short_sha",
]

TAG_PREFIX = "auto-"


@dataclass(frozen=True, slots=True)
class ReleaseSpec:
    tag: str
    title: str
    notes: str

    @classmethod
    def for_sha(cls, sha: str) -> ReleaseSpec:
        return cls(
            tag=f"{TAG_PREFIX}{sha}",
            title=f"Automated Release {sha}",
            notes=f"Automated release for commit {sha}.",
        )


def short_sha(*, cwd: Path) -> Result[str, CiError]:
    result = run_process(
        ["git", "rev-parse", "--short", "HEAD"], cwd=cwd, timeout=GIT_TIMEOUT_SECONDS
    )
    if isinstance(result, Err):
        return Err(
            CiError(
                kind="git_failed",
                message="failed to resolve HEAD",
                hint=result.error.stderr.strip() or str(result.error),
            )
        )

    sha = result.value.strip()
    if not sha:
        return Err(CiError(kind="git_failed", message="git rev-parse returned no commit"))
    return Ok(sha)


def ensure_gh_available() -> Result[None, CiError]:
    if shutil.which("gh") is None:
        return Err(
            CiError(
                kind="gh_missing",
                message="gh: missing",
                hint="Install GitHub CLI: https://cli.github.com/",
            )
        )
    return Ok(None)


def gh_release_cmd(spec: ReleaseSpec) -> list[str]:
    return [
        "gh",
        "release",
        "create",
        spec.tag,
        "--title",
        spec.title,
        "--notes",
        spec.notes,
    ]


def create_release(spec: ReleaseSpec, *, cwd: Path, token: str | None) -> Result[str, CiError]:
    """Create the release; returns whatever gh prints (the release URL)."""
    gh = ensure_gh_available()
    if isinstance(gh, Err):
        return gh

    if not token:
        return Err(
            CiError(
                kind="token_missing",
                message="GITHUB_TOKEN is not set",
                hint="Pass the workflow token: env: GITHUB_TOKEN: ${{ secrets.GITHUB_TOKEN }}",
            )
        )

    result = run_process(
        gh_release_cmd(spec),
        cwd=cwd,
        env={"GITHUB_TOKEN": token},
        timeout=GH_TIMEOUT_SECONDS,
    )
    if isinstance(result, Err):
        return Err(
            CiError(
                kind="release_failed",
                message=f"gh release create failed: {spec.tag}",
                hint=result.error.stderr.strip() or str(result.error),
            )
        )
    return Ok(result.value.strip())
