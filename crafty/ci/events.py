"""Which CI jobs run for a given event.

The workflow reacts to two events on the main branch:

- ``push`` to ``refs/heads/main``: build-and-test, then release
- ``pull_request`` targeting ``main``: build-and-test only

Anything else runs nothing.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

__all__ = [
    "CiEvent",
    "CiPlan",
    "MAIN_BRANCH",
    "branch_ref",
    "is_triggered",
    "plan",
    "should_release",
]

MAIN_BRANCH = "main"

PUSH = "push"
PULL_REQUEST = "pull_request"


def branch_ref(branch: str) -> str:
    return f"refs/heads/{branch}"


@dataclass(frozen=True, slots=True)
class CiEvent:
    """A CI trigger.

    Attributes:
        name: Event name as GitHub reports it (``push``, ``pull_request``, ...)
        ref: Full git ref (``refs/heads/main``, ``refs/pull/7/merge``)
        base_ref: Target branch for pull requests, empty otherwise
    """

    name: str
    ref: str
    base_ref: str = ""

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> CiEvent:
        """Read the event from GitHub Actions' default environment."""
        return cls(
            name=environ.get("GITHUB_EVENT_NAME", ""),
            ref=environ.get("GITHUB_REF", ""),
            base_ref=environ.get("GITHUB_BASE_REF", ""),
        )

    @property
    def is_push(self) -> bool:
        return self.name == PUSH

    @property
    def is_pull_request(self) -> bool:
        return self.name == PULL_REQUEST

    def __str__(self) -> str:
        target = self.base_ref if self.is_pull_request else self.ref
        return f"{self.name or '<none>'} ({target or '<no ref>'})"


@dataclass(frozen=True, slots=True)
class CiPlan:
    build: bool
    release: bool

    @property
    def jobs(self) -> tuple[str, ...]:
        out: list[str] = []
        if self.build:
            out.append("build")
        if self.release:
            out.append("release")
        return tuple(out)


def is_triggered(event: CiEvent, branch: str = MAIN_BRANCH) -> bool:
    if event.is_push:
        return event.ref == branch_ref(branch)
    if event.is_pull_request:
        return event.base_ref == branch
    return False


def should_release(event: CiEvent, branch: str = MAIN_BRANCH) -> bool:
    """Release gate. Pull requests never release."""
    return event.is_push and event.ref == branch_ref(branch)


def plan(event: CiEvent, branch: str = MAIN_BRANCH) -> CiPlan:
    build = is_triggered(event, branch)
    # release depends on build, so it can only be planned alongside it
    return CiPlan(build=build, release=build and should_release(event, branch))
