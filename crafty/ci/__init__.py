"""CI automation: build-and-test, then an automated release on main."""

from .errors import CiError
from .events import CiEvent, CiPlan, is_triggered, plan, should_release
from .pipeline import DEFAULT_STEPS, BuildStep, run_build
from .release import ReleaseSpec, create_release, short_sha

__all__ = [
    "CiError",
    "CiEvent",
    "CiPlan",
    "is_triggered",
    "plan",
    "should_release",
    "BuildStep",
    "DEFAULT_STEPS",
    "run_build",
    "ReleaseSpec",
    "create_release",
    "short_sha",
]
