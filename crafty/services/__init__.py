"""Package management services."""

from .database import PackageDb
from .errors import PackageError
from .packages import PackageService, UpgradeReport

__all__ = [
    "PackageDb",
    "PackageError",
    "PackageService",
    "UpgradeReport",
]
