"""Platform layer: paths, subprocesses, files."""

from .files import atomic_write_text
from .paths import default_config_path, default_database_path, home, user_config_dir
from .process import ProcessError, run, run_silent

__all__ = [
    # files
    "atomic_write_text",
    # paths
    "default_config_path",
    "default_database_path",
    "home",
    "user_config_dir",
    # process
    "ProcessError",
    "run",
    "run_silent",
]
