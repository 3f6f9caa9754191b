"""Typed configuration loading.

The config file is optional. Every field has a default matching the
upstream ArchCraft repository, so crafty works with no file at all:

    [repo]
    tree_url = "https://github.com/archcraft-os/pkgs/tree/main/x86_64"
    raw_url = "https://github.com/archcraft-os/pkgs/raw/refs/heads/main/x86_64/"

    [paths]
    download_dir = "/tmp"
    database = "~/.config/.crafty/installed.json"

    [network]
    timeout = 30

    [pacman]
    sudo = true
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from crafty.platform.paths import default_database_path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_number, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "NetworkConfig",
    "PacmanConfig",
    "PathsConfig",
    "RepoConfig",
    "DEFAULT_TREE_URL",
    "DEFAULT_RAW_URL",
    "load_config",
    "load_config_or_default",
]

DEFAULT_TREE_URL = "https://github.com/archcraft-os/pkgs/tree/main/x86_64"
DEFAULT_RAW_URL = "https://github.com/archcraft-os/pkgs/raw/refs/heads/main/x86_64/"
DEFAULT_DOWNLOAD_DIR = "/tmp"
DEFAULT_TIMEOUT_SECONDS = 30


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None

    @property
    def hint(self) -> str | None:
        return str(self.path) if self.path is not None else None


@dataclass(frozen=True, slots=True)
class RepoConfig:
    """Where the package index and archives live."""

    tree_url: str = DEFAULT_TREE_URL
    raw_url: str = DEFAULT_RAW_URL

    def archive_url(self, filename: str) -> str:
        base = self.raw_url if self.raw_url.endswith("/") else f"{self.raw_url}/"
        return f"{base}{filename}"


@dataclass(frozen=True, slots=True)
class PathsConfig:
    download_dir: Path = Path(DEFAULT_DOWNLOAD_DIR)
    database: Path = field(default_factory=default_database_path)


@dataclass(frozen=True, slots=True)
class NetworkConfig:
    timeout: float = float(DEFAULT_TIMEOUT_SECONDS)


@dataclass(frozen=True, slots=True)
class PacmanConfig:
    sudo: bool = True


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    repo: RepoConfig = field(default_factory=RepoConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    pacman: PacmanConfig = field(default_factory=PacmanConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Missing keys take their defaults. A key that is present with the
        wrong type raises TypeError.
        """
        repo = _section(data, "repo")
        paths = _section(data, "paths")
        network = _section(data, "network")
        pacman = _section(data, "pacman")

        tree_url = _checked(repo, "repo", "tree_url", get_str, "a non-empty string")
        raw_url = _checked(repo, "repo", "raw_url", get_str, "a non-empty string")
        download_dir = _checked(paths, "paths", "download_dir", get_str, "a non-empty string")
        database = _checked(paths, "paths", "database", get_str, "a non-empty string")
        timeout = _checked(network, "network", "timeout", get_number, "a number")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"network.timeout must be positive, got {timeout}")
        sudo = _checked(pacman, "pacman", "sudo", get_bool, "a boolean")

        return cls(
            repo=RepoConfig(
                tree_url=tree_url or DEFAULT_TREE_URL,
                raw_url=raw_url or DEFAULT_RAW_URL,
            ),
            paths=PathsConfig(
                download_dir=Path(download_dir).expanduser()
                if download_dir
                else Path(DEFAULT_DOWNLOAD_DIR),
                database=Path(database).expanduser() if database else default_database_path(),
            ),
            network=NetworkConfig(
                timeout=timeout if timeout is not None else float(DEFAULT_TIMEOUT_SECONDS)
            ),
            pacman=PacmanConfig(sudo=True if sudo is None else sudo),
        )


def _section(data: Mapping[str, object], key: str) -> StrDict:
    if key not in data:
        return {}
    table = get_table(data, key)
    if table is None:
        raise TypeError(f"[{key}] must be a table, got {type(data[key]).__name__}")
    return table


def _checked[T](
    table: StrDict,
    section: str,
    key: str,
    getter: Callable[[Mapping[str, object], str], T | None],
    expected: str,
) -> T | None:
    value = getter(table, key)
    if value is None and key in table:
        raise TypeError(f"{section}.{key} must be {expected}, got {type(table[key]).__name__}")
    return value


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Like load_config, but a missing file yields the defaults."""
    if not path.exists():
        return Ok(Config())
    return load_config(path)
