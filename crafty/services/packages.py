"""Package operations: install, upgrade, search, remove, list.

The service owns the full install pipeline:

    index lookup -> download -> zstd check -> pacman -U
                                                 | failed
                                                 v
                                   unzstd -> pacman -U (plain tar)

and records successful installs in the ``PackageDb``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from crafty.core.config import Config
from crafty.core.result import Err, Ok, Result
from crafty.output.console import ConsoleProtocol, Style
from crafty.repo.http import HttpClient
from crafty.repo.index import fetch_index, find_package_file, package_files, search_packages
from crafty.repo.naming import PackageFile, installed_name, is_valid_zst
from crafty.services.database import PackageDb
from crafty.services.errors import PackageError
from crafty.services.pacman import decompress, install_archive, remove_package

__all__ = ["PackageService", "UpgradeReport"]


def _no_failures() -> list[tuple[str, PackageError]]:
    return []


def _no_names() -> list[str]:
    return []


@dataclass
class UpgradeReport:
    upgraded: list[str] = field(default_factory=_no_names)
    failed: list[tuple[str, PackageError]] = field(default_factory=_no_failures)

    @property
    def ok(self) -> bool:
        return not self.failed


class PackageService:
    def __init__(
        self,
        *,
        config: Config,
        http: HttpClient,
        console: ConsoleProtocol,
        db_path: Path | None = None,
    ) -> None:
        self._config = config
        self._http = http
        self._console = console
        self._db_path = db_path or config.paths.database
        self._names: list[str] | None = None

    def load_db(self) -> PackageDb:
        return PackageDb.load(self._db_path)

    # -- index --------------------------------------------------------------

    def _index(self) -> Result[list[str], PackageError]:
        if self._names is not None:
            return Ok(self._names)

        result = fetch_index(self._http, self._config.repo.tree_url)
        if isinstance(result, Err):
            e = result.error
            return Err(PackageError(kind=e.kind, message=e.message, hint=e.hint))

        self._names = result.value
        return Ok(self._names)

    def search(self, keyword: str) -> Result[list[str], PackageError]:
        names = self._index()
        if isinstance(names, Err):
            return names
        return Ok(search_packages(names.value, keyword))

    def list_packages(self) -> Result[list[str], PackageError]:
        names = self._index()
        if isinstance(names, Err):
            return names
        return Ok(package_files(names.value))

    # -- install ------------------------------------------------------------

    def _download(self, filename: str) -> Result[Path, PackageError]:
        url = self._config.repo.archive_url(filename)
        dest = self._config.paths.download_dir / filename

        self._console.print(f"Downloading from {url}")
        result = self._http.download(url, dest)
        if isinstance(result, Err):
            dest.unlink(missing_ok=True)
            return Err(
                PackageError(
                    kind="download_failed",
                    message=f"download failed: {filename}",
                    hint=str(result.error),
                )
            )

        if not is_valid_zst(dest):
            return Err(
                PackageError(
                    kind="invalid_archive",
                    message="Downloaded file is not a valid zstd archive.",
                    hint=str(dest),
                )
            )
        return Ok(dest)

    def _pacman_install(self, archive: Path) -> Result[None, PackageError]:
        sudo = self._config.pacman.sudo

        self._console.print("Trying to install using pacman...")
        if isinstance(install_archive(archive, sudo=sudo), Ok):
            return Ok(None)

        self._console.warning(
            "Pacman failed to install the .zst file. Trying to decompress and retry..."
        )
        parsed = PackageFile.parse(archive.name)
        tar_path = archive.with_name(
            parsed.tar_name if parsed is not None else archive.name.removesuffix(".zst")
        )
        # unzstd refuses to overwrite a leftover from a previous attempt
        tar_path.unlink(missing_ok=True)

        unpacked = decompress(archive, tar_path)
        if isinstance(unpacked, Err):
            return Err(
                PackageError(
                    kind="decompress_failed",
                    message="Failed to decompress .zst file",
                    hint=str(unpacked.error),
                )
            )

        retried = install_archive(tar_path, sudo=sudo)
        if isinstance(retried, Err):
            return Err(
                PackageError(
                    kind="install_failed",
                    message="Pacman failed to install decompressed package",
                    hint=str(retried.error),
                )
            )
        return Ok(None)

    def install(self, pkg: str) -> Result[str, PackageError]:
        """Install ``pkg`` and return the name recorded in the database."""
        names = self._index()
        if isinstance(names, Err):
            return names

        filename = find_package_file(names.value, pkg)
        if filename is None:
            return Err(
                PackageError(
                    kind="not_found",
                    message=f"Package '{pkg}' not found in the repository.",
                    hint="Use `crafty search <keyword>` to find package names",
                )
            )

        archive = self._download(filename)
        if isinstance(archive, Err):
            return archive

        installed = self._pacman_install(archive.value)
        if isinstance(installed, Err):
            return installed

        self._console.success(f"Installed: {pkg}")

        name = installed_name(filename)
        saved = self.load_db().add(name)
        if isinstance(saved, Err):
            return saved
        return Ok(name)

    # -- upgrade / remove ---------------------------------------------------

    def upgrade(self, pkg: str | None = None) -> Result[UpgradeReport, PackageError]:
        """Reinstall one tracked package, or all of them when ``pkg`` is None.

        Upgrading everything keeps going after a failure; failures are
        collected in the report.
        """
        db = self.load_db()

        if pkg:
            if not db.contains(pkg):
                return Err(
                    PackageError(
                        kind="not_installed",
                        message=f"Package '{pkg}' is not installed via crafty.",
                        hint=f"Install it first: crafty install {pkg}",
                    )
                )
            targets = [pkg]
        else:
            targets = db.sorted()
            if not targets:
                self._console.print("No packages installed via crafty.", Style.DIM)

        report = UpgradeReport()
        for name in targets:
            self._console.header(f"Upgrading {name}")
            result = self.install(name)
            if isinstance(result, Err):
                if pkg:
                    return result
                self._console.error(result.error.message)
                report.failed.append((name, result.error))
            else:
                report.upgraded.append(name)
        return Ok(report)

    def remove(self, pkg: str) -> Result[None, PackageError]:
        self._console.print(f"Removing package {pkg}")

        result = remove_package(pkg, sudo=self._config.pacman.sudo)
        if isinstance(result, Err):
            return Err(
                PackageError(
                    kind="remove_failed",
                    message="Failed to remove package",
                    hint=str(result.error),
                )
            )

        self._console.success(f"Removed: {pkg}")
        return self.load_db().remove(pkg)
