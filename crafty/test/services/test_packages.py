"""Tests for crafty.services.packages."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from crafty.core.config import Config, PacmanConfig, PathsConfig
from crafty.core.result import Err, Ok, Result
from crafty.output.console import MockConsole
from crafty.platform.process import ProcessError
from crafty.repo.http import HttpError, MockHttpClient
from crafty.repo.index import EMBEDDED_DATA_START
from crafty.repo.naming import ZSTD_MAGIC
from crafty.services import packages as packages_mod
from crafty.services.database import PackageDb
from crafty.services.packages import PackageService

ABOUT = "archcraft-about-1.0-2-any.pkg.tar.zst"
OPENBOX = "archcraft-openbox-3.6-1-x86_64.pkg.tar.zst"
PICOM = "picom-ibhagwan-10.2.1-1-x86_64.pkg.tar.zst"


def _page(names: list[str]) -> str:
    payload = {"payload": {"tree": {"items": [{"name": n} for n in names]}}}
    return f"<html>{EMBEDDED_DATA_START}{json.dumps(payload)}</script></html>"


def _fail(cmd: list[str], returncode: int = 1) -> Err[ProcessError]:
    return Err(ProcessError(command=tuple(cmd), returncode=returncode, stdout="", stderr=""))


@dataclass
class FakePacman:
    """Stands in for crafty.services.pacman; results are consumed in order."""

    install_results: list[bool] = field(default_factory=lambda: [True])
    decompress_ok: bool = True
    remove_ok: bool = True
    calls: list[tuple[str, str]] = field(default_factory=lambda: [])

    def install_archive(self, archive: Path, *, sudo: bool = True) -> Result[None, ProcessError]:
        self.calls.append(("install", archive.name))
        ok = self.install_results.pop(0) if self.install_results else True
        return Ok(None) if ok else _fail(["pacman", "-U", str(archive)])

    def decompress(self, archive: Path, dest: Path) -> Result[None, ProcessError]:
        self.calls.append(("decompress", dest.name))
        return Ok(None) if self.decompress_ok else _fail(["unzstd", str(archive)])

    def remove_package(self, name: str, *, sudo: bool = True) -> Result[None, ProcessError]:
        self.calls.append(("remove", name))
        return Ok(None) if self.remove_ok else _fail(["pacman", "-Rns", name])


@dataclass
class Env:
    service: PackageService
    http: MockHttpClient
    console: MockConsole
    pacman: FakePacman
    config: Config
    db_path: Path

    def db(self) -> PackageDb:
        return PackageDb.load(self.db_path)

    def serve_archive(self, filename: str, content: bytes = ZSTD_MAGIC + b"data") -> None:
        self.http.set_download(self.config.repo.archive_url(filename), content)


@pytest.fixture
def env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Env:
    config = Config(
        paths=PathsConfig(download_dir=tmp_path / "dl", database=tmp_path / "installed.json"),
        pacman=PacmanConfig(sudo=False),
    )
    http = MockHttpClient()
    http.set_text(config.repo.tree_url, _page(["archcraft.db", ABOUT, OPENBOX, PICOM]))
    console = MockConsole()
    fake = FakePacman()

    monkeypatch.setattr(packages_mod, "install_archive", fake.install_archive)
    monkeypatch.setattr(packages_mod, "decompress", fake.decompress)
    monkeypatch.setattr(packages_mod, "remove_package", fake.remove_package)

    service = PackageService(config=config, http=http, console=console)
    return Env(
        service=service,
        http=http,
        console=console,
        pacman=fake,
        config=config,
        db_path=config.paths.database,
    )


class TestInstall:
    def test_installs_and_records(self, env: Env) -> None:
        env.serve_archive(ABOUT)

        result = env.service.install("about")

        assert result == Ok("archcraft-about")
        assert env.pacman.calls == [("install", ABOUT)]
        assert env.db().sorted() == ["archcraft-about"]
        assert (env.config.paths.download_dir / ABOUT).exists()
        assert env.console.find(f"Downloading from {env.config.repo.archive_url(ABOUT)}")
        assert "✅ Installed: about" in env.console.messages

    def test_not_found(self, env: Env) -> None:
        result = env.service.install("firefox")

        assert isinstance(result, Err)
        assert result.error.kind == "not_found"
        assert result.error.message == "Package 'firefox' not found in the repository."
        assert ("download", env.config.repo.archive_url(ABOUT)) not in env.http.calls
        assert env.pacman.calls == []

    def test_index_unreachable(self, env: Env) -> None:
        url = env.config.repo.tree_url
        env.http.set_text(url, HttpError(url=url, status=0, message="Network is unreachable"))

        result = env.service.install("about")

        assert isinstance(result, Err)
        assert result.error.kind == "network"

    def test_download_failure(self, env: Env) -> None:
        url = env.config.repo.archive_url(ABOUT)
        env.http.set_download(url, HttpError(url=url, status=404, message="Not Found"))

        result = env.service.install("about")

        assert isinstance(result, Err)
        assert result.error.kind == "download_failed"
        assert not (env.config.paths.download_dir / ABOUT).exists()
        assert env.db().sorted() == []

    def test_rejects_non_zstd_download(self, env: Env) -> None:
        env.serve_archive(ABOUT, b"<!DOCTYPE html><html>404</html>")

        result = env.service.install("about")

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_archive"
        assert result.error.message == "Downloaded file is not a valid zstd archive."
        assert env.pacman.calls == []

    def test_falls_back_to_decompressed_tar(self, env: Env) -> None:
        env.serve_archive(OPENBOX)
        env.pacman.install_results = [False, True]
        stale = env.config.paths.download_dir / OPENBOX.removesuffix(".zst")
        stale.parent.mkdir(parents=True, exist_ok=True)
        stale.write_bytes(b"old")

        result = env.service.install("openbox")

        assert result == Ok("archcraft-openbox")
        assert env.pacman.calls == [
            ("install", OPENBOX),
            ("decompress", "archcraft-openbox-3.6-1-x86_64.pkg.tar"),
            ("install", "archcraft-openbox-3.6-1-x86_64.pkg.tar"),
        ]
        assert not stale.exists()
        assert env.db().contains("archcraft-openbox")

    def test_decompress_failure(self, env: Env) -> None:
        env.serve_archive(ABOUT)
        env.pacman.install_results = [False]
        env.pacman.decompress_ok = False

        result = env.service.install("about")

        assert isinstance(result, Err)
        assert result.error.kind == "decompress_failed"
        assert env.db().sorted() == []

    def test_retry_failure(self, env: Env) -> None:
        env.serve_archive(ABOUT)
        env.pacman.install_results = [False, False]

        result = env.service.install("about")

        assert isinstance(result, Err)
        assert result.error.kind == "install_failed"
        assert result.error.message == "Pacman failed to install decompressed package"
        assert env.db().sorted() == []


class TestUpgrade:
    def test_single_tracked(self, env: Env) -> None:
        PackageDb(path=env.db_path, packages={"archcraft-about"}).save()
        env.serve_archive(ABOUT)

        result = env.service.upgrade("archcraft-about")

        assert isinstance(result, Ok)
        assert result.value.upgraded == ["archcraft-about"]
        assert result.value.ok
        assert "Upgrading archcraft-about" in env.console.messages

    def test_single_not_tracked(self, env: Env) -> None:
        result = env.service.upgrade("about")

        assert isinstance(result, Err)
        assert result.error.kind == "not_installed"
        assert result.error.message == "Package 'about' is not installed via crafty."
        assert env.http.calls == []

    def test_single_failure_propagates(self, env: Env) -> None:
        PackageDb(path=env.db_path, packages={"archcraft-about"}).save()

        result = env.service.upgrade("archcraft-about")

        assert isinstance(result, Err)
        assert result.error.kind == "download_failed"

    def test_all_continues_after_failure(self, env: Env) -> None:
        PackageDb(path=env.db_path, packages={"archcraft-about", "gone", "picom-ibhagwan"}).save()
        env.serve_archive(ABOUT)
        env.serve_archive(PICOM)

        result = env.service.upgrade()

        assert isinstance(result, Ok)
        report = result.value
        assert report.upgraded == ["archcraft-about", "picom-ibhagwan"]
        assert [name for name, _ in report.failed] == ["gone"]
        assert report.failed[0][1].kind == "not_found"
        assert not report.ok
        # the index is fetched once for the whole run
        assert env.http.calls.count(("get_text", env.config.repo.tree_url)) == 1

    def test_all_with_nothing_tracked(self, env: Env) -> None:
        result = env.service.upgrade()

        assert isinstance(result, Ok)
        assert result.value.upgraded == []
        assert result.value.ok
        assert env.console.find("No packages installed via crafty.")


class TestRemove:
    def test_success_updates_db(self, env: Env) -> None:
        PackageDb(path=env.db_path, packages={"archcraft-about", "picom-ibhagwan"}).save()

        result = env.service.remove("archcraft-about")

        assert isinstance(result, Ok)
        assert env.pacman.calls == [("remove", "archcraft-about")]
        assert env.db().sorted() == ["picom-ibhagwan"]
        assert "✅ Removed: archcraft-about" in env.console.messages

    def test_failure_keeps_db(self, env: Env) -> None:
        PackageDb(path=env.db_path, packages={"archcraft-about"}).save()
        env.pacman.remove_ok = False

        result = env.service.remove("archcraft-about")

        assert isinstance(result, Err)
        assert result.error.kind == "remove_failed"
        assert env.db().sorted() == ["archcraft-about"]

    def test_untracked_package_can_be_removed(self, env: Env) -> None:
        result = env.service.remove("vim")

        assert isinstance(result, Ok)
        assert env.db().sorted() == []


class TestQueries:
    def test_search(self, env: Env) -> None:
        result = env.service.search("Open")

        assert result == Ok([OPENBOX])

    def test_search_no_match(self, env: Env) -> None:
        assert env.service.search("firefox") == Ok([])

    def test_list(self, env: Env) -> None:
        assert env.service.list_packages() == Ok([ABOUT, OPENBOX, PICOM])

    def test_list_index_invalid(self, env: Env) -> None:
        env.http.set_text(env.config.repo.tree_url, "<html>no data</html>")

        result = env.service.list_packages()

        assert isinstance(result, Err)
        assert result.error.kind == "index_invalid"
