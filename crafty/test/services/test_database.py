"""Tests for crafty.services.database."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from crafty.core.result import Err, Ok
from crafty.services.database import PackageDb


def test_load_missing_is_empty(tmp_path: Path) -> None:
    db = PackageDb.load(tmp_path / "installed.json")

    assert db.packages == set()
    assert not (tmp_path / "installed.json").exists()


@pytest.mark.parametrize(
    "content",
    ["", "not json", "[]", '{"packages": "archcraft-about"}', '{"other": []}'],
)
def test_load_malformed_is_empty(tmp_path: Path, content: str) -> None:
    path = tmp_path / "installed.json"
    path.write_text(content, encoding="utf-8")

    assert PackageDb.load(path).packages == set()


def test_load_skips_non_string_entries(tmp_path: Path) -> None:
    path = tmp_path / "installed.json"
    path.write_text('{"packages": ["a", 1, "", null, "b"]}', encoding="utf-8")

    assert PackageDb.load(path).packages == {"a", "b"}


def test_add_persists_sorted(tmp_path: Path) -> None:
    path = tmp_path / ".config" / ".crafty" / "installed.json"
    db = PackageDb.load(path)

    assert isinstance(db.add("zsh-theme"), Ok)
    assert isinstance(db.add("archcraft-about"), Ok)

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "packages": ["archcraft-about", "zsh-theme"]
    }
    assert PackageDb.load(path).contains("zsh-theme")


def test_add_is_idempotent(tmp_path: Path) -> None:
    path = tmp_path / "installed.json"
    db = PackageDb.load(path)

    db.add("a")
    db.add("a")

    assert PackageDb.load(path).sorted() == ["a"]


def test_remove(tmp_path: Path) -> None:
    path = tmp_path / "installed.json"
    db = PackageDb(path=path, packages={"a", "b"})
    db.save()

    assert isinstance(db.remove("a"), Ok)
    assert isinstance(db.remove("not-there"), Ok)

    assert PackageDb.load(path).sorted() == ["b"]


def test_save_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    db = PackageDb(path=blocker / "installed.json", packages={"a"})

    result = db.save()

    assert isinstance(result, Err)
    assert result.error.kind == "database_failed"
