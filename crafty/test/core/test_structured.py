"""Tests for crafty.core.structured."""

from __future__ import annotations

from crafty.core.structured import (
    as_obj_list,
    as_str_dict,
    get_bool,
    get_number,
    get_str,
    resolve_pointer,
)


def test_as_str_dict_rejects_non_string_keys() -> None:
    assert as_str_dict({"a": 1}) == {"a": 1}
    assert as_str_dict({1: "a"}) is None
    assert as_str_dict([1]) is None


def test_as_obj_list() -> None:
    assert as_obj_list([1, "a"]) == [1, "a"]
    assert as_obj_list({"a": 1}) is None


def test_get_str_strips_and_drops_empty() -> None:
    table: dict[str, object] = {"a": "  x  ", "b": "   ", "c": 3}
    assert get_str(table, "a") == "x"
    assert get_str(table, "b") is None
    assert get_str(table, "c") is None
    assert get_str(table, "missing") is None


def test_get_number_keeps_fractions_and_ignores_bools() -> None:
    table: dict[str, object] = {"n": 30, "f": 2.7, "b": True, "s": "30"}
    assert get_number(table, "n") == 30.0
    assert get_number(table, "f") == 2.7
    assert get_number(table, "b") is None
    assert get_number(table, "s") is None


def test_get_bool() -> None:
    assert get_bool({"x": False}, "x") is False
    assert get_bool({"x": 0}, "x") is None


class TestResolvePointer:
    def test_nested_objects(self) -> None:
        data = {"payload": {"tree": {"items": [{"name": "a"}]}}}
        assert resolve_pointer(data, "/payload/tree/items") == [{"name": "a"}]

    def test_list_index(self) -> None:
        data = {"items": [{"name": "a"}, {"name": "b"}]}
        assert resolve_pointer(data, "/items/1/name") == "b"

    def test_missing_key(self) -> None:
        assert resolve_pointer({"payload": {}}, "/payload/tree/items") is None

    def test_index_out_of_range(self) -> None:
        assert resolve_pointer({"items": []}, "/items/0") is None

    def test_scalar_in_path(self) -> None:
        assert resolve_pointer({"payload": "text"}, "/payload/tree") is None

    def test_root(self) -> None:
        assert resolve_pointer({"a": 1}, "/") == {"a": 1}
