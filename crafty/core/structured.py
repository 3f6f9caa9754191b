"""Narrowing helpers for untyped TOML/JSON data.

The GitHub tree page and the config file both arrive as ``object``; these
helpers check shapes at runtime and give the type checker something to
narrow on.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def as_obj_list(obj: object) -> ObjList | None:
    if isinstance(obj, list):
        return cast(ObjList, obj)
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Return a stripped, non-empty string value or None."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_number(table: Mapping[str, object], key: str) -> float | None:
    value = table.get(key)
    # bool is an int subclass; `timeout = true` is not a number.
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return float(value)


def get_bool(table: Mapping[str, object], key: str) -> bool | None:
    value = table.get(key)
    return value if isinstance(value, bool) else None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))


def resolve_pointer(obj: object, pointer: str) -> object | None:
    """Follow a JSON pointer such as ``/payload/tree/items``.

    Only object keys and list indices are supported. Returns None as soon
    as a segment cannot be resolved.
    """
    current: object = obj
    for part in pointer.strip("/").split("/"):
        if not part:
            continue
        table = as_str_dict(current)
        if table is not None:
            if part not in table:
                return None
            current = table[part]
            continue
        items = as_obj_list(current)
        if items is not None and part.isdigit() and int(part) < len(items):
            current = items[int(part)]
            continue
        return None
    return current
