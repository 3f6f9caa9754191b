"""Remote package index scraped from the GitHub tree page.

GitHub renders directory listings client-side; the file list ships as
JSON inside a ``<script data-target="react-app.embeddedData">`` tag. We
pull that blob out and read ``/payload/tree/items[*].name``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Literal

from crafty.core.result import Err, Ok, Result
from crafty.core.structured import as_obj_list, as_str_dict, get_str, resolve_pointer
from crafty.repo.http import HttpClient
from crafty.repo.naming import PackageFile, file_pattern_for

__all__ = [
    "IndexFetchError",
    "EMBEDDED_DATA_START",
    "fetch_index",
    "extract_embedded_json",
    "parse_tree_page",
    "find_package_file",
    "package_files",
    "search_packages",
]

EMBEDDED_DATA_START = '<script type="application/json" data-target="react-app.embeddedData">'
EMBEDDED_DATA_END = "</script>"
ITEMS_POINTER = "/payload/tree/items"


@dataclass(frozen=True, slots=True)
class IndexFetchError:
    """Index could not be fetched (``network``) or understood (``index_invalid``)."""

    kind: Literal["network", "index_invalid"]
    message: str
    hint: str | None = None


def extract_embedded_json(page: str) -> str | None:
    start = page.find(EMBEDDED_DATA_START)
    if start < 0:
        return None
    start += len(EMBEDDED_DATA_START)
    end = page.find(EMBEDDED_DATA_END, start)
    if end < 0:
        return None
    return page[start:end]


def parse_tree_page(page: str, *, url: str) -> Result[list[str], IndexFetchError]:
    """Return every entry name listed on a tree page."""
    blob = extract_embedded_json(page)
    if blob is None:
        return Err(
            IndexFetchError(
                kind="index_invalid",
                message="package listing not found in repository page",
                hint=url,
            )
        )

    try:
        data: object = json.loads(blob)
    except json.JSONDecodeError as e:
        return Err(
            IndexFetchError(kind="index_invalid", message=f"invalid embedded JSON: {e}", hint=url)
        )

    items = as_obj_list(resolve_pointer(data, ITEMS_POINTER))
    if items is None:
        return Err(
            IndexFetchError(
                kind="index_invalid",
                message=f"missing {ITEMS_POINTER} in embedded JSON",
                hint=url,
            )
        )

    names: list[str] = []
    for item in items:
        d = as_str_dict(item)
        if d is None:
            continue
        name = get_str(d, "name")
        if name is not None:
            names.append(name)
    return Ok(names)


def fetch_index(http: HttpClient, tree_url: str) -> Result[list[str], IndexFetchError]:
    page = http.get_text(tree_url)
    if isinstance(page, Err):
        return Err(
            IndexFetchError(
                kind="network",
                message="failed to fetch package list",
                hint=str(page.error),
            )
        )
    return parse_tree_page(page.value, url=tree_url)


def package_files(names: list[str]) -> list[str]:
    """Names that are package archives, in index order."""
    return [n for n in names if PackageFile.parse(n) is not None]


def find_package_file(names: list[str], pkg: str) -> str | None:
    pattern = file_pattern_for(pkg)
    for name in names:
        if pattern.match(name):
            return name
    return None


def search_packages(names: list[str], keyword: str) -> list[str]:
    """Archives whose package name contains ``keyword`` (case-insensitive).

    Only the name part is searched, so "x86" does not match every archive.
    """
    needle = keyword.lower()
    out: list[str] = []
    for name in names:
        parsed = PackageFile.parse(name)
        if parsed is not None and needle in parsed.name.lower():
            out.append(name)
    return out
