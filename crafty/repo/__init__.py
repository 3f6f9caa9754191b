"""Remote ArchCraft package repository: HTTP, archive names, index."""

from .http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from .index import (
    IndexFetchError,
    fetch_index,
    find_package_file,
    package_files,
    search_packages,
)
from .naming import PackageFile, installed_name, is_valid_zst

__all__ = [
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    "IndexFetchError",
    "fetch_index",
    "find_package_file",
    "package_files",
    "search_packages",
    "PackageFile",
    "installed_name",
    "is_valid_zst",
]
