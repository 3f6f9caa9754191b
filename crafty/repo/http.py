"""HTTP client for the GitHub tree page and archive downloads.

- HttpClient: protocol (injectable for tests)
- RealHttpClient: urllib implementation
- MockHttpClient: canned responses keyed by URL
"""

from __future__ import annotations

import http.client
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from crafty import __version__
from crafty.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
]

_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP failure. ``status`` is 0 for transport errors."""

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    def get_text(self, url: str) -> Result[str, HttpError]:
        """Fetch URL and decode the body as UTF-8."""
        ...

    def download(
        self,
        url: str,
        dest: Path,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[Path, HttpError]:
        """Stream URL into ``dest``; ``progress(done, total)`` per chunk."""
        ...


class RealHttpClient:
    """urllib client using the system certificate store."""

    def __init__(self, timeout: float = 30.0, user_agent: str = f"crafty/{__version__}") -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _open(self, url: str) -> http.client.HTTPResponse:
        req = urllib.request.Request(url, headers={"User-Agent": self.user_agent})
        return urllib.request.urlopen(req, timeout=self.timeout, context=self._ssl_context)

    def get_text(self, url: str) -> Result[str, HttpError]:
        try:
            with self._open(url) as response:
                body: bytes = response.read()
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except (ValueError, OSError) as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

        try:
            return Ok(body.decode("utf-8"))
        except UnicodeDecodeError as e:
            return Err(HttpError(url=url, status=0, message=f"Decode error: {e}"))

    def download(
        self,
        url: str,
        dest: Path,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[Path, HttpError]:
        try:
            with self._open(url) as response:
                total = int(response.headers.get("Content-Length", 0))
                downloaded = 0
                dest.parent.mkdir(parents=True, exist_ok=True)
                with open(dest, "wb") as f:
                    while chunk := response.read(_CHUNK_SIZE):
                        f.write(chunk)
                        downloaded += len(chunk)
                        if progress:
                            progress(downloaded, total)
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Download timed out"))
        except (ValueError, OSError) as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

        return Ok(dest)


class MockHttpClient:
    """Mock HTTP client for tests.

    Usage:
        client = MockHttpClient()
        client.set_text(TREE_URL, page_html)
        client.set_download(archive_url, b"\\x28\\xb5\\x2f\\xfd...")
    """

    def __init__(self) -> None:
        self._text_responses: dict[str, str | HttpError] = {}
        self._download_responses: dict[str, bytes | HttpError] = {}
        self.calls: list[tuple[str, str]] = []

    def set_text(self, url: str, response: str | HttpError) -> None:
        self._text_responses[url] = response

    def set_download(self, url: str, response: bytes | HttpError) -> None:
        self._download_responses[url] = response

    def get_text(self, url: str) -> Result[str, HttpError]:
        self.calls.append(("get_text", url))
        response = self._text_responses.get(url)
        if response is None:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def download(
        self,
        url: str,
        dest: Path,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[Path, HttpError]:
        self.calls.append(("download", url))
        response = self._download_responses.get(url)
        if response is None:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))
        if isinstance(response, HttpError):
            return Err(response)

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(response)
        if progress:
            progress(len(response), len(response))
        return Ok(dest)
