"""Fetchers that read the raw lookup table text from its source."""

import asyncio
import logging
import time
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

import httpx

from ..errors import FetchError

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


def _decode(content: bytes) -> str:
    """Decode UTF-8 bytes, dropping a leading byte order mark."""
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise FetchError(f"Source is not valid UTF-8: {e}") from e


class HttpSourceFetcher:
    """Fetch the table over HTTP(S), bypassing any caches.

    Every request carries no-cache headers plus a ``v=<epoch ms>`` query
    parameter so intermediaries cannot serve a stale copy.
    """

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    def __repr__(self) -> str:
        return f"HttpSourceFetcher({self.url!r})"

    async def fetch(self) -> str:
        params = {"v": str(int(time.time() * 1000))}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(self.url, params=params, headers=NO_CACHE_HEADERS)
        except httpx.TimeoutException as e:
            raise FetchError(f"Timed out after {self.timeout}s fetching {self.url}") from e
        except httpx.HTTPError as e:
            raise FetchError(f"Request to {self.url} failed: {e}") from e

        if not resp.is_success:
            raise FetchError(resp.reason_phrase or "Request failed", status=resp.status_code)

        log.debug("Fetched %d bytes from %s", len(resp.content), self.url)
        return _decode(resp.content)


class FileSourceFetcher:
    """Read the table from a local file on every call."""

    def __init__(self, path: Union[str, Path], timeout: float = DEFAULT_TIMEOUT):
        self.path = Path(path)
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"FileSourceFetcher({str(self.path)!r})"

    async def fetch(self) -> str:
        try:
            content = await asyncio.wait_for(asyncio.to_thread(self.path.read_bytes), self.timeout)
        except asyncio.TimeoutError as e:
            raise FetchError(f"Timed out after {self.timeout}s reading {self.path}") from e
        except FileNotFoundError as e:
            raise FetchError(f"Source file not found: {self.path}", status=404) from e
        except OSError as e:
            raise FetchError(f"Could not read {self.path}: {e}") from e

        log.debug("Read %d bytes from %s", len(content), self.path)
        return _decode(content)


def is_url(source: str) -> bool:
    return urlparse(str(source)).scheme in ("http", "https")


def create_fetcher(source: Union[str, Path], timeout: float = DEFAULT_TIMEOUT):
    """Pick a fetcher for a path or an http(s) URL."""
    if is_url(str(source)):
        return HttpSourceFetcher(str(source), timeout=timeout)
    return FileSourceFetcher(source, timeout=timeout)
