"""
HTTP fetch layer.

Three composable fetchers sharing one interface:

- `HttpFetcher`: httpx transport with a timeout (default 30 s).
- `RetryFetcher`: retries transient failures with exponential backoff.
- `CachedFetcher`: caches successful GETs of protocol convention files
  for a time-to-live, evicting lazily on read and on failure.

`build_default_fetcher()` stacks them the way SDK clients use them.
"""

from __future__ import annotations

import asyncio
import json
import time
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from arianee_sdk.core.config import Config
from arianee_sdk.core.exceptions import ContentError, FetchTimeoutError
from arianee_sdk.core.logging import get_logger
from arianee_sdk.storage.base import StorageBackend
from arianee_sdk.storage import storage_from_config
from arianee_sdk.storage.memory import InMemoryStorage
from arianee_sdk.utils.retry import execute_with_retry

logger = get_logger("fetch")

DEFAULT_TIMEOUT = 30.0  # seconds

CACHEABLE_URL_PREFIXES: tuple[str, ...] = (
    "https://cert.arianee.org/version",
    "https://api.arianee.com/protocol?q=",
    "https://cert.arianee.org/contractAddresses",
)

_CACHE_COLLECTION = "fetch_cache"


@dataclass
class FetchResponse:
    """Buffered HTTP response."""

    url: str
    status_code: int
    text: str
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Parse the body as JSON."""
        try:
            return json.loads(self.text)
        except json.JSONDecodeError as e:
            raise ContentError(f"Response from {self.url} is not valid JSON", {"error": str(e)}) from e


class Fetcher(Protocol):
    """Anything that can perform a buffered HTTP request."""

    async def fetch(
        self,
        url: str,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        json_body: Any = None,
        timeout: float | None = None,
    ) -> FetchResponse: ...


class HttpFetcher:
    """httpx-backed fetcher with a per-request timeout."""

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._http_client = http_client
        self._owns_client = False
        self._timeout = timeout

    async def _get_client(self) -> httpx.AsyncClient:
        """Lazy-init HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(follow_redirects=True)
            self._owns_client = True
        return self._http_client

    async def close(self) -> None:
        """Close owned HTTP client."""
        if self._owns_client and self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def fetch(
        self,
        url: str,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        json_body: Any = None,
        timeout: float | None = None,
    ) -> FetchResponse:
        client = await self._get_client()
        timeout = timeout or self._timeout
        content = None
        if json_body is not None:
            content = json.dumps(json_body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")

        try:
            response = await client.request(
                method,
                url,
                headers=headers,
                content=content,
                timeout=timeout,
            )
        except httpx.TimeoutException:
            raise FetchTimeoutError(url, int(timeout * 1000)) from None

        logger.debug(f"{method} {url} -> {response.status_code}")
        return FetchResponse(
            url=url,
            status_code=response.status_code,
            text=response.text,
            headers=dict(response.headers),
        )


class RetryFetcher:
    """Retries transient failures of an inner fetcher (3 retries, x2 backoff from 1 s)."""

    def __init__(
        self,
        inner: Fetcher,
        retries: int = 3,
        min_wait: float = 1.0,
        factor: float = 2.0,
    ) -> None:
        self._inner = inner
        self._retries = retries
        self._min_wait = min_wait
        self._factor = factor

    async def fetch(
        self,
        url: str,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        json_body: Any = None,
        timeout: float | None = None,
    ) -> FetchResponse:
        return await execute_with_retry(
            self._inner.fetch,
            url,
            method=method,
            headers=headers,
            json_body=json_body,
            timeout=timeout,
            retries=self._retries,
            min_wait=self._min_wait,
            factor=self._factor,
        )


def is_cacheable_url(url: str, prefixes: tuple[str, ...] = CACHEABLE_URL_PREFIXES) -> bool:
    return any(url.startswith(prefix) for prefix in prefixes)


class CachedFetcher:
    """
    Caches successful GET responses for whitelisted URL prefixes.

    Entries carry their insertion time and are dropped on the first read
    after `ttl` seconds. A failed fetch evicts the entry. Concurrent
    requests for the same URL share one in-flight fetch.
    """

    def __init__(
        self,
        inner: Fetcher,
        storage: StorageBackend | None = None,
        ttl: float = 300.0,
        prefixes: tuple[str, ...] = CACHEABLE_URL_PREFIXES,
    ) -> None:
        self._inner = inner
        self._storage = storage or InMemoryStorage()
        self._ttl = ttl
        self._prefixes = prefixes
        self._inflight: dict[str, asyncio.Future[FetchResponse]] = {}

    async def _cached(self, url: str) -> FetchResponse | None:
        entry = await self._storage.get(_CACHE_COLLECTION, url)
        if entry is None:
            return None
        if time.time() - entry["stored_at"] >= self._ttl:
            await self._storage.delete(_CACHE_COLLECTION, url)
            logger.debug(f"Cache entry expired for {url}")
            return None
        return FetchResponse(
            url=url,
            status_code=entry["status_code"],
            text=entry["text"],
            headers=entry.get("headers", {}),
        )

    async def _fetch_and_store(self, url: str, **kwargs: Any) -> FetchResponse:
        try:
            response = await self._inner.fetch(url, **kwargs)
        except Exception:
            await self._storage.delete(_CACHE_COLLECTION, url)
            raise
        if response.ok:
            await self._storage.save(
                _CACHE_COLLECTION,
                url,
                {
                    "status_code": response.status_code,
                    "text": response.text,
                    "headers": response.headers,
                    "stored_at": time.time(),
                },
            )
        return response

    async def fetch(
        self,
        url: str,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        json_body: Any = None,
        timeout: float | None = None,
    ) -> FetchResponse:
        if method.upper() != "GET" or not is_cacheable_url(url, self._prefixes):
            return await self._inner.fetch(
                url, method=method, headers=headers, json_body=json_body, timeout=timeout
            )

        cached = await self._cached(url)
        if cached is not None:
            return cached

        pending = self._inflight.get(url)
        if pending is not None:
            return await asyncio.shield(pending)

        task = asyncio.ensure_future(
            self._fetch_and_store(url, method=method, headers=headers, timeout=timeout)
        )
        self._inflight[url] = task
        task.add_done_callback(lambda done: self._forget(url, done))
        # A cancelled caller must not cancel the fetch other callers share
        return await asyncio.shield(task)

    def _forget(self, url: str, task: asyncio.Future[FetchResponse]) -> None:
        if self._inflight.get(url) is task:
            del self._inflight[url]

    async def invalidate(self, url: str) -> bool:
        return await self._storage.delete(_CACHE_COLLECTION, url)

    async def clear(self) -> int:
        """Drop every cached response. Returns the number of entries removed."""
        return await self._storage.clear(_CACHE_COLLECTION)


def build_default_fetcher(
    config: Config | None = None,
    storage: StorageBackend | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> CachedFetcher:
    """
    Cached(Retry(Http)) fetcher configured from `config`.

    The response cache lives in `storage`, or in the backend named by
    `config.storage_backend` when none is given.
    """
    config = config or Config()
    http = HttpFetcher(http_client=http_client, timeout=config.http_timeout)
    retrying = RetryFetcher(http, retries=config.fetch_retries)
    return CachedFetcher(
        retrying,
        storage=storage or storage_from_config(config),
        ttl=config.fetch_cache_ttl,
    )
