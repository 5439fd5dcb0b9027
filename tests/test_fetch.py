"""
Tests for the HTTP fetch layer.

Transport is mocked with httpx.MockTransport; no network calls.
"""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from arianee_sdk.core.config import Config
from arianee_sdk.core.exceptions import ContentError, FetchTimeoutError
from arianee_sdk.storage import RedisStorage
from arianee_sdk.storage.memory import InMemoryStorage
from arianee_sdk.utils.fetch import (
    CachedFetcher,
    FetchResponse,
    HttpFetcher,
    RetryFetcher,
    build_default_fetcher,
    is_cacheable_url,
)

CACHEABLE_URL = "https://cert.arianee.org/contractAddresses/testnet.json"
OTHER_URL = "https://brand.example/content.json"


def _ok(url: str, body: str = '{"ok": true}') -> FetchResponse:
    return FetchResponse(url=url, status_code=200, text=body, headers={})


class TestFetchResponse:
    """Test the buffered response."""

    def test_ok(self):
        assert _ok(OTHER_URL).ok is True
        assert FetchResponse(url=OTHER_URL, status_code=404, text="").ok is False

    def test_json(self):
        assert _ok(OTHER_URL).json() == {"ok": True}

    def test_invalid_json(self):
        with pytest.raises(ContentError, match="not valid JSON"):
            _ok(OTHER_URL, "<html>").json()


class TestHttpFetcher:
    """Test the httpx transport."""

    @pytest.mark.asyncio
    async def test_get(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            return httpx.Response(200, json={"hello": "world"})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            response = await HttpFetcher(http_client=client).fetch(OTHER_URL)

        assert response.status_code == 200
        assert response.json() == {"hello": "world"}

    @pytest.mark.asyncio
    async def test_post_json_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            seen["content_type"] = request.headers["Content-Type"]
            return httpx.Response(201, text="created")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            response = await HttpFetcher(http_client=client).fetch(
                OTHER_URL,
                method="POST",
                headers={"Content-Type": "application/json"},
                json_body={"a": 1},
            )

        assert response.status_code == 201
        assert seen == {"body": {"a": 1}, "content_type": "application/json"}

    @pytest.mark.asyncio
    async def test_non_2xx_is_returned(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))
        async with httpx.AsyncClient(transport=transport) as client:
            response = await HttpFetcher(http_client=client).fetch(OTHER_URL)
        assert response.ok is False

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(FetchTimeoutError, match="timed out after 1500ms"):
                await HttpFetcher(http_client=client).fetch(OTHER_URL, timeout=1.5)


class TestRetryFetcher:
    """Test retry of transient failures."""

    @pytest.mark.asyncio
    async def test_retries_transient_errors(self):
        inner = MagicMock()
        inner.fetch = AsyncMock(side_effect=[FetchTimeoutError(OTHER_URL, 10), _ok(OTHER_URL)])

        response = await RetryFetcher(inner, retries=3, min_wait=0).fetch(OTHER_URL)

        assert response.ok is True
        assert inner.fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_retries(self):
        inner = MagicMock()
        inner.fetch = AsyncMock(side_effect=FetchTimeoutError(OTHER_URL, 10))

        with pytest.raises(FetchTimeoutError):
            await RetryFetcher(inner, retries=2, min_wait=0).fetch(OTHER_URL)
        assert inner.fetch.await_count == 3

    @pytest.mark.asyncio
    async def test_does_not_retry_other_errors(self):
        inner = MagicMock()
        inner.fetch = AsyncMock(side_effect=ContentError("bad"))

        with pytest.raises(ContentError):
            await RetryFetcher(inner, retries=3, min_wait=0).fetch(OTHER_URL)
        assert inner.fetch.await_count == 1


class TestCachedFetcher:
    """Test response caching of protocol convention files."""

    def test_cacheable_prefixes(self):
        assert is_cacheable_url(CACHEABLE_URL) is True
        assert is_cacheable_url("https://api.arianee.com/protocol?q=testnet") is True
        assert is_cacheable_url(OTHER_URL) is False

    @pytest.mark.asyncio
    async def test_caches_whitelisted_get(self):
        inner = MagicMock()
        inner.fetch = AsyncMock(return_value=_ok(CACHEABLE_URL))
        fetcher = CachedFetcher(inner, storage=InMemoryStorage())

        first = await fetcher.fetch(CACHEABLE_URL)
        second = await fetcher.fetch(CACHEABLE_URL)

        assert first.text == second.text
        assert inner.fetch.await_count == 1

    @pytest.mark.asyncio
    async def test_does_not_cache_other_urls(self):
        inner = MagicMock()
        inner.fetch = AsyncMock(return_value=_ok(OTHER_URL))
        fetcher = CachedFetcher(inner)

        await fetcher.fetch(OTHER_URL)
        await fetcher.fetch(OTHER_URL)

        assert inner.fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_does_not_cache_failures(self):
        inner = MagicMock()
        inner.fetch = AsyncMock(
            side_effect=[FetchResponse(url=CACHEABLE_URL, status_code=503, text=""), _ok(CACHEABLE_URL)]
        )
        fetcher = CachedFetcher(inner)

        assert (await fetcher.fetch(CACHEABLE_URL)).ok is False
        assert (await fetcher.fetch(CACHEABLE_URL)).ok is True
        assert inner.fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_expired_entries_are_refetched(self):
        inner = MagicMock()
        inner.fetch = AsyncMock(return_value=_ok(CACHEABLE_URL))
        fetcher = CachedFetcher(inner, ttl=0)

        await fetcher.fetch(CACHEABLE_URL)
        await fetcher.fetch(CACHEABLE_URL)

        assert inner.fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_invalidate(self):
        inner = MagicMock()
        inner.fetch = AsyncMock(return_value=_ok(CACHEABLE_URL))
        fetcher = CachedFetcher(inner)

        await fetcher.fetch(CACHEABLE_URL)
        assert await fetcher.invalidate(CACHEABLE_URL) is True
        await fetcher.fetch(CACHEABLE_URL)

        assert inner.fetch.await_count == 2


    @pytest.mark.asyncio
    async def test_clear(self):
        inner = MagicMock()
        inner.fetch = AsyncMock(side_effect=lambda url, **kwargs: _ok(url))
        fetcher = CachedFetcher(inner)

        await fetcher.fetch(CACHEABLE_URL)
        await fetcher.fetch("https://api.arianee.com/protocol?q=testnet")
        assert await fetcher.clear() == 2
        await fetcher.fetch(CACHEABLE_URL)

        assert inner.fetch.await_count == 3

    @pytest.mark.asyncio
    async def test_concurrent_requests_share_fetch(self):
        release = asyncio.Event()

        async def slow_fetch(url, **kwargs):
            await release.wait()
            return _ok(url)

        inner = MagicMock()
        inner.fetch = AsyncMock(side_effect=slow_fetch)
        fetcher = CachedFetcher(inner)

        tasks = [asyncio.create_task(fetcher.fetch(CACHEABLE_URL)) for _ in range(3)]
        await asyncio.sleep(0)
        release.set()
        responses = await asyncio.gather(*tasks)

        assert all(r.ok for r in responses)
        assert inner.fetch.await_count == 1

    @pytest.mark.asyncio
    async def test_cancelled_caller_does_not_cancel_shared_fetch(self):
        started = asyncio.Event()
        release = asyncio.Event()

        async def slow_fetch(url, **kwargs):
            started.set()
            await release.wait()
            return _ok(url)

        inner = MagicMock()
        inner.fetch = AsyncMock(side_effect=slow_fetch)
        fetcher = CachedFetcher(inner)

        first = asyncio.create_task(fetcher.fetch(CACHEABLE_URL))
        await started.wait()
        second = asyncio.create_task(fetcher.fetch(CACHEABLE_URL))
        await asyncio.sleep(0)

        first.cancel()
        release.set()

        assert (await second).ok is True
        with pytest.raises(asyncio.CancelledError):
            await first
        assert inner.fetch.await_count == 1
    @pytest.mark.asyncio
    async def test_post_bypasses_cache(self):
        inner = MagicMock()
        inner.fetch = AsyncMock(return_value=_ok(CACHEABLE_URL))
        fetcher = CachedFetcher(inner)

        await fetcher.fetch(CACHEABLE_URL, method="POST", json_body={})
        await fetcher.fetch(CACHEABLE_URL, method="POST", json_body={})

        assert inner.fetch.await_count == 2


class TestDefaultFetcher:
    """Test the default fetcher stack."""

    @pytest.mark.asyncio
    async def test_stack_uses_given_client(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(str(request.url))
            return httpx.Response(200, json={"protocolVersion": "1.0"})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            fetcher = build_default_fetcher(http_client=client)
            await fetcher.fetch(CACHEABLE_URL)
            await fetcher.fetch(CACHEABLE_URL)

        assert calls == [CACHEABLE_URL]

    def test_storage_from_config(self):
        fetcher = build_default_fetcher(Config(storage_backend="redis", redis_url="redis://cache:6379/1"))

        assert isinstance(fetcher._storage, RedisStorage)

    def test_given_storage_wins(self):
        storage = InMemoryStorage()
        fetcher = build_default_fetcher(Config(storage_backend="redis"), storage=storage)

        assert fetcher._storage is storage
