"""Tests for the Redis client lifecycle module."""

from unittest.mock import AsyncMock, patch

import pytest

import eligibility_api.core.cache as cache_module
from eligibility_api.core.cache import dispose_redis, get_redis, init_redis, ping_redis


@pytest.fixture(autouse=True)
def _reset_client():
    original = cache_module._client
    cache_module._client = None
    yield
    cache_module._client = original


class TestRedisLifecycle:
    """Tests for init/get/ping/dispose."""

    def test_get_raises_when_not_initialized(self) -> None:
        with pytest.raises(RuntimeError, match="Redis client not initialized"):
            get_redis()

    def test_init_passes_timeouts(self) -> None:
        with patch("eligibility_api.core.cache.redis.from_url") as mock_from_url:
            client = init_redis("redis://localhost:6379/0", timeout=2.5)
        assert get_redis() is client
        kwargs = mock_from_url.call_args.kwargs
        assert kwargs["decode_responses"] is True
        assert kwargs["socket_connect_timeout"] == 2.5
        assert kwargs["socket_timeout"] == 2.5

    @pytest.mark.asyncio
    async def test_ping_false_when_not_initialized(self) -> None:
        assert await ping_redis() is False

    @pytest.mark.asyncio
    async def test_ping_failure_returns_false(self) -> None:
        client = AsyncMock()
        client.ping.side_effect = ConnectionError("down")
        cache_module._client = client
        assert await ping_redis() is False

    @pytest.mark.asyncio
    async def test_ping_success(self) -> None:
        client = AsyncMock()
        client.ping.return_value = True
        cache_module._client = client
        assert await ping_redis() is True

    @pytest.mark.asyncio
    async def test_dispose_closes_client(self) -> None:
        client = AsyncMock()
        cache_module._client = client
        await dispose_redis()
        client.aclose.assert_awaited_once()
        assert cache_module._client is None
