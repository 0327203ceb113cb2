"""Redis client lifecycle management.

The client is created once per process by the app lifespan (or a CLI
command) and handed to cache services through dependencies.  Creating the
client does not open a connection, so an unreachable Redis degrades cache
operations to misses instead of failing startup.
"""

import redis.asyncio as redis
from loguru import logger

_client: redis.Redis | None = None


def init_redis(redis_url: str, *, timeout: float = 5.0) -> redis.Redis:
    """Create and store the Redis client.

    Args:
        redis_url: Redis connection URL.
        timeout: Socket connect and read timeout in seconds.

    Returns:
        The created Redis client.
    """
    global _client  # noqa: PLW0603
    _client = redis.from_url(
        redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=timeout,
        socket_timeout=timeout,
        health_check_interval=30,
    )
    logger.info("Configured Redis client")
    return _client


def get_redis() -> redis.Redis:
    """Return the current Redis client.

    Raises:
        RuntimeError: If the client has not been initialized.
    """
    if _client is None:
        msg = "Redis client not initialized. Call init_redis() first."
        raise RuntimeError(msg)
    return _client


async def ping_redis() -> bool:
    """Check connectivity without raising.

    Returns:
        True when Redis answered the ping.
    """
    if _client is None:
        return False
    try:
        return bool(await _client.ping())
    except Exception as e:
        logger.warning(f"Redis ping failed: {e}")
        return False


async def dispose_redis() -> None:
    """Close the Redis client and release its connection pool."""
    global _client  # noqa: PLW0603
    if _client is not None:
        await _client.aclose()
        _client = None
