"""Redis-backed lookup and eligibility caches.

Both caches are advisory: every Redis failure is logged and degrades to a
miss or a no-op so a request never fails because the cache is unavailable.
"""

from dataclasses import dataclass

import redis.asyncio as redis
from loguru import logger
from pydantic import ValidationError

from eligibility_api.lib.geocoder.address import normalize_lookup_key
from eligibility_api.schemas.eligibility import AddressEligibilityResponse

ELIGIBILITY_PREFIX = "eligibility:"
ADDRESS_LOOKUP_PREFIX = "address:lookup:"
DEFAULT_CACHE_DURATION = 3600


@dataclass(frozen=True)
class CacheStats:
    """Eligibility cache statistics; ``total_db_size`` is None when unavailable."""

    eligibility_entries: int
    total_db_size: int | None


def _lookup_key(address: str) -> str:
    return ADDRESS_LOOKUP_PREFIX + normalize_lookup_key(address)


class LookupCache:
    """Caches resolved address components as JSON, keyed by normalized address text.

    Spellings that differ only in case or surrounding whitespace share an entry.

    Args:
        client: Redis client (``decode_responses=True``).
        ttl_seconds: Entry lifetime.
    """

    def __init__(self, client: redis.Redis, ttl_seconds: int = DEFAULT_CACHE_DURATION) -> None:
        self._redis = client
        self.ttl_seconds = ttl_seconds

    async def get(self, address: str) -> str | None:
        """Return the cached JSON components for an address, or None."""
        try:
            value = await self._redis.get(_lookup_key(address))
        except Exception as e:
            logger.error(f"Error retrieving address lookup from cache: {e}")
            return None
        if value is None:
            logger.debug("Address lookup cache miss")
        else:
            logger.debug("Address lookup cache hit")
        return value

    async def set(self, address: str, value: str) -> None:
        """Store JSON components for an address with the configured TTL."""
        try:
            await self._redis.set(_lookup_key(address), value, ex=self.ttl_seconds)
            logger.debug("Cached address lookup")
        except Exception as e:
            logger.error(f"Error caching address lookup: {e}")


class ResultCache:
    """Caches full eligibility responses under ``eligibility:<key>``.

    Args:
        client: Redis client (``decode_responses=True``).
        ttl_seconds: Entry lifetime.
    """

    def __init__(self, client: redis.Redis, ttl_seconds: int = DEFAULT_CACHE_DURATION) -> None:
        self._redis = client
        self.ttl_seconds = ttl_seconds

    async def get_cached_eligibility(self, key: str) -> AddressEligibilityResponse | None:
        """Return the cached response for a key, marked as a cache hit.

        Args:
            key: Cache key from :func:`build_cache_key`.

        Returns:
            The cached response with ``cache_hit`` set, or None on miss,
            undecodable entry or Redis failure.
        """
        cache_key = ELIGIBILITY_PREFIX + key
        try:
            value = await self._redis.get(cache_key)
        except Exception as e:
            logger.error(f"Error retrieving from cache for key {cache_key}: {e}")
            return None

        if value is None:
            logger.debug(f"Cache miss for key: {cache_key}")
            return None

        try:
            response = AddressEligibilityResponse.model_validate_json(value)
        except ValidationError as e:
            logger.error(f"Error deserializing cached response for key {cache_key}: {e}")
            return None

        logger.debug(f"Cache hit for key: {cache_key}")
        return response.model_copy(update={"cache_hit": True})

    async def cache_eligibility(self, key: str, response: AddressEligibilityResponse) -> None:
        """Store a response with the configured TTL."""
        cache_key = ELIGIBILITY_PREFIX + key
        try:
            await self._redis.set(cache_key, response.model_dump_json(exclude_none=True), ex=self.ttl_seconds)
            logger.debug(f"Cached eligibility result for key: {cache_key} with TTL: {self.ttl_seconds}s")
        except Exception as e:
            logger.error(f"Error caching eligibility for key {cache_key}: {e}")

    async def evict(self, key: str) -> bool:
        """Remove one cached response.

        Returns:
            True when an entry was deleted.
        """
        cache_key = ELIGIBILITY_PREFIX + key
        try:
            deleted = await self._redis.delete(cache_key)
        except Exception as e:
            logger.error(f"Error evicting cache for key {cache_key}: {e}")
            return False
        logger.debug(f"Cache evicted for key: {cache_key}, deleted: {deleted}")
        return bool(deleted)

    async def clear_all(self) -> int:
        """Remove every cached eligibility response.

        Returns:
            Number of deleted entries (0 on failure).
        """
        try:
            keys = await self._redis.keys(ELIGIBILITY_PREFIX + "*")
            if not keys:
                logger.info("No eligibility cache entries to clear")
                return 0
            deleted = int(await self._redis.delete(*keys))
        except Exception as e:
            logger.error(f"Error clearing eligibility cache: {e}")
            return 0
        logger.info(f"Cleared {deleted} eligibility cache entries")
        return deleted

    async def is_cached(self, key: str) -> bool:
        try:
            return bool(await self._redis.exists(ELIGIBILITY_PREFIX + key))
        except Exception as e:
            logger.error(f"Error checking cache existence for key {key}: {e}")
            return False

    async def get_ttl(self, key: str) -> int:
        """Return the remaining TTL in seconds.

        Returns:
            Seconds remaining; -2 when the key is missing, -1 when it has no
            expiry or Redis is unavailable.
        """
        try:
            return int(await self._redis.ttl(ELIGIBILITY_PREFIX + key))
        except Exception as e:
            logger.error(f"Error getting TTL for key {key}: {e}")
            return -1

    async def update_ttl(self, key: str, seconds: int) -> bool:
        """Reset the TTL of an existing entry.

        Returns:
            True when the key existed and its TTL was updated.
        """
        try:
            return bool(await self._redis.expire(ELIGIBILITY_PREFIX + key, seconds))
        except Exception as e:
            logger.error(f"Error updating TTL for key {key}: {e}")
            return False

    async def get_stats(self) -> CacheStats:
        """Count cached responses and report the Redis database size."""
        try:
            keys = await self._redis.keys(ELIGIBILITY_PREFIX + "*")
            db_size = await self._redis.dbsize()
        except Exception as e:
            logger.error(f"Error getting cache stats: {e}")
            return CacheStats(eligibility_entries=0, total_db_size=None)
        return CacheStats(eligibility_entries=len(keys or []), total_db_size=int(db_size))
