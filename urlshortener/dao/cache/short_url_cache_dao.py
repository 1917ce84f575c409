"""DAO for caching short URLs in Redis (ElastiCache) in front of the store

This module provides a read-through cache for the resolution path: a point
lookup by shortcode hits Redis first and, on a miss, reads the backing
ShortURLBaseDAO and populates the cache with the result.

Responsibilities:
    - Retrieve short URLs from Redis
    - On cache-miss, fetch from the backing store and populate cache
    - Never let a cached entry outlive the record it mirrors
    - Maintain one key type:
        * cache:<prefix>:links:<shortcode> -> JSON {target, expires_at, created_at}

The cache holds no access counter and offers no lookup by long URL; those
always go to the backing store.

Classes:
    ShortURLCacheDAO:
        Read-through cache DAO backed by Redis.

Example:
    >>> store = ShortURLDynamoDBDAO(table_name='URLShortenerMappings')
    >>> cache = ShortURLCacheDAO(store=store, redis_host='cache.internal', prefix='urlshortener:dev')
    >>> cache.get('8ec596c44bd62b6b').target    # MISS: reads DynamoDB, fills cache
    'https://example.com/very/long/url'
    >>> cache.get('8ec596c44bd62b6b').target    # HIT
    'https://example.com/very/long/url'
"""

import json
import logging
import time
from datetime import datetime
from typing import Optional

import redis
from beartype import beartype

from urlshortener.constants import CacheTTL
from urlshortener.models import ShortURLModel
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.cache.cache_key_schema import CacheKeySchema
from urlshortener.dao.redis.mixins import RedisClientMixin
from urlshortener.dao.redis.helpers import handle_redis_connection_error


logger = logging.getLogger(__name__)


class ShortURLCacheDAO(RedisClientMixin):
    """Redis-backed read-through cache for ShortURLModel lookups

    Attributes:
        store (ShortURLBaseDAO):
            Backing store read on cache misses.
        ttl (int):
            Upper bound (seconds) for a cache entry's lifetime.
        redis (redis.Redis):
            Redis client (via RedisClientMixin).
        keys (CacheKeySchema):
            Key schema helper for generating namespaced cache keys.

    Methods:
        get(shortcode: str) -> ShortURLModel:
            Retrieve a short URL from cache, falling back to the store on miss.
            Raises ShortURLNotFoundError if neither tier has an unexpired record.
            Raises DataStoreError on connectivity issues with Redis or the store.
    """

    key_schema = CacheKeySchema

    def __init__(self, store: ShortURLBaseDAO, ttl: Optional[int] = CacheTTL.SHORT_URL, **redis_kwargs):
        super().__init__(**redis_kwargs)
        self.store = store
        self.ttl = int(ttl)

    @handle_redis_connection_error
    @beartype
    def get(self, shortcode: str) -> ShortURLModel:
        """Retrieve a short URL, reading through to the store on a cache miss

        Steps:
            - Try "cache:<prefix>:links:<shortcode>".
            - On CACHE HIT, decode the entry and return it unless expired.
            - On CACHE MISS, read the store (ShortURLNotFoundError propagates and
              nothing is cached) and populate the cache, expiring at the earlier
              of the record's expiry and now + ttl.

        Returns:
            ShortURLModel: The short URL. `access_count` is not tracked by the
                cache and is reported as 0 on hits.

        Raises:
            ShortURLNotFoundError:
                If no unexpired record exists.
            DataStoreError:
                If Redis (handled by decorator) or the store is unreachable.
        """
        key = self.keys.short_url_key(shortcode)
        blob = self.redis.get(key)

        # CACHE HIT
        if blob is not None:
            short_url = self._decode(shortcode, blob)
            if short_url is not None and not short_url.is_expired():
                logger.debug('Cache HIT for short URL.', extra={'shortcode': shortcode})
                return short_url

        # CACHE MISS (or stale/corrupt entry): read through to the store
        logger.debug('Cache MISS for short URL.', extra={'shortcode': shortcode})
        short_url = self.store.get(shortcode)
        self._put(key, short_url)
        return short_url

    def _put(self, key: str, short_url: ShortURLModel) -> None:
        """Populate the cache; a failed fill never fails the read"""
        expire_at = min(short_url.expires_at, int(time.time()) + self.ttl)
        payload = json.dumps(
            {
                'target': short_url.target,
                'expires_at': short_url.expires_at,
                'created_at': short_url.created_at.isoformat(),
            }
        )
        try:
            self.redis.set(key, payload, exat=expire_at)
        except redis.exceptions.RedisError:
            logger.warning('Failed to populate cache for short URL.', exc_info=True, extra={'shortcode': short_url.shortcode})

    @staticmethod
    def _decode(shortcode: str, blob: str | bytes) -> ShortURLModel | None:
        try:
            entry = json.loads(blob)
            return ShortURLModel(
                shortcode=shortcode,
                target=entry['target'],
                expires_at=int(entry['expires_at']),
                created_at=datetime.fromisoformat(entry['created_at']),
            )
        except (ValueError, KeyError, TypeError):
            logger.warning('Discarding malformed cache entry.', extra={'shortcode': shortcode})
            return None
