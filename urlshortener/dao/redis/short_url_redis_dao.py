"""Data Access Object (DAO) implementation for managing shortened URLs in Redis

This module provides a Redis-based implementation of ShortURLBaseDAO, used as
the store backend in local development (`active_backend: "redis"`).

Key layout (see RedisKeySchema), all expiring at the record's `expires_at`:
    <prefix>:links:<shortcode>:url         -> long URL
    <prefix>:links:<shortcode>:hits        -> access counter
    <prefix>:links:<shortcode>:created_at  -> ISO-8601 creation timestamp
    <prefix>:targets:<sha256(long URL)>    -> shortcode (secondary index)

Classes:
    ShortURLRedisDAO:
        DAO for storing and retrieving ShortURLModel in a Redis datastore.

Example:
    >>> dao = ShortURLRedisDAO(prefix="urlshortener:local")
    >>> dao.insert(ShortURLModel(shortcode='8ec596c44bd62b6b',
    ...                          target='https://example.com/very/long/url',
    ...                          expires_at=1_792_022_400))
    <ShortURLRedisDAO>
    >>> dao.find_by_target('https://example.com/very/long/url').shortcode
    '8ec596c44bd62b6b'
    >>> dao.hit('8ec596c44bd62b6b')
    1
"""

import time
from datetime import datetime, UTC

from beartype import beartype

from urlshortener.models import ShortURLModel
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.redis.mixins import RedisClientMixin
from urlshortener.dao.redis.helpers import handle_redis_connection_error
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short URL mappings

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    All methods raise DataStoreError on connectivity issues with Redis.
    """

    @handle_redis_connection_error
    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLRedisDAO':
        """Insert a short URL mapping unless its shortcode is already taken

        `SET ... NX` on the URL key is the conditional write: only one of several
        concurrent inserts of the same shortcode gets to create it.

        Raises:
            ShortURLAlreadyExistsError:
                If a short URL with the same shortcode already exists.
        """
        shortcode = short_url.shortcode
        link_url_key = self.keys.link_url_key(shortcode)

        created = self.redis.set(link_url_key, short_url.target, nx=True, exat=short_url.expires_at)
        if not created:
            raise ShortURLAlreadyExistsError(f"Short URL with code '{shortcode}' already exists.")

        # NOTE: a concurrent get() may run between the SET NX above and this
        #       transaction. It then sees the URL without metadata, which
        #       get() reads as access_count=0 and an unknown creation time.
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.set(self.keys.link_hits_key(shortcode), short_url.access_count, exat=short_url.expires_at)
            pipe.set(self.keys.link_created_at_key(shortcode), short_url.created_at.isoformat(), exat=short_url.expires_at)
            pipe.set(self.keys.target_key(short_url.target), shortcode, exat=short_url.expires_at)
            pipe.execute()
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL mapping by shortcode

        Fetches the URL, its counters and remaining TTL in a single transaction.

        Raises:
            ShortURLNotFoundError:
                If the short URL does not exist (Redis drops expired keys itself).
        """
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.get(self.keys.link_url_key(shortcode))
            pipe.get(self.keys.link_hits_key(shortcode))
            pipe.get(self.keys.link_created_at_key(shortcode))
            pipe.ttl(self.keys.link_url_key(shortcode))
            target, hits, created_at, ttl = pipe.execute()

        if target is None or ttl == -2:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        return ShortURLModel(
            shortcode=shortcode,
            target=target,
            expires_at=int(time.time()) + max(int(ttl), 0),
            created_at=datetime.fromisoformat(created_at) if created_at else datetime.fromtimestamp(0, UTC),
            access_count=int(hits or 0),
        )

    @handle_redis_connection_error
    @beartype
    def find_by_target(self, target: str, **kwargs) -> ShortURLModel | None:
        """Retrieve the short URL mapped to a long URL via the targets index"""
        shortcode = self.redis.get(self.keys.target_key(target))
        if shortcode is None:
            return None

        try:
            short_url = self.get(shortcode)
        except ShortURLNotFoundError:
            return None
        return short_url if short_url.target == target else None

    @handle_redis_connection_error
    @beartype
    def hit(self, shortcode: str, **kwargs) -> int:
        """Increment the access counter for a short URL

        Returns:
            int: access count after the increment.

        Raises:
            ShortURLNotFoundError:
                If no short URL with the given shortcode exists.
        """
        if not self.redis.exists(self.keys.link_url_key(shortcode)):
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        # INCR keeps the TTL set on insert
        return int(self.redis.incr(self.keys.link_hits_key(shortcode)))
