"""Redis client wiring shared by the Redis store and the Redis cache.

Both Redis-backed DAOs need the same things from a connection: bounded socket
timeouts (a hung Redis must surface as DataStoreError, not hang the Lambda),
optional TLS for ElastiCache with in-transit encryption, and a PING on
construction so a misconfigured endpoint fails at wiring time.

Example:
    >>> class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    ...     key_schema = RedisKeySchema
    ...
    >>> dao = ShortURLRedisDAO(redis_host='localhost', prefix='urlshortener:local')
    >>> dao.keys.link_url_key('8ec596c44bd62b6b')
    'urlshortener:local:links:8ec596c44bd62b6b:url'
"""

from typing import Optional

import redis

from urlshortener.dao.redis.redis_key_schema import RedisKeySchema
from urlshortener.dao.exceptions import DataStoreError


def build_redis_client(
    host: str = 'localhost',
    port: int | str = 6379,
    db: int | str = 0,
    *,
    username: Optional[str] = None,
    password: Optional[str] = None,
    ssl: bool = False,
    socket_timeout: float = 1.0,
    socket_connect_timeout: Optional[float] = None,
    decode_responses: bool = True,
) -> redis.Redis:
    """Create a Redis client with explicit timeouts.

    AppConfig values may arrive as strings, hence the coercions.
    `socket_connect_timeout` defaults to `socket_timeout`.
    """
    socket_timeout = float(socket_timeout)
    return redis.Redis(
        host=host,
        port=int(port),
        db=int(db),
        decode_responses=decode_responses,
        username=username,
        password=password,
        ssl=bool(ssl),
        socket_timeout=socket_timeout,
        socket_connect_timeout=socket_timeout if socket_connect_timeout is None else float(socket_connect_timeout),
    )


class RedisClientMixin:
    """Give a DAO a verified Redis client and a namespaced key schema.

    Subclasses pick their key layout through the `key_schema` class attribute.

    Attributes:
        redis (redis.Redis): connected client.
        keys: instance of `key_schema` bound to the DAO's prefix.
    """

    key_schema = RedisKeySchema

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_ssl: Optional[bool] = False,
        redis_socket_timeout: Optional[float] = 1.0,
        redis_socket_connect_timeout: Optional[float] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """
        Args:
            redis_* : connection settings, see `build_redis_client`. Ignored
                when `redis_client` is given.
            redis_client (Optional[redis.Redis]): pre-built client (tests, reuse).
            prefix (Optional[str]): key namespace, e.g. 'urlshortener:prod'.

        Raises:
            DataStoreError: If Redis does not answer the PING.
        """
        if redis_client is None:
            redis_client = build_redis_client(
                redis_host,
                redis_port,
                redis_db,
                username=redis_username,
                password=redis_password,
                ssl=redis_ssl,
                socket_timeout=redis_socket_timeout,
                socket_connect_timeout=redis_socket_connect_timeout,
                decode_responses=redis_decode_responses,
            )

        self.redis = redis_client
        self.keys = self.key_schema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self) -> None:
        """PING Redis; raise DataStoreError naming the endpoint if it is unreachable"""
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(
                f"Can't connect to Redis at {self._endpoint()}. Check the provided configuration parameters."
            ) from e

    def _endpoint(self) -> str:
        info = self.redis.connection_pool.connection_kwargs
        return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"
