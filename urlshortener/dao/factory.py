"""Build DAOs from a Lambda's configuration section (see utils.config.load_config).

Example:
    >>> config = {'dynamodb': {'table_name': 'URLShortenerMappings'},
    ...           'cache': {'host': 'cache.internal', 'port': 6379, 'ttl': 600}}
    >>> store = short_url_dao_from_config(config, prefix='urlshortener:dev')
    >>> cache = cache_dao_from_config(config, store, prefix='urlshortener:dev')
"""

import logging

from urlshortener.types import LambdaConfiguration
from urlshortener.exceptions import BadConfigurationError
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.cache import ShortURLCacheDAO
from urlshortener.dao.dynamodb import ShortURLDynamoDBDAO
from urlshortener.dao.redis import ShortURLRedisDAO


logger = logging.getLogger(__name__)

BACKENDS = ('dynamodb', 'redis')


def _redis_kwargs(section: dict) -> dict:
    return {f'redis_{k}': v for k, v in section.items()}


def short_url_dao_from_config(config: LambdaConfiguration, prefix: str | None = None) -> ShortURLBaseDAO:
    """Return the store DAO for the configured backend.

    Raises:
        BadConfigurationError:
            If the configuration names no supported backend.
    """
    if 'dynamodb' in config:
        logger.debug('Using DynamoDB as the backend database for short URLs.')
        return ShortURLDynamoDBDAO(**config['dynamodb'])
    if 'redis' in config:
        logger.debug('Using Redis as the backend database for short URLs.')
        return ShortURLRedisDAO(**_redis_kwargs(config['redis']), prefix=prefix)

    raise BadConfigurationError(f'No supported backend configured (expected one of {", ".join(BACKENDS)}).')


def cache_dao_from_config(
    config: LambdaConfiguration,
    store: ShortURLBaseDAO,
    prefix: str | None = None,
) -> ShortURLCacheDAO | None:
    """Return the read-through cache DAO, or None if no cache tier is configured."""
    section = dict(config.get('cache') or {})
    if not section:
        return None

    ttl = section.pop('ttl', None)
    cache_kwargs = {'ttl': ttl} if ttl is not None else {}
    return ShortURLCacheDAO(store=store, **cache_kwargs, **_redis_kwargs(section), prefix=prefix)
