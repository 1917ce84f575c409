"""Unit tests for the ShortURLCacheDAO (read-through cache)

Test coverage includes:

1. Cache hits
   - Ensures cached entries are returned without touching the store.
   - Ensures expired or malformed entries are treated as misses.

2. Cache misses
   - Ensures the store is read and the cache populated.
   - Ensures the entry never outlives the record (expiry = min(record, now + ttl)).
   - Confirms ShortURLNotFoundError from the store propagates and nothing is cached.
   - Confirms a failed cache fill does not fail the read.

3. Error handling
   - Confirms Redis connection errors on read raise DataStoreError.
   - Confirms store DataStoreError propagates.
   - Ensures invalid types raise TypeError or BeartypeCallHintParamViolation.
"""

import json
from datetime import datetime, UTC
from unittest.mock import MagicMock

import pytest
import redis
from beartype.roar import BeartypeCallHintParamViolation
from freezegun import freeze_time

from urlshortener.models import ShortURLModel
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.cache import ShortURLCacheDAO
from urlshortener.dao.exceptions import DataStoreError, ShortURLNotFoundError


# 2025-10-15T00:00:00Z
NOW = 1_760_486_400
KEY = 'cache:testapp:test:links:8ec596c44bd62b6b'


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def short_url(long_url, shortcode):
    return ShortURLModel(
        shortcode=shortcode,
        target=long_url,
        expires_at=NOW + 31_536_000,
        created_at=datetime(2025, 10, 15, tzinfo=UTC),
        access_count=12,
    )


@pytest.fixture
def store(short_url):
    _store = MagicMock(spec=ShortURLBaseDAO)
    _store.get.return_value = short_url
    return _store


@pytest.fixture
def dao(redis_client, store, app_prefix):
    return ShortURLCacheDAO(store=store, ttl=600, redis_client=redis_client, prefix=app_prefix)


def cache_entry(target='https://example.com/very/long/url', expires_at=NOW + 31_536_000):
    return json.dumps({'target': target, 'expires_at': expires_at, 'created_at': '2025-10-15T00:00:00+00:00'})


# -------------------------------
# 1. Cache hits
# -------------------------------


@freeze_time('2025-10-15')
def test_get_cache_hit(dao, redis_client, store, long_url, shortcode):
    """Ensure a cached entry is returned without reading the store."""
    redis_client.get.return_value = cache_entry()

    short_url = dao.get(shortcode)

    assert short_url.target == long_url
    assert short_url.shortcode == shortcode
    assert short_url.expires_at == NOW + 31_536_000
    redis_client.get.assert_called_once_with(KEY)
    store.get.assert_not_called()
    redis_client.set.assert_not_called()


@freeze_time('2025-10-15')
@pytest.mark.parametrize('blob', [cache_entry(expires_at=NOW), '{not json', json.dumps({'target': 'x'})])
def test_get_stale_or_corrupt_entry_reads_through(dao, redis_client, store, shortcode, blob):
    """Ensure expired or malformed entries are treated as misses."""
    redis_client.get.return_value = blob

    dao.get(shortcode)

    store.get.assert_called_once_with(shortcode)
    redis_client.set.assert_called_once()


# -------------------------------
# 2. Cache misses
# -------------------------------


@freeze_time('2025-10-15')
def test_get_cache_miss_populates_cache(dao, redis_client, store, short_url, shortcode):
    """Ensure a miss reads the store and caches for at most `ttl` seconds."""
    result = dao.get(shortcode)

    assert result is short_url
    store.get.assert_called_once_with(shortcode)
    args, kwargs = redis_client.set.call_args
    assert args[0] == KEY
    assert json.loads(args[1]) == {
        'target': short_url.target,
        'expires_at': short_url.expires_at,
        'created_at': '2025-10-15T00:00:00+00:00',
    }
    assert kwargs == {'exat': NOW + 600}


@freeze_time('2025-10-15')
def test_cache_entry_never_outlives_record(dao, redis_client, store, long_url, shortcode):
    """Ensure a record expiring before now + ttl bounds the cache entry."""
    store.get.return_value = ShortURLModel(shortcode=shortcode, target=long_url, expires_at=NOW + 60)

    dao.get(shortcode)

    assert redis_client.set.call_args.kwargs == {'exat': NOW + 60}


def test_get_cache_miss_store_miss(dao, redis_client, store):
    """Ensure not-found propagates and negative results are not cached."""
    store.get.side_effect = ShortURLNotFoundError('missing')

    with pytest.raises(ShortURLNotFoundError):
        dao.get('0000000000000000')

    redis_client.set.assert_not_called()


def test_failed_cache_fill_does_not_fail_read(dao, redis_client, short_url, shortcode):
    """Ensure a Redis failure while populating the cache is only logged."""
    redis_client.set.side_effect = redis.exceptions.ConnectionError('Connection error')

    assert dao.get(shortcode) is short_url


# -------------------------------
# 3. Error handling
# -------------------------------


def test_get_with_redis_connection_error(dao, redis_client, store):
    """Ensure an unreachable cache on read raises DataStoreError."""
    redis_client.get.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError, match="Can't connect to Redis at cache.test:6379/0."):
        dao.get('8ec596c44bd62b6b')
    store.get.assert_not_called()


def test_get_with_store_error(dao, store):
    store.get.side_effect = DataStoreError('store down')

    with pytest.raises(DataStoreError, match='store down'):
        dao.get('8ec596c44bd62b6b')


@pytest.mark.parametrize('invalid', [None, 123])
def test_get_with_invalid_type(dao, invalid):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.get(invalid)


def test_default_ttl(redis_client, store):
    dao = ShortURLCacheDAO(store=store, redis_client=redis_client)
    assert dao.ttl == 3_600
    assert dao.keys.short_url_key('abc') == 'cache:links:abc'
