"""Unit tests for the RedisKeySchema class in redis_key_schema.py.

Test coverage includes:

1. Link key generation
   - Ensures link_*_key() generate correct Redis keys for a given shortcode.

2. Target key generation
   - Ensures target_key() indexes long URLs by SHA-256 digest.

3. Prefix behavior
   - Confirms keys are not prefixed by default and prefixed otherwise.

4. Invalid prefix types
   - Ensures improper prefix types raise TypeError.
"""

import hashlib

import pytest

from urlshortener.dao.redis.redis_key_schema import RedisKeySchema


# -------------------------------
# 1. Link key generation
# -------------------------------

@pytest.mark.parametrize(
    "method, expected",
    [
        ("link_url_key", "links:8ec596c44bd62b6b:url"),
        ("link_hits_key", "links:8ec596c44bd62b6b:hits"),
        ("link_created_at_key", "links:8ec596c44bd62b6b:created_at"),
    ],
)
def test_link_keys(method, expected):
    """Ensure link keys are derived from the shortcode."""
    keys = RedisKeySchema()
    assert getattr(keys, method)("8ec596c44bd62b6b") == expected


# -------------------------------
# 2. Target key generation
# -------------------------------

def test_target_key(long_url):
    """Ensure target_key() has a fixed size regardless of URL length."""
    keys = RedisKeySchema()
    digest = hashlib.sha256(long_url.encode("utf-8")).hexdigest()

    assert keys.target_key(long_url) == f"targets:{digest}"
    assert len(keys.target_key(long_url * 100)) == len("targets:") + 64


# -------------------------------
# 3. Prefix behavior
# -------------------------------

@pytest.mark.parametrize(
    "prefix, expected_url_key, expected_hits_key",
    [
        ("testprefix", "testprefix:links:abc123:url", "testprefix:links:abc123:hits"),
        ("urlshortener:dev", "urlshortener:dev:links:abc123:url", "urlshortener:dev:links:abc123:hits"),
        (None, "links:abc123:url", "links:abc123:hits"),
    ],
)
def test_key_prefixing(prefix, expected_url_key, expected_hits_key):
    """Ensure keys are correctly prefixed when a prefix is provided."""
    keys = RedisKeySchema(prefix=prefix)
    assert keys.link_url_key("abc123") == expected_url_key
    assert keys.link_hits_key("abc123") == expected_hits_key


# -------------------------------
# 4. Invalid prefix types
# -------------------------------

@pytest.mark.parametrize("prefix", [123, -1, 45.6, [], {}])
def test_invalid_prefix_type_raises_error(prefix):
    """Ensure invalid prefix types raise a TypeError."""
    with pytest.raises(TypeError):
        RedisKeySchema(prefix=prefix)
