"""Unit tests for the generate_shortcode function in shortener.py.

Test coverage includes:

1. Basic functionality
   - Ensures the function returns a lowercase hex string of the expected length.

2. Determinism
   - Same input must always produce identical output.
   - Distinct inputs (even a trailing slash) produce distinct output.

3. Length parameter
   - Ensures custom lengths are respected and out-of-range lengths rejected.

4. Error handling
   - Ensures non-string URLs and non-integer lengths raise TypeError.

5. Regression testing
   - Known inputs produce stable, expected output to detect accidental changes.

6. long_url_digest()
   - Full 64 character digest, prefix of which is the shortcode.
"""

import string

import pytest

from urlshortener.utils import generate_shortcode, long_url_digest


# -------------------------------
# 1. Basic functionality
# -------------------------------

def test_generate_shortcode_returns_hex_string(long_url):
    """Ensure generate_shortcode() returns 16 lowercase hex characters by default."""
    result = generate_shortcode(long_url)
    assert isinstance(result, str)
    assert len(result) == 16
    assert set(result) <= set(string.hexdigits.lower())


# -------------------------------
# 2. Determinism
# -------------------------------

def test_generate_shortcode_is_deterministic(long_url):
    """Ensure the same URL always yields the same code."""
    assert len({generate_shortcode(long_url) for _ in range(100)}) == 1


def test_generate_shortcode_distinguishes_urls(long_url):
    """Ensure URLs are hashed exactly as given, without normalization."""
    assert generate_shortcode(long_url) != generate_shortcode(long_url + '/')
    assert generate_shortcode(long_url) != generate_shortcode(long_url.upper())


# -------------------------------
# 3. Length parameter
# -------------------------------

@pytest.mark.parametrize('length', [1, 7, 16, 32, 64])
def test_generate_shortcode_respects_length(long_url, length):
    """Ensure the result is a prefix of the full digest of the given length."""
    full = generate_shortcode(long_url, length=64)
    result = generate_shortcode(long_url, length=length)
    assert len(result) == length
    assert full.startswith(result)


@pytest.mark.parametrize('length', [0, -1, 65])
def test_generate_shortcode_rejects_out_of_range_length(long_url, length):
    """Ensure lengths outside 1..64 raise ValueError."""
    with pytest.raises(ValueError):
        generate_shortcode(long_url, length=length)


# -------------------------------
# 4. Error handling
# -------------------------------

@pytest.mark.parametrize('invalid', [None, 123, b'https://example.com', ['https://example.com']])
def test_generate_shortcode_rejects_non_string_url(invalid):
    """Ensure non-string URLs raise TypeError."""
    with pytest.raises(TypeError):
        generate_shortcode(invalid)


@pytest.mark.parametrize('invalid', [None, '16', 16.0, True])
def test_generate_shortcode_rejects_non_integer_length(long_url, invalid):
    """Ensure non-integer lengths raise TypeError."""
    with pytest.raises(TypeError):
        generate_shortcode(long_url, length=invalid)


# -------------------------------
# 5. Regression testing
# -------------------------------

@pytest.mark.parametrize(
    'url, expected',
    [
        ('https://example.com/very/long/url', '8ec596c44bd62b6b'),
        ('https://example.com/very/long/url/', 'bdab8b1e4f487f35'),
        ('https://example.com', '100680ad546ce6a5'),
        ('héllo', '3c48591d8d098a45'),
    ],
)
def test_generate_shortcode_known_values(url, expected):
    """Ensure known URLs keep producing the same short codes."""
    assert generate_shortcode(url) == expected


# -------------------------------
# 6. long_url_digest()
# -------------------------------

def test_long_url_digest(long_url, shortcode):
    digest = long_url_digest(long_url)

    assert digest == '8ec596c44bd62b6b218fc45bed72fd6a1bdb732db2f19b7b840bd4dde5e35061'
    assert digest.startswith(shortcode)
    assert len(long_url_digest(long_url * 1_000)) == 64


def test_long_url_digest_rejects_non_string_url():
    with pytest.raises(TypeError):
        long_url_digest(b'https://example.com')
