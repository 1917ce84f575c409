"""Shortcode generation utility

This module provides a helper function for deriving short, deterministic
codes from long URLs.

Functions:
    generate_shortcode(long_url, length=16):
        Hash a long URL into a fixed-length hexadecimal short code.

    long_url_digest(long_url):
        Full SHA-256 hex digest of a long URL, used to index long URLs of any length.

Example:
    >>> from urlshortener.utils import generate_shortcode
    >>> generate_shortcode('https://example.com/very/long/url')
    '8ec596c44bd62b6b'
"""

import hashlib

from urlshortener.constants import SHORTCODE_LENGTH


# SHA-256 hex digest length
MAX_LENGTH = 64


def generate_shortcode(long_url: str, length: int = SHORTCODE_LENGTH) -> str:
    """Generate a deterministic short code for a long URL.

    The code is the first `length` characters of the lowercase hex SHA-256
    digest of the UTF-8 encoded URL. The URL is hashed exactly as given:
    a trailing slash, scheme case or query parameter order all produce a
    different code.

    Args:
        long_url (str):
            The original long URL.

        length (int, optional):
            Number of hex characters to keep. Defaults to 16 (64 bits).

    Returns:
        str: A lowercase hexadecimal short code.

    Raises:
        TypeError: If `long_url` is not a string.
        ValueError: If `length` is outside 1..64.

    Example:
        >>> generate_shortcode('https://example.com/very/long/url', length=16)
        '8ec596c44bd62b6b'

    NOTE:
        - 64 bits keep codes short while making accidental collisions between
          unrelated URLs negligible at the expected scale. Truncation is not
          collision-proof; the shortening service refuses to overwrite a code
          owned by a different URL.
    """
    if not isinstance(long_url, str):
        raise TypeError(f'Long URL must be of type string (given type: {type(long_url)}).')
    if isinstance(length, bool) or not isinstance(length, int):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if not 1 <= length <= MAX_LENGTH:
        raise ValueError(f'Length must be between 1 and {MAX_LENGTH} (given value: {length}).')

    return long_url_digest(long_url)[:length]


def long_url_digest(long_url: str) -> str:
    """Return the lowercase hex SHA-256 digest of a long URL (64 characters)"""
    if not isinstance(long_url, str):
        raise TypeError(f'Long URL must be of type string (given type: {type(long_url)}).')
    return hashlib.sha256(long_url.encode('utf-8')).hexdigest()
