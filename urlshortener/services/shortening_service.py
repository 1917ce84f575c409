"""Shortening service: idempotent creation of short URLs.

Creation is deduplicated by long URL: the first request for a long URL stores
a new record, every later (or concurrent) request for the same long URL gets
that same record back.

Example:
    >>> service = ShorteningService(dao=ShortURLDynamoDBDAO())
    >>> result = service.create('https://example.com/very/long/url')
    >>> result.short_url.shortcode, result.created
    ('8ec596c44bd62b6b', True)
    >>> service.create('https://example.com/very/long/url').created
    False
"""

import logging
from dataclasses import dataclass
from datetime import datetime, UTC

from urlshortener.constants import TTL, SHORTCODE_LENGTH
from urlshortener.models import ShortURLModel
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.exceptions import DataStoreError, ShortURLAlreadyExistsError, ShortURLNotFoundError
from urlshortener.exceptions import InvalidLongURLError, ShortCodeCollisionError
from urlshortener.utils.helpers import expires_at_from_now
from urlshortener.utils.shortener import generate_shortcode
from urlshortener.services.constants import SHORT_URL_CREATED, SHORT_URL_DEDUPLICATED, CREATION_RACE_LOST, SHORTCODE_COLLISION


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShortenResult:
    short_url: ShortURLModel
    created: bool  # False when an existing record was returned


class ShorteningService:
    """Create short URLs, at most one record per long URL.

    Args:
        dao (ShortURLBaseDAO): store holding the mappings.
        ttl (int): record lifetime in seconds. Defaults to one year.
        shortcode_length (int): hex characters per short code. Defaults to 16.
    """

    def __init__(self, dao: ShortURLBaseDAO, ttl: int = TTL.ONE_YEAR, shortcode_length: int = SHORTCODE_LENGTH):
        self.dao = dao
        self.ttl = ttl
        self.shortcode_length = shortcode_length

    def create(self, long_url: str) -> ShortenResult:
        """Return the short URL for `long_url`, creating it on first sighting.

        Steps:
            - Step 1: Look up an existing record via the long URL index
            - Step 2: Found => return it unchanged (no new TTL, no write)
            - Step 3: Not found => generate the shortcode and conditionally insert
            - Step 4: Lost the insert race => re-read and return the winner

        Raises:
            InvalidLongURLError:
                If `long_url` is not a non-empty string.
            ShortCodeCollisionError:
                If the shortcode already belongs to a different long URL.
            DataStoreError:
                If the store is unreachable or times out.
        """
        self._validate(long_url)

        # 1- Deduplicate via the secondary index
        existing = self.dao.find_by_target(long_url)
        if existing is not None:
            logger.info(
                'Long URL already shortened. Returning existing short URL.',
                extra={'shortcode': existing.shortcode, 'event': SHORT_URL_DEDUPLICATED},
            )
            return ShortenResult(short_url=existing, created=False)

        # 2- Build and conditionally insert a new record
        short_url = ShortURLModel(
            shortcode=generate_shortcode(long_url, length=self.shortcode_length),
            target=long_url,
            expires_at=expires_at_from_now(self.ttl),
            created_at=datetime.now(UTC),
            access_count=0,
        )
        try:
            self.dao.insert(short_url)
        except ShortURLAlreadyExistsError:
            return ShortenResult(short_url=self._resolve_lost_race(short_url), created=False)

        logger.info('Created short URL.', extra={'shortcode': short_url.shortcode, 'event': SHORT_URL_CREATED})
        return ShortenResult(short_url=short_url, created=True)

    def _resolve_lost_race(self, short_url: ShortURLModel) -> ShortURLModel:
        """Return the record which won the conditional insert for this shortcode"""
        logger.warning(
            'Conditional insert lost to an existing record. Re-reading the winner.',
            extra={'shortcode': short_url.shortcode, 'event': CREATION_RACE_LOST},
        )
        try:
            winner = self.dao.get(short_url.shortcode)
        except ShortURLNotFoundError as e:
            # The winner vanished (expired) between our insert and this read
            raise DataStoreError(f"Short URL with code '{short_url.shortcode}' disappeared during creation.") from e

        if winner.target != short_url.target:
            logger.error(
                'Shortcode collision between distinct long URLs.',
                extra={'shortcode': short_url.shortcode, 'event': SHORTCODE_COLLISION},
            )
            raise ShortCodeCollisionError(f"Short code '{short_url.shortcode}' already belongs to a different long URL.")
        return winner

    @staticmethod
    def _validate(long_url: str) -> None:
        if not isinstance(long_url, str) or not long_url:
            raise InvalidLongURLError('longUrl is required')
