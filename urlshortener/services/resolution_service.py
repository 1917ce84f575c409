"""Resolution service: shortcode -> long URL, cache first.

Reads go through the read-through cache when one is configured and straight
to the store otherwise. Every successful resolution schedules a best-effort
access counter increment against the store on a background thread; the
caller never waits for it and its failures only show up in the logs.

Example:
    >>> store = ShortURLDynamoDBDAO()
    >>> service = ResolutionService(dao=store, cache=ShortURLCacheDAO(store=store))
    >>> service.resolve('8ec596c44bd62b6b')
    'https://example.com/very/long/url'
"""

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait

from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.cache import ShortURLCacheDAO
from urlshortener.exceptions import ValidationError
from urlshortener.services.constants import SHORT_URL_RESOLVED, ACCESS_COUNT_UPDATE_FAILED


logger = logging.getLogger(__name__)

# Shared by all services in the process; lives as long as the (warm) Lambda container
_access_counter_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix='access-counter')


class ResolutionService:
    """Resolve shortcodes to long URLs.

    Args:
        dao (ShortURLBaseDAO): store; authority for the access counter.
        cache (ShortURLCacheDAO | None): read-through cache in front of `dao`.
        executor (Executor | None): runs access counter increments.
            Defaults to a process-wide thread pool.
    """

    def __init__(self, dao: ShortURLBaseDAO, cache: ShortURLCacheDAO | None = None, executor: Executor | None = None):
        self.dao = dao
        self.cache = cache
        self.executor = executor or _access_counter_executor
        self._pending: set[Future] = set()
        self._pending_lock = threading.Lock()

    def resolve(self, shortcode: str) -> str:
        """Return the long URL for `shortcode`.

        Raises:
            ValidationError:
                If `shortcode` is not a non-empty string.
            ShortURLNotFoundError:
                If neither the cache nor the store holds an unexpired record.
            DataStoreError:
                If the cache or store is unreachable or times out.
        """
        if not isinstance(shortcode, str) or not shortcode:
            raise ValidationError('shortUrl is required')

        reader = self.cache if self.cache is not None else self.dao
        short_url = reader.get(shortcode)

        self._record_hit(shortcode)
        logger.debug('Resolved short URL.', extra={'shortcode': shortcode, 'event': SHORT_URL_RESOLVED})
        return short_url.target

    def drain(self, timeout: float | None = None) -> None:
        """Wait for outstanding access counter increments (tests, shutdown)"""
        with self._pending_lock:
            pending = list(self._pending)
        wait(pending, timeout=timeout)

    def _record_hit(self, shortcode: str) -> None:
        try:
            future = self.executor.submit(self.dao.hit, shortcode)
        except RuntimeError:
            # Executor already shut down (interpreter exiting)
            logger.warning(
                'Access counter executor unavailable. Dropping increment.',
                extra={'shortcode': shortcode, 'event': ACCESS_COUNT_UPDATE_FAILED},
            )
            return

        with self._pending_lock:
            self._pending.add(future)
        future.add_done_callback(lambda f: self._on_hit_done(shortcode, f))

    def _on_hit_done(self, shortcode: str, future: Future) -> None:
        with self._pending_lock:
            self._pending.discard(future)
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.warning(
                'Failed to update access count.',
                exc_info=error,
                extra={'shortcode': shortcode, 'event': ACCESS_COUNT_UPDATE_FAILED, 'error': error.__class__.__name__},
            )
