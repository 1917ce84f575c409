import threading
import time
from concurrent.futures import Executor, Future

import pytest

from urlshortener.models import ShortURLModel
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError


class InMemoryShortURLDAO(ShortURLBaseDAO):
    """Thread-safe in-memory store honoring the conditional insert contract."""

    def __init__(self):
        self.items: dict[str, ShortURLModel] = {}
        self.hits: dict[str, int] = {}
        self.lock = threading.Lock()

    def insert(self, short_url, **kwargs):
        with self.lock:
            current = self.items.get(short_url.shortcode)
            # Expired records no longer hold their shortcode
            if current is not None and not current.is_expired(time.time()):
                raise ShortURLAlreadyExistsError(short_url.shortcode)
            self.items[short_url.shortcode] = short_url
            self.hits[short_url.shortcode] = short_url.access_count
        return self

    def get(self, shortcode, **kwargs):
        with self.lock:
            short_url = self.items.get(shortcode)
        if short_url is None or short_url.is_expired(time.time()):
            raise ShortURLNotFoundError(shortcode)
        return short_url

    def find_by_target(self, target, **kwargs):
        with self.lock:
            candidates = [s for s in self.items.values() if s.target == target]
        return next((s for s in candidates if not s.is_expired(time.time())), None)

    def hit(self, shortcode, **kwargs):
        with self.lock:
            if shortcode not in self.items:
                raise ShortURLNotFoundError(shortcode)
            self.hits[shortcode] += 1
            return self.hits[shortcode]


class InlineExecutor(Executor):
    """Run submitted calls synchronously in the calling thread."""

    def submit(self, fn, /, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future


@pytest.fixture
def inline_executor() -> InlineExecutor:
    return InlineExecutor()


@pytest.fixture
def memory_dao() -> InMemoryShortURLDAO:
    return InMemoryShortURLDAO()


@pytest.fixture
def long_url() -> str:
    return 'https://example.com/very/long/url'


@pytest.fixture
def shortcode() -> str:
    # sha256('https://example.com/very/long/url')[:16]
    return '8ec596c44bd62b6b'
