import functools
from collections.abc import Callable

from urlshortener.utils.shortener import long_url_digest


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for storing data models.

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "urlshortener:prod" or "urlshortener:dev".
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_url_key(self, shortcode: str) -> str:
        return f'links:{shortcode}:url'

    @prefix_key
    def link_hits_key(self, shortcode: str) -> str:
        return f'links:{shortcode}:hits'

    @prefix_key
    def link_created_at_key(self, shortcode: str) -> str:
        return f'links:{shortcode}:created_at'

    @prefix_key
    def target_key(self, target: str) -> str:
        # Long URLs have arbitrary length; index them by digest
        return f'targets:{long_url_digest(target)}'
