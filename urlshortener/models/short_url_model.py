import time
from dataclasses import dataclass, field
from datetime import datetime, UTC
from decimal import Decimal
from typing import Any

from urlshortener.constants import ItemAttr
from urlshortener.utils.shortener import long_url_digest


@dataclass(frozen=True)
class ShortURLModel:
    """Represent a shortened URL mapping.

    Attributes:
        shortcode (str):
            The unique short identifier representing the shortened URL.
        target (str):
            The original long URL that the short code redirects to.
        expires_at (int):
            Absolute expiry as epoch seconds. Once reached, the record is
            treated as absent and is eligible for garbage collection.
        created_at (datetime):
            Creation moment (UTC), set once.
        access_count (int):
            Best-effort count of successful resolutions.

    Example:
        >>> url = ShortURLModel(
        ...     shortcode='8ec596c44bd62b6b',
        ...     target='https://example.com/very/long/url',
        ...     expires_at=1_792_281_600,
        ... )
        >>> url.target
        'https://example.com/very/long/url'
        >>> url.access_count
        0
        >>> url.is_expired(now=1_792_281_599)
        False
    """

    shortcode: str
    target: str
    expires_at: int
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    access_count: int = 0

    def is_expired(self, now: int | float | None = None) -> bool:
        """Return True once `expires_at` has been reached."""
        now = time.time() if now is None else now
        return self.expires_at <= now

    def to_item(self) -> dict[str, Any]:
        """Serialize the model into its DynamoDB item shape.

        `long_url_hash` keys the LongURLIndex GSI, so long URLs of any length
        (up to the 400 KB item limit) can be looked up.
        """
        return {
            ItemAttr.SHORT_URL: self.shortcode,
            ItemAttr.LONG_URL: self.target,
            ItemAttr.LONG_URL_HASH: long_url_digest(self.target),
            ItemAttr.TTL: self.expires_at,
            ItemAttr.CREATED_AT: self.created_at.isoformat(),
            ItemAttr.ACCESS_COUNT: self.access_count,
        }

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> 'ShortURLModel':
        """Build a model from a DynamoDB item.

        boto3 returns numbers as `Decimal`; they are converted back to `int`.
        Items written before `created_at` was tracked fall back to the epoch.
        """
        created_at = item.get(ItemAttr.CREATED_AT)
        return cls(
            shortcode=item[ItemAttr.SHORT_URL],
            target=item[ItemAttr.LONG_URL],
            expires_at=_to_int(item[ItemAttr.TTL]),
            created_at=datetime.fromisoformat(created_at) if created_at else datetime.fromtimestamp(0, UTC),
            access_count=_to_int(item.get(ItemAttr.ACCESS_COUNT, 0)),
        )


def _to_int(value: int | Decimal | str) -> int:
    return int(value)
