"""Data Access Object (DAO) implementation for managing shortened URLs in DynamoDB

This module provides a DynamoDB-based implementation of ShortURLBaseDAO. One
item per short URL lives in the table, keyed by 'short_url', with a global
secondary index (LongURLIndex) keyed by 'long_url_hash' (SHA-256 of the long
URL) and DynamoDB TTL enabled on the numeric 'ttl' attribute.

Responsibilities:
    - Conditionally insert short URLs (insert unless a live item holds the key);
    - Retrieve short URLs by short code and by long URL;
    - Atomically increment per-link access counters;
    - Hide expired items which DynamoDB has not deleted yet;
    - Raise appropriate DAO exceptions.

Classes:
    ShortURLDynamoDBDAO:
        DAO for storing and retrieving ShortURLModel in a DynamoDB table.

Example:
    >>> dao = ShortURLDynamoDBDAO(table_name='URLShortenerMappings')
    >>> dao.insert(ShortURLModel(shortcode='8ec596c44bd62b6b',
    ...                          target='https://example.com/very/long/url',
    ...                          expires_at=1_792_022_400))
    <ShortURLDynamoDBDAO>
    >>> dao.get('8ec596c44bd62b6b').access_count
    0
    >>> dao.hit('8ec596c44bd62b6b')
    1
"""

import time

from beartype import beartype
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from urlshortener.constants import ItemAttr
from urlshortener.models import ShortURLModel
from urlshortener.utils.shortener import long_url_digest
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.dynamodb.mixins import DynamoDBClientMixin
from urlshortener.dao.dynamodb.helpers import handle_dynamodb_errors, is_conditional_check_failure
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError


class ShortURLDynamoDBDAO(DynamoDBClientMixin, ShortURLBaseDAO):
    """DynamoDB-based Data Access Object (DAO) for managing short URL mappings

    Attributes (see DynamoDBClientMixin):
        table (DynamoDBTable):
            boto3 Table resource.
        table_name (str):
            Name of the table.
        index_name (str):
            Name of the long URL global secondary index.

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLDynamoDBDAO:
            PutItem guarded by attribute_not_exists(short_url) OR ttl <= now.
            Raises ShortURLAlreadyExistsError when an unexpired item holds the code.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            GetItem by partition key.
            Raises ShortURLNotFoundError when missing or expired.

        find_by_target(target: str, **kwargs) -> ShortURLModel | None:
            Query LongURLIndex by long URL digest for the first unexpired item.

        hit(shortcode: str, **kwargs) -> int:
            UpdateItem 'ADD access_count :inc' guarded by attribute_exists(short_url).
            Raises ShortURLNotFoundError when the condition fails.

    All methods raise DataStoreError on AWS errors (see handle_dynamodb_errors).
    """

    @handle_dynamodb_errors
    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLDynamoDBDAO':
        """Insert a short URL item unless an unexpired item holds its short code

        NOTE: The existence check and the write happen in a single conditional
              PutItem, so two concurrent inserts of the same short code can never
              both succeed:

              (lambda 1): Query LongURLIndex => no item
              (lambda 2): Query LongURLIndex => no item
              (lambda 1): PutItem ... attribute_not_exists(short_url) => OK
              (lambda 2): PutItem ... attribute_not_exists(short_url) => ConditionalCheckFailed

              (lambda 2) then re-reads the winning item (see ShorteningService).

              An expired item which DynamoDB TTL has not deleted yet (deletion can
              lag by ~48h) does not hold the code: the PutItem replaces it.

        Raises:
            ShortURLAlreadyExistsError:
                If an unexpired item with the same short code exists.
            DataStoreError:
                On AWS errors.
        """
        now = int(time.time())
        try:
            self.table.put_item(
                Item=short_url.to_item(),
                ConditionExpression=Attr(ItemAttr.SHORT_URL).not_exists() | Attr(ItemAttr.TTL).lte(now),
            )
        except ClientError as e:
            if is_conditional_check_failure(e):
                raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.") from e
            raise
        return self

    @handle_dynamodb_errors
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL item by short code

        Raises:
            ShortURLNotFoundError:
                If the item does not exist or has expired.
            DataStoreError:
                On AWS errors.
        """
        response = self.table.get_item(Key={ItemAttr.SHORT_URL: shortcode})
        item = response.get('Item')

        if item is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        short_url = ShortURLModel.from_item(item)
        if short_url.is_expired():
            # DynamoDB TTL deletes lazily; the item may linger after expiry
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' expired.")
        return short_url

    @handle_dynamodb_errors
    @beartype
    def find_by_target(self, target: str, **kwargs) -> ShortURLModel | None:
        """Retrieve the unexpired short URL item mapped to a long URL

        Queries the LongURLIndex GSI (eventually consistent) by the SHA-256
        digest of `target`. Expired items still present in the index are
        skipped, and so are items whose long URL differs (digest collision).

        Returns:
            ShortURLModel | None: The mapped short URL, None if there is none.
        """
        now = time.time()
        query_kwargs = {
            'IndexName': self.index_name,
            'KeyConditionExpression': Key(ItemAttr.LONG_URL_HASH).eq(long_url_digest(target)),
        }

        while True:
            response = self.table.query(**query_kwargs)
            for item in response.get('Items', []):
                short_url = ShortURLModel.from_item(item)
                if short_url.target == target and not short_url.is_expired(now):
                    return short_url

            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                return None
            query_kwargs['ExclusiveStartKey'] = last_key

    @handle_dynamodb_errors
    @beartype
    def hit(self, shortcode: str, **kwargs) -> int:
        """Atomically increment the access counter of a short URL

        The update goes straight to the table (never through a cache), and the
        condition keeps it from creating a stub item for unknown short codes.

        Returns:
            int: access count after the increment.

        Raises:
            ShortURLNotFoundError:
                If the item does not exist.
            DataStoreError:
                On AWS errors.
        """
        try:
            response = self.table.update_item(
                Key={ItemAttr.SHORT_URL: shortcode},
                UpdateExpression='ADD #count :inc',
                ConditionExpression=Attr(ItemAttr.SHORT_URL).exists(),
                ExpressionAttributeNames={'#count': ItemAttr.ACCESS_COUNT},
                ExpressionAttributeValues={':inc': 1},
                ReturnValues='UPDATED_NEW',
            )
        except ClientError as e:
            if is_conditional_check_failure(e):
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.") from e
            raise
        return int(response['Attributes'][ItemAttr.ACCESS_COUNT])
