"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism (e.g., DynamoDB, Redis).

Responsibilities:
    - Provide an interface for inserting and retrieving ShortURLModel objects.
    - Provide a secondary lookup by long URL (deduplication).
    - Provide an atomic access counter increment.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from urlshortener.models import ShortURLModel
        >>> from urlshortener.dao.dynamodb import ShortURLDynamoDBDAO

        >>> dao = ShortURLDynamoDBDAO(table_name='URLShortenerMappings')

        >>> short_url = ShortURLModel(
        ...     shortcode='8ec596c44bd62b6b',
        ...     target='https://example.com/very/long/url',
        ...     expires_at=1_792_022_400,
        ... )
        >>> dao.insert(short_url)

        >>> dao.get('8ec596c44bd62b6b').target
        'https://example.com/very/long/url'

        >>> dao.find_by_target('https://example.com/very/long/url').shortcode
        '8ec596c44bd62b6b'

NOTE:
    - Mappings expire automatically once `expires_at` passes. The DAO does not
      provide an interface to manually delete entries, and expired entries which
      the store has not garbage collected yet are reported as absent.
"""

from abc import ABC, abstractmethod

from urlshortener.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLBaseDAO:
            Conditionally insert a new ShortURLModel into the data store.
            Raises ShortURLAlreadyExistsError if the short code already exists.
            Raises DataStoreError on connection or write failure.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a ShortURLModel from the data store by short code.
            Raises ShortURLNotFoundError if the entry does not exist or has expired.
            Raises DataStoreError on connection or read failure.

        find_by_target(target: str, **kwargs) -> ShortURLModel | None:
            Retrieve the ShortURLModel for a long URL via the secondary index.
            Returns None if no unexpired entry exists.
            Raises DataStoreError on connection or read failure.

        hit(shortcode: str, **kwargs) -> int:
            Atomically increment the access counter of a short URL.
            Raises ShortURLNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or write failure.

    Subclassing:
        Datastore-specific implementations (e.g., ShortURLDynamoDBDAO or
        ShortURLRedisDAO) must extend this class and implement all
        abstract methods.
    """

    @abstractmethod
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLBaseDAO':
        """Insert a new ShortURLModel into the data store, unless its short code exists.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a ShortURLModel with the same short code already exists

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a ShortURLModel from the data store by its short code.

        Args:
            shortcode (str):
                The short code of the ShortURLModel to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel: The ShortURLModel instance.

        Raises:
            ShortURLNotFoundError:
                If no unexpired ShortURLModel with the given short code exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find_by_target(self, target: str, **kwargs) -> ShortURLModel | None:
        """Retrieve the ShortURLModel mapped to a long URL.

        Args:
            target (str):
                The exact long URL (no normalization).

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel | None: The unexpired ShortURLModel if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def hit(self, shortcode: str, **kwargs) -> int:
        """Increment the access counter of a short URL by 1.

        Args:
            shortcode (str):
                The short code of the accessed ShortURLModel.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            int: The access count after the increment.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given short code exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass
