"""DynamoDB mixin providing shared table resource initialization.

Responsibilities:
    - Initialize a boto3 DynamoDB Table resource with per-call timeouts
    - Point the resource at LocalStack (or a custom endpoint) in local mode

Classes:
    - DynamoDBClientMixin: Base mixin to inject the Table resource into DAOs.

Example:
    Typical usage with a DAO implementation:

        >>> class ShortURLDynamoDBDAO(DynamoDBClientMixin, ShortURLBaseDAO):
        ...     pass
        ...
        >>> dao = ShortURLDynamoDBDAO(table_name='URLShortenerMappings')
        >>> dao.table.name
        'URLShortenerMappings'
"""

from typing import Optional

import boto3
from botocore.config import Config

from urlshortener.types import DynamoDBTable
from urlshortener.constants import DEFAULT_TABLE_NAME, DEFAULT_LONG_URL_INDEX, DEFAULT_AWS_REGION
from urlshortener.utils.runtime import running_locally, localstack_endpoint


class DynamoDBClientMixin:
    """Mixin DynamoDB Table resource setup for DynamoDB-backed DAOs.

    Attributes:
        table (DynamoDBTable):
            boto3 Table resource used by subclasses.

        table_name (str):
            Name of the DynamoDB table.

        index_name (str):
            Name of the global secondary index keyed by long URL.
    """

    def __init__(
        self,
        table_name: Optional[str] = DEFAULT_TABLE_NAME,
        index_name: Optional[str] = DEFAULT_LONG_URL_INDEX,
        region: Optional[str] = DEFAULT_AWS_REGION,
        endpoint_url: Optional[str] = None,
        connect_timeout: Optional[float] = 1.0,
        read_timeout: Optional[float] = 2.0,
        max_attempts: Optional[int] = 2,
        table: Optional[DynamoDBTable] = None,
    ):
        """Initialize a DynamoDB-based DAO for short URL management

        The option is given to either use an existing Table resource or
        create one via the appropriate connection parameters.

        Args:
            table_name (Optional[str]):
                DynamoDB table name. Defaults to 'URLShortenerMappings'.

            index_name (Optional[str]):
                Global secondary index on 'long_url'. Defaults to 'LongURLIndex'.

            region (Optional[str]):
                AWS region. Defaults to 'us-east-1'.

            endpoint_url (Optional[str]):
                Custom DynamoDB endpoint. Defaults to LocalStack when running locally.

            connect_timeout (Optional[float]):
                Seconds to wait for a connection. Defaults to 1.0.

            read_timeout (Optional[float]):
                Seconds to wait for a response. Defaults to 2.0.

            max_attempts (Optional[int]):
                Total attempts botocore makes per call (including the first). Defaults to 2.

            table (Optional[DynamoDBTable]):
                Pre-initialized Table resource. If None, a new resource is created.
        """
        self.table_name = table_name
        self.index_name = index_name

        if table is None:
            if endpoint_url is None and running_locally():
                endpoint_url = localstack_endpoint()
            config = Config(
                connect_timeout=float(connect_timeout),
                read_timeout=float(read_timeout),
                retries={'max_attempts': int(max_attempts), 'mode': 'standard'},
            )
            resource = boto3.resource('dynamodb', region_name=region, endpoint_url=endpoint_url, config=config)
            table = resource.Table(table_name)

        self.table = table
