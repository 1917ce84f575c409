from unittest.mock import MagicMock

import pytest

from urlshortener.dao.dynamodb import ShortURLDynamoDBDAO


@pytest.fixture
def table() -> MagicMock:
    """Mock a boto3 DynamoDB Table resource."""
    _table = MagicMock()
    _table.name = 'URLShortenerMappings'
    _table.get_item.return_value = {}
    _table.query.return_value = {'Items': []}
    return _table


@pytest.fixture
def dao(table) -> ShortURLDynamoDBDAO:
    return ShortURLDynamoDBDAO(table_name='URLShortenerMappings', table=table)
