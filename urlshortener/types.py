from typing import Any

from botocore.client import BaseClient


# Type aliases for Python dictionaries
type LambdaEvent = dict[str, Any]
type LambdaContext = Any
type LambdaResponse = dict[str, Any]
type LambdaConfiguration = dict[str, Any]
type AppConfig = dict[str, Any]
type DynamoDBItem = dict[str, Any]

# Type aliases for boto3 clients and resources
type AppConfigDataClient = BaseClient
type DynamoDBClient = BaseClient
type DynamoDBTable = Any  # boto3.resources.factory.dynamodb.Table (generated at runtime)
