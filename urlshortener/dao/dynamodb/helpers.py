import functools
from typing import TypeVar, Any
from collections.abc import Callable

from botocore.exceptions import BotoCoreError, ClientError

from urlshortener.dao.exceptions import DataStoreError


__all__ = ['handle_dynamodb_errors', 'is_conditional_check_failure']

F = TypeVar('F', bound=Callable[..., Any])

CONDITIONAL_CHECK_FAILED = 'ConditionalCheckFailedException'


def is_conditional_check_failure(error: ClientError) -> bool:
    """Return True if a ClientError was caused by a failed ConditionExpression."""
    return error.response.get('Error', {}).get('Code') == CONDITIONAL_CHECK_FAILED


def handle_dynamodb_errors[F](method: F) -> F:
    """Wrap DynamoDB-interacting DAO methods to handle AWS errors

    Any botocore error left unhandled by the method (endpoint unreachable,
    read timeout, throttling, missing table, ...) is surfaced as a transient
    DataStoreError. No retry happens here beyond botocore's own retry config.

    Args:
        method (Callable[..., Any]):
            DAO method performing DynamoDB operations.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on AWS errors.

    Example:
        >>> @handle_dynamodb_errors
        ... def get(self, shortcode):
        ...     return self.table.get_item(Key={'short_url': shortcode})
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except ClientError as e:
            code = e.response.get('Error', {}).get('Code', 'Unknown')
            raise DataStoreError(f"DynamoDB request to table '{self.table_name}' failed ({code}).") from e
        except BotoCoreError as e:
            raise DataStoreError(f"Can't reach DynamoDB table '{self.table_name}': {e}") from e

    return wrapper
