"""
AWS action primitives for provisioning the short URL table.

Exposed functions (signatures):
    create_table(
        dynamodb_client,
        table_name: str,
        index_name: str,
        *,
        tags: list[dict[str, str]] | None = None,
        dry_run: bool = False,
    ) -> bool

    enable_ttl(
        dynamodb_client,
        table_name: str,
        attribute: str,
        *,
        dry_run: bool = False,
    ) -> None

Behavior:
    - `create_table`:
        * Creates an on-demand table keyed by `short_url` with a GSI on `long_url_hash`.
        * Leaves an existing table untouched.
        * Waits until the table is ACTIVE.
    - `enable_ttl`:
        * Turns on DynamoDB TTL for the given attribute unless it already is.

Raises:
    botocore.exceptions.BotoCoreError / ClientError for AWS API failures.
"""

from __future__ import annotations

from urlshortener.constants import ItemAttr


def create_table(
    dynamodb_client,
    table_name: str,
    index_name: str,
    *,
    tags: list[dict[str, str]] | None = None,
    dry_run: bool = False,
) -> bool:
    """Create the short URL table and its long URL index if missing.

    Returns:
        bool: True if the table was created, False if it already existed
              (or in dry-run mode).

    Example:
        >>> create_table(ddb, "URLShortenerMappings", "LongURLIndex")  # doctest: +SKIP
        DynamoDB create table='URLShortenerMappings' index='LongURLIndex' [created]
        True
    """
    msg = f"DynamoDB create table='{table_name}' index='{index_name}'"
    if dry_run:
        print("[DRY-RUN]", msg)
        return False

    kwargs = {
        "TableName": table_name,
        "BillingMode": "PAY_PER_REQUEST",
        "AttributeDefinitions": [
            {"AttributeName": ItemAttr.SHORT_URL, "AttributeType": "S"},
            {"AttributeName": ItemAttr.LONG_URL_HASH, "AttributeType": "S"},
        ],
        "KeySchema": [{"AttributeName": ItemAttr.SHORT_URL, "KeyType": "HASH"}],
        "GlobalSecondaryIndexes": [
            {
                "IndexName": index_name,
                "KeySchema": [{"AttributeName": ItemAttr.LONG_URL_HASH, "KeyType": "HASH"}],
                "Projection": {"ProjectionType": "ALL"},
            }
        ],
    }
    if tags:
        kwargs["Tags"] = tags

    try:
        dynamodb_client.create_table(**kwargs)
        created = True
    except dynamodb_client.exceptions.ResourceInUseException:
        created = False

    dynamodb_client.get_waiter("table_exists").wait(TableName=table_name)
    print(msg + (" [created]" if created else " [exists]"))
    return created


def enable_ttl(dynamodb_client, table_name: str, attribute: str, *, dry_run: bool = False) -> None:
    """Enable DynamoDB TTL on `attribute` (epoch seconds) if not already enabled."""
    msg = f"DynamoDB TTL table='{table_name}' attribute='{attribute}'"
    if dry_run:
        print("[DRY-RUN]", msg)
        return

    description = dynamodb_client.describe_time_to_live(TableName=table_name)["TimeToLiveDescription"]
    if description.get("TimeToLiveStatus") in {"ENABLED", "ENABLING"} and description.get("AttributeName") == attribute:
        print(msg + " [unchanged]")
        return

    dynamodb_client.update_time_to_live(
        TableName=table_name,
        TimeToLiveSpecification={"Enabled": True, "AttributeName": attribute},
    )
    print(msg + " [updated]")
