#!/usr/bin/env python3
"""
Provision the DynamoDB table backing the URL shortener.

This CLI creates:
    - table <table-name> (partition key `short_url`, on-demand billing)
    - GSI <index-name> on `long_url_hash` (projection ALL), used for deduplication
    - TTL on the `ttl` attribute (absolute expiry in epoch seconds)

CLI usage:
    $ python -m bootstrap.create_table \
        --table-name URLShortenerMappings \
        --region us-east-1 \
        --tags "Owner=platform-team,Service=urlshortener"

    # Against LocalStack
    $ python -m bootstrap.create_table --endpoint-url http://localhost:4566 --region us-east-1

Behavior:
    - Idempotent: an existing table is left as is; TTL is enabled if it is not already.
    - Tags are applied only when the table is created.
    - Prints concise action logs.

Args:
    --table-name (str): Table name (default: URLShortenerMappings).
    --index-name (str): Long URL GSI name (default: LongURLIndex).
    --region (str): AWS region (default: us-east-1).
    --endpoint-url (str): Optional endpoint override (e.g., LocalStack).
    --tags (str): Optional comma-separated key=value tags.
    --dry-run (flag): If set, preview without writing.
    --aws-profile (str): Optional AWS shared config/credentials profile.

Raises:
    ValueError: For invalid inputs.
    botocore.exceptions.BotoCoreError / ClientError: For AWS API failures.
"""

from __future__ import annotations

import argparse

from bootstrap.helper import boto3_session, normalize_user_tags
from bootstrap.aws_actions import create_table, enable_ttl
from urlshortener.constants import DEFAULT_TABLE_NAME, DEFAULT_LONG_URL_INDEX, DEFAULT_AWS_REGION, ItemAttr


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Steps:
        - Parse CLI arguments
        - Create (or find) the table and wait for it to become ACTIVE
        - Enable TTL on the expiry attribute
    """
    parser = argparse.ArgumentParser(
        prog='create_table.py',
        description='Create the DynamoDB table, long URL index and TTL used by the URL shortener',
    )
    parser.add_argument('--table-name', default=DEFAULT_TABLE_NAME, help=f'Table name (default: {DEFAULT_TABLE_NAME})')
    parser.add_argument('--index-name', default=DEFAULT_LONG_URL_INDEX, help=f'GSI name (default: {DEFAULT_LONG_URL_INDEX})')
    parser.add_argument('--region', default=DEFAULT_AWS_REGION, help=f'AWS region (default: {DEFAULT_AWS_REGION})')
    parser.add_argument('--endpoint-url', default=None, help='Endpoint override, e.g. http://localhost:4566')
    parser.add_argument('--tags', default='', help='Comma-separated tags, e.g. "Owner=platform-team,Service=urlshortener"')
    parser.add_argument('--dry-run', action='store_true', help='Preview without writing')
    parser.add_argument('--aws-profile', default=None, help='AWS shared profile name (e.g., default, dev, prod)')

    args = parser.parse_args(argv)

    table_name = args.table_name.strip()
    index_name = args.index_name.strip()
    if not table_name:
        raise ValueError('Missing --table-name')
    if not index_name:
        raise ValueError('Missing --index-name')

    tags = [{'Key': 'Component', 'Value': 'url-mappings'}, {'Key': 'ManagedBy', 'Value': 'bootstrap'}]
    tags += normalize_user_tags(args.tags)

    session = boto3_session(args.aws_profile, args.region)
    dynamodb = session.client('dynamodb', endpoint_url=args.endpoint_url)

    created = create_table(dynamodb, table_name, index_name, tags=tags, dry_run=args.dry_run)
    enable_ttl(dynamodb, table_name, ItemAttr.TTL, dry_run=args.dry_run)

    if args.dry_run:
        print(f"Done. Previewed table '{table_name}'.")
    else:
        print(f"Done. Table '{table_name}' {'created' if created else 'already existed'}; TTL on '{ItemAttr.TTL}'.")


if __name__ == '__main__':
    main()
