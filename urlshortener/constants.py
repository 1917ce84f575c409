from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Short URL TTL duration (data retention period) (1 year in seconds)
    ONE_YEAR = 31_536_000  # 60 * 60 * 24 * 365


class CacheTTL:
    """Cache entry TTL durations in seconds."""

    # Upper bound for a cached short URL entry (never outlives the record itself)
    SHORT_URL = 3_600


# Short codes are the first 16 hex characters of SHA-256 (64 bits)
SHORTCODE_LENGTH = 16

# DynamoDB table layout
DEFAULT_TABLE_NAME = 'URLShortenerMappings'
DEFAULT_LONG_URL_INDEX = 'LongURLIndex'
DEFAULT_AWS_REGION = 'us-east-1'


class ItemAttr(StrEnum):
    """DynamoDB attribute names of a short URL item."""

    SHORT_URL = 'short_url'
    LONG_URL = 'long_url'
    LONG_URL_HASH = 'long_url_hash'  # LongURLIndex partition key (SHA-256 of long_url)
    TTL = 'ttl'
    CREATED_AT = 'created_at'
    ACCESS_COUNT = 'access_count'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'

    class LocalStack(StrEnum):
        ENDPOINT = 'LOCALSTACK_ENDPOINT'  # usually http://localstack:4566


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
