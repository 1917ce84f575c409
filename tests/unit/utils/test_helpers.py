"""Unit tests for helpers.py.

Test coverage includes:

1. path_parameter() reads proxy event path parameters
2. expires_at_from_now() computes absolute expiry
3. require_environment() checks the environment on every call
4. guarantee_500_response() converts handler crashes into 500 responses
"""

import json

import pytest
from freezegun import freeze_time

from urlshortener.exceptions import MissingEnvironmentVariableError
from urlshortener.utils.helpers import (
    path_parameter,
    expires_at_from_now,
    require_environment,
    guarantee_500_response,
)


NOW = 1_760_486_400  # 2025-10-15T00:00:00Z


# -------------------------------
# 1. path_parameter()
# -------------------------------


@pytest.mark.parametrize(
    'event, expected',
    [
        ({'pathParameters': {'shortUrl': '8ec596c44bd62b6b'}}, '8ec596c44bd62b6b'),
        ({'pathParameters': {'shortUrl': ''}}, None),
        ({'pathParameters': {'longUrl': 'https://example.com'}}, None),
        ({'pathParameters': None}, None),
        ({}, None),
    ],
)
def test_path_parameter(event, expected):
    assert path_parameter(event, 'shortUrl') == expected


# -------------------------------
# 2. expires_at_from_now()
# -------------------------------


@freeze_time('2025-10-15')
@pytest.mark.parametrize('args, expected', [((), NOW + 31_536_000), ((60,), NOW + 60), ((0,), NOW)])
def test_expires_at_from_now(args, expected):
    assert expires_at_from_now(*args) == expected


# -------------------------------
# 3. require_environment()
# -------------------------------


@require_environment('TABLE_NAME', 'REDIS_HOST')
def connect(table: str) -> str:
    return f'connected to {table}'


def test_require_environment_passes_through(monkeypatch):
    monkeypatch.setenv('TABLE_NAME', 'URLShortenerMappings')
    monkeypatch.setenv('REDIS_HOST', 'redis')

    assert connect('URLShortenerMappings') == 'connected to URLShortenerMappings'


@pytest.mark.parametrize(
    'environment, message',
    [
        ({'REDIS_HOST': 'redis'}, "'TABLE_NAME'$"),
        ({'TABLE_NAME': '', 'REDIS_HOST': 'redis'}, "'TABLE_NAME'$"),
        ({}, "'TABLE_NAME', 'REDIS_HOST'$"),
    ],
)
def test_require_environment_missing_or_empty(monkeypatch, environment, message):
    monkeypatch.delenv('TABLE_NAME', raising=False)
    monkeypatch.delenv('REDIS_HOST', raising=False)
    for name, value in environment.items():
        monkeypatch.setenv(name, value)

    with pytest.raises(MissingEnvironmentVariableError, match=f'Missing required environment variables: {message}'):
        connect('URLShortenerMappings')


def test_require_environment_checked_per_call(monkeypatch):
    """A warm container sees variables set after decoration."""
    monkeypatch.delenv('TABLE_NAME', raising=False)
    monkeypatch.setenv('REDIS_HOST', 'redis')
    with pytest.raises(MissingEnvironmentVariableError):
        connect('URLShortenerMappings')

    monkeypatch.setenv('TABLE_NAME', 'URLShortenerMappings')
    assert connect('URLShortenerMappings') == 'connected to URLShortenerMappings'


# -------------------------------
# 4. guarantee_500_response()
# -------------------------------


@guarantee_500_response
def crashing_handler(event, context):
    raise RuntimeError('boom')


@guarantee_500_response
def healthy_handler(event, context):
    return {'statusCode': 301, 'headers': {'Location': event['target']}}


def test_guarantee_500_response(monkeypatch, caplog):
    monkeypatch.setattr('urlshortener.utils.helpers.running_locally', lambda: False)

    response = crashing_handler({}, None)
    body = json.loads(response['body'])

    assert response['statusCode'] == 500
    assert body['errorCode'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'
    assert 'Unhandled exception in Lambda handler' in caplog.text


def test_guarantee_500_response_reraises_when_running_locally(monkeypatch):
    monkeypatch.setattr('urlshortener.utils.helpers.running_locally', lambda: True)

    with pytest.raises(RuntimeError, match='boom'):
        crashing_handler({}, None)


def test_guarantee_500_response_passes_responses_through():
    response = healthy_handler({'target': 'https://example.com'}, None)

    assert response == {'statusCode': 301, 'headers': {'Location': 'https://example.com'}}
    assert healthy_handler.__name__ == 'healthy_handler'
