"""Lambda configuration from AWS AppConfig.

One AppConfig *Application* (`APP_NAME`) holds an *Environment* per `APP_ENV`.
Its configuration profile (`backend-config`) is a single JSON document shared
by all Lambdas, each reading its own section:

    {
        "active_backend": "dynamodb",
        "build": "2025-10-15.1",
        "configs": {
            "shorten_url": {
                "dynamodb": { "table_name": "URLShortenerMappings", ... }
            },
            "redirect_url": {
                "dynamodb": { ... },
                "cache": { "host": "...", "port": 6379, "db": 0, "ttl": 3600 }
            }
        }
    }

In AWS the document comes from the AppConfig Data API. Under `sam local` it
can come from a local AppConfig agent instead (`APPCONFIG_AGENT_URL`), which
must point at this machine or the Docker host.

Example:
    >>> load_config('redirect_url')
    {'dynamodb': {'table_name': 'URLShortenerMappings'}, 'cache': {'host': 'redis', 'port': 6379}}
"""

import os
import json
import urllib.parse
import urllib.request
import logging

import boto3

from urlshortener.types import LambdaConfiguration
from urlshortener.constants import ENV
from urlshortener.exceptions import BadConfigurationError
from urlshortener.utils.helpers import require_environment
from urlshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)

DEFAULT_PROFILE_NAME = 'backend-config'
AGENT_HOSTS = frozenset({'localhost', '127.0.0.1', 'host.docker.internal'})
AGENT_PORT = 2772
AGENT_TIMEOUT = 5


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return the DAO key prefix '<app name>:<app env>', or None without APP_NAME.

    Example:
        >>> os.environ['APP_NAME'] = 'urlshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'urlshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def extract_lambda_config(document: dict, lambda_name: str) -> LambdaConfiguration:
    """Extract a Lambda's section of the AppConfig document.

    Returns:
        dict: {<active backend>: {...}} plus {'cache': {...}} when the Lambda
              defines a cache tier.

    Raises:
        BadConfigurationError:
            If the document lacks the active backend or the Lambda's section.
    """
    try:
        backend = document['active_backend']
        lambda_config = document['configs'][lambda_name]
        data = {backend: lambda_config[backend]}
    except (KeyError, TypeError) as e:
        raise BadConfigurationError(f'AppConfig document has no {e} section for {lambda_name!r}.') from e

    if lambda_config.get('cache'):
        data['cache'] = lambda_config['cache']
    return data


def local_agent_url() -> str | None:
    """Return $APPCONFIG_AGENT_URL when running locally, None otherwise.

    Raises:
        BadConfigurationError:
            If the URL is not http(s) on a local host and the agent port.
    """
    url = os.getenv(ENV.AppConfig.AGENT_URL)
    if not url or not running_locally():
        return None

    parts = urllib.parse.urlparse(url)
    if parts.scheme not in {'http', 'https'} or parts.hostname not in AGENT_HOSTS or parts.port not in {AGENT_PORT, None}:
        raise BadConfigurationError(f'Refusing to load AppConfig from non-local agent URL {url!r}.')
    return url.rstrip('/')


def fetch_agent_document(agent_url: str) -> dict:
    """Read the configuration document from a local AppConfig agent"""
    profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, DEFAULT_PROFILE_NAME)
    url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

    logger.debug('Loading AppConfig from local agent.', extra={'agentUrl': url})
    with urllib.request.urlopen(url, timeout=AGENT_TIMEOUT) as response:
        return json.load(response)


@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def fetch_appconfig_document() -> dict:
    """Read the configuration document through the AppConfig Data API

    Raises:
        MissingEnvironmentVariableError:
            If APPCONFIG_APP_ID, APPCONFIG_ENV_ID or APPCONFIG_PROFILE_ID is unset.
    """
    logger.debug('Loading AppConfig from AWS AppConfig.')
    appconfig = boto3.client('appconfigdata')

    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    return json.loads(response['Configuration'].read().decode('utf-8'))


def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load the configuration section of a Lambda ('shorten_url', 'redirect_url').

    Raises:
        MissingEnvironmentVariableError:
            If the AppConfig identifiers are not set (AWS path).
        BadConfigurationError:
            If the document has no section for the Lambda, or the local agent
            URL is not local.
    """
    agent_url = local_agent_url()
    document = fetch_agent_document(agent_url) if agent_url else fetch_appconfig_document()

    data = extract_lambda_config(document, lambda_name)
    logger.debug('Loaded AppConfig.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
    return data
