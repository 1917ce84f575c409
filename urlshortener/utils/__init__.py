from urlshortener.utils.config import app_env, app_name, app_prefix, load_config
from urlshortener.utils.helpers import path_parameter, expires_at_from_now, require_environment, guarantee_500_response
from urlshortener.utils.shortener import generate_shortcode, long_url_digest
from urlshortener.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'long_url_digest',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'path_parameter',
    'expires_at_from_now',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
