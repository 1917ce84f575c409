class URLShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:url_shortener_error'


class ValidationError(URLShortenerError):
    """Raised when a request carries missing or malformed input."""

    error_code = 'app:validation_error'


class InvalidLongURLError(ValidationError):
    """Raised when a long URL is empty, not a string or too long."""

    error_code = 'app:invalid_long_url_error'


class ShortCodeCollisionError(URLShortenerError):
    """Raised when a generated short code is already owned by a different long URL."""

    error_code = 'app:short_code_collision_error'


class ConfigurationError(URLShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
