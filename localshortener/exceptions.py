class LocalShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:localshortener_error'


class ConfigurationError(LocalShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class AuthenticationError(LocalShortenerError):
    """Raised when a mutating request carries a wrong or missing API key."""

    error_code = 'api:authentication_error'


class ShortLinkError(LocalShortenerError):
    """Base exception for short link request errors."""

    error_code = 'link:short_link_error'


class ValidationError(ShortLinkError):
    """Raised when a shorten request carries invalid input."""

    error_code = 'link:validation_error'


class NotFoundError(ShortLinkError):
    """Raised when there is no live short link for a code."""

    error_code = 'link:not_found_error'


class RandomSourceError(ShortLinkError):
    """Raised when the secure random source cannot be read."""

    error_code = 'link:random_source_error'


class CodeExhaustedError(ShortLinkError):
    """Raised when every generated candidate code is already taken."""

    error_code = 'link:code_exhausted_error'
