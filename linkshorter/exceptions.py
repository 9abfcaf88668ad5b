class LinkShorterError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:linkshorter_error'


class InvalidInputError(LinkShorterError, ValueError):
    """Raised when a caller passes a malformed URL, a non-positive limit or an unset identifier."""

    error_code = 'app:invalid_input_error'


class InternalError(LinkShorterError):
    """Raised when an operation cannot complete for reasons outside the caller's control."""

    error_code = 'app:internal_error'


class ConfigurationError(LinkShorterError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
