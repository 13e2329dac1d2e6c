class AppError(Exception):
    """Base application error for the IP location service."""


class LookupUnavailableError(AppError):
    """Raised when the upstream geolocation lookup cannot produce a result.

    Covers transport failures and timeouts, non-200 upstream responses and
    bodies that are not a JSON object.
    """


class ServerStartupError(AppError):
    """Raised when the listening socket cannot be bound."""
