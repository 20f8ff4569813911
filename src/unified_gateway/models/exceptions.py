"""Custom exceptions for the unified gateway layer."""


class GatewayError(Exception):
    """Base exception for gateway-related errors."""

    pass


class ConfigurationError(GatewayError):
    """
    Raised when a gateway profile is missing required credentials.

    This is a TERMINAL error. It is detected before any request is built,
    so no network traffic happens for a misconfigured gateway.
    """

    pass


class MissingOptionError(ConfigurationError):
    """Raised when a provider requires an option the caller did not supply."""

    pass


class UnsupportedOperationError(ConfigurationError):
    """Raised when an operation is requested from a provider that lacks it."""

    pass


class TransportError(GatewayError):
    """
    Raised by a transport when the provider could not be reached.

    This is a RETRYABLE error from the caller's point of view, but the
    lifecycle never retries it. It is converted to a failed Response.

    Examples:
    - Network timeout
    - Connection refused / DNS failure
    - TLS handshake failure
    """

    pass


class ParseError(GatewayError):
    """
    Raised when a provider response does not decode to the expected structure.

    The lifecycle converts this into a failed Response with a generic
    "contact support" message since the caller cannot act on it.
    """

    pass
