"""Exception taxonomy for the flow execution client."""

from __future__ import annotations


class FlowClientError(Exception):
    """Base class for every error raised by flow_exec."""


class ConfigurationError(FlowClientError):
    """Raised when the client is configured with missing or contradictory values.

    Always raised synchronously: at config construction, from_env, or when a
    token update is attempted on a client that cannot accept one.
    """


class NetworkError(FlowClientError):
    """Raised when the HTTP exchange itself fails (DNS, refused connection, timeout).

    The underlying httpx exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class ParseError(FlowClientError):
    """Raised when a response body is not a JSON flow execution response.

    status_code: HTTP status of the response that could not be parsed.
    body: raw response text, for diagnostics.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
