"""API error classes and handling."""

from typing import Optional


class MailgunError(Exception):
    """Base class for API errors."""

    pass


class HTTPStatusError(MailgunError):
    """The API answered with a non-success HTTP status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class MissingRequiredParameters(HTTPStatusError):
    """Request parameters were rejected (HTTP 400)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class InvalidCredentials(HTTPStatusError):
    """Authentication failed (HTTP 401)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class MissingEndpoint(HTTPStatusError):
    """Requested endpoint does not exist (HTTP 404)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class GenericHTTPError(HTTPStatusError):
    """Any other non-200 response.

    Carries the status code and the raw response body so callers can decide
    what to do with statuses the client does not classify.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        response_body: Optional[str] = None,
    ) -> None:
        super().__init__(message, status_code)
        self.response_body = response_body

    def __str__(self) -> str:
        return f"{self.args[0]} (HTTP {self.status_code})"


class TransportError(MailgunError):
    """Network error occurred before any HTTP status was received."""

    pass
