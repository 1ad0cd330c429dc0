"""Mailgun REST client.

Authenticated request dispatch and response classification for the Mailgun
HTTP API.
"""

__version__ = "0.1.0"

from mailgun_client.api.client import RestClient
from mailgun_client.api.errors import (
    GenericHTTPError,
    HTTPStatusError,
    InvalidCredentials,
    MailgunError,
    MissingEndpoint,
    MissingRequiredParameters,
    TransportError,
)
from mailgun_client.api.files import RemoteFile
from mailgun_client.api.responses import ApiResponse, Decoded, RawText

__all__ = [
    "__version__",
    "ApiResponse",
    "Decoded",
    "GenericHTTPError",
    "HTTPStatusError",
    "InvalidCredentials",
    "MailgunError",
    "MissingEndpoint",
    "MissingRequiredParameters",
    "RawText",
    "RemoteFile",
    "RestClient",
    "TransportError",
]
