"""Mailgun REST API request dispatcher."""

import base64
import json
import time
from contextlib import ExitStack
from typing import Any, List, Mapping, Optional, Sequence, Union

import httpx
import structlog

from mailgun_client import constants
from mailgun_client.api.errors import (
    GenericHTTPError,
    InvalidCredentials,
    MissingEndpoint,
    MissingRequiredParameters,
    TransportError,
)
from mailgun_client.api.files import (
    MultipartPart,
    collect_files,
    data_parts,
)
from mailgun_client.api.responses import ApiResponse, decode_body
from mailgun_client.config import Settings, get_settings
from mailgun_client.metrics import (
    mailgun_api_latency_seconds,
    mailgun_api_requests_total,
)


logger = structlog.get_logger()

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")

Body = Union[str, bytes, Mapping[str, Any], None]


def generate_endpoint(api_host: str, api_version: str, ssl: bool) -> str:
    """Build the base URL every request path is appended to."""
    scheme = "https" if ssl else "http"
    return f"{scheme}://{api_host}/{api_version}/"


class RestClient:
    """Authenticated client for the Mailgun REST API.

    Every call performs exactly one HTTP request through the injected
    ``httpx.Client`` and either returns an :class:`ApiResponse` (HTTP 200) or
    raises one of the errors in :mod:`mailgun_client.api.errors`. Nothing is
    retried.

    Args:
        api_key: Mailgun API key, sent as the Basic-Auth password
        api_host: API host name, e.g. ``api.mailgun.net``
        api_version: API version path segment, e.g. ``v3``
        ssl: Use https when true, plain http otherwise
        http_client: Transport used to send requests. When omitted, the client
            creates (and owns) an ``httpx.Client``.
        timeout: Timeout in seconds for the client-created transport
    """

    def __init__(
        self,
        api_key: str,
        api_host: str = constants.DEFAULT_API_HOST,
        api_version: str = constants.DEFAULT_API_VERSION,
        ssl: bool = True,
        http_client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ) -> None:
        self._api_key = api_key
        self._owns_http_client = http_client is None
        if http_client is None:
            http_client = httpx.Client(timeout=timeout)
        self._http_client = http_client
        self._api_endpoint = generate_endpoint(api_host, api_version, ssl)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> "RestClient":
        """Create a client from :class:`Settings` (environment by default)."""
        settings = settings or get_settings()
        return cls(
            api_key=settings.api_key,
            api_host=settings.api_host,
            api_version=settings.api_version,
            ssl=settings.ssl,
            http_client=http_client,
            timeout=settings.api_timeout,
        )

    @property
    def api_endpoint(self) -> str:
        return self._api_endpoint

    def close(self) -> None:
        """Close the HTTP transport if this client created it."""
        if self._owns_http_client:
            self._http_client.close()

    def __enter__(self) -> "RestClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _auth_header(self) -> str:
        credentials = f"{constants.API_USER}:{self._api_key}"
        return "Basic " + base64.b64encode(credentials.encode("utf-8")).decode("ascii")

    def send(
        self,
        method: str,
        uri: str,
        body: Body = None,
        files: Optional[Sequence[MultipartPart]] = None,
        extra_headers: Optional[Mapping[str, str]] = None,
    ) -> ApiResponse:
        """Send one request and classify its response.

        Args:
            method: GET, POST, PUT or DELETE
            uri: Path appended verbatim to the base endpoint
            body: Raw str/bytes body, or a mapping sent form-encoded. With
                ``files``, a mapping body is sent as multipart fields and a
                raw body is dropped.
            files: Multipart parts as ``(name, (filename, content))`` tuples.
                When non-empty the request is sent as multipart/form-data.
            extra_headers: Extra request headers

        Returns:
            ApiResponse for HTTP 200

        Raises:
            MissingRequiredParameters: HTTP 400
            InvalidCredentials: HTTP 401
            MissingEndpoint: HTTP 404
            GenericHTTPError: Any other HTTP status
            TransportError: The request never got an HTTP response
            ValueError: Unsupported method
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        request_headers = httpx.Headers(extra_headers or {})
        request_headers["User-Agent"] = (
            f"{constants.SDK_USER_AGENT}/{constants.SDK_VERSION}"
        )
        request_headers["Authorization"] = self._auth_header()

        url = self._api_endpoint + uri
        content: Optional[Union[str, bytes]] = None
        data: Optional[Mapping[str, Any]] = None
        parts: Optional[List[MultipartPart]] = None

        if files:
            # Form fields from a mapping body travel as parts ahead of the files
            parts = data_parts(body) if isinstance(body, Mapping) else []
            parts.extend(files)
            # httpx generates the boundary and the matching Content-Type
            request_headers.pop("Content-Type", None)
        elif isinstance(body, Mapping):
            data = body
        else:
            content = body

        request = self._http_client.build_request(
            method,
            url,
            headers=request_headers,
            content=content,
            data=data,
            files=parts,
        )

        logger.debug(
            "Sending API request",
            method=method,
            url=url,
            multipart=parts is not None,
            parts=len(parts) if parts else 0,
        )

        start_time = time.perf_counter()
        try:
            response = self._http_client.send(request)
        except httpx.TransportError as e:
            mailgun_api_requests_total.labels(
                method=method, outcome="transport_error"
            ).inc()
            logger.warning(
                "API transport error",
                method=method,
                url=url,
                error=str(e),
            )
            raise TransportError(f"Network error: {e}") from e
        finally:
            mailgun_api_latency_seconds.labels(method=method).observe(
                time.perf_counter() - start_time
            )

        return self.response_handler(response)

    def post(
        self,
        endpoint_url: str,
        post_data: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Any]] = None,
    ) -> ApiResponse:
        """POST form fields and files as multipart/form-data.

        Args:
            endpoint_url: Path relative to the base endpoint
            post_data: Field name to value; list/tuple values become one part
                per element
            files: ``message``, ``attachment`` and/or ``inline`` groups, each a
                single file source or a list of them. A source is a path (a
                leading ``@`` is stripped), a :class:`RemoteFile`, or a
                ``{"remoteName": ..., "filePath": ...}`` mapping.
        """
        references = collect_files(files)

        # Every opened file is closed when the request finishes, however it ends
        with ExitStack() as stack:
            post_files = [reference.open(stack) for reference in references]
            return self.send(
                "POST",
                endpoint_url,
                files=data_parts(post_data) + post_files,
            )

    def get(
        self,
        endpoint_url: str,
        query_string: Optional[Mapping[str, Any]] = None,
    ) -> ApiResponse:
        """GET with ``query_string`` serialized onto the path."""
        query = str(httpx.QueryParams(query_string or {}))
        if query:
            endpoint_url = f"{endpoint_url}?{query}"
        return self.send("GET", endpoint_url)

    def put(self, endpoint_url: str, put_data: Body = None) -> ApiResponse:
        """PUT ``put_data`` as the request body (form-encoded if a mapping)."""
        return self.send("PUT", endpoint_url, put_data)

    def delete(self, endpoint_url: str) -> ApiResponse:
        return self.send("DELETE", endpoint_url)

    def response_handler(self, response: httpx.Response) -> ApiResponse:
        """Map an HTTP response to an :class:`ApiResponse` or raise.

        Only 200 counts as success; 201, 202, 204 and friends raise
        :class:`GenericHTTPError` like any other unclassified status.
        """
        status_code = response.status_code
        method = response.request.method if _has_request(response) else "UNKNOWN"

        if status_code == 200:
            mailgun_api_requests_total.labels(method=method, outcome="success").inc()
            logger.debug("API request succeeded", method=method, status_code=status_code)
            return ApiResponse(body=decode_body(response.text), status_code=status_code)

        if status_code == 400:
            outcome = "missing_parameters"
            error: Exception = MissingRequiredParameters(
                constants.EXCEPTION_MISSING_REQUIRED_PARAMETERS
                + self._response_exception_message(response)
            )
        elif status_code == 401:
            outcome = "invalid_credentials"
            error = InvalidCredentials(constants.EXCEPTION_INVALID_CREDENTIALS)
        elif status_code == 404:
            outcome = "missing_endpoint"
            error = MissingEndpoint(
                constants.EXCEPTION_MISSING_ENDPOINT
                + self._response_exception_message(response)
            )
        else:
            outcome = "http_error"
            error = GenericHTTPError(
                constants.EXCEPTION_GENERIC_HTTP_ERROR,
                status_code,
                response.text,
            )

        mailgun_api_requests_total.labels(method=method, outcome=outcome).inc()
        logger.warning(
            "API request failed",
            method=method,
            status_code=status_code,
            error_type=type(error).__name__,
        )
        raise error

    def _response_exception_message(self, response: httpx.Response) -> str:
        """Return ``" " + message`` from a JSON error body, or ``""``."""
        try:
            payload = json.loads(response.text)
        except ValueError:
            return ""
        if isinstance(payload, dict) and payload.get("message") is not None:
            return f" {payload['message']}"
        return ""


def _has_request(response: httpx.Response) -> bool:
    try:
        response.request
    except RuntimeError:
        return False
    return True
