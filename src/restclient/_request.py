"""The request lifecycle.

A :class:`Request` drives exactly one call, strictly in order:

    encode body -> build client -> build request -> set headers
    -> apply auth -> execute -> classify status -> decode body

Any stage failing aborts the call and the error propagates to the caller
unchanged; nothing is retried. A non-2xx response is never decoded, so the
response destination is only touched after a successful exchange.
"""

import re
from logging import Logger, getLogger
from typing import Any, Mapping, Optional, Union

import httpx
from httpx import Client, Response

from ._codec import DataKind, content_type_for, decode_body, encode_body
from ._config import Config
from ._status import classify_status, status_line
from ._utils._logs import setup_logging
from ._utils._ssl_context import get_httpx_client_kwargs
from ._utils.constants import HEADER_AUTHORIZATION, HEADER_CONTENT_TYPE, LOGGER_NAME
from .models.auth import Auth
from .models.errors import DecodeError, RequestBuildError, RestClientError

# RFC 9110 token characters
_METHOD_TOKEN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


class Request:
    """One REST call: its inputs, its transport state and its outcome.

    Args:
        method: The HTTP method (GET, POST, PUT, DELETE, ...).
        url: The absolute URL to call.
        auth: Optional Basic credentials. No header is sent without a username.
        query_parameters: Parameters appended to the query string.
        request_body: The payload to encode, or None for no body.
        response_body: The destination populated in place from a 2xx response.
            A pydantic model, dataclass instance, dict or list.
        data_kind: How the payload is encoded. Defaults to JSON.
        timeout: Seconds allowed for establishing the connection. This does
            not bound the whole exchange. Defaults to ``config.timeout``.
        config: Defaults for the request. ``Config()`` when omitted. A config
            with ``debug`` set turns on restclient logging to stderr.
        logger: Where diagnostics go. Defaults to the ``restclient`` logger.
    """

    def __init__(
        self,
        method: str,
        url: str,
        auth: Optional[Auth] = None,
        *,
        query_parameters: Optional[Mapping[str, str]] = None,
        request_body: Any = None,
        response_body: Any = None,
        data_kind: Union[DataKind, str] = DataKind.JSON,
        timeout: Optional[float] = None,
        config: Optional[Config] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._config = config or Config()
        if self._config.debug:
            setup_logging(debug=True)
        self._logger = logger or getLogger(LOGGER_NAME)

        self.method = method
        self.url = url
        self.auth = auth if auth is not None else Auth()

        self.query_parameters: dict[str, str] = dict(query_parameters or {})
        self.request_body = request_body
        self.response_body = response_body
        self.data_kind = data_kind

        self.request_content: Optional[bytes] = None
        self.response_raw: bytes = b""

        self.timeout = timeout if timeout is not None else self._config.timeout

        self.client: Optional[Client] = None
        self.request: Optional[httpx.Request] = None
        self.response: Optional[Response] = None

    @classmethod
    def basic(cls, method: str, url: str, **kwargs: Any) -> "Request":
        """Create a Request without authentication."""
        return cls(method, url, Auth(), **kwargs)

    @classmethod
    def with_auth(
        cls, method: str, url: str, username: str, password: str, **kwargs: Any
    ) -> "Request":
        """Create a Request authenticating with Basic credentials."""
        return cls(method, url, Auth(username=username, password=password), **kwargs)

    def __repr__(self) -> str:
        return f"Request(method={self.method!r}, url={self.url!r}, auth={self.auth!r})"

    def _require(self, attribute: str, stage: str) -> Any:
        value = getattr(self, attribute)
        if value is None:
            raise RestClientError(f"{stage} called before the {attribute} was created")
        return value

    def do(self) -> None:
        """Run the whole lifecycle.

        Raises:
            EncodeError: The body could not be encoded. Nothing was sent.
            RequestBuildError: The method or URL is malformed. Nothing was sent.
            httpx.TransportError: The connection failed or timed out.
            StatusError: The server answered with a non-2xx status.
            DecodeError: A 2xx body could not be decoded into the destination.
        """
        self._logger.debug("Do: started")

        self.encode_request_body()
        self.create_http_client()
        try:
            self.create_http_request()
            self.set_headers()
            self.apply_auth()

            self._logger.debug("Sending request to server")
            self.execute()
        finally:
            if self.client is not None:
                self.client.close()

        self._logger.debug("Do: completed")

    def encode_request_body(self) -> None:
        """Encode the request body, populating ``request_content``."""
        self._logger.debug("EncodeRequestBody: started")
        self.request_content = encode_body(
            self.request_body, self.data_kind, self._logger
        )
        self._logger.debug("EncodeRequestBody: completed")

    def create_http_client(self) -> None:
        """Build a fresh client whose timeout only bounds connection setup."""
        self._logger.debug("createHTTPClient: started")
        self.client = Client(**get_httpx_client_kwargs(self.timeout))
        self._logger.debug("createHTTPClient: completed")

    def create_http_request(self) -> None:
        self._logger.debug("createHTTPRequest: started")
        if not isinstance(self.method, str) or not _METHOD_TOKEN.match(self.method):
            self._logger.error(f"Failed to create request: invalid method {self.method!r}")
            raise RequestBuildError(f"Invalid HTTP method: {self.method!r}")

        build = self.client.build_request if self.client is not None else httpx.Request
        try:
            self.request = build(
                self.method,
                self.url,
                params=self.query_parameters or None,
                content=self.request_content,
            )
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            self._logger.error(f"Failed to create request: {e}")
            raise RequestBuildError(f"Failed to create request: {e}", e) from e

        self._logger.debug("createHTTPRequest: completed")

    def set_headers(self) -> None:
        request = self._require("request", "set_headers")
        content_type = content_type_for(self.data_kind)
        if content_type is None:
            self._logger.warning(
                f"Unknown data kind {self.data_kind!r}, not setting {HEADER_CONTENT_TYPE}"
            )
            return
        request.headers[HEADER_CONTENT_TYPE] = content_type

    def apply_auth(self) -> None:
        request = self._require("request", "apply_auth")
        if not self.auth.enabled:
            return
        self._logger.debug(f"Adding authentication information: {self.auth!r}")
        request.headers[HEADER_AUTHORIZATION] = self.auth.header_value()

    def execute(self) -> None:
        """Send the request, then classify and decode the response.

        The response is closed before returning, whatever the outcome.
        """
        self._logger.debug("Execute: started")
        client = self._require("client", "execute")
        request = self._require("request", "execute")
        try:
            response = client.send(request, stream=True)
        except httpx.TransportError as e:
            self._logger.error(f"Failed to make request to server: {e}")
            raise

        self.response = response
        try:
            self._logger.debug(f"Server response: {response!r}")
            self.process_status_code()
            self.decode_response()
        finally:
            response.close()

        self._logger.debug("Execute: completed")

    def process_status_code(self) -> None:
        """Raise the classified error for a non-2xx response."""
        self._logger.debug("ProcessStatusCode: started")
        response = self._require("response", "process_status_code")
        status = status_line(response.status_code, response.reason_phrase)
        error = classify_status(response.status_code, status)
        if error is not None:
            self._logger.debug(f"Request failed: {error}")
            raise error from error.err
        self._logger.debug("ProcessStatusCode: completed")

    def decode_response(self) -> None:
        """Decode the response body into ``response_body``."""
        self._logger.debug("DecodeResponse: started")
        response = self._require("response", "decode_response")
        try:
            self.response_raw = response.read()
        except httpx.HTTPError as e:
            self._logger.error(f"Failed to read from body: {e}")
            raise DecodeError(f"Failed to read from body: {e}", e) from e
        self._logger.debug(f"Server response: {response.status_code} {self.response_raw!r}")

        try:
            decode_body(self.response_raw, self.response_body, self._logger)
        except DecodeError as e:
            self._logger.error(f"Failed to decode response body: {self.response_raw!r} {e}")
            raise

        self._logger.debug("DecodeResponse: completed")
