from typing import Optional


class RestClientError(Exception):
    """Base class for every error raised by restclient."""

    def __init__(self, message: str, err: Optional[BaseException] = None):
        self.message = message
        self.err = err
        super().__init__(self.message)


class EncodeError(RestClientError):
    """Raised when the request body cannot be encoded.

    Always raised before any network activity takes place.
    """


class DecodeError(RestClientError):
    """Raised when a 2xx response body cannot be decoded into the destination."""


class RequestBuildError(RestClientError):
    """Raised when the outbound request cannot be constructed (bad method or URL)."""


class StatusLineError(Exception):
    """Underlying cause carried by status errors, built from the status line text."""

    def __init__(self, status: str):
        self.status = status
        super().__init__(status)


class StatusError(RestClientError):
    """A response was received but its status code is not 2xx.

    Attributes:
        code: The numeric HTTP status code.
        status: The status line text, e.g. ``"404 Not Found"``.
        err: The underlying cause built from the status line.
    """

    def __init__(self, code: int, status: str, err: Optional[BaseException] = None):
        self.code = code
        self.status = status
        cause = err if err is not None else StatusLineError(status)
        super().__init__(self._format(status, cause), cause)

    @staticmethod
    def _format(status: str, err: BaseException) -> str:
        return str(err)

    @property
    def status_code(self) -> int:
        return self.code


class NotFoundError(StatusError):
    """A 404 status code was received."""

    @staticmethod
    def _format(status: str, err: BaseException) -> str:
        return f"Request: Not Found: {err}"


class RequestError(StatusError):
    """A 4xx status code other than 404 was received."""

    @staticmethod
    def _format(status: str, err: BaseException) -> str:
        return f"Request: Request failed: {status}: {err}"


class ServerError(StatusError):
    """A 5xx status code was received."""

    @staticmethod
    def _format(status: str, err: BaseException) -> str:
        return f"Request: Server failure: {status}: {err}"


class UnhandledStatusError(StatusError):
    """A status code outside the 2xx, 4xx and 5xx ranges was received."""

    @staticmethod
    def _format(status: str, err: BaseException) -> str:
        return f"Unhandled StatusCode: {status}"
