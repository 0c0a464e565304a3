from typing import Optional

from .models.errors import (
    NotFoundError,
    RequestError,
    ServerError,
    StatusError,
    StatusLineError,
    UnhandledStatusError,
)


def classify_status(status_code: int, status: str) -> Optional[StatusError]:
    """Map a response status to an error, or None for 2xx.

    Args:
        status_code: The numeric HTTP status code.
        status: The status line text, e.g. ``"404 Not Found"``.
    """
    if 200 <= status_code < 300:
        return None

    err = StatusLineError(status)
    if status_code == 404:
        return NotFoundError(status_code, status, err)
    if 400 <= status_code < 500:
        return RequestError(status_code, status, err)
    if 500 <= status_code < 600:
        return ServerError(status_code, status, err)
    return UnhandledStatusError(status_code, status, err)


def status_line(status_code: int, reason_phrase: str) -> str:
    return f"{status_code} {reason_phrase}".strip()
