"""restclient - convenience library for REST API calls.

- A generic interface for any HTTP method
- Transparent JSON (or form) encoding of request bodies and JSON decoding
  of response bodies into pydantic models, dataclasses, dicts or lists
- Basic authentication
- Connection timeouts (default: 2s)
- Status codes classified into NotFoundError, RequestError and ServerError
"""

import logging

from ._codec import DataKind, decode_body, encode_body
from ._config import Config
from ._request import Request
from ._shorthand import delete, get, patch, post, post_form, put
from ._status import classify_status
from ._utils import TagOptions, encode_form, get_tag_name, setup_logging
from ._utils.constants import LOGGER_NAME
from .models import (
    Auth,
    DecodeError,
    EncodeError,
    NotFoundError,
    RequestBuildError,
    RequestError,
    RestClientError,
    ServerError,
    StatusError,
    StatusLineError,
    UnhandledStatusError,
)

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())

__all__ = [
    "Auth",
    "Config",
    "DataKind",
    "DecodeError",
    "EncodeError",
    "NotFoundError",
    "Request",
    "RequestBuildError",
    "RequestError",
    "RestClientError",
    "ServerError",
    "StatusError",
    "StatusLineError",
    "TagOptions",
    "UnhandledStatusError",
    "classify_status",
    "decode_body",
    "delete",
    "encode_body",
    "encode_form",
    "get",
    "get_tag_name",
    "patch",
    "post",
    "post_form",
    "put",
    "setup_logging",
]
