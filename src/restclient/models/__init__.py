from .auth import Auth
from .errors import (
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

__all__ = [
    "Auth",
    "DecodeError",
    "EncodeError",
    "NotFoundError",
    "RequestBuildError",
    "RequestError",
    "RestClientError",
    "ServerError",
    "StatusError",
    "StatusLineError",
    "UnhandledStatusError",
]
