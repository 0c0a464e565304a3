from typing import Any, Optional

from ._codec import DataKind
from ._request import Request
from .models.auth import Auth


def _call(
    method: str,
    url: str,
    auth: Optional[Auth],
    req: Any = None,
    ret: Any = None,
    **kwargs: Any,
) -> Request:
    r = Request(method, url, auth, request_body=req, response_body=ret, **kwargs)
    r.do()
    return r


def get(url: str, auth: Optional[Auth] = None, ret: Any = None, **kwargs: Any) -> Request:
    """GET ``url``, decoding the response into ``ret``."""
    return _call("GET", url, auth, None, ret, **kwargs)


def post(
    url: str, auth: Optional[Auth] = None, req: Any = None, ret: Any = None, **kwargs: Any
) -> Request:
    """POST ``req`` as JSON to ``url``, decoding the response into ``ret``."""
    return _call("POST", url, auth, req, ret, **kwargs)


def put(
    url: str, auth: Optional[Auth] = None, req: Any = None, ret: Any = None, **kwargs: Any
) -> Request:
    return _call("PUT", url, auth, req, ret, **kwargs)


def patch(
    url: str, auth: Optional[Auth] = None, req: Any = None, ret: Any = None, **kwargs: Any
) -> Request:
    return _call("PATCH", url, auth, req, ret, **kwargs)


def delete(
    url: str, auth: Optional[Auth] = None, req: Any = None, ret: Any = None, **kwargs: Any
) -> Request:
    return _call("DELETE", url, auth, req, ret, **kwargs)


def post_form(
    url: str, auth: Optional[Auth] = None, req: Any = None, ret: Any = None, **kwargs: Any
) -> Request:
    """POST ``req`` form-encoded to ``url``, decoding the JSON response into ``ret``."""
    return _call("POST", url, auth, req, ret, data_kind=DataKind.FORM, **kwargs)
