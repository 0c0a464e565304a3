import os
import ssl
from typing import Any, Optional

from httpx import Timeout

_CA_FILE_VARIABLES = ("SSL_CERT_FILE", "REQUESTS_CA_BUNDLE")


def _env_path(name: str) -> Optional[str]:
    value = os.environ.get(name)
    if not value:
        return None
    return os.path.expanduser(os.path.expandvars(value))


def create_ssl_context() -> ssl.SSLContext:
    """System trust store when truststore is installed, else certifi.

    SSL_CERT_FILE, REQUESTS_CA_BUNDLE and SSL_CERT_DIR override the certifi
    bundle.
    """
    try:
        import truststore

        return truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    except ImportError:
        import certifi

        cafile = next(
            (path for path in map(_env_path, _CA_FILE_VARIABLES) if path),
            certifi.where(),
        )
        return ssl.create_default_context(cafile=cafile, capath=_env_path("SSL_CERT_DIR"))


def get_httpx_client_kwargs(connect_timeout: float) -> dict[str, Any]:
    """Keyword arguments for the httpx.Client built for a single request.

    Only connection establishment is bounded; reads, writes and pool
    acquisition wait indefinitely.
    """
    return {
        "timeout": Timeout(None, connect=connect_timeout),
        "verify": create_ssl_context(),
        "follow_redirects": True,
    }
