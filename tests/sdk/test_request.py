import base64
import logging
from dataclasses import dataclass, field

import httpx
import pytest
from pydantic import BaseModel
from pytest_httpx import HTTPXMock

from restclient import (
    Auth,
    Config,
    DataKind,
    DecodeError,
    EncodeError,
    NotFoundError,
    Request,
    RequestBuildError,
    RequestError,
    RestClientError,
    ServerError,
    UnhandledStatusError,
)


@dataclass
class StructRequest:
    Variable: str = field(default="", metadata={"json": "variable"})


class Destination(BaseModel):
    variable: str = ""


class TestNewRequest:
    def test_preserves_method_url_and_auth(self, auth: Auth):
        req = Request("GET", "url.com", auth)

        assert req.method == "GET"
        assert req.url == "url.com"
        assert req.auth == auth
        assert req.auth.username == "edward"
        assert req.auth.password == "pass"

    def test_default_timeout(self):
        assert Request("GET", "url.com").timeout == 2.0

    def test_timeout_from_config_and_argument(self):
        assert Request("GET", "url.com", config=Config(timeout=5)).timeout == 5
        assert Request("GET", "url.com", timeout=0.5).timeout == 0.5

    def test_basic(self):
        req = Request.basic("DELETE", "url.com")
        assert req.auth == Auth()
        assert not req.auth.enabled

    def test_with_auth(self):
        req = Request.with_auth("PUT", "url.com", "edward", "pass")
        assert req.auth == Auth(username="edward", password="pass")

    def test_repr_masks_password(self, auth: Auth):
        assert "pass'" not in repr(Request("GET", "url.com", auth))


class TestLifecycleStages:
    def test_create_request(self, auth: Auth):
        req = Request("GET", "http://url.com/path", auth)
        req.create_http_request()

        assert req.request is not None
        assert req.request.method == "GET"
        assert req.request.url.path == "/path"
        assert req.request.headers is not None

    def test_create_request_invalid_method(self):
        req = Request("BAD METHOD", "http://url.com/")
        with pytest.raises(RequestBuildError):
            req.create_http_request()

    def test_create_client_bounds_connect_only(self, auth: Auth):
        req = Request("GET", "url.com", auth, timeout=3)
        req.create_http_client()

        assert req.client is not None
        assert req.client.timeout.connect == 3
        assert req.client.timeout.read is None
        assert req.client.timeout.write is None
        assert req.client.timeout.pool is None
        req.client.close()

    def test_encode_request(self, auth: Auth):
        req = Request("GET", "url.com", auth, request_body=StructRequest("hi"))
        req.encode_request_body()

        assert req.request_content == b'{"variable":"hi"}'

    def test_encode_without_body(self):
        req = Request("GET", "url.com")
        req.encode_request_body()
        assert req.request_content is None

    def test_process_status_code(self, auth: Auth):
        req = Request("GET", "url.com", auth)

        req.response = httpx.Response(404)
        with pytest.raises(NotFoundError) as exc_info:
            req.process_status_code()
        assert exc_info.value.status == "404 Not Found"

        req.response = httpx.Response(450)
        with pytest.raises(RequestError):
            req.process_status_code()

        req.response = httpx.Response(550)
        with pytest.raises(ServerError):
            req.process_status_code()

        req.response = httpx.Response(200)
        req.process_status_code()

    def test_decode_response(self):
        destination = Destination()
        req = Request("GET", "url.com", response_body=destination)
        req.response = httpx.Response(200, content=b'{"variable": "x"}')

        req.decode_response()

        assert req.response_raw == b'{"variable": "x"}'
        assert destination.variable == "x"


class TestDo:
    def test_success_decodes_destination(
        self, httpx_mock: HTTPXMock, base_url: str, auth: Auth
    ):
        httpx_mock.add_response(
            url=f"{base_url}/variables",
            status_code=200,
            json={"variable": "x"},
        )
        destination = Destination()

        req = Request("GET", f"{base_url}/variables", auth, response_body=destination)
        req.do()

        assert destination.variable == "x"
        assert req.response is not None
        assert req.response.is_closed

    def test_sends_json_body_and_headers(
        self, httpx_mock: HTTPXMock, base_url: str, auth: Auth
    ):
        httpx_mock.add_response(url=f"{base_url}/variables", method="POST", status_code=204)

        Request(
            "POST", f"{base_url}/variables", auth, request_body=StructRequest("hi")
        ).do()

        sent_request = httpx_mock.get_request()
        if sent_request is None:
            raise Exception("No request was sent")

        expected = base64.b64encode(b"edward:pass").decode("ascii")
        assert sent_request.method == "POST"
        assert sent_request.content == b'{"variable":"hi"}'
        assert sent_request.headers["Content-Type"] == "application/json"
        assert sent_request.headers["Authorization"] == f"Basic {expected}"

    def test_sends_form_body(self, httpx_mock: HTTPXMock, base_url: str):
        httpx_mock.add_response(url=f"{base_url}/form", method="POST", status_code=200)

        Request(
            "POST",
            f"{base_url}/form",
            request_body={"variable": "hi there"},
            data_kind=DataKind.FORM,
        ).do()

        sent_request = httpx_mock.get_request()
        assert sent_request is not None
        assert sent_request.content == b"variable=hi+there"
        assert (
            sent_request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        )

    def test_no_auth_header_without_username(
        self, httpx_mock: HTTPXMock, base_url: str
    ):
        httpx_mock.add_response(url=f"{base_url}/open", status_code=200)

        Request("GET", f"{base_url}/open", Auth(password="ignored")).do()

        sent_request = httpx_mock.get_request()
        assert sent_request is not None
        assert "Authorization" not in sent_request.headers

    def test_query_parameters(self, httpx_mock: HTTPXMock, base_url: str):
        httpx_mock.add_response(url=f"{base_url}/search?q=term&page=2", status_code=200)

        Request(
            "GET", f"{base_url}/search", query_parameters={"q": "term", "page": "2"}
        ).do()

        sent_request = httpx_mock.get_request()
        assert sent_request is not None
        assert sent_request.url.params["q"] == "term"
        assert sent_request.url.params["page"] == "2"

    def test_not_found_leaves_destination_untouched(
        self, httpx_mock: HTTPXMock, base_url: str, auth: Auth
    ):
        httpx_mock.add_response(url=f"{base_url}/missing", status_code=404, json={})
        destination = Destination(variable="untouched")

        req = Request("GET", f"{base_url}/missing", auth, response_body=destination)
        with pytest.raises(NotFoundError) as exc_info:
            req.do()

        assert exc_info.value.code == 404
        assert destination.variable == "untouched"
        assert req.response_raw == b""
        assert req.response is not None and req.response.is_closed

    def test_error_body_is_never_decoded(self, httpx_mock: HTTPXMock, base_url: str):
        httpx_mock.add_response(
            url=f"{base_url}/broken", status_code=500, json={"variable": "error"}
        )
        destination = Destination()

        with pytest.raises(ServerError) as exc_info:
            Request("GET", f"{base_url}/broken", response_body=destination).do()

        assert exc_info.value.code == 500
        assert exc_info.value.status == "500 Internal Server Error"
        assert destination.variable == ""

    def test_unclassified_status(self, httpx_mock: HTTPXMock, base_url: str):
        httpx_mock.add_response(url=f"{base_url}/moved", status_code=304)

        with pytest.raises(UnhandledStatusError) as exc_info:
            Request("GET", f"{base_url}/moved").do()

        assert exc_info.value.code == 304

    def test_decode_failure_closes_response(self, httpx_mock: HTTPXMock, base_url: str):
        httpx_mock.add_response(url=f"{base_url}/garbled", status_code=200, text="{nope")
        destination = Destination(variable="before")

        req = Request("GET", f"{base_url}/garbled", response_body=destination)
        with pytest.raises(DecodeError):
            req.do()

        assert destination.variable == "before"
        assert req.response is not None and req.response.is_closed

    def test_zero_length_success_body(self, httpx_mock: HTTPXMock, base_url: str):
        httpx_mock.add_response(url=f"{base_url}/empty", status_code=200)
        destination = Destination(variable="same")

        Request("GET", f"{base_url}/empty", response_body=destination).do()

        assert destination.variable == "same"

    def test_transport_error_propagates(self, httpx_mock: HTTPXMock, base_url: str):
        httpx_mock.add_exception(httpx.ConnectError("Connection refused"))
        destination = Destination(variable="same")

        req = Request("GET", f"{base_url}/down", response_body=destination)
        with pytest.raises(httpx.ConnectError):
            req.do()

        assert destination.variable == "same"
        assert req.response is None
        assert req.client is not None and req.client.is_closed

    def test_encode_failure_sends_nothing(self, httpx_mock: HTTPXMock, base_url: str):
        req = Request(
            "POST", f"{base_url}/variables", request_body={"a": 1}, data_kind="xml"
        )
        with pytest.raises(EncodeError):
            req.do()

        assert httpx_mock.get_requests() == []
        assert req.client is None

    def test_build_failure_sends_nothing(self, httpx_mock: HTTPXMock, base_url: str):
        with pytest.raises(RequestBuildError):
            Request("", f"{base_url}/variables").do()

        assert httpx_mock.get_requests() == []

    def test_unknown_kind_without_body_is_only_logged(
        self, httpx_mock: HTTPXMock, base_url: str, caplog
    ):
        httpx_mock.add_response(url=f"{base_url}/plain", status_code=200)

        with caplog.at_level(logging.WARNING, logger="restclient"):
            Request("GET", f"{base_url}/plain", data_kind="xml").do()

        sent_request = httpx_mock.get_request()
        assert sent_request is not None
        assert "Content-Type" not in sent_request.headers
        assert "Unknown data kind" in caplog.text

    def test_injected_logger(self, httpx_mock: HTTPXMock, base_url: str, caplog):
        httpx_mock.add_response(url=f"{base_url}/logged", status_code=200)
        logger = logging.getLogger("tests.injected")

        with caplog.at_level(logging.DEBUG, logger="tests.injected"):
            Request("GET", f"{base_url}/logged", logger=logger).do()

        assert "Do: started" in caplog.text
        assert "Do: completed" in caplog.text


class TestDebugConfig:
    def test_debug_config_enables_logging(self):
        logger = logging.getLogger("restclient")
        try:
            Request("GET", "url.com", config=Config(debug=True))
            assert logger.level == logging.DEBUG
        finally:
            logger.setLevel(logging.NOTSET)


class TestStageOrdering:
    def test_headers_before_request_is_built(self):
        with pytest.raises(RestClientError, match="set_headers called before"):
            Request("GET", "url.com").set_headers()

    def test_auth_before_request_is_built(self, auth: Auth):
        with pytest.raises(RestClientError, match="apply_auth called before"):
            Request("GET", "url.com", auth).apply_auth()

    def test_execute_before_client_is_built(self):
        with pytest.raises(RestClientError, match="execute called before the client"):
            Request("GET", "url.com").execute()

    def test_status_and_decode_before_response(self):
        req = Request("GET", "url.com")
        with pytest.raises(RestClientError, match="process_status_code called before"):
            req.process_status_code()
        with pytest.raises(RestClientError, match="decode_response called before"):
            req.decode_response()


class TestInjectedLoggerDiagnostics:
    def test_codec_warnings_reach_injected_logger(
        self, httpx_mock: HTTPXMock, base_url: str, caplog
    ):
        @dataclass
        class Login:
            user: str = "edward"
            remember: bool = True

        httpx_mock.add_response(url=f"{base_url}/login", method="POST", status_code=200)
        httpx_mock.add_response(url=f"{base_url}/ping", status_code=200)
        logger = logging.getLogger("tests.diagnostics")

        with caplog.at_level(logging.WARNING, logger="tests.diagnostics"):
            Request(
                "POST",
                f"{base_url}/login",
                request_body=Login(),
                data_kind=DataKind.FORM,
                logger=logger,
            ).do()
            Request("GET", f"{base_url}/ping", logger=logger).do()

        messages = [r.getMessage() for r in caplog.records if r.name == "tests.diagnostics"]
        assert any("Ignoring unhandled type" in m for m in messages)
        assert any("Nothing to encode" in m for m in messages)
