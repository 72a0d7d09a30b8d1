import pytest

from edgehttp.errors import (
    HeadersFullError,
    InvalidContentLengthError,
    NoSecKeyError,
    NoVersionError,
)
from edgehttp.headers import (
    DEFAULT_MAX_HEADERS_COUNT,
    Headers,
    RequestHeaders,
    ResponseHeaders,
)
from edgehttp.method import Method

NONCE = bytes(range(16))


def test_default_capacity():
    assert Headers().capacity == DEFAULT_MAX_HEADERS_COUNT == 64


def test_set_and_get_ignore_case():
    headers = Headers().set("Content-Type", "text/plain")
    assert headers.get("content-type") == "text/plain"
    assert headers.content_type() == "text/plain"
    assert headers.get_raw("CONTENT-TYPE") == b"text/plain"
    assert headers.get("Host") is None


def test_set_replaces_in_place():
    headers = Headers().set("A", "1").set("B", "2").set("a", "3")
    assert list(headers) == [("a", "3"), ("B", "2")]


def test_remove_keeps_order():
    headers = Headers().set("A", "1").set("B", "2").set("C", "3")
    headers.remove("b")
    assert list(headers) == [("A", "1"), ("C", "3")]
    headers.remove("missing")
    assert len(headers) == 2


def test_empty_name_changes_nothing():
    headers = Headers().set("A", "1").set("", "x")
    assert list(headers) == [("A", "1")]


def test_full_raises():
    headers = Headers(2).set("A", "1").set("B", "2")
    with pytest.raises(HeadersFullError):
        headers.set("C", "3")
    headers.set("A", "4")
    assert headers.get("A") == "4"


def test_iter_raw_returns_bytes():
    headers = Headers().set_raw("X", b"\x01\x02")
    assert list(headers.iter_raw()) == [("X", b"\x01\x02")]


def test_content_len_round_trip():
    headers = Headers().set_content_len(1234)
    assert headers.content_len() == 1234
    assert headers.get("Content-Length") == "1234"


def test_content_len_missing_and_invalid():
    assert Headers().content_len() is None
    with pytest.raises(InvalidContentLengthError):
        Headers().set("Content-Length", "abc").content_len()


def test_set_content_len_negative_rejected():
    with pytest.raises(ValueError):
        Headers().set_content_len(-1)


def test_convenience_setters():
    headers = (
        Headers()
        .set_transfer_encoding_chunked()
        .set_connection_close()
        .set_cache_control_no_cache()
        .set_upgrade_websocket()
        .set_host("example.com")
        .set_content_encoding("gzip")
    )
    assert headers.transfer_encoding() == "Chunked"
    assert headers.connection() == "Close"
    assert headers.cache_control() == "No-Cache"
    assert headers.upgrade() == "websocket"
    assert headers.host() == "example.com"
    assert headers.content_encoding() == "gzip"
    headers.set_connection_keep_alive()
    assert headers.connection() == "Keep-Alive"
    headers.set_connection_upgrade()
    assert headers.connection() == "Upgrade"


def test_ws_upgrade_request_round_trip():
    request = RequestHeaders(path="/ws")
    request.headers.set_ws_upgrade_request_headers("example.com", None, None, NONCE)
    assert request.headers.host() == "example.com"
    assert "Origin" not in request.headers
    assert request.headers.get("Sec-WebSocket-Version") == "13"
    assert request.is_ws_upgrade_request()


def test_not_upgrade_for_post():
    request = RequestHeaders(method=Method.POST)
    request.headers.set_ws_upgrade_request_headers(None, None, None, NONCE)
    assert not request.is_ws_upgrade_request()


def test_ws_upgrade_response_known_key():
    headers = Headers().set_ws_upgrade_response_headers(
        [("Sec-WebSocket-Version", "13"), ("Sec-WebSocket-Key", "dGhlIHNhbXBsZSBub25jZQ==")],
        None,
    )
    assert headers.get("Sec-WebSocket-Accept") == "s3pPLMBiTxaQ9kYGzzhZRbK+xOo="


def test_ws_upgrade_response_errors():
    with pytest.raises(NoVersionError):
        Headers().set_ws_upgrade_response_headers([("Sec-WebSocket-Key", "k")], None)
    with pytest.raises(NoSecKeyError):
        Headers().set_ws_upgrade_response_headers([("Sec-WebSocket-Version", "13")], None)


def test_ws_upgrade_accepted_round_trip():
    request = Headers().set_ws_upgrade_request_headers(None, None, None, NONCE)
    response = ResponseHeaders(code=101)
    response.headers.set_ws_upgrade_response_headers(request, None)
    assert response.is_ws_upgrade_accepted(NONCE)
    assert not response.is_ws_upgrade_accepted(bytes(16))
    response.code = 200
    assert not response.is_ws_upgrade_accepted(NONCE)


def test_request_str():
    request = RequestHeaders(path="/index")
    request.headers.set_host("example.com")
    assert str(request) == "HTTP/1.1 GET /index\nHost: example.com\n"


def test_response_str():
    response = ResponseHeaders(http11=False, code=404, reason="Not Found")
    assert str(response) == "HTTP/1.0 404 Not Found\n"


def test_defaults():
    request = RequestHeaders()
    response = ResponseHeaders()
    assert (request.http11, request.method, request.path) == (True, Method.GET, "/")
    assert (response.http11, response.code, response.reason) == (True, 200, None)
    assert len(request.headers) == 0