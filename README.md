# edgehttp

Building blocks for HTTP/1.0 and HTTP/1.1 messages. The package provides a
bounded header collection, request and response head models, and rules that
decide the connection type and body framing of a message. It also has helpers
for the HTTP side of the WebSocket upgrade handshake. It uses only the
standard library.

## Installation

```
pip install edgehttp
```

## Headers

`edgehttp.headers.Headers` holds at most `capacity` name/value pairs. The
default capacity is 64, set by `DEFAULT_MAX_HEADERS_COUNT`.

- Names are matched ignoring ASCII case.
- Setting a name that is already present replaces its value in place. A new
  name is added after the existing ones.
- Adding a new header when every slot is taken raises `HeadersFullError`.
- Setting a header with an empty name changes nothing.
- Every setter returns the instance, so calls can be chained.

```python
from edgehttp.headers import Headers

headers = Headers(16)
headers.set_host("example.com").set_connection_keep_alive().set_content_len(42)

headers.get("content-length")   # "42"
headers.content_len()           # 42
"HOST" in headers               # True
dict(headers)                   # {"Host": "example.com", "Connection": "Keep-Alive", "Content-Length": "42"}
headers.remove("Host")
```

There are shortcut getters for common headers: `content_len`, `content_type`,
`content_encoding`, `transfer_encoding`, `host`, `connection`, `cache_control`
and `upgrade`. Each has a matching `set_...` method. There are also fixed-value
setters:

- `set_transfer_encoding_chunked`
- `set_connection_close`
- `set_connection_keep_alive`
- `set_connection_upgrade`
- `set_cache_control_no_cache`
- `set_upgrade_websocket`

Raw byte values are available through `get_raw`, `set_raw` and `iter_raw`.

`content_len()` raises `InvalidContentLengthError` when the value is not a
non-negative integer that fits in 64 bits. That error is also a `ValueError`.

## Request and response heads

`RequestHeaders` holds `http11`, `method`, `path` and `headers`. By default it
is `GET /` over HTTP/1.1. `ResponseHeaders` holds `http11`, `code`, `reason`
and `headers`. By default it is a 200 over HTTP/1.1 with no reason. Calling
`str()` on either gives the first line followed by one `Name: value` line per
header.

```python
from edgehttp.headers import RequestHeaders

request = RequestHeaders(path="/chat")
request.headers.set_connection_upgrade().set_upgrade_websocket()
request.is_ws_upgrade_request()   # True
```

## Connection and body resolution

```python
from edgehttp.connection import BodyType, ConnectionType

conn = ConnectionType.resolve(None, None, True)           # ConnectionType.KEEP_ALIVE
body = BodyType.resolve(None, conn, False, True, True)    # BodyType.chunked()
str(body)                                                  # "Chunked"
```

`ConnectionType.resolve` chooses the connection type in this order:

1. The type given in the headers.
2. The carry-over type, which for a response is the request's type.
3. Keep-Alive for HTTP/1.1, or Close for HTTP/1.0.

`BodyType` has three kinds, listed in `BodyKind`:

- chunked, created with `BodyType.chunked()`
- content length, created with `BodyType.content_len(n)`
- raw, created with `BodyType.raw()`; it is allowed only in responses on a
  Close connection

`from_header` and `from_headers` read these types from header pairs. When a
header appears more than once, the last one wins. `raw_header` gives back the
matching header.

A combination that the protocol forbids raises a subclass of
`HeadersMismatchError`:

- `ConnectionTypeMismatchError` when a response asks for Keep-Alive after the
  request asked for Close.
- `BodyTypeError` for an invalid body framing, such as a chunked body over
  HTTP/1.0.

## Methods

```python
from edgehttp.method import Method

Method.parse("get")      # Method.GET
Method.parse("bogus")    # None
str(Method.MSEARCH)      # "MSEARCH"
```

## WebSocket upgrades

```python
import os
from edgehttp import ws

nonce = os.urandom(16)
request = ws.upgrade_request_headers("example.com", None, None, nonce)

response = ws.upgrade_response_headers(request, None)
accepted = ws.is_upgrade_accepted(101, response, nonce)  # True

ws.sec_key_response("dGhlIHNhbXBsZSBub25jZQ==")  # "s3pPLMBiTxaQ9kYGzzhZRbK+xOo="
```

The nonce must be exactly 16 bytes, or `ValueError` is raised. The version
defaults to "13".

`upgrade_response_headers` raises these errors, both subclasses of
`UpgradeError`:

- `NoVersionError` when the request's `Sec-WebSocket-Version` is missing or
  differs from the expected version.
- `NoSecKeyError` when the request has no `Sec-WebSocket-Key`.

`Headers.set_ws_upgrade_request_headers` and
`Headers.set_ws_upgrade_response_headers` write the same headers into a
`Headers` instance. Every error in the package derives from
`edgehttp.errors.HttpError`.

## What this package does not do

The package does not open sockets, read or write message bodies, parse raw
bytes from the wire, or run an HTTP client or server. It models the request
line, status line and headers, and decides how a message's connection and body
should be handled. Moving the bytes is left to the caller.

## Running the tests

```
pip install -e ".[test]"
pytest
```