"""HTTP headers and the request and response heads that carry them."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from edgehttp.connection import BodyType
from edgehttp.errors import HeadersFullError
from edgehttp.method import Method
from edgehttp import ws

__all__ = [
    "DEFAULT_MAX_HEADERS_COUNT",
    "Headers",
    "RequestHeaders",
    "ResponseHeaders",
]

DEFAULT_MAX_HEADERS_COUNT = 64

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def _eq_ignore_ascii_case(left: str, right: str) -> bool:
    return left.translate(_ASCII_LOWER) == right.translate(_ASCII_LOWER)


def _decode(value: bytes) -> str:
    return value.decode("utf-8", errors="surrogateescape")


class Headers:
    """An ordered set of HTTP headers with a fixed number of slots.

    Names are matched ignoring ASCII case. Setting a header that already exists
    replaces its value in place; a new header goes after the existing ones.
    Setters return the instance so that calls can be chained.
    """

    def __init__(self, capacity: int = DEFAULT_MAX_HEADERS_COUNT) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must not be negative, got {capacity}")
        self.capacity = capacity
        self._entries: list[tuple[str, bytes]] = []

    def __iter__(self) -> Iterator[tuple[str, str]]:
        """Iterate over all headers as (name, value) pairs."""
        return ((name, _decode(value)) for name, value in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._index(name) is not None

    def __repr__(self) -> str:
        return f"Headers({list(self)!r}, capacity={self.capacity})"

    def iter_raw(self) -> Iterator[tuple[str, bytes]]:
        """Iterate over all headers, with the values as raw bytes."""
        return iter(list(self._entries))

    def _index(self, name: str) -> int | None:
        return next(
            (
                index
                for index, (header_name, _) in enumerate(self._entries)
                if _eq_ignore_ascii_case(header_name, name)
            ),
            None,
        )

    def get(self, name: str) -> str | None:
        """Return the value of the named header, or None."""
        raw = self.get_raw(name)
        return None if raw is None else _decode(raw)

    def get_raw(self, name: str) -> bytes | None:
        """Return the raw value of the named header, or None."""
        index = self._index(name)
        return None if index is None else self._entries[index][1]

    def set(self, name: str, value: str) -> Headers:
        """Set a header; an empty name changes nothing."""
        return self.set_raw(name, value.encode("utf-8", errors="surrogateescape"))

    def set_raw(self, name: str, value: bytes) -> Headers:
        """Set a header with a raw value; an empty name changes nothing.

        Raises HeadersFullError when the header is new and every slot is taken.
        """
        if not name:
            return self.remove(name)

        value = bytes(value)
        index = self._index(name)
        if index is not None:
            self._entries[index] = (name, value)
        elif len(self._entries) < self.capacity:
            self._entries.append((name, value))
        else:
            raise HeadersFullError()
        return self

    def remove(self, name: str) -> Headers:
        """Remove the named header, keeping the order of the others."""
        index = self._index(name)
        if index is not None:
            del self._entries[index]
        return self

    def content_len(self) -> int | None:
        """Return the `Content-Length` value, or None.

        Raises InvalidContentLengthError if the value is not a valid length.
        """
        value = self.get("Content-Length")
        if value is None:
            return None
        body = BodyType.from_header("Content-Length", value)
        return None if body is None else body.length

    def content_type(self) -> str | None:
        """Return the `Content-Type` value, or None."""
        return self.get("Content-Type")

    def content_encoding(self) -> str | None:
        """Return the `Content-Encoding` value, or None."""
        return self.get("Content-Encoding")

    def transfer_encoding(self) -> str | None:
        """Return the `Transfer-Encoding` value, or None."""
        return self.get("Transfer-Encoding")

    def host(self) -> str | None:
        """Return the `Host` value, or None."""
        return self.get("Host")

    def connection(self) -> str | None:
        """Return the `Connection` value, or None."""
        return self.get("Connection")

    def cache_control(self) -> str | None:
        """Return the `Cache-Control` value, or None."""
        return self.get("Cache-Control")

    def upgrade(self) -> str | None:
        """Return the `Upgrade` value, or None."""
        return self.get("Upgrade")

    def set_content_len(self, content_len: int) -> Headers:
        """Set `Content-Length`; the length must fit in 64 unsigned bits."""
        length = BodyType.content_len(content_len).length
        return self.set("Content-Length", str(length))

    def set_content_type(self, content_type: str) -> Headers:
        """Set `Content-Type`."""
        return self.set("Content-Type", content_type)

    def set_content_encoding(self, content_encoding: str) -> Headers:
        """Set `Content-Encoding`."""
        return self.set("Content-Encoding", content_encoding)

    def set_transfer_encoding(self, transfer_encoding: str) -> Headers:
        """Set `Transfer-Encoding`."""
        return self.set("Transfer-Encoding", transfer_encoding)

    def set_transfer_encoding_chunked(self) -> Headers:
        """Set `Transfer-Encoding: Chunked`."""
        return self.set_transfer_encoding("Chunked")

    def set_host(self, host: str) -> Headers:
        """Set `Host`."""
        return self.set("Host", host)

    def set_connection(self, connection: str) -> Headers:
        """Set `Connection`."""
        return self.set("Connection", connection)

    def set_connection_close(self) -> Headers:
        """Set `Connection: Close`."""
        return self.set_connection("Close")

    def set_connection_keep_alive(self) -> Headers:
        """Set `Connection: Keep-Alive`."""
        return self.set_connection("Keep-Alive")

    def set_connection_upgrade(self) -> Headers:
        """Set `Connection: Upgrade`."""
        return self.set_connection("Upgrade")

    def set_cache_control(self, cache: str) -> Headers:
        """Set `Cache-Control`."""
        return self.set("Cache-Control", cache)

    def set_cache_control_no_cache(self) -> Headers:
        """Set `Cache-Control: No-Cache`."""
        return self.set_cache_control("No-Cache")

    def set_upgrade(self, upgrade: str) -> Headers:
        """Set `Upgrade`."""
        return self.set("Upgrade", upgrade)

    def set_upgrade_websocket(self) -> Headers:
        """Set `Upgrade: websocket`."""
        return self.set_upgrade("websocket")

    def set_ws_upgrade_request_headers(
        self,
        host: str | None,
        origin: str | None,
        version: str | None,
        nonce: bytes,
    ) -> Headers:
        """Set every header of a WebSocket upgrade request made with ``nonce``."""
        for name, value in ws.upgrade_request_headers(host, origin, version, nonce):
            self.set(name, value)
        return self

    def set_ws_upgrade_response_headers(
        self, request_headers: Iterable[tuple[str, str]], version: str | None
    ) -> Headers:
        """Set every header of a response accepting a WebSocket upgrade request.

        Raises UpgradeError if the request cannot be accepted.
        """
        for name, value in ws.upgrade_response_headers(request_headers, version):
            self.set(name, value)
        return self


def _header_lines(headers: Headers) -> str:
    return "".join(f"{name}: {value}\n" for name, value in headers)


@dataclass
class RequestHeaders:
    """The head of an HTTP request: protocol version, method, path and headers."""

    http11: bool = True
    method: Method = Method.GET
    path: str = "/"
    headers: Headers = field(default_factory=Headers)

    def is_ws_upgrade_request(self) -> bool:
        """Return True if this is a WebSocket upgrade request."""
        return ws.is_upgrade_request(self.method, self.headers)

    def __str__(self) -> str:
        version = "HTTP/1.1" if self.http11 else "HTTP/1.0"
        return f"{version} {self.method} {self.path}\n" + _header_lines(self.headers)


@dataclass
class ResponseHeaders:
    """The head of an HTTP response: protocol version, status, reason and headers."""

    http11: bool = True
    code: int = 200
    reason: str | None = None
    headers: Headers = field(default_factory=Headers)

    def is_ws_upgrade_accepted(self, nonce: bytes) -> bool:
        """Return True if this response accepts the upgrade request made with ``nonce``."""
        return ws.is_upgrade_accepted(self.code, self.headers, nonce)

    def __str__(self) -> str:
        version = "HTTP/1.1 " if self.http11 else "HTTP/1.0"
        reason = self.reason if self.reason is not None else ""
        return f"{version} {self.code} {reason}\n" + _header_lines(self.headers)