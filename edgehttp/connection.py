"""Connection type and body type of an HTTP message, and how they are resolved."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from edgehttp.errors import (
    BodyTypeError,
    ConnectionTypeMismatchError,
    InvalidContentLengthError,
)

__all__ = ["ConnectionType", "BodyKind", "BodyType"]

_log = logging.getLogger(__name__)

_U64_MAX = 2**64 - 1

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)

Header = tuple[str, str]


def _eq_ignore_ascii_case(left: str, right: str) -> bool:
    return left.translate(_ASCII_LOWER) == right.translate(_ASCII_LOWER)


def _parse_content_length(value: str) -> int:
    digits = value[1:] if value.startswith("+") else value
    if not digits or not digits.isascii() or not digits.isdigit():
        raise InvalidContentLengthError(value)
    length = int(digits)
    if length > _U64_MAX:
        raise InvalidContentLengthError(value)
    return length


class ConnectionType(Enum):
    """The `Connection` type of an HTTP message; the value is its header value."""

    KEEP_ALIVE = "Keep-Alive"
    CLOSE = "Close"
    UPGRADE = "Upgrade"

    @classmethod
    def resolve(
        cls,
        headers_connection_type: ConnectionType | None,
        carry_over_connection_type: ConnectionType | None,
        http11: bool,
    ) -> ConnectionType:
        """Resolve the connection type of a message.

        The type found in the headers wins; otherwise the carry-over type (the
        request's, when resolving a response); otherwise Keep-Alive for HTTP/1.1
        and Close for HTTP/1.0. Raises ConnectionTypeMismatchError when the
        headers ask for Keep-Alive but the carry-over type is Close.
        """
        if headers_connection_type is not None:
            if (
                headers_connection_type is cls.KEEP_ALIVE
                and carry_over_connection_type is cls.CLOSE
            ):
                _log.warning(
                    "Cannot set a Keep-Alive connection when the peer requested Close"
                )
                raise ConnectionTypeMismatchError()
            return headers_connection_type

        if carry_over_connection_type is not None:
            return carry_over_connection_type
        return cls.KEEP_ALIVE if http11 else cls.CLOSE

    @classmethod
    def from_header(cls, name: str, value: str) -> ConnectionType | None:
        """Return the connection type a `Connection` header names, or None."""
        if not _eq_ignore_ascii_case(name, "Connection"):
            return None
        return next(
            (member for member in cls if _eq_ignore_ascii_case(value, member.value)),
            None,
        )

    @classmethod
    def from_headers(cls, headers: Iterable[Header]) -> ConnectionType | None:
        """Return the connection type given by the headers; the last one wins."""
        connection: ConnectionType | None = None
        for name, value in headers:
            found = cls.from_header(name, value)
            if found is None:
                continue
            if connection is not None:
                _log.warning(
                    "Multiple Connection headers found. Current %s and new %s",
                    connection,
                    found,
                )
            connection = found
        return connection

    def raw_header(self) -> tuple[str, bytes]:
        """Return the `Connection` header for this type, with a raw value."""
        return ("Connection", self.value.encode("ascii"))

    def __str__(self) -> str:
        return self.value


class BodyKind(Enum):
    """How the length of a message body is known."""

    CHUNKED = "chunked"
    CONTENT_LEN = "content-len"
    RAW = "raw"


@dataclass(frozen=True)
class BodyType:
    """The body type of an HTTP message.

    ``length`` is set only for the CONTENT_LEN kind.
    """

    kind: BodyKind
    length: int | None = None

    def __post_init__(self) -> None:
        if self.kind is BodyKind.CONTENT_LEN:
            if self.length is None or not 0 <= self.length <= _U64_MAX:
                raise ValueError(f"invalid content length: {self.length!r}")
        elif self.length is not None:
            raise ValueError(f"{self.kind.name} body takes no length")

    @classmethod
    def chunked(cls) -> BodyType:
        """A chunked body (`Transfer-Encoding: Chunked`)."""
        return cls(BodyKind.CHUNKED)

    @classmethod
    def raw(cls) -> BodyType:
        """A raw body, ended by closing the connection; responses only."""
        return cls(BodyKind.RAW)

    @classmethod
    def content_len(cls, length: int) -> BodyType:
        """A body of ``length`` bytes (`Content-Length: length`)."""
        return cls(BodyKind.CONTENT_LEN, length)

    @classmethod
    def resolve(
        cls,
        headers_body_type: BodyType | None,
        connection_type: ConnectionType,
        request: bool,
        http11: bool,
        chunked_if_unspecified: bool,
    ) -> BodyType:
        """Resolve the body type of a message.

        A body type from the headers is checked against the connection type and
        protocol version; without one it is derived from them. With
        ``chunked_if_unspecified`` an HTTP/1.1 message with no body type becomes
        chunked, unless it is a response on a Close connection. Raises
        BodyTypeError for combinations the protocol does not allow.
        """
        if headers_body_type is not None:
            if headers_body_type.kind is BodyKind.RAW:
                if request:
                    cls._reject("Raw body in a request. This is not allowed.")
                if connection_type is not ConnectionType.CLOSE:
                    cls._reject(
                        "Raw body response with a Keep-Alive connection. "
                        "This is not allowed."
                    )
            elif headers_body_type.kind is BodyKind.CHUNKED and not http11:
                cls._reject(
                    "Chunked body with an HTTP/1.0 connection. This is not allowed."
                )
            return headers_body_type

        if request:
            if chunked_if_unspecified and http11:
                return cls.chunked()
            _log.debug("Unknown body type in a request. Assuming Content-Length=0.")
            return cls.content_len(0)

        if connection_type is ConnectionType.CLOSE:
            return cls.raw()

        if connection_type is ConnectionType.UPGRADE:
            if http11:
                _log.debug(
                    "Unknown body type in response but the Connection is Upgrade. "
                    "Assuming Content-Length=0."
                )
                return cls.content_len(0)
            cls._reject(
                "Connection is set to Upgrade but the HTTP protocol version "
                "is not 1.1. This is not allowed."
            )

        if chunked_if_unspecified and http11:
            return cls.chunked()

        cls._reject(
            "Unknown body type in a response with a Keep-Alive connection. "
            "This is not allowed."
        )

    @staticmethod
    def _reject(reason: str) -> None:
        _log.warning("%s", reason)
        raise BodyTypeError(reason)

    @classmethod
    def from_header(cls, name: str, value: str) -> BodyType | None:
        """Return the body type a header gives, or None if it gives none.

        Raises InvalidContentLengthError for a malformed `Content-Length`.
        """
        if _eq_ignore_ascii_case(name, "Transfer-Encoding"):
            if _eq_ignore_ascii_case(value, "Chunked"):
                return cls.chunked()
        elif _eq_ignore_ascii_case(name, "Content-Length"):
            return cls.content_len(_parse_content_length(value))
        return None

    @classmethod
    def from_headers(cls, headers: Iterable[Header]) -> BodyType | None:
        """Return the body type given by the headers; the last one wins."""
        body: BodyType | None = None
        for name, value in headers:
            found = cls.from_header(name, value)
            if found is None:
                continue
            if body is not None:
                _log.warning(
                    "Multiple body type headers found. Current %s and new %s",
                    body,
                    found,
                )
            body = found
        return body

    def raw_header(self) -> tuple[str, bytes] | None:
        """Return the header that announces this body type, or None for a raw body."""
        if self.kind is BodyKind.CHUNKED:
            return ("Transfer-Encoding", b"Chunked")
        if self.kind is BodyKind.CONTENT_LEN:
            return ("Content-Length", str(self.length).encode("ascii"))
        return None

    def __str__(self) -> str:
        if self.kind is BodyKind.CHUNKED:
            return "Chunked"
        if self.kind is BodyKind.CONTENT_LEN:
            return f"Content-Length: {self.length}"
        return "Raw"