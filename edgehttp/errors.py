"""Exceptions raised while building and checking HTTP messages."""

from __future__ import annotations


class HttpError(Exception):
    """Base class for all errors raised by this package."""


class HeadersMismatchError(HttpError):
    """The connection type and body type in the headers do not fit together."""


class ConnectionTypeMismatchError(HeadersMismatchError):
    """A Keep-Alive response was given to a request that asked for Close."""

    def __init__(self) -> None:
        super().__init__(
            "Response connection type is different from the request connection type"
        )


class BodyTypeError(HeadersMismatchError):
    """The body type cannot be used with the connection type and protocol version."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Body type mismatch: {reason}")


class UpgradeError(HttpError):
    """A WebSocket upgrade request could not be answered."""


class NoVersionError(UpgradeError):
    """The request has no acceptable `Sec-WebSocket-Version` header."""

    def __init__(self) -> None:
        super().__init__("No Sec-WebSocket-Version header")


class NoSecKeyError(UpgradeError):
    """The request has no `Sec-WebSocket-Key` header."""

    def __init__(self) -> None:
        super().__init__("No Sec-WebSocket-Key header")


class UnsupportedVersionError(UpgradeError):
    """The requested `Sec-WebSocket-Version` is not supported."""

    def __init__(self) -> None:
        super().__init__("Unsupported Sec-WebSocket-Version")


class HeadersFullError(HttpError):
    """Every header slot is taken, so no new header can be added."""

    def __init__(self) -> None:
        super().__init__("No space left")


class InvalidContentLengthError(HttpError, ValueError):
    """A `Content-Length` value is not a non-negative integer."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid Content-Length header: {value!r}")