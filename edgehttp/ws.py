"""Helpers for the HTTP side of a WebSocket upgrade handshake."""

from __future__ import annotations

import base64
import hashlib
import logging
from collections.abc import Iterable

from edgehttp.errors import NoSecKeyError, NoVersionError
from edgehttp.method import Method

__all__ = [
    "NONCE_LEN",
    "MAX_BASE64_KEY_LEN",
    "MAX_BASE64_KEY_RESPONSE_LEN",
    "DEFAULT_VERSION",
    "upgrade_request_headers",
    "is_upgrade_request",
    "upgrade_response_headers",
    "is_upgrade_accepted",
    "sec_key_response",
]

_log = logging.getLogger(__name__)

NONCE_LEN = 16
MAX_BASE64_KEY_LEN = 28
MAX_BASE64_KEY_RESPONSE_LEN = 33
DEFAULT_VERSION = "13"

_WS_MAGIC_GUID = "258EAFA5-E914-47DA-95CA-C5AB0DC85B11"

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)

Header = tuple[str, str]


def _eq_ignore_ascii_case(left: str, right: str) -> bool:
    return left.translate(_ASCII_LOWER) == right.translate(_ASCII_LOWER)


def _check_nonce(nonce: bytes) -> bytes:
    nonce = bytes(nonce)
    if len(nonce) != NONCE_LEN:
        raise ValueError(f"nonce must be {NONCE_LEN} bytes long, got {len(nonce)}")
    return nonce


def _sec_key_encode(nonce: bytes) -> str:
    return base64.b64encode(nonce).decode("ascii")


def _sec_key_digest(sec_key: str) -> str:
    digest = hashlib.sha1(sec_key.encode() + _WS_MAGIC_GUID.encode()).digest()
    response = base64.b64encode(digest).decode("ascii")
    _log.debug("Computed response: %s", response)
    return response


def upgrade_request_headers(
    host: str | None,
    origin: str | None,
    version: str | None,
    nonce: bytes,
) -> list[Header]:
    """Return the headers of a WebSocket upgrade request.

    ``Host`` and ``Origin`` are included only when given; the version defaults
    to "13" and the key is the base64 encoding of the 16-byte ``nonce``.
    """
    nonce = _check_nonce(nonce)
    headers: list[Header] = []
    if host is not None:
        headers.append(("Host", host))
    if origin is not None:
        headers.append(("Origin", origin))
    headers.extend(
        [
            ("Content-Length", "0"),
            ("Connection", "Upgrade"),
            ("Upgrade", "websocket"),
            ("Sec-WebSocket-Version", version if version is not None else DEFAULT_VERSION),
            ("Sec-WebSocket-Key", _sec_key_encode(nonce)),
        ]
    )
    return headers


def is_upgrade_request(method: Method, request_headers: Iterable[Header]) -> bool:
    """Return True if a request is a WebSocket upgrade request."""
    if method is not Method.GET:
        return False

    connection = False
    upgrade = False
    for name, value in request_headers:
        if _eq_ignore_ascii_case(name, "Connection"):
            connection = _eq_ignore_ascii_case(value, "Upgrade")
        elif _eq_ignore_ascii_case(name, "Upgrade"):
            upgrade = _eq_ignore_ascii_case(value, "websocket")

    return connection and upgrade


def upgrade_response_headers(
    request_headers: Iterable[Header], version: str | None
) -> list[Header]:
    """Return the headers of a response accepting a WebSocket upgrade request.

    Raises NoVersionError if the request's version is missing or differs from
    ``version`` (default "13"), and NoSecKeyError if it carries no key.
    """
    expected = version if version is not None else DEFAULT_VERSION
    version_ok = False
    accept: str | None = None

    for name, value in request_headers:
        if _eq_ignore_ascii_case(name, "Sec-WebSocket-Version"):
            if not _eq_ignore_ascii_case(value, expected):
                raise NoVersionError()
            version_ok = True
        elif _eq_ignore_ascii_case(name, "Sec-WebSocket-Key"):
            accept = sec_key_response(value)

    if not version_ok:
        raise NoVersionError()
    if accept is None:
        raise NoSecKeyError()

    return [
        ("Content-Length", "0"),
        ("Connection", "Upgrade"),
        ("Upgrade", "websocket"),
        ("Sec-WebSocket-Accept", accept),
    ]


def is_upgrade_accepted(
    code: int, response_headers: Iterable[Header], nonce: bytes
) -> bool:
    """Return True if a response accepts the upgrade request made with ``nonce``."""
    if code != 101:
        return False

    nonce = _check_nonce(nonce)
    connection = False
    upgrade = False
    accepted = False

    for name, value in response_headers:
        if _eq_ignore_ascii_case(name, "Connection"):
            connection = _eq_ignore_ascii_case(value, "Upgrade")
        elif _eq_ignore_ascii_case(name, "Upgrade"):
            upgrade = _eq_ignore_ascii_case(value, "websocket")
        elif _eq_ignore_ascii_case(name, "Sec-WebSocket-Accept"):
            accepted = value == _sec_key_digest(_sec_key_encode(nonce))

    return connection and upgrade and accepted


def sec_key_response(sec_key: str) -> str:
    """Compute the `Sec-WebSocket-Accept` value for a `Sec-WebSocket-Key`."""
    _log.debug("Computing response for key: %s", sec_key)
    return _sec_key_digest(sec_key)