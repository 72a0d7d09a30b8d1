import pytest

from edgehttp.errors import (
    BodyTypeError,
    ConnectionTypeMismatchError,
    HeadersFullError,
    HeadersMismatchError,
    HttpError,
    InvalidContentLengthError,
    NoSecKeyError,
    NoVersionError,
    UnsupportedVersionError,
    UpgradeError,
)


def test_connection_type_mismatch_message():
    err = ConnectionTypeMismatchError()
    assert str(err) == (
        "Response connection type is different from the request connection type"
    )
    assert isinstance(err, HeadersMismatchError)
    assert isinstance(err, HttpError)


def test_body_type_error_message_and_reason():
    reason = "Raw body in a request. This is not allowed."
    err = BodyTypeError(reason)
    assert err.reason == reason
    assert str(err) == "Body type mismatch: " + reason
    assert isinstance(err, HeadersMismatchError)


@pytest.mark.parametrize(
    "cls, message",
    [
        (NoVersionError, "No Sec-WebSocket-Version header"),
        (NoSecKeyError, "No Sec-WebSocket-Key header"),
        (UnsupportedVersionError, "Unsupported Sec-WebSocket-Version"),
    ],
)
def test_upgrade_error_messages(cls, message):
    err = cls()
    assert str(err) == message
    assert isinstance(err, UpgradeError)
    assert isinstance(err, HttpError)
    assert not isinstance(err, HeadersMismatchError)


def test_headers_full_error():
    err = HeadersFullError()
    assert str(err) == "No space left"
    with pytest.raises(HttpError):
        raise err


def test_invalid_content_length_is_value_error():
    err = InvalidContentLengthError("abc")
    assert err.value == "abc"
    assert "abc" in str(err)
    with pytest.raises(ValueError):
        raise err


def test_upgrade_errors_are_distinct():
    no_version = NoVersionError()
    no_sec_key = NoSecKeyError()
    unsupported = UnsupportedVersionError()
    messages = {str(no_version), str(no_sec_key), str(unsupported)}
    assert len(messages) == 3
    assert not isinstance(no_sec_key, NoVersionError)
    assert not isinstance(no_version, UnsupportedVersionError)
    assert not isinstance(unsupported, NoSecKeyError)