import pytest

from edgehttp.method import Method


def test_str_is_wire_name():
    assert Method.parse("get").__str__() == "GET"
    assert Method.parse("mkcalendar").__str__() == "MKCALENDAR"
    assert f"{Method.parse('Post')}" == "POST"


@pytest.mark.parametrize("method", list(Method))
def test_parse_round_trip(method):
    assert Method.parse(str(method)) is method


@pytest.mark.parametrize("method", list(Method))
def test_parse_ignores_case(method):
    assert Method.parse(str(method).lower()) is method
    assert Method.parse(str(method).swapcase().title()) is method


def test_parse_mixed_case_names():
    assert Method.parse("MkCol") is Method.MKCOL
    assert Method.parse("MSearch") is Method.MSEARCH
    assert Method.parse("get") is Method.GET


@pytest.mark.parametrize("name", ["", "FETCH", "M-SEARCH", "GET ", " GET", "GETS"])
def test_parse_unknown_returns_none(name):
    assert Method.parse(name) is None


def test_parse_rejects_non_ascii_lookalikes():
    # The Kelvin sign lowercases to "k" but is not an ASCII letter.
    assert Method.parse("LOC\u212a") is None
    assert Method.parse("LOCK") is Method.LOCK


def test_all_methods_distinct_and_counted():
    names = [Method.__str__(m) for m in Method]
    assert len(names) == len(set(names)) == 33
    assert all(name == name.upper() for name in names)
    assert {Method.parse(name) for name in names} == set(Method)