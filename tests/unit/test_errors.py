import copy
import pickle

import pytest

import json_parser as jp
from json_errors import ErrorKind, ParseError, line_col


def test_line_col_from_offset():
    text = "ab\ncd\n"
    assert line_col(text, 0) == (1, 1)
    assert line_col(text, 2) == (1, 3)
    assert line_col(text, 3) == (2, 1)
    assert line_col(text, 6) == (3, 1)

def test_error_carries_position_and_message():
    with pytest.raises(ParseError) as ei:
        jp.parse('{\n  "a": tru\n}')
    err = ei.value
    assert err.kind is ErrorKind.INVALID_LITERAL
    assert err.pos == 9
    assert (err.lineno, err.colno) == (2, 8)
    assert err.msg.startswith("invalid literal 'tru'")
    assert str(err) == f"{err.msg}: line 2 column 8 (char 9)"

def test_error_attributes_are_read_only():
    err = ParseError(ErrorKind.TRAILING_DATA, "extra data", "1 2", 2)
    with pytest.raises(AttributeError):
        err.pos = 0
    with pytest.raises(AttributeError):
        err.kind = ErrorKind.INVALID_NUMBER

def test_error_kinds_are_closed():
    assert {k.name for k in ErrorKind} == {
        "UNEXPECTED_END_OF_INPUT",
        "UNEXPECTED_TOKEN",
        "INVALID_NUMBER",
        "INVALID_STRING",
        "INVALID_LITERAL",
        "TRAILING_DATA",
        "NESTING_TOO_DEEP",
    }

@pytest.mark.parametrize("text, kind", [
    ("", ErrorKind.UNEXPECTED_END_OF_INPUT),
    ("[1 2]", ErrorKind.UNEXPECTED_TOKEN),
    ("01", ErrorKind.INVALID_NUMBER),
    ('"abc', ErrorKind.INVALID_STRING),
    ("nul", ErrorKind.INVALID_LITERAL),
    ("123 456", ErrorKind.TRAILING_DATA),
    ("[" * 600, ErrorKind.NESTING_TOO_DEEP),
])
def test_each_failure_maps_to_its_kind(text, kind):
    with pytest.raises(ParseError) as ei:
        jp.parse(text)
    assert ei.value.kind is kind

def test_first_error_wins():
    # Both a bad literal and a trailing comma; the literal comes first.
    with pytest.raises(ParseError) as ei:
        jp.parse("[nope, 1,]")
    assert ei.value.kind is ErrorKind.INVALID_LITERAL
    assert ei.value.pos == 1

def test_error_survives_pickle_and_copy():
    with pytest.raises(ParseError) as ei:
        jp.parse('{\n  "a": tru\n}')
    err = ei.value
    for clone in (pickle.loads(pickle.dumps(err)), copy.copy(err), copy.deepcopy(err)):
        assert isinstance(clone, ParseError)
        assert clone.kind is err.kind
        assert (clone.msg, clone.pos, clone.lineno, clone.colno) == (err.msg, err.pos, err.lineno, err.colno)
        assert str(clone) == str(err)
