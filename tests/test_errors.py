from __future__ import annotations

import pytest

from crust.api import run_source
from crust.errors import CrustError, ErrorKind, ExecutionError, ParseError


def test_wrap_prefixes_context_and_keeps_kind() -> None:
    err = CrustError(ErrorKind.STACK_UNDERFLOW, "stack is empty")
    assert err.wrap("inner") is err
    err.wrap("outer")
    assert str(err) == "outer: inner: stack is empty"
    assert err.kind == ErrorKind.STACK_UNDERFLOW
    assert err.message == "stack is empty"


def test_parse_error_has_location() -> None:
    with pytest.raises(ParseError) as exc:
        run_source(src="ipush 1\nipush x")
    assert exc.value.line == 2
    assert exc.value.col == 7
    s = str(exc.value)
    assert "line 2 col 7" in s


def test_parse_error_without_location() -> None:
    err = ParseError(ErrorKind.INVALID_INTEGER, "bad")
    assert str(err) == "bad"


def test_execution_errors_are_crust_errors() -> None:
    with pytest.raises(CrustError) as exc:
        run_source(src="spush a ipush 1 iadd")
    assert isinstance(exc.value, ExecutionError)
    assert exc.value.kind == ErrorKind.KIND_MISMATCH
    assert exc.value.ip == 4


def test_error_kinds_are_string_tags() -> None:
    assert ErrorKind("invalid_jump") is ErrorKind.INVALID_JUMP
    assert ErrorKind.END_OF_PROGRAM.value == "end_of_program"
