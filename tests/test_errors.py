import pytest

from snaplru.errors import SnapLRUConfigError, SnapLRUError, SnapLRUTraceError


def test_all_errors_are_subclasses_of_snaplru_error() -> None:
    assert issubclass(SnapLRUConfigError, SnapLRUError)
    assert issubclass(SnapLRUTraceError, SnapLRUError)


def test_error_message_is_preserved() -> None:
    msg = "boom"
    err = SnapLRUConfigError(msg)
    assert str(err) == msg


def test_trace_error_carries_line_number() -> None:
    err = SnapLRUTraceError("bad command", line=4)
    assert err.line == 4
    assert str(err) == "line 4: bad command"

    bare = SnapLRUTraceError("empty trace")
    assert bare.line is None
    assert str(bare) == "empty trace"


def test_can_catch_any_snaplru_error() -> None:
    def raise_one() -> None:
        raise SnapLRUTraceError("nope", line=1)

    with pytest.raises(SnapLRUError):
        raise_one()
