"""Tests for snaplru.diagnostics — error formatting and actionable hints."""

from __future__ import annotations

from snaplru.diagnostics import format_error_with_hint, format_hint
from snaplru.errors import SnapLRUConfigError, SnapLRUError, SnapLRUTraceError

# --- format_hint ---


def test_hint_for_missing_config() -> None:
    hint = format_hint(SnapLRUConfigError("Missing snaplru.toml at: /x/snaplru.toml"))
    assert hint is not None
    assert "snaplru init" in hint


def test_hint_for_bad_trigger() -> None:
    hint = format_hint(SnapLRUConfigError("Invalid config: cache.trigger must be one of count"))
    assert hint is not None
    assert '"clock"' in hint


def test_hint_for_trace_error() -> None:
    hint = format_hint(SnapLRUTraceError("unknown command 'x'", line=3))
    assert hint is not None
    assert "insert KEY VALUE" in hint


def test_no_hint_for_unknown_errors() -> None:
    assert format_hint(SnapLRUError("something")) is None
    assert format_hint(RuntimeError("x")) is None
    assert format_hint(SnapLRUConfigError("Expected version to be an integer.")) is None


# --- format_error_with_hint ---


def test_error_with_hint_has_both_lines() -> None:
    out = format_error_with_hint(SnapLRUTraceError("unknown command 'x'", line=3))
    lines = out.splitlines()
    assert lines[0] == "error: line 3: unknown command 'x'"
    assert lines[1].startswith("hint: ")


def test_error_without_hint_is_single_line() -> None:
    assert format_error_with_hint(RuntimeError("boom")) == "error: boom"


def test_file_not_found_names_the_file() -> None:
    exc = FileNotFoundError(2, "No such file or directory", "trace.txt")
    out = format_error_with_hint(exc)
    assert out.startswith("error: no such file: trace.txt")
    assert "hint:" in out


def test_empty_message_falls_back_to_repr() -> None:
    assert format_error_with_hint(RuntimeError()) == "error: RuntimeError()"
