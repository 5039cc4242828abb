"""Error formatting and actionable hints for snaplru CLI output.

Keep this module small and dependency-light: it is imported by the CLI layer
and only depends on the error hierarchy.
"""

from __future__ import annotations

from snaplru.errors import SnapLRUConfigError, SnapLRUTraceError


def format_hint(exc: BaseException) -> str | None:
    """Return an actionable hint for a known error, or None."""
    msg = str(exc)

    if isinstance(exc, SnapLRUConfigError):
        if "Missing snaplru.toml" in msg or "Could not find" in msg:
            return "run `snaplru init` to create a default snaplru.toml"
        if "trigger" in msg:
            return 'set cache.trigger to "count" or "clock"'
        if "Invalid TOML" in msg:
            return "fix the TOML syntax in snaplru.toml"
        return None

    if isinstance(exc, SnapLRUTraceError):
        return "trace lines look like `insert KEY VALUE`, `get KEY`, `member KEY`, `size`, `dump`"

    if isinstance(exc, FileNotFoundError):
        return "check the trace path (use `-` to read from stdin)"

    return None


def format_error_with_hint(exc: BaseException) -> str:
    """Format error message + optional hint for stderr output."""
    if isinstance(exc, FileNotFoundError) and exc.filename:
        msg = f"no such file: {exc.filename}"
    else:
        msg = (str(exc) or repr(exc)).strip()

    result = f"error: {msg}"
    hint = format_hint(exc)
    if hint:
        result += f"\nhint: {hint}"
    return result
