"""Line-oriented operation traces and their replay against a cache.

A trace is plain text, one operation per line::

    # warm up
    insert a 1
    insert b hello world
    get a
    member b
    size
    dump

Keys are single tokens; an insert value is the remainder of the line. Blank
lines and lines starting with ``#`` are ignored.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Literal

from snaplru import cache as lru
from snaplru.errors import SnapLRUTraceError

logger = logging.getLogger("snaplru.trace")

Command = Literal["insert", "get", "member", "size", "dump"]

# insert's value is the rest of the line, so it counts as one argument.
_ARITY: dict[str, int] = {"insert": 2, "get": 1, "member": 1, "size": 0, "dump": 0}

MISS = "<miss>"


@dataclass(frozen=True, slots=True)
class TraceOp:
    command: Command
    line: int
    key: str | None = None
    value: str | None = None


@dataclass(frozen=True, slots=True)
class StepResult:
    op: TraceOp
    output: str
    evicted: str | None = None


@dataclass(slots=True)
class ReplayReport:
    cache: lru.LRUCache
    steps: list[StepResult] = field(default_factory=list)
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    def as_dict(self) -> dict[str, Any]:
        return {
            "steps": [
                {
                    "line": s.op.line,
                    "command": s.op.command,
                    "key": s.op.key,
                    "output": s.output,
                    "evicted": s.evicted,
                }
                for s in self.steps
            ],
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "capacity": self.cache.capacity,
            "clock": self.cache.clock,
            "size": lru.size(self.cache),
            "items": lru.to_dict(self.cache),
        }


def parse_trace(text: str) -> list[TraceOp]:
    """Parse trace text into operations, raising SnapLRUTraceError on bad lines."""

    ops: list[TraceOp] = []
    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        command, *tail = line.split(maxsplit=1)
        if command not in _ARITY:
            raise SnapLRUTraceError(f"unknown command {command!r}", line=lineno)

        arity = _ARITY[command]
        rest = tail[0] if tail else ""
        args = rest.split(maxsplit=1) if command == "insert" else rest.split()
        if len(args) != arity:
            raise SnapLRUTraceError(
                f"{command} expects {arity} argument(s), got {len(args)}", line=lineno
            )

        key = args[0] if arity >= 1 else None
        value = args[1] if arity == 2 else None
        ops.append(TraceOp(command=command, line=lineno, key=key, value=value))  # type: ignore[arg-type]
    return ops


def replay(ops: list[TraceOp], cache: lru.LRUCache) -> ReplayReport:
    """Apply `ops` to `cache` in order and collect per-step output."""

    report = ReplayReport(cache=cache)
    for op in ops:
        evicted = None
        if op.command == "insert":
            report.cache, evicted = lru.insert_with_victim(op.key, op.value, report.cache)
            output = "ok" if evicted is None else f"ok (evicted {evicted})"
            if evicted is not None:
                report.evictions += 1
        elif op.command == "get":
            if lru.member(op.key, report.cache):
                report.cache, value = lru.get(op.key, report.cache)
                report.hits += 1
                output = str(value)
            else:
                report.misses += 1
                output = MISS
        elif op.command == "member":
            output = "true" if lru.member(op.key, report.cache) else "false"
        elif op.command == "size":
            output = str(lru.size(report.cache))
        elif op.command == "dump":
            output = json.dumps(lru.to_dict(report.cache))
        else:  # pragma: no cover
            raise ValueError(f"unknown command: {op.command!r}")

        logger.debug("line %d: %s %s -> %s", op.line, op.command, op.key or "", output)
        report.steps.append(StepResult(op=op, output=output, evicted=evicted))

    logger.info(
        "Replayed %d op(s): hits=%d misses=%d evictions=%d",
        len(ops),
        report.hits,
        report.misses,
        report.evictions,
    )
    return report
