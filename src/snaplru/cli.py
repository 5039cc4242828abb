from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from snaplru import __version__
from snaplru.cache import TRIGGERS
from snaplru.config import (
    CONFIG_FILENAME,
    DEFAULT_CONFIG_TOML,
    SnapLRUConfig,
    default_config,
    find_project_root,
    load_config,
)
from snaplru.diagnostics import format_error_with_hint
from snaplru.errors import SnapLRUConfigError, SnapLRUTraceError

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2
EXIT_TRACE_ERROR = 3


def _add_config_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--root",
        type=str,
        default=None,
        help="Project root (defaults to searching upward from cwd for snaplru.toml).",
    )
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to snaplru.toml (defaults to <root>/snaplru.toml).",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="snaplru")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    init_p = subparsers.add_parser("init", help=f"Write a default {CONFIG_FILENAME}.")
    init_p.add_argument("--force", action="store_true", help="Overwrite an existing file.")

    replay_p = subparsers.add_parser("replay", help="Replay an operation trace against a cache.")
    replay_p.add_argument("trace", help="Trace file path, or `-` for stdin.")
    _add_config_flags(replay_p)
    replay_p.add_argument("--capacity", type=int, default=None, help="Capacity override.")
    replay_p.add_argument(
        "--trigger",
        choices=TRIGGERS,
        default=None,
        help="Eviction trigger override.",
    )
    replay_p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Emit a JSON report instead of one line per step.",
    )

    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def _load_config(args: argparse.Namespace) -> SnapLRUConfig:
    if args.config:
        return load_config(config_path=Path(args.config).resolve())

    start = Path(args.root).resolve() if args.root else Path.cwd()
    try:
        root = find_project_root(start)
    except SnapLRUConfigError:
        # No config file anywhere: run on defaults.
        return default_config()
    return load_config(root=root)


def _configure_logging(level: str, *, verbose: bool) -> None:
    resolved = logging.DEBUG if verbose else getattr(logging, level, logging.WARNING)
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)
    logging.getLogger("snaplru").setLevel(resolved)


def _read_trace(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def cmd_init(args: argparse.Namespace) -> int:
    target = Path.cwd() / CONFIG_FILENAME
    if target.exists() and not bool(args.force):
        _eprint(f"error: {target} already exists (use --force to overwrite)")
        return EXIT_CONFIG_ERROR
    target.write_text(DEFAULT_CONFIG_TOML, encoding="utf-8")
    print(f"wrote {target}")
    return EXIT_OK


def cmd_replay(args: argparse.Namespace) -> int:
    from snaplru import cache as lru
    from snaplru.trace import parse_trace, replay

    try:
        cfg = _load_config(args)
        _configure_logging(cfg.logging.level, verbose=bool(args.verbose))

        capacity = cfg.cache.capacity if args.capacity is None else int(args.capacity)
        trigger = cfg.cache.trigger if args.trigger is None else args.trigger

        ops = parse_trace(_read_trace(args.trace))
        report = replay(ops, lru.empty(capacity, trigger=trigger))
    except SnapLRUConfigError as e:
        _eprint(format_error_with_hint(e))
        return EXIT_CONFIG_ERROR
    except (SnapLRUTraceError, OSError, UnicodeDecodeError) as e:
        _eprint(format_error_with_hint(e))
        return EXIT_TRACE_ERROR

    if bool(args.json_output):
        print(json.dumps(report.as_dict(), indent=2))
        return EXIT_OK

    for step in report.steps:
        label = step.op.command if step.op.key is None else f"{step.op.command} {step.op.key}"
        print(f"{step.op.line}: {label} -> {step.output}")
    print(
        f"hits={report.hits} misses={report.misses} evictions={report.evictions} "
        f"size={lru.size(report.cache)} clock={report.cache.clock}"
    )
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    try:
        args = parse_args(list(sys.argv[1:] if argv is None else argv))
    except SystemExit as e:
        # argparse uses SystemExit for --help/--version and parse errors.
        code = e.code
        return int(code) if isinstance(code, int) else EXIT_CONFIG_ERROR

    if args.command == "init":
        return cmd_init(args)
    if args.command == "replay":
        return cmd_replay(args)

    return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
