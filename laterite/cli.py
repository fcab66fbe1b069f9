"""Laterite CLI — laterite repl, laterite parse, laterite check."""
import logging
import sys
import os

from laterite import __version__
from laterite.config import get_config
from laterite.diagnostics import report_failures
from laterite.errors import LateriteError
from laterite.parser import parse_line
from laterite.repl import Repl

USAGE = "Usage: laterite [repl | parse <expression> | check <file> | --version]"


def _configure_logging(config: dict) -> None:
    level = str(config["logging"]["level"]).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="[laterite] %(levelname)s %(name)s: %(message)s",
    )


def _color(config: dict, stream) -> bool:
    return bool(config["diagnostics"]["color"]) and stream.isatty()


def check_file(filepath: str, config: dict) -> int:
    """Parse every non-blank line of *filepath*; returns the number of failing lines."""
    with open(filepath) as f:
        lines = f.read().splitlines()

    failed = 0
    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        result = parse_line(line)
        if not result.ok:
            failed += 1
            print(f"{filepath}:{number}:", file=sys.stderr)
            report_failures(
                result.failures, line, stream=sys.stderr,
                color=_color(config, sys.stderr), code=config["diagnostics"]["code"],
            )
    return failed


def main():
    args = sys.argv[1:]
    command = args[0] if args else "repl"

    if command in ("--version", "-V"):
        print(f"laterite {__version__}")
        sys.exit(0)

    try:
        config = get_config()
    except LateriteError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    _configure_logging(config)

    if command == "repl":
        sys.exit(Repl(config).run())

    if command == "parse":
        if len(args) < 2:
            print("Usage: laterite parse <expression>", file=sys.stderr)
            sys.exit(1)
        line = " ".join(args[1:])
        result = parse_line(line)
        if result.ok:
            print(repr(result.tree))
            sys.exit(0)
        report_failures(
            result.failures, line, stream=sys.stderr,
            color=_color(config, sys.stderr), code=config["diagnostics"]["code"],
        )
        sys.exit(1)

    if command == "check":
        if len(args) < 2:
            print("Usage: laterite check <file>", file=sys.stderr)
            sys.exit(1)
        filepath = args[1]
        if not os.path.exists(filepath):
            print(f"Error: file not found: {filepath}", file=sys.stderr)
            sys.exit(1)
        if check_file(filepath, config):
            sys.exit(1)
        print(f"OK: {filepath}")
        sys.exit(0)

    print(f"Unknown command: {command}", file=sys.stderr)
    print(USAGE, file=sys.stderr)
    sys.exit(1)


if __name__ == "__main__":
    main()
