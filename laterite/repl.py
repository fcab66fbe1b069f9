"""Laterite REPL — reads lines, parses each, prints the tree or diagnostics."""

from __future__ import annotations

import logging
import os
import sys
from typing import Callable, TextIO

try:
    import readline
except ImportError:  # Windows
    readline = None

from laterite import __version__
from laterite.diagnostics import BOLD, RESET, report_failures
from laterite.parser import parse_line

logger = logging.getLogger(__name__)


class Repl:
    """Interactive loop around ``parse_line``.

    Each line is parsed independently; nothing is carried between lines
    apart from the line editor's history.
    """

    def __init__(
        self,
        config: dict,
        out: TextIO | None = None,
        err: TextIO | None = None,
        read_line: Callable[[str], str] = input,
    ) -> None:
        self.config = config
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self.read_line = read_line
        self.color = bool(config["diagnostics"]["color"]) and self.err.isatty()

    def _bold(self, text: str) -> str:
        return f"{BOLD}{text}{RESET}" if self.color else text

    def banner(self) -> str:
        return "\n".join([
            "Laterite Computer Algebra System",
            f"Version: {__version__}",
            "This program is free software under the GPLv3 license.",
            f"Type {self._bold('Ctrl+D')} to quit, and {self._bold('Ctrl+C')} to terminate.",
        ])

    def handle(self, line: str) -> bool:
        """Parse one line and print the outcome. Returns True when it parsed."""
        if self.config["repl"]["show_line"]:
            print(f"Line: {line}", file=self.out)
        result = parse_line(line)
        if result.ok:
            print(repr(result.tree), file=self.out)
            return True
        report_failures(
            result.failures,
            line,
            stream=self.err,
            color=self.color,
            code=self.config["diagnostics"]["code"],
        )
        return False

    def run(self) -> int:
        """Loop until end of input or interrupt; returns the exit status."""
        print(self.banner(), file=self.out)
        history_file = self.config["repl"]["history_file"]
        self._load_history(history_file)
        prompt = self.config["repl"]["prompt"]
        try:
            while True:
                try:
                    line = self.read_line(prompt)
                except KeyboardInterrupt:
                    print("CTRL-C", file=self.out)
                    break
                except EOFError:
                    print("CTRL-D", file=self.out)
                    break
                self.handle(line)
        finally:
            self._save_history(history_file)
        return 0

    # -- History -----------------------------------------------------------

    def _load_history(self, path: str | None) -> None:
        if readline is None or not path:
            return
        path = os.path.expanduser(path)
        if os.path.exists(path):
            try:
                readline.read_history_file(path)
            except OSError as e:
                logger.warning("Could not read history file %s: %s", path, e)

    def _save_history(self, path: str | None) -> None:
        if readline is None or not path:
            return
        path = os.path.expanduser(path)
        try:
            readline.write_history_file(path)
        except OSError as e:
            logger.warning("Could not write history file %s: %s", path, e)
