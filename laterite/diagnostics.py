"""Render parse failures as human-readable reports anchored to the input line.

A report looks like::

    [E03] Error: Unexpected end of input, expected ')'
     --> 1:5
      |
    1 | (1+2
      |     ^ Unexpected end of input
      | - Unclosed delimiter (

The primary span is drawn in red, the opening delimiter of an unclosed
group in yellow.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterable, TextIO

from laterite.failures import Custom, ParseFailure, Span, Unclosed

logger = logging.getLogger(__name__)

RED = "\033[31m"
YELLOW = "\033[33m"
BOLD = "\033[1m"
RESET = "\033[0m"


def _paint(text: str, style: str, color: bool) -> str:
    return f"{style}{text}{RESET}" if color else text


def primary_label(failure: ParseFailure, color: bool = False) -> str:
    """Text shown under the offending span."""
    if isinstance(failure.reason, Custom):
        return failure.reason.message
    if failure.found is None:
        return "Unexpected end of input"
    return f"Unexpected token {_paint(failure.found, RED, color)}"


def _marker_line(gutter: str, span: Span, glyph: str, label: str, style: str, color: bool) -> str:
    width = max(1, span.end - span.start)
    marker = _paint(glyph * width, style, color)
    return f"{gutter}| {' ' * span.start}{marker} {label}"


def render_failure(failure: ParseFailure, source: str, color: bool = False, code: int = 3) -> str:
    """Return the report for one failure as text, without a trailing newline.

    Rendering only reads *failure* and *source*, so the same arguments always
    produce the same text.
    """
    shown = source.replace("\t", " ")
    gutter = " " * len("1 ")
    lines = [
        f"{_paint(f'[E{code:02d}] Error:', RED + BOLD, color)} {failure.message()}",
        f" --> 1:{failure.span.start + 1}",
        f"{gutter}|",
        f"1 | {shown}",
        _marker_line(gutter, failure.span, "^", primary_label(failure, color), RED, color),
    ]
    if isinstance(failure.reason, Unclosed):
        delimiter = _paint(failure.reason.delimiter, YELLOW, color)
        lines.append(_marker_line(
            gutter, failure.reason.span, "-", f"Unclosed delimiter {delimiter}", YELLOW, color,
        ))
    return "\n".join(lines)


def report_failures(
    failures: Iterable[ParseFailure],
    source: str,
    stream: TextIO | None = None,
    color: bool = False,
    code: int = 3,
) -> int:
    """Write one report per failure to *stream*, in order.

    A failure that cannot be rendered is logged and skipped so the rest are
    still reported.  Returns the number of reports written.
    """
    if stream is None:
        stream = sys.stderr
    written = 0
    for failure in failures:
        try:
            text = render_failure(failure, source, color=color, code=code)
        except Exception:
            logger.exception("Could not render diagnostic for %r", failure)
            continue
        stream.write(text + "\n")
        written += 1
    return written
