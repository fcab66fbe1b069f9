"""End-to-end tests over the example input files: line -> parse -> tree or report."""

import io
import os

from laterite.ast_nodes import Function, Let, walk
from laterite.diagnostics import report_failures
from laterite.parser import parse_line

EXAMPLES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "examples")


def read_lines(name: str) -> list[str]:
    with open(os.path.join(EXAMPLES_DIR, name)) as f:
        return [line for line in f.read().splitlines() if line.strip()]


def test_session_lines_all_parse():
    for line in read_lines("session.lat"):
        result = parse_line(line)
        assert result.ok, (line, result.failures)


def test_session_bindings():
    trees = [parse_line(line).tree for line in read_lines("session.lat")]
    assert any(isinstance(t, Let) for t in trees)
    assert any(isinstance(t, Function) for t in trees)


def test_spans_point_into_source():
    line = "func area(w, h) = w * h in @area(2, 3.5)"
    for node in walk(parse_line(line).tree):
        assert node.span is not None
        assert 0 <= node.span.start < node.span.end <= len(line)


def test_broken_file_reports():
    out = io.StringIO()
    failing = 0
    for line in read_lines("broken.lat"):
        result = parse_line(line)
        if not result.ok:
            failing += 1
            report_failures(result.failures, line, stream=out)
    assert failing == 2
    assert out.getvalue().count("[E03] Error:") == 2
