"""Laterite MCP Server — exposes the Laterite parser via MCP protocol."""

import io

from mcp.server.fastmcp import FastMCP

from laterite.ast_nodes import to_infix
from laterite.diagnostics import report_failures
from laterite.parser import parse_line

mcp = FastMCP("laterite")


@mcp.tool()
def laterite_parse(expression: str) -> str:
    """Parse one line of Laterite input and return its expression tree.

    Args:
        expression: A single line such as "2 + 3*x" or "@f(x, 1.5)"
    """
    return parse_expression(expression)


def parse_expression(expression: str) -> str:
    """Core logic for parsing an expression — testable without MCP."""
    if "\n" in expression:
        return "Error: expression must be a single line"
    result = parse_line(expression)
    if result.ok:
        return f"{result.tree!r}\n{to_infix(result.tree)}"
    out = io.StringIO()
    report_failures(result.failures, expression, stream=out)
    return out.getvalue()


@mcp.tool()
def laterite_check(filepath: str) -> str:
    """Check that every line of a file parses. Reports diagnostics for failing lines.

    Args:
        filepath: Path to a text file with one expression per line
    """
    return check_laterite_file(filepath)


def check_laterite_file(filepath: str) -> str:
    """Core logic for checking a file — testable without MCP."""
    try:
        with open(filepath) as f:
            lines = f.read().splitlines()
    except FileNotFoundError:
        return f"Error: file not found: {filepath}"
    except OSError as e:
        return f"Error reading file: {e}"

    out = io.StringIO()
    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        result = parse_line(line)
        if not result.ok:
            out.write(f"{filepath}:{number}:\n")
            report_failures(result.failures, line, stream=out)
    report = out.getvalue()
    return f"Error:\n{report}" if report else f"OK: {filepath}"


LATERITE_GRAMMAR_GUIDE = """\
# Writing Laterite Input

Laterite parses one line at a time into an exact expression tree.

## Expressions
```
1 + 2*x          -- * and / bind tighter than + and -
1 - 2 - 3        -- left-associative: (1 - 2) - 3
2 ^ 3 ^ 2        -- ^ is right-associative: 2 ^ (3 ^ 2)
(1 + 2) * 4      -- parentheses override precedence
-(a + b)         -- unary negation
```

## Numbers
```
42      3.25      -0.5
```
Numbers are exact rationals: 3.25 is 13/4, never a float.

## Calls
```
@sin(x)          -- one argument
@log(x, 10)      -- two arguments (the maximum)
```

## Bindings
```
let x = 2 in x * x
func f(a, b) = a + b in @f(1, 2)
```

## Important Rules
1. Identifiers are lower-case letters only: x, rate, theta
2. Calls always start with @ and take 1 or 2 arguments
3. let starts a binding only before a name, func only before name(; elsewhere let, func and in are plain variables
"""


@mcp.prompt()
def laterite_guide() -> str:
    """Guide to the Laterite input grammar. Use this when writing expressions."""
    return LATERITE_GRAMMAR_GUIDE


if __name__ == "__main__":
    mcp.run(transport="stdio")
