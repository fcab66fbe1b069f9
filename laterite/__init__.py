"""Laterite — parses computer-algebra input lines into expression trees."""

from laterite.ast_nodes import (
    Expression,
    Add,
    Sub,
    Mul,
    Div,
    Pow,
    Neg,
    Rational,
    Variable,
    Call,
    Function,
    Let,
    walk,
    to_infix,
)
from laterite.failures import ParseFailure, Span, Unexpected, Unclosed, Custom
from laterite.parser import ParseResult, parse_line
from laterite.diagnostics import render_failure, report_failures
from laterite.errors import LateriteError, LiteralConversionError, ConfigError

__version__ = "0.1.0"

__all__ = [
    "Expression", "Add", "Sub", "Mul", "Div", "Pow", "Neg", "Rational",
    "Variable", "Call", "Function", "Let", "walk", "to_infix",
    "ParseFailure", "Span", "Unexpected", "Unclosed", "Custom",
    "ParseResult", "parse_line", "render_failure", "report_failures",
    "LateriteError", "LiteralConversionError", "ConfigError",
]
