"""Laterite expression tree.

Every node is a frozen dataclass so a tree cannot be changed once the parser
hands it over.  Each node carries an optional ``span`` for source-location
tracking; spans are excluded from equality and repr so that ``"1+2"`` and ``" 1 + 2 "``
produce equal trees.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from fractions import Fraction
from typing import Iterator

from laterite.failures import Span


# ── Base ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Expression:
    """Base class for every expression node."""


def _span():
    return field(default=None, compare=False, repr=False, kw_only=True)


# ── Binary operators ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class BinaryExpression(Expression):
    left: Expression
    right: Expression
    span: Span | None = _span()


@dataclass(frozen=True)
class Add(BinaryExpression):
    symbol = "+"


@dataclass(frozen=True)
class Sub(BinaryExpression):
    symbol = "-"


@dataclass(frozen=True)
class Mul(BinaryExpression):
    symbol = "*"


@dataclass(frozen=True)
class Div(BinaryExpression):
    symbol = "/"


@dataclass(frozen=True)
class Pow(BinaryExpression):
    symbol = "^"


@dataclass(frozen=True)
class Neg(Expression):
    operand: Expression
    span: Span | None = _span()


# ── Leaves ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Rational(Expression):
    value: Fraction
    span: Span | None = _span()


@dataclass(frozen=True)
class Variable(Expression):
    name: str
    span: Span | None = _span()


# ── Calls and scoping constructs ────────────────────────────────────────────

@dataclass(frozen=True)
class Call(Expression):
    name: str
    arguments: tuple[Expression, ...]
    span: Span | None = _span()


@dataclass(frozen=True)
class Function(Expression):
    """``func name(params) = body in then``; *name* is visible only in *then*."""
    name: str
    params: tuple[str, ...]
    body: Expression
    then: Expression
    span: Span | None = _span()


@dataclass(frozen=True)
class Let(Expression):
    """``let name = value in then``; *name* is visible only in *then*."""
    name: str
    value: Expression
    then: Expression
    span: Span | None = _span()


# ── Traversal ───────────────────────────────────────────────────────────────

def children(node: Expression) -> tuple[Expression, ...]:
    """Return the direct sub-expressions of *node* in field order."""
    found: list[Expression] = []
    for f in fields(node):
        value = getattr(node, f.name)
        if isinstance(value, Expression):
            found.append(value)
        elif isinstance(value, tuple):
            found.extend(v for v in value if isinstance(v, Expression))
    return tuple(found)


def walk(node: Expression) -> Iterator[Expression]:
    """Yield *node* and all of its descendants in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(children(current)))


def to_infix(node: Expression) -> str:
    """Render *node* as fully parenthesised infix text."""
    if isinstance(node, BinaryExpression):
        return f"({to_infix(node.left)} {node.symbol} {to_infix(node.right)})"
    if isinstance(node, Neg):
        return f"-{to_infix(node.operand)}"
    if isinstance(node, Rational):
        value = node.value
        return str(value) if value.denominator == 1 else f"({value})"
    if isinstance(node, Variable):
        return node.name
    if isinstance(node, Call):
        args = ", ".join(to_infix(a) for a in node.arguments)
        return f"@{node.name}({args})"
    if isinstance(node, Function):
        params = ", ".join(node.params)
        return f"func {node.name}({params}) = {to_infix(node.body)} in {to_infix(node.then)}"
    if isinstance(node, Let):
        return f"let {node.name} = {to_infix(node.value)} in {to_infix(node.then)}"
    raise TypeError(f"not an expression node: {node!r}")
