"""Laterite parser — recursive-descent parser producing an expression tree.

Grammar, lowest precedence first::

    line      := statement EOF
    statement := 'let' ident '=' addend 'in' statement
               | 'func' ident '(' ident (',' ident)* ')' '=' addend 'in' statement
               | addend
    addend    := term (('+' | '-') term)*
    term      := power (('*' | '/') power)*
    power     := unary ('^' power)?
    unary     := '-' unary | factor
    factor    := ident | call | number | '(' addend ')'
    call      := '@' ident '(' addend (',' addend)? ')'
    number    := '-'? digits ('.' digits)?

``+ - * /`` fold to the left, ``^`` nests to the right.  A ``-`` written
directly against a numeral in operand position is the numeral's sign.
``let``, ``func`` and ``in`` are ordinary identifiers except where the
binding forms above need them, so ``let * 2`` is a product.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from fractions import Fraction

from laterite.lexer import DESCRIPTIONS, Lexer, Token, TokenType
from laterite.errors import LiteralConversionError, ParseError
from laterite.failures import Custom, ParseFailure, Span, Unclosed, Unexpected
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
)

logger = logging.getLogger(__name__)

MAX_CALL_ARGUMENTS = 2

# Each level costs several Python frames, so stay well below the interpreter's
# recursion limit.
MAX_NESTING = 100

NESTING_MESSAGE = "expression nested too deeply"

ADDITIVE = {TokenType.PLUS: Add, TokenType.MINUS: Sub}
MULTIPLICATIVE = {TokenType.STAR: Mul, TokenType.SLASH: Div}


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one line: a tree, or the failures that prevented one."""
    tree: Expression | None = None
    failures: tuple[ParseFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return self.tree is not None


def parse_line(source: str) -> ParseResult:
    """Parse one line of input.

    Malformed input never raises; it comes back as ``ParseResult.failures``.
    ``LiteralConversionError`` is the one exception that escapes, since it
    means the lexer accepted a numeral the converter cannot handle.
    """
    tokens = Lexer(source).tokenize()
    try:
        tree = Parser(tokens).parse()
    except ParseError as e:
        logger.debug("parse failed for %r: %s", source, e.message)
        return ParseResult(failures=(e.failure,))
    except RecursionError:
        logger.debug("recursion limit hit for %r", source)
        failure = ParseFailure(Span(0, len(source)), reason=Custom(NESTING_MESSAGE))
        return ParseResult(failures=(failure,))
    logger.debug("parsed %r", source)
    return ParseResult(tree=tree)


def rational_from_literal(text: str) -> Fraction:
    """Convert a decimal numeral such as ``-12.5`` to an exact fraction.

    The digits are read as one integer scaled by a power of ten, so no
    binary floating point is involved.
    """
    sign = -1 if text.startswith("-") else 1
    whole, dot, frac = text.lstrip("-").partition(".")
    if not whole.isdigit() or (dot and not frac.isdigit()):
        raise LiteralConversionError(f"Malformed numeral: {text!r}")
    try:
        return Fraction(sign * int(whole + frac), 10 ** len(frac))
    except (ValueError, ZeroDivisionError) as e:
        raise LiteralConversionError(f"Failed to convert numeral {text!r}: {e}") from e


class Parser:
    """Recursive-descent parser for one line of Laterite input.

    Consumes the token list from the Lexer and produces a single
    ``Expression``.  Errors are raised as ``ParseError`` carrying a
    ``ParseFailure``; ``parse_line`` turns them back into data.
    """

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos: int = 0
        # Descriptions of every token tried at the current position.
        self._tried: dict[str, None] = {}
        self._labels: list[str] = []
        self._depth: int = 0

    # -- Navigation helpers ------------------------------------------------

    def current(self) -> Token:
        """Return the token at the current position; the last token is always EOF."""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return self.tokens[-1]

    def peek(self, offset: int = 1) -> Token:
        """Look ahead *offset* tokens without consuming; past the end is EOF."""
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return self.tokens[-1]

    def advance(self) -> Token:
        """Consume and return the current token, then increment pos."""
        tok = self.current()
        if tok.type != TokenType.EOF:
            self.pos += 1
            self._tried = {}
        return tok

    def at(self, *types: TokenType) -> bool:
        """Check the current token against *types*, remembering what was tried."""
        if self.current().type in types:
            return True
        for token_type in types:
            self._tried[DESCRIPTIONS[token_type]] = None
        return False

    def at_word(self, word: str) -> bool:
        """Check for an identifier spelled *word*, remembering it was tried."""
        tok = self.current()
        if tok.type == TokenType.IDENTIFIER and tok.value == word:
            return True
        self._tried[repr(word)] = None
        return False

    def expect_word(self, word: str) -> Token:
        """Consume an identifier spelled *word*, else raise ParseError."""
        if not self.at_word(word):
            raise ParseError(self._failure(Unexpected()))
        return self.advance()

    def match(self, *types: TokenType) -> Token | None:
        """If the current token matches any of *types*, consume and return it; else None."""
        if self.at(*types):
            return self.advance()
        return None

    def expect(self, token_type: TokenType) -> Token:
        """Consume the current token if it matches *token_type*, else raise ParseError."""
        tok = self.match(token_type)
        if tok is None:
            raise ParseError(self._failure(Unexpected()))
        return tok

    def close(self, opener: Token) -> Token:
        """Consume the ``)`` matching *opener*, else report the delimiter as unclosed."""
        tok = self.match(TokenType.RPAREN)
        if tok is None:
            raise ParseError(self._failure(Unclosed(opener.span, opener.value)))
        return tok

    @contextmanager
    def rule(self, label: str):
        """Name the grammar rule being parsed, for error messages."""
        self._labels.append(label)
        try:
            yield
        finally:
            self._labels.pop()

    @contextmanager
    def nested(self):
        """Track recursion depth; past MAX_NESTING the line is rejected."""
        self._depth += 1
        try:
            if self._depth > MAX_NESTING:
                raise ParseError(self._failure(Custom(NESTING_MESSAGE)))
            yield
        finally:
            self._depth -= 1

    def _failure(self, reason, span: Span | None = None) -> ParseFailure:
        tok = self.current()
        return ParseFailure(
            span=span or tok.span,
            reason=reason,
            label=self._labels[-1] if self._labels else None,
            found=None if tok.type == TokenType.EOF else tok.value,
            expected=tuple(self._tried),
        )

    # -- Top-level ---------------------------------------------------------

    def parse(self) -> Expression:
        """Parse the whole token stream; trailing input is an error."""
        tree = self.parse_statement()
        self.expect(TokenType.EOF)
        return tree

    def parse_statement(self) -> Expression:
        """Parse a ``let`` binding, a ``func`` definition, or a bare expression."""
        with self.nested():
            if self._starts_let():
                return self.parse_let()
            if self._starts_function():
                return self.parse_function()
            return self.parse_addend()

    def _starts_let(self) -> bool:
        """``let`` opens a binding only when a name follows it."""
        return self.at_word("let") and self.peek().type == TokenType.IDENTIFIER

    def _starts_function(self) -> bool:
        """``func`` opens a definition only when ``name(`` follows it."""
        return (
            self.at_word("func")
            and self.peek().type == TokenType.IDENTIFIER
            and self.peek(2).type == TokenType.LPAREN
        )

    def parse_let(self) -> Let:
        """Parse ``let <ident> = <addend> in <statement>``."""
        tok = self.expect_word("let")
        with self.rule("let binding"):
            name_tok = self.expect(TokenType.IDENTIFIER)
            self.expect(TokenType.EQUALS)
            value = self.parse_addend()
            self.expect_word("in")
        then = self.parse_statement()
        return Let(name_tok.value, value, then, span=Span(tok.start, _end(then)))

    def parse_function(self) -> Function:
        """Parse ``func <ident>(<params>) = <addend> in <statement>``."""
        tok = self.expect_word("func")
        with self.rule("function definition"):
            name_tok = self.expect(TokenType.IDENTIFIER)
            lparen = self.expect(TokenType.LPAREN)
            params = [self.expect(TokenType.IDENTIFIER).value]
            while self.match(TokenType.COMMA):
                params.append(self.expect(TokenType.IDENTIFIER).value)
            self.close(lparen)
            self.expect(TokenType.EQUALS)
            body = self.parse_addend()
            self.expect_word("in")
        then = self.parse_statement()
        return Function(
            name_tok.value, tuple(params), body, then, span=Span(tok.start, _end(then))
        )

    # -- Expression parsing (recursive descent by precedence) --------------

    def parse_addend(self) -> Expression:
        """Parse ``+`` and ``-``, folding to the left."""
        left = self.parse_term()
        while self.at(*ADDITIVE):
            op_tok = self.advance()
            right = self.parse_term()
            left = ADDITIVE[op_tok.type](left, right, span=_join(left, right))
        return left

    def parse_term(self) -> Expression:
        """Parse ``*`` and ``/``, folding to the left."""
        left = self.parse_power()
        while self.at(*MULTIPLICATIVE):
            op_tok = self.advance()
            right = self.parse_power()
            left = MULTIPLICATIVE[op_tok.type](left, right, span=_join(left, right))
        return left

    def parse_power(self) -> Expression:
        """Parse ``^``, which is right-associative."""
        base = self.parse_unary()
        if self.match(TokenType.CARET):
            with self.nested():
                exponent = self.parse_power()
            return Pow(base, exponent, span=_join(base, exponent))
        return base

    def parse_unary(self) -> Expression:
        """Parse a signed numeral or a unary ``-`` prefix.

        Groups, calls and negation all recurse through here, so this is
        where their depth is counted.
        """
        with self.nested():
            if self.at(TokenType.MINUS):
                op_tok = self.advance()
                nxt = self.current()
                if nxt.type == TokenType.NUMBER and nxt.start == op_tok.end:
                    self.advance()
                    return self._rational(op_tok.value + nxt.value, Span(op_tok.start, nxt.end))
                operand = self.parse_unary()
                return Neg(operand, span=Span(op_tok.start, _end(operand)))
            return self.parse_factor()

    def parse_factor(self) -> Expression:
        """Parse atomic expressions: variables, calls, numerals, groups."""
        if self.at(TokenType.IDENTIFIER):
            tok = self.advance()
            return Variable(tok.value, span=tok.span)

        if self.at(TokenType.AT):
            return self.parse_call()

        if self.at(TokenType.NUMBER):
            tok = self.advance()
            return self._rational(tok.value, tok.span)

        # Grouped expression: ( addend )
        if self.at(TokenType.LPAREN):
            lparen = self.advance()
            node = self.parse_addend()
            self.close(lparen)
            return node

        raise ParseError(self._failure(Unexpected()))

    def parse_call(self) -> Call:
        """Parse ``@name(arg)`` or ``@name(arg, arg)``."""
        at_tok = self.expect(TokenType.AT)
        with self.rule("function call"):
            name_tok = self.expect(TokenType.IDENTIFIER)
            lparen = self.expect(TokenType.LPAREN)
            if self.current().type == TokenType.RPAREN:
                rparen = self.current()
                raise ParseError(self._failure(
                    Custom("function calls take at least 1 argument"),
                    span=Span(lparen.start, rparen.end),
                ))
            args = [self.parse_addend()]
            while self.at(TokenType.COMMA):
                if len(args) == MAX_CALL_ARGUMENTS:
                    raise ParseError(self._failure(
                        Custom(f"function calls take at most {MAX_CALL_ARGUMENTS} arguments"),
                    ))
                self.advance()
                args.append(self.parse_addend())
            rparen = self.close(lparen)
        return Call(name_tok.value, tuple(args), span=Span(at_tok.start, rparen.end))

    # -- Literals ----------------------------------------------------------

    def _rational(self, text: str, span: Span) -> Rational:
        return Rational(rational_from_literal(text), span=span)


def _end(node: Expression) -> int:
    return node.span.end if node.span else 0


def _join(left: Expression, right: Expression) -> Span | None:
    if left.span is None or right.span is None:
        return None
    return Span(left.span.start, right.span.end)
