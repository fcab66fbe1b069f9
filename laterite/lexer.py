"""Laterite lexer — scans one input line into a flat list of tokens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from laterite.failures import Span


# ---------------------------------------------------------------------------
# Token types
# ---------------------------------------------------------------------------

class TokenType(Enum):
    # Literals
    NUMBER = auto()

    # Identifiers
    IDENTIFIER = auto()

    # Operators
    PLUS = auto()          # +
    MINUS = auto()         # -
    STAR = auto()          # *
    SLASH = auto()         # /
    CARET = auto()         # ^
    EQUALS = auto()        # =

    # Delimiters
    AT = auto()            # @
    COMMA = auto()         # ,
    LPAREN = auto()        # (
    RPAREN = auto()        # )

    # Anything the grammar has no use for
    UNKNOWN = auto()

    EOF = auto()


# ---------------------------------------------------------------------------
# Character tables
# ---------------------------------------------------------------------------

# Only ASCII whitespace separates tokens; anything else is an UNKNOWN token.
WHITESPACE = frozenset(" \t\r\n\f\v")

SINGLE_CHAR: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "^": TokenType.CARET,
    "=": TokenType.EQUALS,
    "@": TokenType.AT,
    ",": TokenType.COMMA,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

# How each token type is named in "expected ..." lists.
DESCRIPTIONS: dict[TokenType, str] = {
    TokenType.NUMBER: "number",
    TokenType.IDENTIFIER: "identifier",
    TokenType.EOF: "end of input",
    **{tt: repr(ch) for ch, tt in SINGLE_CHAR.items()},
}


# ---------------------------------------------------------------------------
# Token dataclass
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    start: int
    end: int

    @property
    def span(self) -> Span:
        return Span(self.start, self.end)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.start}..{self.end})"


# ---------------------------------------------------------------------------
# Lexer
# ---------------------------------------------------------------------------

class Lexer:
    """Scans a single line of Laterite input and produces Token objects.

    The lexer never raises: characters the grammar cannot use come out as
    ``UNKNOWN`` tokens so the parser can report them with the right context.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos: int = 0

    # -- Character-level helpers -------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at EOF."""
        if self.pos < len(self.source):
            return self.source[self.pos]
        return ""

    def peek(self) -> str:
        """Look ahead one character without consuming it."""
        next_pos = self.pos + 1
        if next_pos < len(self.source):
            return self.source[next_pos]
        return ""

    def advance(self) -> str:
        """Consume and return the current character."""
        ch = self._current()
        self.pos += 1
        return ch

    # -- Main entry point --------------------------------------------------

    def tokenize(self) -> list[Token]:
        """Scan the entire line and return a list of tokens ending with EOF."""
        tokens: list[Token] = []

        while self.pos < len(self.source):
            ch = self._current()

            if ch in WHITESPACE:
                self.advance()
                continue

            if _is_digit(ch):
                tokens.append(self._read_number())
                continue

            if _is_lower(ch):
                tokens.append(self._read_identifier())
                continue

            start = self.pos
            self.advance()
            token_type = SINGLE_CHAR.get(ch, TokenType.UNKNOWN)
            tokens.append(Token(token_type, ch, start, self.pos))

        tokens.append(Token(TokenType.EOF, "", self.pos, self.pos))
        return tokens

    # -- Token readers -----------------------------------------------------

    def _read_number(self) -> Token:
        """Read an integer or decimal literal: [0-9]+(\\.[0-9]+)?"""
        start = self.pos

        while _is_digit(self._current()):
            self.advance()

        # A dot only belongs to the numeral when digits follow it
        if self._current() == "." and _is_digit(self.peek()):
            self.advance()
            while _is_digit(self._current()):
                self.advance()

        return Token(TokenType.NUMBER, self.source[start:self.pos], start, self.pos)

    def _read_identifier(self) -> Token:
        """Read an identifier: [a-z]+

        Words such as ``let`` are plain identifiers here; the parser decides
        from context whether they start a binding.
        """
        start = self.pos

        while _is_lower(self._current()):
            self.advance()

        return Token(TokenType.IDENTIFIER, self.source[start:self.pos], start, self.pos)


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_lower(ch: str) -> bool:
    return "a" <= ch <= "z"
