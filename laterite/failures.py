"""Parse failures as data.

A failed parse is described by one or more ``ParseFailure`` records.  Each
record points at a ``Span`` of the original line, names the grammar rule that
was active, and gives a reason: an unexpected token, an unclosed delimiter,
or a custom message.
"""

from __future__ import annotations

from dataclasses import dataclass, field

END_OF_INPUT = "end of input"


@dataclass(frozen=True)
class Span:
    """Half-open ``[start, end)`` range of character offsets into a line.

    Offsets index the ``str``, so they match byte offsets only for ASCII
    input. ``byte_range`` gives the UTF-8 byte form.
    """
    start: int
    end: int

    def byte_range(self, source: str) -> tuple[int, int]:
        """Return the same range as UTF-8 byte offsets into *source*."""
        start = len(source[: self.start].encode("utf-8"))
        end = start + len(source[self.start : self.end].encode("utf-8"))
        return start, end


# ── Reasons ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Unexpected:
    pass


@dataclass(frozen=True)
class Unclosed:
    span: Span
    delimiter: str


@dataclass(frozen=True)
class Custom:
    message: str


# ── Failure ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ParseFailure:
    span: Span
    reason: Unexpected | Unclosed | Custom = field(default_factory=Unexpected)
    label: str | None = None
    found: str | None = None
    expected: tuple[str, ...] = ()

    def message(self) -> str:
        """Summary line for this failure.

        A custom reason supplies its own text; otherwise the message is built
        from what was found, the active rule and the expected tokens.
        """
        if isinstance(self.reason, Custom):
            return self.reason.message
        head = "Unexpected token" if self.found is not None else "Unexpected end of input"
        if self.label:
            head += f" while parsing {self.label}"
        if self.expected:
            wanted = ", ".join(self.expected)
        else:
            wanted = "something else"
        return f"{head}, expected {wanted}"
