"""Tests for parse failure records and their messages."""

import dataclasses

import pytest

from laterite.failures import ParseFailure, Span, Unexpected, Unclosed, Custom


class TestSpan:
    def test_byte_range_ascii(self):
        assert Span(2, 5).byte_range("ab cde") == (2, 5)

    def test_byte_range_multibyte(self):
        # "π" is two bytes in UTF-8
        assert Span(2, 3).byte_range("π x") == (3, 4)
        assert Span(0, 1).byte_range("π x") == (0, 2)

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Span(0, 1).start = 3


class TestMessage:
    def test_unexpected_token(self):
        failure = ParseFailure(Span(0, 1), found="#", expected=("number", "'('"))
        assert failure.message() == "Unexpected token, expected number, '('"

    def test_unexpected_end_of_input(self):
        failure = ParseFailure(Span(3, 3), expected=("')'",))
        assert failure.message() == "Unexpected end of input, expected ')'"

    def test_label(self):
        failure = ParseFailure(
            Span(2, 3), label="function call", found=")", expected=("identifier",)
        )
        assert failure.message() == (
            "Unexpected token while parsing function call, expected identifier"
        )

    def test_empty_expected(self):
        failure = ParseFailure(Span(0, 1), found="x")
        assert failure.message() == "Unexpected token, expected something else"

    def test_custom_overrides(self):
        failure = ParseFailure(
            Span(0, 1), reason=Custom("too many arguments"), label="function call", found=","
        )
        assert failure.message() == "too many arguments"

    def test_default_reason(self):
        assert ParseFailure(Span(0, 0)).reason == Unexpected()

    def test_unclosed_reason_uses_generic_message(self):
        failure = ParseFailure(Span(4, 4), reason=Unclosed(Span(0, 1), "("), expected=("')'",))
        assert failure.message() == "Unexpected end of input, expected ')'"
