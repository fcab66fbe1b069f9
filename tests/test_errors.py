"""Tests for the Laterite exception hierarchy."""

from laterite.errors import LateriteError, ParseError, LiteralConversionError, ConfigError
from laterite.failures import ParseFailure, Span, Custom


def test_laterite_error_is_exception():
    assert issubclass(LateriteError, Exception)


def test_parse_error_inherits_laterite_error():
    assert issubclass(ParseError, LateriteError)


def test_literal_conversion_error_is_not_a_parse_error():
    assert issubclass(LiteralConversionError, LateriteError)
    assert not issubclass(LiteralConversionError, ParseError)


def test_config_error_inherits_laterite_error():
    assert issubclass(ConfigError, LateriteError)


def test_errors_carry_message():
    err = ConfigError("bad file")
    assert str(err) == "bad file"
    assert err.message == "bad file"


def test_parse_error_carries_failure():
    failure = ParseFailure(Span(3, 4), reason=Custom("nope"))
    err = ParseError(failure)
    assert err.failure is failure
    assert str(err) == "Col 4: nope"
