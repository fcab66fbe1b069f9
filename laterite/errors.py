"""Laterite error types with source span info."""


class LateriteError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ParseError(LateriteError):
    """Carries a single ParseFailure out of the recursive-descent rules.

    Only ``parse_line`` catches it; callers always receive the failure as data.
    """

    def __init__(self, failure):
        self.failure = failure
        super().__init__(f"Col {failure.span.start + 1}: {failure.message()}")


class LiteralConversionError(LateriteError):
    """A numeral accepted by the grammar could not be converted to a rational."""
    pass


class ConfigError(LateriteError):
    pass
