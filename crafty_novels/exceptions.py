"""Package-specific exception types."""

from __future__ import annotations


class TokenizeError(ValueError):
    """Base class for tokenizing-related errors.

    Represents malformed source markup: a broken style escape or a missing or
    incomplete frontmatter block.

    Args:
        message: Human-readable description of the problem.
        line_number: One-based index of the offending line, when known.
    """

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class MissingFormatCodeError(TokenizeError):
    """Raised when the sentinel character ends a line without a format code."""

    def __init__(self, line_number: int | None = None):
        super().__init__("expected a format code after '§'", line_number)


class NoSuchFormatCodeError(TokenizeError):
    """Raised when the character after the sentinel is not a known format code.

    Args:
        code: The unrecognized code character.
        line_number: One-based index of the offending line, when known.
    """

    def __init__(self, code: str, line_number: int | None = None):
        self.code = code
        super().__init__(f"no such format code '{code}'", line_number)


class InvalidFormatCodeStringError(TokenizeError):
    """Raised when a format code string is not the sentinel plus one character.

    Args:
        string: The rejected string.
    """

    def __init__(self, string: str):
        self.string = string
        super().__init__(f"expected a two character string starting with §, received '{string}'")


class IncompleteOrMissingFrontmatterError(TokenizeError):
    """Raised when a frontmatter line lacks its expected field prefix."""

    def __init__(self, expected: str, line_number: int | None = None):
        self.expected = expected
        super().__init__(
            f"frontmatter is not present or incomplete (expected {expected!r})", line_number
        )


class UnexpectedEndOfInputError(TokenizeError):
    """Raised when the input ends before the frontmatter is complete."""

    def __init__(self, line_number: int | None = None):
        super().__init__("expected document to be longer", line_number)


class ConvertFileError(Exception):
    """Raised when converting a file fails."""
