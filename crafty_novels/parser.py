"""Tokenizing for the Stendhal book export format."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TextIO

from .config import ConfigError, ConvertConfig, validate_config
from .constants import (
    AUTHOR_PREFIX,
    FRONTMATTER_LINES,
    PAGE_BREAK_PREFIX,
    PAGES_MARKER,
    SENTINEL,
    TITLE_PREFIX,
)
from .exceptions import (
    ConvertFileError,
    IncompleteOrMissingFrontmatterError,
    MissingFormatCodeError,
    NoSuchFormatCodeError,
    TokenizeError,
    UnexpectedEndOfInputError,
)
from .filesystem import safe_read
from .minecraft import FORMAT_CODES, Style
from .models import (
    Author,
    LineBreak,
    LineState,
    PageBreak,
    ParagraphBreak,
    Space,
    StyleMark,
    Text,
    Title,
    Token,
    TokenList,
)

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """Split text into lines the way the export format defines them.

    Lines end at ``"\\n"``, a single ``"\\r"`` before it is dropped, and a
    trailing newline does not start an extra empty line. Other characters that
    `str.splitlines` treats as boundaries stay part of the line.

    Args:
        text: Whole document text.

    Returns:
        list[str]: Lines without their endings.

    Examples:
        split_lines("a\\r\\nb\\n")  # ["a", "b"]
        split_lines("a\\n\\n")  # ["a", ""]
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _strip_line_ending(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def _next_line(lines: Iterator[str], line_number: int) -> str:
    line = next(lines, None)
    if line is None:
        raise UnexpectedEndOfInputError(line_number)
    return line


def _read_field(lines: Iterator[str], prefix: str, line_number: int) -> str:
    """Consume the next line and return it with `prefix` removed.

    Raises:
        UnexpectedEndOfInputError: If `lines` is exhausted.
        IncompleteOrMissingFrontmatterError: If the line lacks `prefix`.
    """
    line = _next_line(lines, line_number)
    if not line.startswith(prefix):
        raise IncompleteOrMissingFrontmatterError(prefix, line_number)
    return line[len(prefix) :]


def parse_frontmatter(lines: Iterator[str]) -> tuple[Title, Author]:
    """Parse the three-line header at the start of a document.

    Consumes exactly three lines from `lines`, leaving the iterator on the
    first body line.

    Args:
        lines: Iterator over the document's lines, without line endings.

    Returns:
        tuple[Title, Author]: The title and author, in that order.

    Raises:
        UnexpectedEndOfInputError: If fewer than three lines remain.
        IncompleteOrMissingFrontmatterError: If a line lacks its field prefix
            or the third line is not exactly ``"pages:"``.

    Examples:
        lines = iter(["title: Book", "author: Me", "pages:", "#- Hello"])
        parse_frontmatter(lines)  # (Title("Book"), Author("Me"))
        next(lines)  # "#- Hello"
    """
    title = Title(_read_field(lines, TITLE_PREFIX, 1))
    author = Author(_read_field(lines, AUTHOR_PREFIX, 2))

    if _next_line(lines, 3) != PAGES_MARKER:
        raise IncompleteOrMissingFrontmatterError(PAGES_MARKER, 3)

    logger.debug("Parsed frontmatter: title=%r author=%r", title.value, author.value)
    return title, author


def _flush_word(output: list[Token], state: LineState) -> None:
    """Move the pending word, if any, into `output` as a text token."""
    if state.word:
        output.append(Text("".join(state.word)))
        state.word.clear()


def _try_start_page(output: list[Token], line: str) -> str:
    """Emit a page break when `line` opens a page.

    Returns:
        str: `line` with the page prefix removed, or unchanged.
    """
    if not line.startswith(PAGE_BREAK_PREFIX):
        return line

    output.append(PageBreak())
    return line[len(PAGE_BREAK_PREFIX) :]


def parse_line(output: list[Token], line: str, line_number: int | None = None) -> None:
    """Tokenize one body line into `output`.

    An empty line becomes a single paragraph break. Any other line ends with
    a line break, and a format left open on the line is closed by a
    synthetic reset so that no formatting carries over to the next line.

    Args:
        output: Token list to append to.
        line: The line, without its line ending.
        line_number: One-based position of the line, used in error messages.

    Raises:
        MissingFormatCodeError: If the line ends right after the sentinel.
        NoSuchFormatCodeError: If the sentinel is followed by an unknown code.

    Examples:
        tokens = []
        parse_line(tokens, "#- page start")
        # [PageBreak(), Text("page"), Space(), Text("start"), LineBreak()]
    """
    if not line:
        output.append(ParagraphBreak())
        return

    line = _try_start_page(output, line)

    state = LineState()
    characters = iter(line)

    for character in characters:
        if character == " ":
            _flush_word(output, state)
            output.append(Space())
        elif character == SENTINEL:
            _flush_word(output, state)

            code = next(characters, None)
            if code is None:
                raise MissingFormatCodeError(line_number)
            fmt = FORMAT_CODES.get(code)
            if fmt is None:
                raise NoSuchFormatCodeError(code, line_number)

            state.trailing_style = fmt is not Style.RESET
            output.append(StyleMark(fmt))
        else:
            state.word.append(character)

    _flush_word(output, state)
    if state.trailing_style:
        output.append(StyleMark(Style.RESET))
    output.append(LineBreak())


def tokenize_lines(lines: Iterable[str]) -> TokenList:
    """Tokenize a whole document given as lines without line endings.

    Raises:
        TokenizeError: If the frontmatter or any body line is malformed. The
            first error aborts the whole document.
    """
    lines = iter(lines)
    metadata = parse_frontmatter(lines)

    tokens: list[Token] = []
    for line_number, line in enumerate(lines, start=FRONTMATTER_LINES + 1):
        parse_line(tokens, line, line_number)

    logger.debug("Tokenized document into %d tokens", len(tokens))
    return TokenList(metadata=metadata, tokens=tokens)


def tokenize_string(text: str) -> TokenList:
    """Tokenize a document held in memory.

    Examples:
        tokenize_string("title: T\\nauthor: A\\npages:\\nHello")
    """
    return tokenize_lines(split_lines(text))


def tokenize_reader(stream: TextIO) -> TokenList:
    """Tokenize a document read line by line from a text stream."""
    return tokenize_lines(_strip_line_ending(line) for line in stream)


def tokenize_file(filepath: Path, config: ConvertConfig | None = None) -> TokenList:
    """Tokenize a Stendhal export file.

    Args:
        filepath: Path to the export.
        config: Configuration supplying the input encoding; defaults to a new
            `ConvertConfig` when omitted.

    Returns:
        TokenList: The tokenized document.

    Raises:
        ConvertFileError: If the configuration is invalid, the file cannot be
            read or decoded, or its content is malformed. The underlying
            error is chained as ``__cause__``.

    Examples:
        tokens = tokenize_file(Path("book.stendhal"))
    """
    config = config or ConvertConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ConvertFileError(str(error)) from error

    try:
        with safe_read(filepath, config.encoding) as stream:
            return tokenize_reader(stream)
    except UnicodeDecodeError as error:
        error_message = f"Invalid {config.encoding} sequence in {filepath}: {error}"
        raise ConvertFileError(error_message) from error
    except TokenizeError as error:
        raise ConvertFileError(f"{filepath}: {error}") from error
    except IOError as error:
        raise ConvertFileError(str(error)) from error
