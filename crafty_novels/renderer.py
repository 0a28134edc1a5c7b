"""HTML rendering for tokenized documents."""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Protocol

from .config import ConvertConfig
from .constants import (
    BODY_CLOSE,
    BODY_OPEN,
    DOCUMENT_HEAD_CLOSE,
    DOCUMENT_HEAD_OPEN,
    LINE_BREAK_HTML,
    PAGE_BREAK_HTML,
)
from .entities import encode_text
from .exceptions import ConvertFileError
from .filesystem import write_output
from .minecraft import Color, Format, Style
from .models import (
    Author,
    LineBreak,
    Metadata,
    PageBreak,
    ParagraphBreak,
    Space,
    StyleMark,
    Text,
    Title,
    Token,
    TokenList,
)
from .parser import tokenize_file, tokenize_string

logger = logging.getLogger(__name__)


class Writer(Protocol):
    """Anything HTML can be written into: `io.StringIO`, text files, stdout."""

    def write(self, text: str, /) -> object: ...

    def flush(self) -> None: ...


_STYLE_ELEMENTS = {
    Style.OBFUSCATED: "code",
    Style.BOLD: "b",
    Style.STRIKETHROUGH: "s",
    Style.UNDERLINE: "u",
    Style.ITALIC: "i",
}


def _element_for(fmt: Format) -> str:
    if isinstance(fmt, Color):
        return "span"
    if fmt is Style.RESET:
        raise ValueError("Style.RESET has no HTML element")
    return _STYLE_ELEMENTS[fmt]


def open_tag(fmt: Format) -> str:
    """Return the opening tag for a format.

    Examples:
        open_tag(Color.RED)  # "<span style='color:#FF5555'>"
        open_tag(Style.BOLD)  # "<b>"
    """
    if isinstance(fmt, Color):
        return f"<span style='color:{fmt}'>"
    return f"<{_element_for(fmt)}>"


def close_tag(fmt: Format) -> str:
    return f"</{_element_for(fmt)}>"


def close_formatting_tags(output: Writer, format_stack: list[Format]) -> None:
    """Close every open format, most recently opened first, emptying the stack."""
    while format_stack:
        output.write(close_tag(format_stack.pop()))


def handle_format(output: Writer, format_stack: list[Format], fmt: Format) -> None:
    """Open `fmt` and push it onto `format_stack`, or close everything on reset."""
    if fmt is Style.RESET:
        close_formatting_tags(output, format_stack)
        return

    format_stack.append(fmt)
    output.write(open_tag(fmt))


def handle_token(output: Writer, format_stack: list[Format], token: Token) -> None:
    """Write the HTML for one token.

    Args:
        output: Destination for the HTML text.
        format_stack: Formats opened so far and not yet closed. Owned by the
            caller and scoped to one rendering pass.
        token: The token to render.

    Raises:
        TypeError: If `token` is not a token type.
    """
    if isinstance(token, Text):
        output.write(encode_text(token.text))
    elif isinstance(token, StyleMark):
        handle_format(output, format_stack, token.format)
    elif isinstance(token, Space):
        output.write(" ")
    elif isinstance(token, (LineBreak, ParagraphBreak)):
        output.write(LINE_BREAK_HTML)
    elif isinstance(token, PageBreak):
        output.write(PAGE_BREAK_HTML)
    else:
        raise TypeError(f"Unexpected token: {token!r}")


def start_document(output: Writer, metadata: Iterable[Metadata]) -> None:
    """Write the document head and open the body.

    Metadata is written in the order given; values are entity encoded.
    """
    output.write(DOCUMENT_HEAD_OPEN)

    for item in metadata:
        if isinstance(item, Title):
            output.write(f"<title>{encode_text(item.value)}</title>")
        elif isinstance(item, Author):
            output.write(f'<meta name="author" content="{encode_text(item.value)}" />')

    output.write(DOCUMENT_HEAD_CLOSE)
    output.write(BODY_OPEN)


def end_document(output: Writer, format_stack: list[Format]) -> None:
    """Close any formats still open, then the body and the document."""
    if format_stack:
        logger.warning("Closing %d format(s) left open at end of document", len(format_stack))
        close_formatting_tags(output, format_stack)

    output.write(BODY_CLOSE)


def export_to_writer(token_list: TokenList, output: Writer) -> None:
    """Render a token list as a complete HTML document into `output`.

    Makes a single pass over the tokens and flushes `output` once at the end.
    Errors raised by `output` propagate unchanged, leaving whatever was
    already written in an unspecified state.

    Args:
        token_list: The tokenized document.
        output: Destination for the HTML text.

    Examples:
        export_to_writer(tokenize_string(text), sys.stdout)
    """
    format_stack: list[Format] = []

    start_document(output, token_list.metadata)
    for token in token_list.tokens:
        handle_token(output, format_stack, token)
    end_document(output, format_stack)

    output.flush()
    logger.debug("Rendered %d tokens", len(token_list.tokens))


def export_to_string(token_list: TokenList) -> str:
    """Render a token list as a complete HTML document.

    Examples:
        export_to_string(TokenList(tokens=[Text("hi")]))
    """
    buffer = io.StringIO()
    export_to_writer(token_list, buffer)
    return buffer.getvalue()


def export_to_file(
    token_list: TokenList,
    filepath: Path,
    overwrite: bool = False,
    warn: Callable[[str], None] | None = None,
) -> None:
    """Render a token list into a file, replacing it atomically.

    Raises:
        IOError: If the file exists and `overwrite` is False, or writing fails.
    """
    write_output(
        filepath,
        lambda stream: export_to_writer(token_list, stream),
        overwrite=overwrite,
        warn=warn,
    )


def convert_string(text: str) -> str:
    """Convert a Stendhal export held in memory into an HTML document.

    Raises:
        TokenizeError: If the export is malformed.

    Examples:
        convert_string("title: T\\nauthor: A\\npages:\\n§lBold")
    """
    return export_to_string(tokenize_string(text))


def convert_file(
    source: Path,
    destination: Path,
    config: ConvertConfig | None = None,
    warn: Callable[[str], None] | None = None,
) -> None:
    """Convert a Stendhal export file into an HTML file.

    Args:
        source: Path to the export.
        destination: Path of the HTML file to write.
        config: Encoding and overwrite settings; defaults to a new
            `ConvertConfig` when omitted.
        warn: Optional callback for emitting non-fatal warnings.

    Raises:
        ConvertFileError: If reading, tokenizing, or writing fails.
    """
    config = config or ConvertConfig()
    token_list = tokenize_file(source, config)

    try:
        export_to_file(token_list, destination, overwrite=config.overwrite, warn=warn)
    except IOError as error:
        raise ConvertFileError(str(error)) from error
