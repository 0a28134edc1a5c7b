"""
crafty-novels: HTML exporter for Minecraft book exports.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    crafty-novels diary.stendhal -o diary.html

Library Usage:
    from pathlib import Path
    from crafty_novels import tokenize_string, export_to_string

    content = Path("diary.stendhal").read_text()
    tokens = tokenize_string(content)
    html = export_to_string(tokens)
"""

from .exceptions import (
    ConvertFileError,
    IncompleteOrMissingFrontmatterError,
    InvalidFormatCodeStringError,
    MissingFormatCodeError,
    NoSuchFormatCodeError,
    TokenizeError,
    UnexpectedEndOfInputError,
)
from .minecraft import Color, Format, FormatCode, Rgb, Style
from .models import (
    Author,
    LineBreak,
    PageBreak,
    ParagraphBreak,
    Space,
    StyleMark,
    Text,
    Title,
    TokenList,
)
from .parser import tokenize_file, tokenize_reader, tokenize_string
from .renderer import convert_file, convert_string, export_to_string, export_to_writer

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "tokenize_string",
    "tokenize_reader",
    "tokenize_file",
    "export_to_string",
    "export_to_writer",
    "convert_string",
    "convert_file",
    # Data models
    "TokenList",
    "Text",
    "StyleMark",
    "Space",
    "LineBreak",
    "ParagraphBreak",
    "PageBreak",
    "Title",
    "Author",
    "Color",
    "Style",
    "Format",
    "FormatCode",
    "Rgb",
    # Exceptions
    "TokenizeError",
    "MissingFormatCodeError",
    "NoSuchFormatCodeError",
    "InvalidFormatCodeStringError",
    "IncompleteOrMissingFrontmatterError",
    "UnexpectedEndOfInputError",
    "ConvertFileError",
    # Version
    "__version__",
]
