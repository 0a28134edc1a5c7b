"""Minecraft: Java Edition formatting codes and colors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .constants import SENTINEL
from .exceptions import InvalidFormatCodeStringError, MissingFormatCodeError, NoSuchFormatCodeError


@dataclass(frozen=True)
class Rgb:
    """A 24-bit color value.

    Attributes:
        red: Red channel, 0-255.
        green: Green channel, 0-255.
        blue: Blue channel, 0-255.

    Examples:
        str(Rgb(255, 170, 0))  # "#FFAA00"
    """

    red: int
    green: int
    blue: int

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    def hex(self) -> str:
        """Return the color as ``RRGGBB`` without a leading ``#``."""
        return f"{self.red:02X}{self.green:02X}{self.blue:02X}"

    def __str__(self) -> str:
        return f"#{self.hex()}"


class Color(Enum):
    """The sixteen named text colors.

    Each member carries its proper name plus the foreground and background
    (shadow) values used by the game. ``str(color)`` is the foreground value
    as ``#RRGGBB``.
    """

    BLACK = ("black", Rgb(0, 0, 0), Rgb(0, 0, 0))
    DARK_BLUE = ("dark_blue", Rgb(0, 0, 170), Rgb(0, 0, 42))
    DARK_GREEN = ("dark_green", Rgb(0, 170, 0), Rgb(0, 42, 0))
    DARK_AQUA = ("dark_aqua", Rgb(0, 170, 170), Rgb(0, 42, 42))
    DARK_RED = ("dark_red", Rgb(170, 0, 0), Rgb(42, 0, 0))
    DARK_PURPLE = ("dark_purple", Rgb(170, 0, 170), Rgb(42, 0, 42))
    GOLD = ("gold", Rgb(255, 170, 0), Rgb(42, 42, 0))
    GRAY = ("gray", Rgb(170, 170, 170), Rgb(42, 42, 42))
    DARK_GRAY = ("dark_gray", Rgb(85, 85, 85), Rgb(21, 21, 21))
    BLUE = ("blue", Rgb(85, 85, 255), Rgb(21, 21, 63))
    GREEN = ("green", Rgb(85, 255, 85), Rgb(21, 63, 21))
    AQUA = ("aqua", Rgb(85, 255, 255), Rgb(21, 63, 63))
    RED = ("red", Rgb(255, 85, 85), Rgb(63, 21, 21))
    LIGHT_PURPLE = ("light_purple", Rgb(255, 85, 255), Rgb(63, 21, 63))
    YELLOW = ("yellow", Rgb(255, 255, 85), Rgb(63, 63, 21))
    WHITE = ("white", Rgb(255, 255, 255), Rgb(63, 63, 63))

    def __init__(self, proper_name: str, fg: Rgb, bg: Rgb):
        self.proper_name = proper_name
        self.fg = fg
        self.bg = bg

    def __str__(self) -> str:
        return str(self.fg)


class Style(Enum):
    """Formats that are not colors."""

    # Characters rapidly cycle through random glyphs in game
    OBFUSCATED = auto()
    BOLD = auto()
    STRIKETHROUGH = auto()
    UNDERLINE = auto()
    ITALIC = auto()
    RESET = auto()


Format = Color | Style

# Exactly one code per format; lookups never fall back to a default.
FORMAT_CODES: dict[str, Format] = {
    "0": Color.BLACK,
    "1": Color.DARK_BLUE,
    "2": Color.DARK_GREEN,
    "3": Color.DARK_AQUA,
    "4": Color.DARK_RED,
    "5": Color.DARK_PURPLE,
    "6": Color.GOLD,
    "7": Color.GRAY,
    "8": Color.DARK_GRAY,
    "9": Color.BLUE,
    "a": Color.GREEN,
    "b": Color.AQUA,
    "c": Color.RED,
    "d": Color.LIGHT_PURPLE,
    "e": Color.YELLOW,
    "f": Color.WHITE,
    "k": Style.OBFUSCATED,
    "l": Style.BOLD,
    "m": Style.STRIKETHROUGH,
    "n": Style.UNDERLINE,
    "o": Style.ITALIC,
    "r": Style.RESET,
}

_CODES_BY_FORMAT: dict[Format, str] = {fmt: code for code, fmt in FORMAT_CODES.items()}


def format_from_code(code: str) -> Format:
    """Look up a code character against the format code table.

    Args:
        code: The single character following the sentinel.

    Returns:
        Format: The matching color or style.

    Raises:
        NoSuchFormatCodeError: If `code` is not one of the 22 known codes.

    Examples:
        format_from_code("c")  # Color.RED
        format_from_code("l")  # Style.BOLD
    """
    try:
        return FORMAT_CODES[code]
    except KeyError:
        raise NoSuchFormatCodeError(code) from None


def code_for_format(fmt: Format) -> str:
    """Return the code character for a format.

    Examples:
        code_for_format(Style.RESET)  # "r"
    """
    return _CODES_BY_FORMAT[fmt]


@dataclass(frozen=True)
class FormatCode:
    """A code character paired with the format it selects.

    ``str(FormatCode)`` renders the escape as written in source markup, for
    example ``"§l"`` for bold.

    Attributes:
        code: The character following the sentinel.
        format: The color or style the code selects.
    """

    code: str
    format: Format

    @classmethod
    def from_char(cls, code: str) -> FormatCode:
        return cls(code, format_from_code(code))

    @classmethod
    def from_format(cls, fmt: Format) -> FormatCode:
        return cls(code_for_format(fmt), fmt)

    @classmethod
    def parse(cls, string: str) -> FormatCode:
        """Parse an escape such as ``"§0"``.

        Args:
            string: The sentinel followed by exactly one code character.

        Returns:
            FormatCode: The parsed code.

        Raises:
            InvalidFormatCodeStringError: If `string` does not start with the
                sentinel or is longer than two characters.
            MissingFormatCodeError: If `string` is the bare sentinel.
            NoSuchFormatCodeError: If the code character is unknown.

        Examples:
            FormatCode.parse("§c")  # FormatCode(code="c", format=Color.RED)
        """
        if not string.startswith(SENTINEL) or len(string) > 2:
            raise InvalidFormatCodeStringError(string)
        if len(string) < 2:
            raise MissingFormatCodeError()
        return cls.from_char(string[1])

    def __str__(self) -> str:
        return f"{SENTINEL}{self.code}"
