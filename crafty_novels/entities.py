"""HTML named-entity table and text encoding."""

from __future__ import annotations

from html.entities import codepoint2name
from types import MappingProxyType


# HTML 4 names for double arrows, letterlike symbols, fraction slash and angle
# brackets; these characters are written through literally.
_UNNAMED = frozenset(
    {
        "alefsym",
        "dArr",
        "frasl",
        "hArr",
        "image",
        "lArr",
        "lang",
        "rArr",
        "rang",
        "real",
        "uArr",
        "weierp",
    }
)

# HTML 4 named entities, plus the apostrophe which HTML 4 lacks.
HTML_ENTITIES = MappingProxyType(
    {
        **{
            chr(codepoint): name
            for codepoint, name in codepoint2name.items()
            if name not in _UNNAMED
        },
        "'": "apos",
    }
)


def encode_char(character: str) -> str:
    """Encode one character for raw HTML text.

    Args:
        character: A single character.

    Returns:
        str: ``&name;`` when the character has a named entity, otherwise the
            character itself.

    Examples:
        encode_char("<")  # "&lt;"
        encode_char("a")  # "a"
    """
    name = HTML_ENTITIES.get(character)
    if name is None:
        return character
    return f"&{name};"


def encode_text(text: str) -> str:
    """Encode a string character by character.

    There is no lookahead: text that already contains entities is encoded
    again, so ``"&amp;"`` becomes ``"&amp;amp;"``.

    Examples:
        encode_text("<div>")  # "&lt;div&gt;"
    """
    return "".join(encode_char(character) for character in text)

