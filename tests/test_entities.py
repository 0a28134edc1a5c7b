from __future__ import annotations

import pytest

from crafty_novels.entities import HTML_ENTITIES, encode_char, encode_text


@pytest.mark.parametrize(
    "character, expected",
    [
        ("<", "&lt;"),
        (">", "&gt;"),
        ("&", "&amp;"),
        ('"', "&quot;"),
        ("'", "&apos;"),
        ("\u00a0", "&nbsp;"),
        ("é", "&eacute;"),
        ("—", "&mdash;"),
        ("€", "&euro;"),
        ("Ω", "&Omega;"),
        ("§", "&sect;"),
    ],
)
def test_encode_char_uses_named_entities(character: str, expected: str):
    assert encode_char(character) == expected


@pytest.mark.parametrize("character", ["a", "Z", "0", " ", "#", "-", "漢", "😀"])
def test_encode_char_passes_other_characters_through(character: str):
    assert encode_char(character) == character


def test_table_size():
    assert len(HTML_ENTITIES) == 241


@pytest.mark.parametrize(
    "character",
    [
        "\u2044",  # frasl
        "\u21d0",  # lArr
        "\u21d1",  # uArr
        "\u21d2",  # rArr
        "\u21d3",  # dArr
        "\u21d4",  # hArr
        "\u2111",  # image
        "\u2118",  # weierp
        "\u211c",  # real
        "\u2135",  # alefsym
        "\u2329",  # lang
        "\u232a",  # rang
    ],
)
def test_html4_only_symbols_are_written_literally(character: str):
    assert encode_char(character) == character
    assert character not in HTML_ENTITIES


def test_single_arrows_keep_their_names():
    assert encode_char("\u2190") == "&larr;"
    assert encode_char("\u2194") == "&harr;"


def test_table_is_read_only():
    with pytest.raises(TypeError):
        HTML_ENTITIES["x"] = "x"  # type: ignore[index]


def test_encode_text_has_no_lookahead():
    assert encode_text("&amp;</div>") == "&amp;amp;&lt;/div&gt;"
    assert encode_text("&gt;") == "&amp;gt;"


def test_encode_text_empty():
    assert encode_text("") == ""
