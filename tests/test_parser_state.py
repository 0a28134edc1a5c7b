from crafty_novels.models import LineState, PageBreak, Text
from crafty_novels.parser import _flush_word, _strip_line_ending, _try_start_page


def test_try_start_page_strips_prefix():
    output: list = []

    assert _try_start_page(output, "#- rest of line") == "rest of line"
    assert output == [PageBreak()]


def test_try_start_page_ignores_other_lines():
    output: list = []

    assert _try_start_page(output, " #- indented") == " #- indented"
    assert _try_start_page(output, "#-no space") == "#-no space"
    assert output == []


def test_flush_word_empties_buffer():
    output: list = []
    state = LineState(word=list("word"))

    _flush_word(output, state)

    assert output == [Text("word")]
    assert state.word == []


def test_flush_word_skips_empty_buffer():
    output: list = []

    _flush_word(output, LineState())

    assert output == []


def test_strip_line_ending():
    assert _strip_line_ending("a\r\n") == "a"
    assert _strip_line_ending("a\n") == "a"
    assert _strip_line_ending("a") == "a"
    assert _strip_line_ending("a\r") == "a"
    assert _strip_line_ending("\n") == ""
