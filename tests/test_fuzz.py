from __future__ import annotations

import os

import pytest
from crafty_novels.exceptions import TokenizeError
from crafty_novels.models import LineBreak, ParagraphBreak
from crafty_novels.parser import parse_line
from crafty_novels.renderer import convert_string

atheris = pytest.importorskip("atheris")


def test_parse_line_with_fuzzed_input():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    parsed = 0

    for _ in range(128):
        if provider.remaining_bytes() == 0:
            break
        line = provider.ConsumeUnicodeNoSurrogates(64).replace("\n", "").replace("\r", "")
        output: list = []
        try:
            parse_line(output, line)
        except TokenizeError:
            continue
        assert output[-1] in (LineBreak(), ParagraphBreak())
        parsed += 1

    assert parsed  # ensure we exercised the loop


def test_convert_string_with_fuzzed_body():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    lines: list[str] = []

    while provider.remaining_bytes() > 0 and len(lines) < 32:
        prefix = "#- " if provider.ConsumeBool() else ""
        lines.append(prefix + provider.ConsumeUnicodeNoSurrogates(32).replace("§", "§l"))

    html = convert_string("title: fuzz\nauthor: fuzz\npages:\n" + "\n".join(lines))
    assert html.startswith("<!DOCTYPE html>")
    assert html.endswith("</article></body></html>")
