"""Constants used across the crafty-novels package."""

from __future__ import annotations

# Source markup
SENTINEL = "§"
PAGE_BREAK_PREFIX = "#- "
TITLE_PREFIX = "title: "
AUTHOR_PREFIX = "author: "
PAGES_MARKER = "pages:"
FRONTMATTER_LINES = 3

# HTML document framing
DOCUMENT_HEAD_OPEN = '<!DOCTYPE html><html lang="en" dir="ltr"><head><meta charset="utf-8" />'
DOCUMENT_HEAD_CLOSE = (
    '<meta name="viewport" content="width=device-width, initial-scale=1.0" /></head>'
)
# break-spaces keeps runs of spaces, matching how books display them in game
BODY_OPEN = "<body><article style=white-space:break-spaces>"
BODY_CLOSE = "</article></body></html>"
LINE_BREAK_HTML = "<br />"
PAGE_BREAK_HTML = "<hr />"

# Limits
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_ENCODING = "utf-8"
