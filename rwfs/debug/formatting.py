"""Terminal formatting helpers for debug output."""

import json

from rich.text import Text

ESCAPE_STYLE = "bright_green"
SEPARATOR_STYLE = "bright_red"
HEADER_STYLE = "bold bright_white"
FOOTER_STYLE = "bold grey50"
LABEL_STYLE = "grey50"
BANNER_STYLE = "bright_black on bright_white"
NOTICE_STYLE = "yellow"

_CONTROL_SEPARATORS = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def format_separator(separator: str) -> str:
    """Return a visible form of the separator: escapes for control characters, JSON otherwise."""
    if separator in _CONTROL_SEPARATORS:
        return _CONTROL_SEPARATORS[separator]
    return json.dumps(separator, ensure_ascii=False)


def label(name: str, value: str, value_style: str = HEADER_STYLE) -> Text:
    return Text.assemble((f"{name}: ", LABEL_STYLE), (value, value_style))


def render_chunk(chunk: str, separator: str) -> Text:
    """
    Render a chunk as its JSON string form with line-break escapes
    and the separator highlighted.
    """
    body = Text(json.dumps(chunk, ensure_ascii=False))
    body.highlight_words(["\\n", "\\r"], style=ESCAPE_STYLE)
    # Separator is shown as it appears inside the JSON string.
    visible_separator = json.dumps(separator, ensure_ascii=False)[1:-1]
    if visible_separator:
        body.highlight_words([visible_separator], style=SEPARATOR_STYLE)
    return body
