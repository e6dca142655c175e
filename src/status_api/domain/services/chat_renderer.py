"""Render chat components into legacy formatting-code strings."""
from __future__ import annotations

import re

from status_api.domain.models.chat_component import ChatComponent, ChatNode, ChatText

FORMATTING_MARKER = "§"
RESET_CODE = f"{FORMATTING_MARKER}r"

COLOR_CODES = {
    "black": "0",
    "dark_blue": "1",
    "dark_green": "2",
    "dark_aqua": "3",
    "dark_red": "4",
    "dark_purple": "5",
    "gold": "6",
    "gray": "7",
    "dark_gray": "8",
    "blue": "9",
    "green": "a",
    "aqua": "b",
    "red": "c",
    "light_purple": "d",
    "yellow": "e",
    "white": "f",
}
DEFAULT_COLOR_CODE = "f"

_FORMATTING_PATTERN = re.compile(f"{FORMATTING_MARKER}[0-9a-fk-or]", re.IGNORECASE)


def color_code(color_name: str) -> str:
    """Return the legacy code for ``color_name``, falling back to white."""

    return COLOR_CODES.get(color_name, DEFAULT_COLOR_CODE)


def render_component(component: ChatComponent) -> str:
    """Flatten ``component`` into text annotated with formatting codes.

    A reset code is inserted before an ``extra`` entry whenever the segment
    rendered just before it set a color or style flag of its own: the node's
    own formatted text for the first entry, the previous sibling otherwise.
    Formatting applied deeper inside that sibling's children is not considered.
    """

    if isinstance(component, ChatText):
        return component.text

    parts = [_style_prefix(component)]
    if component.text:
        parts.append(component.text)

    previous_formatted = bool(component.text) and component.has_formatting
    for child in component.extra:
        if previous_formatted:
            parts.append(RESET_CODE)
        parts.append(render_component(child))
        previous_formatted = child.has_formatting

    return "".join(parts)


def strip_formatting(text: str) -> str:
    """Remove every formatting code from ``text``."""

    return _FORMATTING_PATTERN.sub("", text)


def _style_prefix(node: ChatNode) -> str:
    codes = []
    if node.color:
        codes.append(color_code(node.color))
    if node.bold:
        codes.append("l")
    if node.italic:
        codes.append("o")
    if node.underlined:
        codes.append("n")
    if node.strikethrough:
        codes.append("m")
    if node.obfuscated:
        codes.append("k")
    return "".join(f"{FORMATTING_MARKER}{code}" for code in codes)
