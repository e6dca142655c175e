"""Tests for rendering chat components into formatting-code strings."""
from __future__ import annotations

import pytest

from status_api.domain.models.chat_component import (
    MAX_COMPONENT_DEPTH,
    ChatNode,
    ChatText,
    chat_component_from_json,
)
from status_api.domain.services.chat_renderer import (
    color_code,
    render_component,
    strip_formatting,
)


def test_plain_string_is_returned_unchanged() -> None:
    """A plain text description renders as-is."""

    component = chat_component_from_json("A Minecraft Server")

    assert component == ChatText("A Minecraft Server")
    assert render_component(component) == "A Minecraft Server"


def test_reset_follows_formatted_text_before_extra() -> None:
    """Formatting on the node's own text must not bleed into its extras."""

    component = chat_component_from_json(
        {"text": "A", "color": "red", "extra": [{"text": "B"}]}
    )

    rendered = render_component(component)

    assert rendered == "§cA§rB"
    assert strip_formatting(rendered) == "AB"


def test_reset_is_inserted_only_after_formatted_siblings() -> None:
    """A reset precedes a sibling only when the previous sibling was formatted."""

    component = chat_component_from_json(
        {
            "text": "",
            "extra": [
                {"text": "X", "bold": True},
                {"text": "Y"},
                {"text": "Z"},
            ],
        }
    )

    assert render_component(component) == "§lX§rYZ"


def test_reset_check_ignores_formatting_nested_in_previous_sibling() -> None:
    """Only the previous sibling's own flags decide whether a reset is emitted."""

    component = chat_component_from_json(
        {
            "extra": [
                {"text": "A", "extra": [{"text": "B", "color": "gold"}]},
                {"text": "C"},
            ]
        }
    )

    assert render_component(component) == "A§6BC"


def test_style_codes_follow_fixed_order() -> None:
    """Color comes first, then bold, italic, underlined, strikethrough, obfuscated."""

    component = chat_component_from_json(
        {
            "text": "x",
            "obfuscated": True,
            "strikethrough": True,
            "underlined": True,
            "italic": True,
            "bold": True,
            "color": "blue",
        }
    )

    assert render_component(component) == "§9§l§o§n§m§kx"


def test_false_flags_are_ignored() -> None:
    """Explicitly disabled flags should not produce codes."""

    component = chat_component_from_json({"text": "plain", "bold": False, "color": ""})

    assert component == ChatNode(text="plain")
    assert render_component(component) == "plain"


def test_unknown_colors_fall_back_to_white() -> None:
    """Colors without a legacy code, hex colors included, render as white."""

    assert color_code("dark_aqua") == "3"
    assert color_code("#ff8800") == "f"
    assert render_component(ChatNode(text="hi", color="rainbow")) == "§fhi"


def test_list_components_render_each_entry() -> None:
    """A JSON array is treated as a sequence of sibling components."""

    component = chat_component_from_json(["a", {"text": "b", "color": "green"}, "c"])

    assert render_component(component) == "a§ab§rc"


def test_missing_description_renders_empty() -> None:
    """An absent description becomes an empty string."""

    assert render_component(chat_component_from_json(None)) == ""


def test_strip_formatting_removes_only_known_codes() -> None:
    """Color digits and style letters are removed regardless of case."""

    assert strip_formatting("§AHello §Lworld§r!") == "Hello world!"
    assert strip_formatting("§zkeep §") == "§zkeep §"


def test_nesting_up_to_depth_limit_is_accepted() -> None:
    """Components nested exactly to the depth limit still build and render."""

    value: object = "deep"
    for _ in range(MAX_COMPONENT_DEPTH):
        value = {"extra": [value]}

    assert render_component(chat_component_from_json(value)) == "deep"


def test_nesting_beyond_depth_limit_is_rejected() -> None:
    """Arrays and objects both count toward the depth limit."""

    value: object = "deep"
    for _ in range(MAX_COMPONENT_DEPTH + 1):
        value = [value]

    with pytest.raises(ValueError):
        chat_component_from_json(value)
