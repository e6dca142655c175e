"""Domain models for the formatted text carried in a server description."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Tuple, Union

MAX_COMPONENT_DEPTH = 64


@dataclass(frozen=True)
class ChatText:
    """Plain text leaf without any formatting."""

    text: str = ""

    @property
    def has_formatting(self) -> bool:
        return False


@dataclass(frozen=True)
class ChatNode:
    """Formatted text segment owning an ordered sequence of child components."""

    text: str | None = None
    color: str | None = None
    bold: bool = False
    italic: bool = False
    underlined: bool = False
    strikethrough: bool = False
    obfuscated: bool = False
    extra: Tuple["ChatComponent", ...] = field(default_factory=tuple)

    @property
    def has_formatting(self) -> bool:
        """Return ``True`` when this node sets a color or any style flag itself."""

        return bool(
            self.color
            or self.bold
            or self.italic
            or self.underlined
            or self.strikethrough
            or self.obfuscated
        )


ChatComponent = Union[ChatText, ChatNode]


def chat_component_from_json(value: Any, depth: int = 0) -> ChatComponent:
    """Build a chat component tree from its decoded JSON representation.

    Raises ``ValueError`` when components nest deeper than
    ``MAX_COMPONENT_DEPTH`` levels.
    """

    if depth > MAX_COMPONENT_DEPTH:
        raise ValueError(
            f"Chat component nested deeper than {MAX_COMPONENT_DEPTH} levels."
        )
    if value is None:
        return ChatText()
    if isinstance(value, str):
        return ChatText(value)
    if isinstance(value, list):
        return ChatNode(
            extra=tuple(chat_component_from_json(item, depth + 1) for item in value)
        )
    if isinstance(value, Mapping):
        return _node_from_mapping(value, depth)
    return ChatText(str(value))


def _node_from_mapping(data: Mapping[str, Any], depth: int) -> ChatNode:
    raw_text = data.get("text")
    raw_color = data.get("color")
    raw_extra = data.get("extra")
    if isinstance(raw_extra, list):
        extra = tuple(chat_component_from_json(item, depth + 1) for item in raw_extra)
    else:
        extra = ()

    return ChatNode(
        text=None if raw_text is None else str(raw_text),
        color=str(raw_color) if raw_color else None,
        bold=bool(data.get("bold")),
        italic=bool(data.get("italic")),
        underlined=bool(data.get("underlined")),
        strikethrough=bool(data.get("strikethrough")),
        obfuscated=bool(data.get("obfuscated")),
        extra=extra,
    )
