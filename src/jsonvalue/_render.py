"""
Text rendering of canonical JSON trees.

Works on the raw tree held by a JsonValue. Rendering is depth first and keeps
array and object order.
"""

from collections.abc import Mapping
from typing import Any

from ._profile import ProfileContext

# Exactly the characters the parser unescapes, nothing more
_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "/": "\\/",
    "\b": "\\b",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
_ESCAPE_TABLE = str.maketrans(_ESCAPES)


def encode_string(s: str) -> str:
    """Quotes a string, escaping only the characters the parser unescapes."""
    return '"' + s.translate(_ESCAPE_TABLE) + '"'


def encode_number(n: int | float) -> str:
    """
    Renders a canonical number.

    Floats use their shortest round-trip repr; canonical floats are always
    finite so the result is valid JSON.
    """
    if isinstance(n, float):
        return repr(n)
    return str(n)


def _get_indent_string(indent: str | int | None, level: int) -> str:
    """Generate indentation string for given level."""
    if indent is None:
        return ""
    elif isinstance(indent, int):
        return " " * (indent * level)
    else:
        return indent * level


class _Renderer:
    """Renders one raw tree with fixed separator and indentation settings."""

    def __init__(self, spacing: bool, indent: str | int | None) -> None:
        self.indent = indent
        if indent is not None:
            self.item_separator = ","
            self.key_separator = ": "
        elif spacing:
            self.item_separator = ", "
            self.key_separator = ": "
        else:
            self.item_separator = ","
            self.key_separator = ":"

    def render(self, raw: Any, level: int = 0) -> str:  # noqa: PLR0911
        if raw is None:
            return "null"
        elif raw is True:
            return "true"
        elif raw is False:
            return "false"
        elif isinstance(raw, str):
            return encode_string(raw)
        elif isinstance(raw, int | float):
            return encode_number(raw)
        elif isinstance(raw, Mapping):
            return self._render_object(raw, level)
        elif isinstance(raw, tuple | list):
            return self._render_array(raw, level)
        msg = f"Cannot convert to json: {raw!r}"
        raise TypeError(msg)

    def _render_array(self, arr: tuple[Any, ...] | list[Any], level: int) -> str:
        if not arr:
            return "[]"
        items = [self.render(item, level + 1) for item in arr]
        return self._wrap("[", items, "]", level)

    def _render_object(self, obj: Mapping[str, Any], level: int) -> str:
        if not obj:
            return "{}"
        items = [
            f"{encode_string(key)}{self.key_separator}"
            f"{self.render(value, level + 1)}"
            for key, value in obj.items()
        ]
        return self._wrap("{", items, "}", level)

    def _wrap(self, start: str, items: list[str], end: str, level: int) -> str:
        if self.indent is None:
            return start + self.item_separator.join(items) + end

        indent_str = _get_indent_string(self.indent, level)
        inner_indent = _get_indent_string(self.indent, level + 1)
        lines = [start]
        for i, item in enumerate(items):
            line = f"{inner_indent}{item}"
            if i < len(items) - 1:
                line += self.item_separator
            lines.append(line)
        lines.append(f"{indent_str}{end}")
        return "\n".join(lines)


def render(
    raw: Any, spacing: bool = False, indent: str | int | None = None
) -> str:
    """
    Renders a raw tree as JSON text.

    The compact form has no whitespace around separators, the spaced form
    uses ", " and ": ", and an indent puts every member on its own line.
    """
    with ProfileContext("render_value") as profile:
        text = _Renderer(spacing, indent).render(raw)
        profile.chars = len(text)
    return text
