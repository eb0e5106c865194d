"""
Immutable, canonical JSON values with path-tracking decoding.

Parses JSON text into a JsonValue whose numbers are stored in their smallest
lossless form, renders values back to text, converts Python data into values,
and decodes values into typed application data through interpretation scopes
that report failures with the path of the failing node.
"""

from typing import IO
from typing import Any

from ._canonical import NumberKind
from ._canonical import canonicalize_number
from ._errors import DecodeError
from ._errors import IllegalValue
from ._errors import JsonValueError
from ._errors import ParseError
from ._parser import JsonParser
from ._parser import ParseConfig
from ._profile import HotPathStats
from ._profile import clear_hot_path_stats
from ._profile import get_hot_path_stats
from ._value import JsonValue
from ._value import JsonValueConverter
from ._value import ValueKind
from ._value import from_python
from ._value import json_object_of
from .interpret import ElementScopes
from .interpret import JsonInterpretScope
from .interpret import ObjectScope
from .interpret import decode
from .interpret import interpret_scope

__version__ = "0.1.0"


def parse(text: str, **kwargs: Any) -> JsonValue:
    """
    Parses JSON text into a canonical JsonValue.

    Keyword arguments configure the parser (see ParseConfig). Raises
    ParseError with line and position on malformed input.
    """
    return JsonValue.parse(text, **kwargs)


def to_text(
    value: JsonValue, spacing: bool = False, indent: str | int | None = None
) -> str:
    """
    Renders a JsonValue as JSON text.

    Compact by default; spacing puts a space after ',' and ':', and indent
    renders one member per line.
    """
    if not isinstance(value, JsonValue):
        msg = f"expected a JsonValue, not {type(value).__name__}"
        raise TypeError(msg)
    return value.to_text(spacing=spacing, indent=indent)


def load(fp: IO[str], **kwargs: Any) -> JsonValue:
    """
    Parses a JsonValue from a file-like object.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return parse(fp.read(), **kwargs)


def dump(value: JsonValue, fp: IO[str], **kwargs: Any) -> None:
    """
    Writes a JsonValue to a file-like object.

    Keyword arguments are the rendering options of to_text.
    """
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    fp.write(to_text(value, **kwargs))


__all__ = [
    "DecodeError",
    "ElementScopes",
    "HotPathStats",
    "IllegalValue",
    "JsonInterpretScope",
    "JsonParser",
    "JsonValue",
    "JsonValueConverter",
    "JsonValueError",
    "NumberKind",
    "ObjectScope",
    "ParseConfig",
    "ParseError",
    "ValueKind",
    "canonicalize_number",
    "clear_hot_path_stats",
    "decode",
    "dump",
    "from_python",
    "get_hot_path_stats",
    "interpret_scope",
    "json_object_of",
    "load",
    "parse",
    "to_text",
]
