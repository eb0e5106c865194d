"""
Immutable JSON value model.

A JsonValue wraps a canonical raw tree built from None, bool, str, canonical
numbers, tuples (arrays) and read-only mappings (objects). Trees are created
by parsing or by converting Python data through from_python, and are never
mutated afterwards.
"""

import logging
import numbers
from collections.abc import Callable
from collections.abc import Mapping
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING
from typing import Any
from typing import Protocol
from typing import runtime_checkable
from typing import TypeAlias

from ._canonical import NumberKind
from ._canonical import canonicalize_number
from ._canonical import number_kind
from ._errors import IllegalValue
from ._render import render

if TYPE_CHECKING:
    from .interpret import JsonInterpretScope

logger = logging.getLogger(__name__)

# Recursive raw tree type - arrays are tuples, objects are read-only mappings
RawJson = (
    str
    | int
    | float
    | bool
    | None
    | tuple["RawJson", ...]
    | Mapping[str, "RawJson"]
)


class ValueKind(Enum):
    """Discriminates the variants of the JSON tagged union."""

    NULL = "null"
    BOOLEAN = "boolean"
    STRING = "string"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT = "float"
    ARRAY = "array"
    OBJECT = "object"


_NUMBER_KINDS = {
    NumberKind.INT32: ValueKind.INT32,
    NumberKind.INT64: ValueKind.INT64,
    NumberKind.FLOAT: ValueKind.FLOAT,
}


def kind_of(raw: RawJson) -> ValueKind:  # noqa: PLR0911
    """Maps a raw tree node to its variant."""
    if raw is None:
        return ValueKind.NULL
    elif isinstance(raw, bool):
        return ValueKind.BOOLEAN
    elif isinstance(raw, str):
        return ValueKind.STRING
    elif isinstance(raw, int | float):
        return _NUMBER_KINDS[number_kind(raw)]
    elif isinstance(raw, tuple):
        return ValueKind.ARRAY
    elif isinstance(raw, Mapping):
        return ValueKind.OBJECT
    msg = f"Not a canonical json node: {raw!r}"
    raise TypeError(msg)


def raw_equal(a: RawJson, b: RawJson) -> bool:
    """
    Structural equality over raw trees.

    Unlike plain ==, booleans never equal numbers. Object key order does not
    matter, array order does.
    """
    if a is b:
        return True
    kind = kind_of(a)
    if kind is not kind_of(b):
        return False
    if kind is ValueKind.ARRAY:
        return len(a) == len(b) and all(  # type: ignore[arg-type]
            raw_equal(x, y)
            for x, y in zip(a, b)  # type: ignore[call-overload]
        )
    if kind is ValueKind.OBJECT:
        if a.keys() != b.keys():  # type: ignore[union-attr]
            return False
        return all(
            raw_equal(value, b[key])  # type: ignore[index]
            for key, value in a.items()  # type: ignore[union-attr]
        )
    return a == b


def raw_hash(raw: RawJson) -> int:
    """Structural hash consistent with raw_equal."""
    if isinstance(raw, tuple):
        return hash(("array", *(raw_hash(item) for item in raw)))
    if isinstance(raw, Mapping):
        return hash(
            (
                "object",
                frozenset((key, raw_hash(value)) for key, value in raw.items()),
            )
        )
    return hash(raw)


@dataclass(frozen=True, eq=False, repr=False)
class JsonValue:
    """
    Immutable, canonical JSON value.

    The constructor canonicalizes its argument the way from_python does:
    lists become tuples, dicts become read-only mappings and numbers take
    their canonical form. Raises IllegalValue for anything else.
    """

    raw_value: RawJson

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw_value", _convert(self.raw_value, None))

    @classmethod
    def _from_raw(cls, raw: RawJson) -> "JsonValue":
        """Wraps a tree that is already canonical without walking it."""
        value = object.__new__(cls)
        object.__setattr__(value, "raw_value", raw)
        return value

    @classmethod
    def parse(cls, text: str, **kwargs: Any) -> "JsonValue":
        """Parses JSON text. Raises ParseError on malformed input."""
        from ._parser import parse_raw

        return cls._from_raw(parse_raw(text, **kwargs))

    @classmethod
    def from_python(
        cls, value: Any, converter: "ConverterLike | None" = None
    ) -> "JsonValue":
        """Converts Python data. Raises IllegalValue on unsupported input."""
        return from_python(value, converter)

    @property
    def kind(self) -> ValueKind:
        return kind_of(self.raw_value)

    def to_text(
        self, spacing: bool = False, indent: str | int | None = None
    ) -> str:
        """Renders the value, compact unless spacing or indent is given."""
        return render(self.raw_value, spacing=spacing, indent=indent)

    def to_python(self) -> Any:
        """Returns a mutable deep copy built from lists and dicts."""
        return _thaw(self.raw_value)

    def interpret_scope(self) -> "JsonInterpretScope":
        """Opens a root decoding scope over this value."""
        from .interpret import interpret_scope

        return interpret_scope(self)

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, JsonValue):
            return NotImplemented
        return raw_equal(self.raw_value, other.raw_value)

    def __hash__(self) -> int:
        return raw_hash(self.raw_value)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"JsonValue({self.to_text()})"


def _thaw(raw: RawJson) -> Any:
    if isinstance(raw, tuple):
        return [_thaw(item) for item in raw]
    if isinstance(raw, Mapping):
        return {key: _thaw(value) for key, value in raw.items()}
    return raw


@runtime_checkable
class JsonValueConverter(Protocol):
    """
    Lets domain objects declare their own JSON shape.

    Consulted before the built-in rules for every value, nested ones
    included. Returning None falls back to the built-in rules.
    """

    def convert_to_json_value(self, value: Any) -> JsonValue | None: ...


ConverterLike: TypeAlias = JsonValueConverter | Callable[[Any], JsonValue | None]


def _resolve_converter(
    converter: ConverterLike | None,
) -> Callable[[Any], JsonValue | None] | None:
    if converter is None:
        return None
    if isinstance(converter, JsonValueConverter):
        return converter.convert_to_json_value
    if callable(converter):
        return converter
    msg = f"converter must be callable, not {type(converter).__name__}"
    raise TypeError(msg)


def _convert(  # noqa: PLR0911
    value: Any, convert: Callable[[Any], JsonValue | None] | None
) -> RawJson:
    """Converts one node, consulting the converter first."""
    if isinstance(value, JsonValue):
        return value.raw_value
    if convert is not None:
        replacement = convert(value)
        if replacement is not None:
            if not isinstance(replacement, JsonValue):
                raise IllegalValue(
                    "Converter must return a JsonValue or None, "
                    f"not {type(replacement).__name__}",
                    replacement,
                )
            return replacement.raw_value

    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        # Exact str, so StrEnum members and other subclasses are not kept
        return str.__str__(value)
    if isinstance(value, Mapping):
        return _convert_mapping(value, convert)
    if isinstance(value, Sequence) and not isinstance(
        value, bytes | bytearray
    ):
        return _convert_sequence(value, convert)
    if isinstance(value, numbers.Number):
        return canonicalize_number(value)
    raise IllegalValue(
        f"Cannot convert value to json element: {value!r}", value
    )


def _convert_sequence(
    sequence: Sequence[Any], convert: Callable[[Any], JsonValue | None] | None
) -> tuple[RawJson, ...]:
    converted: list[RawJson] = []
    for index, item in enumerate(sequence):
        try:
            converted.append(_convert(item, convert))
        except IllegalValue as e:
            e.add_note(f"while converting item {index}")
            raise
    return tuple(converted)


def _convert_mapping(
    mapping: Mapping[Any, Any], convert: Callable[[Any], JsonValue | None] | None
) -> Mapping[str, RawJson]:
    converted: dict[str, RawJson] = {}
    for key, item in mapping.items():
        if not isinstance(key, str):
            raise IllegalValue(
                "Only str keys are supported for converting a mapping to a "
                f"json value. Got key: {key!r}",
                key,
            )
        try:
            converted[str.__str__(key)] = _convert(item, convert)
        except IllegalValue as e:
            e.add_note(f"while converting property {key!r}")
            raise
    return MappingProxyType(converted)


def from_python(value: Any, converter: ConverterLike | None = None) -> JsonValue:
    """
    Converts Python data into a canonical JsonValue.

    Accepts None, bool, str, numbers, sequences and str-keyed mappings, plus
    nested JsonValues which are embedded as they are. The optional converter
    sees every node before the built-in rules do.
    """
    try:
        return JsonValue._from_raw(
            _convert(value, _resolve_converter(converter))
        )
    except IllegalValue as e:
        logger.debug("Conversion to json value failed: %s", e)
        raise


def json_object_of(
    *pairs: tuple[str, Any],
    converter: ConverterLike | None = None,
    **members: Any,
) -> JsonValue:
    """
    Builds an object value from (key, value) pairs and keyword members.

    Positional pairs come first, in order, followed by keyword members.
    """
    entries: dict[str, Any] = {}
    for key, value in pairs:
        entries[key] = value
    entries.update(members)
    return from_python(entries, converter)
