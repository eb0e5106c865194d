"""
Scoped decoding of JSON values into application data.

A JsonInterpretScope is a read-only view over one node of a value tree. It
coerces primitives, opens child scopes for array elements and object
properties on demand, and turns any failure inside decoding logic into a
DecodeError naming the path of the failing node, e.g. ``/config/numbers/4``.

Typical use::

    point = decode(value, lambda scope: scope.as_object(
        lambda obj: Point(
            x=obj.property("x").as_double(),
            y=obj.property("y").as_double(),
        )
    ))
"""

import logging
import re
import uuid
from collections.abc import Callable
from collections.abc import Iterator
from collections.abc import KeysView
from collections.abc import Mapping
from collections.abc import Sequence
from typing import Final
from typing import NoReturn
from typing import TypeVar
from typing import overload
from typing import TypeAlias

from ._canonical import INT32_MAX
from ._canonical import INT32_MIN
from ._canonical import INT64_MAX
from ._canonical import INT64_MIN
from ._canonical import NON_FINITE_TOKENS
from ._errors import DecodeError
from ._render import encode_number
from ._value import JsonValue
from ._value import RawJson

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Lenient numeric strings; integers keep at most 19 significant digits
_INTEGER_TEXT: Final = re.compile(r"([+-]?)0*([0-9]{1,19})")
_FLOAT_TEXT: Final = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)

PathSegment: TypeAlias = str | int


class JsonInterpretScope:
    """
    Decoding view bound to one node of a JSON value tree.

    Child scopes keep a link to their parent so a failure anywhere below the
    root can report its full path. All scopes below one root share the
    root's correlation token.
    """

    __slots__ = ("_raw", "_parent", "_at", "_root_id")

    def __init__(
        self,
        raw: RawJson,
        parent: "JsonInterpretScope | None" = None,
        at: PathSegment | None = None,
    ) -> None:
        self._raw = raw
        self._parent = parent
        self._at = at
        self._root_id = parent._root_id if parent is not None else uuid.uuid4()

    @property
    def root_id(self) -> uuid.UUID:
        return self._root_id

    @property
    def path(self) -> tuple[PathSegment, ...]:
        """Keys and indexes leading from the root to this node."""
        segments: list[PathSegment] = []
        scope: JsonInterpretScope | None = self
        while scope is not None and scope._parent is not None:
            segments.append(scope._at)  # type: ignore[arg-type]
            scope = scope._parent
        segments.reverse()
        return tuple(segments)

    @property
    def pointer(self) -> str:
        """JSON-Pointer-like rendering of path, "/" for the root."""
        return "/" + "/".join(str(segment) for segment in self.path)

    # Failure handling

    def fail(self, message: str) -> NoReturn:
        """Raises a DecodeError located at this scope."""
        raise DecodeError(self.pointer, message, self._root_id)

    def fail_scope(self, cause: BaseException) -> NoReturn:
        """
        Re-raises cause as a DecodeError located at this scope.

        A DecodeError already produced under the same root passes through
        unchanged, so nested scopes wrap a failure exactly once.
        """
        if isinstance(cause, DecodeError) and cause.root_id == self._root_id:
            raise cause
        detail = f"{type(cause).__name__}: {cause}"
        logger.debug("Decoding failed at %s: %s", self.pointer, detail)
        raise DecodeError(self.pointer, detail, self._root_id) from cause

    def parse(self, decoder: Callable[["JsonInterpretScope"], T]) -> T:
        """Runs decoder on this scope, scoping any failure it raises."""
        try:
            return decoder(self)
        except Exception as e:
            self.fail_scope(e)

    # Primitive coercions

    def _as_string_or_none(self) -> str | None:
        raw = self._raw
        if isinstance(raw, bool):
            return "true" if raw else "false"
        if isinstance(raw, str):
            return raw
        if isinstance(raw, int | float):
            return encode_number(raw)
        return None

    def as_string(self) -> str:
        result = self._as_string_or_none()
        if result is None:
            self.fail(f"Cannot convert to String. value: {self._describe()}")
        return result

    def _as_integer(self, name: str, low: int, high: int) -> int:
        raw = self._raw
        result: int | None = None
        if isinstance(raw, bool):
            result = None
        elif isinstance(raw, int):
            result = raw
        elif isinstance(raw, float):
            result = int(raw)
        elif isinstance(raw, str):
            match = _INTEGER_TEXT.fullmatch(raw)
            if match is not None:
                result = int(match.group(1) + match.group(2))
        if result is None or not low <= result <= high:
            self.fail(f"Cannot convert to {name}. value: {self._describe()}")
        return result

    def as_int(self) -> int:
        """Coerces to a 32-bit integer; floats truncate toward zero."""
        return self._as_integer("Int", INT32_MIN, INT32_MAX)

    def as_long(self) -> int:
        """Coerces to a 64-bit integer; floats truncate toward zero."""
        return self._as_integer("Long", INT64_MIN, INT64_MAX)

    def as_double(self) -> float:
        raw = self._raw
        if isinstance(raw, int | float) and not isinstance(raw, bool):
            return float(raw)
        if isinstance(raw, str) and (
            raw in NON_FINITE_TOKENS or _FLOAT_TEXT.fullmatch(raw)
        ):
            return float(raw)
        self.fail(f"Cannot convert to Double. value: {self._describe()}")

    def as_boolean(self) -> bool:
        raw = self._raw
        if isinstance(raw, bool):
            return raw
        if raw == "true":
            return True
        if raw == "false":
            return False
        self.fail(f"Cannot convert to Boolean. value: {self._describe()}")

    def as_json_value(self) -> JsonValue:
        return JsonValue._from_raw(self._raw)

    def _describe(self) -> str:
        return JsonValue._from_raw(self._raw).to_text()

    # Containers

    def array_elements(self) -> "ElementScopes":
        """Child scopes for the elements of an array, built on access."""
        if not isinstance(self._raw, tuple):
            self.fail("Not an array.")
        return ElementScopes(self, self._raw)

    def object_scope(self) -> "ObjectScope":
        if not isinstance(self._raw, Mapping):
            self.fail("Not an object.")
        return ObjectScope(self, self._raw)

    def as_array(
        self, decode_element: Callable[["JsonInterpretScope", int], T]
    ) -> list[T]:
        """
        Decodes every array element, passing each its scope and index.

        Failures are reported at the element that raised them.
        """
        results: list[T] = []
        for index, element in enumerate(self.array_elements()):
            results.append(
                element.parse(lambda scope: decode_element(scope, index))
            )
        return results

    def as_object(self, decode_object: Callable[["ObjectScope"], T]) -> T:
        """Decodes this node as an object through its ObjectScope."""
        object_scope = self.object_scope()
        return self.parse(lambda _: decode_object(object_scope))

    def __repr__(self) -> str:
        return f"JsonInterpretScope({self.pointer})"


class ElementScopes(Sequence[JsonInterpretScope]):
    """Lazy, index addressed sequence of element scopes."""

    __slots__ = ("_scope", "_elements")

    def __init__(
        self, scope: JsonInterpretScope, elements: tuple[RawJson, ...]
    ) -> None:
        self._scope = scope
        self._elements = elements

    def __len__(self) -> int:
        return len(self._elements)

    @overload
    def __getitem__(self, index: int) -> JsonInterpretScope: ...

    @overload
    def __getitem__(self, index: slice) -> list[JsonInterpretScope]: ...

    def __getitem__(
        self, index: int | slice
    ) -> JsonInterpretScope | list[JsonInterpretScope]:
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        if index < 0:
            index += len(self._elements)
        if not 0 <= index < len(self._elements):
            raise IndexError("array element index out of range")
        return JsonInterpretScope(self._elements[index], self._scope, index)

    def __iter__(self) -> Iterator[JsonInterpretScope]:
        for index in range(len(self._elements)):
            yield self[index]


class ObjectScope:
    """Property access for a scope bound to a JSON object."""

    __slots__ = ("_scope", "_members")

    def __init__(
        self, scope: JsonInterpretScope, members: Mapping[str, RawJson]
    ) -> None:
        self._scope = scope
        self._members = members

    @property
    def scope(self) -> JsonInterpretScope:
        return self._scope

    def property_names(self) -> KeysView[str]:
        return self._members.keys()

    def property(self, name: str) -> JsonInterpretScope:
        """Required property; a missing or null value fails."""
        if name not in self._members:
            self._scope.fail(f"Missing property '{name}'.")
        value = self._members[name]
        if value is None:
            self._scope.fail(f"Null value for property '{name}'.")
        return JsonInterpretScope(value, self._scope, name)

    def property_or_none(self, name: str) -> JsonInterpretScope | None:
        """Optional property; None when missing or null."""
        value = self._members.get(name)
        if value is None:
            return None
        return JsonInterpretScope(value, self._scope, name)


def interpret_scope(value: JsonValue) -> JsonInterpretScope:
    """Opens a root scope with a fresh correlation token."""
    if not isinstance(value, JsonValue):
        raise TypeError(
            f"expected a JsonValue, not {type(value).__name__}"
        )
    return JsonInterpretScope(value.raw_value)


def decode(value: JsonValue, decoder: Callable[[JsonInterpretScope], T]) -> T:
    """Decodes value with decoder, reporting failures with their path."""
    return interpret_scope(value).parse(decoder)
