"""
Exception types raised by parsing, conversion and scoped decoding.

All three are terminal for the operation that raised them; nothing in the
library retries or recovers internally.
"""

from typing import Any
from typing import TypeAlias

Position: TypeAlias = int


class JsonValueError(ValueError):
    """Base class for every error raised by jsonvalue."""


class ParseError(JsonValueError):
    """
    Handles JSON parsing failures with precise position information.

    Carries the failing offset together with the 1-based line and column it
    maps to, so malformed input can be located without re-parsing.
    """

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        # Only computed on the error path
        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        super().__init__(f"{msg} at line {self.lineno} position {self.colno}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.msg, self.doc, self.pos)


class IllegalValue(JsonValueError, TypeError):
    """
    Raised when a Python value has no JSON representation.

    Covers non-string mapping keys, unsupported types and numbers outside the
    canonical range.
    """

    def __init__(self, msg: str, value: Any = None) -> None:
        self.value = value
        super().__init__(msg)


class DecodeError(JsonValueError):
    """
    Scoped decoding failure carrying the path of the failing node.

    The root_id ties the error to the root scope that produced it, letting
    enclosing scopes of the same decode pass it through untouched.
    """

    def __init__(self, pointer: str, detail: str, root_id: object) -> None:
        self.pointer = pointer
        self.detail = detail
        self.root_id = root_id
        super().__init__(f"Parsing failed at {pointer}: {detail}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.pointer, self.detail, self.root_id)
