"""
Recursive descent JSON parser.

Reads standard JSON text (RFC 8259, no extensions) with a single forward
cursor and produces the canonical raw tree wrapped by JsonValue. Any grammar
violation raises ParseError naming the tokens that were expected at the
cursor.
"""

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any
from typing import Final
from typing import NoReturn

from ._canonical import canonicalize_literal
from ._errors import ParseError
from ._profile import ProfileContext
from ._value import RawJson

logger = logging.getLogger(__name__)

WHITESPACE: Final = " \t\n\r"
DIGITS: Final = "0123456789"
NUMBER_START: Final = "-0123456789"
HEX_DIGITS: Final = "0123456789abcdefABCDEF"
VALUE_START: Final = '{["-0123456789tfn'

# Simple escapes and what they stand for; \u is handled separately
ESCAPE_MAP: Final = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

# Run of regular string characters: >= U+0020 except quote and backslash
_REGULAR_CHARS = re.compile(r'[^"\\\x00-\x1f]*')


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures JSON parsing behavior with immutable settings.

    max_depth bounds how many arrays and objects may be nested inside each
    other. None leaves nesting bounded only by the interpreter's recursion
    limit.
    """

    max_depth: int | None = None

    def __post_init__(self) -> None:
        if self.max_depth is None:
            return
        if isinstance(self.max_depth, bool) or not isinstance(
            self.max_depth, int
        ):
            raise TypeError("max_depth must be an integer or None")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")


class JsonParser:
    """
    Cursor based recursive descent parser.

    One instance parses one document; the cursor only moves forward.
    """

    def __init__(self, text: str, config: ParseConfig) -> None:
        self.text = text
        self.pos = 0
        self.length = len(text)
        self.config = config
        self.depth = 0

    def peek(self) -> str:
        """Returns current character without advancing, "" at the end."""
        return self.text[self.pos] if self.pos < self.length else ""

    def peek_text(self, literal: str) -> bool:
        return self.text.startswith(literal, self.pos)

    def advance(self, count: int = 1) -> None:
        self.pos += count

    def throw_expected(self, *names: str) -> NoReturn:
        """Raises a ParseError listing the alternatives expected here."""
        raise ParseError(f"Expected {' or '.join(names)}", self.text, self.pos)

    def expect(self, char: str) -> None:
        if self.peek() == char:
            self.advance()
        else:
            self.throw_expected(f"'{char}'")

    def skip_whitespace(self) -> None:
        """Skips whitespace characters according to JSON spec."""
        while self.pos < self.length and self.text[self.pos] in WHITESPACE:
            self.pos += 1

    def check_end_of_file(self) -> None:
        if self.pos < self.length:
            self.throw_expected("end-of-file")

    # Grammar

    def read_element(self) -> RawJson:
        """element := ws value ws"""
        self.skip_whitespace()
        value = self.read_value()
        self.skip_whitespace()
        return value

    def read_value(self) -> RawJson:  # noqa: PLR0911
        char = self.peek()
        if char == "{":
            return self.read_object()
        elif char == "[":
            return self.read_array()
        elif char == '"':
            return self.read_string()
        elif char and char in NUMBER_START:
            return self.read_number()
        elif self.peek_text("true"):
            self.advance(4)
            return True
        elif self.peek_text("false"):
            self.advance(5)
            return False
        elif self.peek_text("null"):
            self.advance(4)
            return None
        self.throw_expected("value")

    def _enter_container(self) -> None:
        self.depth += 1
        max_depth = self.config.max_depth
        if max_depth is not None and self.depth > max_depth:
            self.throw_expected(f"nesting depth <= {max_depth}")

    def read_object(self) -> RawJson:
        """object := '{' ws ( '}' | member (',' member)* ws '}' )"""
        self.expect("{")
        self._enter_container()
        self.skip_whitespace()

        members: dict[str, RawJson] = {}
        char = self.peek()
        if char == "}":
            self.advance()
        elif char == '"':
            self._read_member(members)
            while True:
                char = self.peek()
                if char == ",":
                    self.advance()
                    self._read_member(members)
                elif char == "}":
                    self.advance()
                    break
                else:
                    self.throw_expected("'}'", "','")
        else:
            self.throw_expected("'}'", "member")

        self.depth -= 1
        return MappingProxyType(members)

    def _read_member(self, members: dict[str, RawJson]) -> None:
        """member := ws string ws ':' element"""
        self.skip_whitespace()
        key_pos = self.pos
        key = self.read_string()
        if key in members:
            raise ParseError(f"Duplicate property '{key}'", self.text, key_pos)
        self.skip_whitespace()
        self.expect(":")
        members[key] = self.read_element()

    def read_array(self) -> RawJson:
        """array := '[' ws ( ']' | element (',' element)* ws ']' )"""
        self.expect("[")
        self._enter_container()
        self.skip_whitespace()

        elements: list[RawJson] = []
        char = self.peek()
        if char == "]":
            self.advance()
        elif char and char in VALUE_START:
            elements.append(self.read_element())
            while True:
                char = self.peek()
                if char == ",":
                    self.advance()
                    elements.append(self.read_element())
                elif char == "]":
                    self.advance()
                    break
                else:
                    self.throw_expected("']'", "','")
        else:
            self.throw_expected("']'", "element")

        self.depth -= 1
        return tuple(elements)

    def read_string(self) -> str:
        """Reads a quoted string, resolving escape sequences."""
        with ProfileContext("parse_string"):
            self.expect('"')
            chunks: list[str] = []
            while True:
                match = _REGULAR_CHARS.match(self.text, self.pos)
                if match is not None and match.end() > self.pos:
                    chunks.append(match.group())
                    self.pos = match.end()
                char = self.peek()
                if char == '"':
                    self.advance()
                    return "".join(chunks)
                elif char == "\\":
                    chunks.append(self._read_escape())
                else:
                    # Control character or end of input
                    self.throw_expected("'\"'", "character")

    def _read_escape(self) -> str:
        self.expect("\\")
        char = self.peek()
        if char == "u":
            self.advance()
            code_point = self._read_hex4()
            # Join a UTF-16 surrogate pair written as two escapes
            if 0xD800 <= code_point <= 0xDBFF and self.peek_text("\\u"):
                low_start = self.pos
                self.advance(2)
                low = self._read_hex4()
                if 0xDC00 <= low <= 0xDFFF:
                    return chr(
                        0x10000 + ((code_point - 0xD800) << 10) + (low - 0xDC00)
                    )
                self.pos = low_start
            return chr(code_point)
        elif char and char in ESCAPE_MAP:
            self.advance()
            return ESCAPE_MAP[char]
        self.throw_expected("escape")

    def _read_hex4(self) -> int:
        value = 0
        for _ in range(4):
            char = self.peek()
            if not char or char not in HEX_DIGITS:
                self.throw_expected("hex")
            value = value << 4 | int(char, 16)
            self.advance()
        return value

    def _read_digit(self) -> str:
        char = self.peek()
        if not char or char not in DIGITS:
            self.throw_expected("digit")
        self.advance()
        return char

    def _skip_digits(self) -> None:
        while self.pos < self.length and self.text[self.pos] in DIGITS:
            self.pos += 1

    def read_number(self) -> RawJson:
        """
        Reads a number literal and canonicalizes it.

        number := '-'? ('0' | [1-9][0-9]*) ('.' [0-9]+)? ([eE] [+-]? [0-9]+)?
        """
        with ProfileContext("parse_number"):
            start = self.pos
            if self.peek() == "-":
                self.advance()

            if self._read_digit() != "0":
                self._skip_digits()

            if self.peek() == ".":
                self.advance()
                self._read_digit()
                self._skip_digits()

            if self.peek() in ("e", "E"):
                self.advance()
                if self.peek() in ("+", "-"):
                    self.advance()
                self._read_digit()
                self._skip_digits()

            return canonicalize_literal(self.text[start : self.pos])


def parse_raw(text: str, **kwargs: Any) -> RawJson:
    """
    Parses a whole JSON document into a canonical raw tree.

    Leading and trailing whitespace is skipped; anything else after the
    top-level value is an error.
    """
    if not isinstance(text, str):
        raise TypeError(
            f"the JSON text must be str, not {type(text).__name__}"
        )

    config = ParseConfig(**kwargs)
    parser = JsonParser(text, config)
    try:
        with ProfileContext("parse_value", len(text)):
            value = parser.read_element()
            parser.check_end_of_file()
    except RecursionError as e:
        raise ParseError(
            "Expected nesting depth within the recursion limit",
            text,
            parser.pos,
        ) from e
    except ParseError as e:
        logger.debug(
            "JSON parse failed at line %d position %d: %s",
            e.lineno,
            e.colno,
            e.msg,
        )
        raise
    return value
