"""
Pytest configuration and shared fixtures for jsonvalue tests.

Provides immutable test data fixtures shared by the parsing, rendering and
decoding tests.
"""

from dataclasses import dataclass
from typing import Any

import pytest


@dataclass(frozen=True)
class JsonTestCase:
    """One input document and what parsing it should produce."""

    description: str
    input_data: str
    should_fail: bool = False
    expected_output: Any = None
    skip_reason: str = ""


@pytest.fixture
def json_fail_cases() -> list[JsonTestCase]:
    """
    Malformed documents that must raise ParseError.

    Two JSON_checker cases are accepted here and carry a skip_reason.
    """
    # json.org JSON_checker fail1.json to fail33.json, in order
    fail_docs = [
        '"A JSON payload should be an object or array, not a string."',
        '["Unclosed array"',
        '{unquoted_key: "keys must be quoted"}',
        '["extra comma",]',
        '["double extra comma",,]',
        '[   , "<-- missing value"]',
        '["Comma after the close"],',
        '["Extra close"]]',
        '{"Extra comma": true,}',
        '{"Extra value after close": true} "misplaced quoted value"',
        '{"Illegal expression": 1 + 2}',
        '{"Illegal invocation": alert()}',
        '{"Numbers cannot have leading zeroes": 013}',
        '{"Numbers cannot be hex": 0x14}',
        '["Illegal backslash escape: \\x15"]',
        "[\\naked]",
        '["Illegal backslash escape: \\017"]',
        '[[[[[[[[[[[[[[[[[[["Too deep"]]]]]]]]]]]]]]]]]]',
        '{"Missing colon" null}',
        '{"Double colon":: null}',
        '{"Comma instead of colon", null}',
        '["Colon instead of comma": false]',
        '["Bad value", truth]',
        "['single quote']",
        '["\ttab\tcharacter\tin\tstring\t"]',
        '["tab\\   character\\   in\\  string\\  "]',
        '["line\nbreak"]',
        '["line\\\nbreak"]',
        "[0e]",
        "[0e+]",
        "[0e+-1]",
        '{"Comma instead if closing brace": true,',
        '["mismatch"}',
        # Raw control character, from a simplejson issue
        '["A\u001fZ control characters in string"]',
    ]

    skips = {
        1: "any value is accepted at the top level",
        18: "nesting depth is unbounded unless max_depth is set",
    }

    return [
        JsonTestCase(
            description=f"fail{idx + 1}.json",
            input_data=doc,
            should_fail=True,
            skip_reason=skips.get(idx + 1, ""),
        )
        for idx, doc in enumerate(fail_docs)
    ]


@pytest.fixture
def json_pass_cases() -> list[JsonTestCase]:
    """
    The JSON_checker pass documents.

    pass1 has its \\f escape removed, since form feed is not an accepted
    escape.
    """
    return [
        JsonTestCase(
            description="pass1.json - complex nested structure",
            input_data="""[
    "JSON Test Pattern pass1",
    {"object with 1 member":["array with 1 element"]},
    {},
    [],
    -42,
    true,
    false,
    null,
    {
        "integer": 1234567890,
        "real": -9876.543210,
        "e": 0.123456789e-12,
        "E": 1.234567890E+34,
        "":  23456789012E66,
        "zero": 0,
        "one": 1,
        "space": " ",
        "quote": "\\"",
        "backslash": "\\\\",
        "controls": "\\b\\n\\r\\t",
        "slash": "/ & \\/",
        "alpha": "abcdefghijklmnopqrstuvwyz",
        "ALPHA": "ABCDEFGHIJKLMNOPQRSTUVWYZ",
        "digit": "0123456789",
        "0123456789": "digit",
        "special": "`1~!@#$%^&*()_+-={':[,]}|;.</>?",
        "hex": "\\u0123\\u4567\\u89AB\\uCDEF\\uabcd\\uef4A",
        "true": true,
        "false": false,
        "null": null,
        "array":[  ],
        "object":{  },
        "address": "50 St. James Street",
        "url": "https://www.JSON.org/",
        "comment": "// /* <!-- --",
        "# -- --> */": " ",
        " s p a c e d " :[1,2 , 3

,

4 , 5        ,          6           ,7        ],"compact":[1,2,3,4,5,6,7],
        "jsontext": "{\\"object with 1 member\\":[\\"array with 1 element\\"]}"
    }
]""",
            should_fail=False,
        ),
        JsonTestCase(
            description="pass2.json - deep nesting",
            input_data='[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]',
            should_fail=False,
        ),
        JsonTestCase(
            description="pass3.json - simple object",
            input_data='{"JSON Test Pattern pass3": {"The outermost value": "must be an object or array.", "In this test": "It is an object."}}',
            should_fail=False,
        ),
    ]


@pytest.fixture
def basic_json_values() -> list[JsonTestCase]:
    """Small documents with their to_python() result."""
    return [
        JsonTestCase("null value", "null", False, None),
        JsonTestCase("true boolean", "true", False, True),
        JsonTestCase("false boolean", "false", False, False),
        JsonTestCase("integer", "42", False, 42),
        JsonTestCase("negative integer", "-17", False, -17),
        JsonTestCase("float", "3.14", False, 3.14),
        JsonTestCase("empty string", '""', False, ""),
        JsonTestCase("simple string", '"hello"', False, "hello"),
        JsonTestCase("empty array", "[]", False, []),
        JsonTestCase("empty object", "{}", False, {}),
        JsonTestCase("simple array", "[1, 2, 3]", False, [1, 2, 3]),
        JsonTestCase(
            "simple object", '{"key": "value"}', False, {"key": "value"}
        ),
        JsonTestCase("integral float", "1.0", False, 1),
        JsonTestCase("exponent to integer", "2.5e1", False, 25),
        JsonTestCase("negative zero", "-0", False, 0),
        JsonTestCase("escaped slash", '"a\\/b"', False, "a/b"),
    ]


@pytest.fixture
def scenario_document() -> str:
    """
    Provides a multi-line document mixing every kind of JSON value.
    """
    return """
    {
      "name": "Haim",
      "numbers": ["1", "3", "6\\"", [{"":[]}], null, false, 23.4e-1, 7878,{ }],
      "address": { "x":1, "y" : 2, "z": 3 }
    }
    """
