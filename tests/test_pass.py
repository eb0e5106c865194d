"""
JSON specification compliance tests for valid JSON inputs.

Validates that properly formatted JSON strings parse successfully and produce
the expected values.
"""

import jsonvalue

from .conftest import JsonTestCase


def test_json_spec_compliance(json_pass_cases: list[JsonTestCase]) -> None:
    """
    Validates JSON strings that must parse successfully per RFC 8259.

    Tests standards compliance for valid JSON structures including complex
    nested documents, deep arrays, and simple objects.
    """
    for case in json_pass_cases:
        value = jsonvalue.parse(case.input_data)
        assert value.kind in (jsonvalue.ValueKind.ARRAY, jsonvalue.ValueKind.OBJECT)


def test_pass1_members(json_pass_cases: list[JsonTestCase]) -> None:
    """
    Spot checks members of the pass1 document after canonicalization.
    """
    value = jsonvalue.parse(json_pass_cases[0].input_data)
    members = value.raw_value[8]  # type: ignore[index]

    assert members["integer"] == 1234567890
    assert members["real"] == -9876.54321
    assert members["E"] == 1.23456789e34
    assert members[""] == 2.3456789012e76
    assert members["zero"] == 0
    assert members["quote"] == '"'
    assert members["controls"] == "\b\n\r\t"
    assert members["slash"] == "/ & /"
    assert members["hex"] == "\u0123\u4567\u89ab\ucdef\uabcd\uef4a"
    assert members[" s p a c e d "] == (1, 2, 3, 4, 5, 6, 7)
    assert members["jsontext"] == '{"object with 1 member":["array with 1 element"]}'


def test_empty_containers() -> None:
    """
    Validates parsing of empty JSON containers.
    """
    assert jsonvalue.parse("[]").raw_value == ()
    assert jsonvalue.parse("{}").to_python() == {}
    assert jsonvalue.parse(" [] ").raw_value == ()
    assert jsonvalue.parse(" {} ").to_python() == {}
    assert jsonvalue.parse("[ ]").raw_value == ()
    assert jsonvalue.parse("{\n}").to_python() == {}


def test_whitespace_handling() -> None:
    """
    Validates proper handling of JSON whitespace.
    """
    assert jsonvalue.parse(" null ").raw_value is None
    assert jsonvalue.parse("\n\ttrue\n").raw_value is True
    assert jsonvalue.parse("\r\n42\r\n").raw_value == 42

    assert jsonvalue.parse("[ 1 , 2 , 3 ]").raw_value == (1, 2, 3)
    assert jsonvalue.parse('{ "key" : "value" }').to_python() == {
        "key": "value"
    }


def test_top_level_scalars() -> None:
    """
    Validates any value is accepted at the top level, not only containers.
    """
    assert jsonvalue.parse('"A JSON payload"').raw_value == "A JSON payload"
    assert jsonvalue.parse("-1.5").raw_value == -1.5
