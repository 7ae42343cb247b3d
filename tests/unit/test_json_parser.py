"""Tests for JSON parser."""

from chartgen.utils.json_parser import JSONParser


def test_extract_json_simple():
    """Test extracting simple JSON."""
    text = '{"key": "value"}'
    result = JSONParser.extract_json(text)
    assert result == {"key": "value"}


def test_extract_json_in_code_block():
    """Test extracting JSON from code block."""
    text = '```json\n{"relevant": false, "reason": "weather"}\n```'
    result = JSONParser.extract_json(text)
    assert result == {"relevant": False, "reason": "weather"}


def test_extract_json_with_surrounding_prose():
    text = 'Sure! Here is the plan: {"sql": "SELECT 1", "chartType": "pie"} Hope it helps.'
    assert JSONParser.extract_json(text) == {"sql": "SELECT 1", "chartType": "pie"}


def test_extract_json_nested_object():
    text = '{"outer": {"inner": 1}} trailing {"second": 2}'
    assert JSONParser.extract_json(text) == {"outer": {"inner": 1}}


def test_extract_json_braces_inside_strings():
    text = '{"title": "Count {by} ward", "sql": "SELECT \'}\' AS name"}'
    result = JSONParser.extract_json(text)
    assert result == {"title": "Count {by} ward", "sql": "SELECT '}' AS name"}


def test_extract_json_escaped_quote_inside_string():
    text = r'{"title": "say \"hi\" {", "n": 1}'
    assert JSONParser.extract_json(text) == {"title": 'say "hi" {', "n": 1}


def test_extract_json_invalid():
    """Test extracting invalid JSON returns None."""
    assert JSONParser.extract_json("not json at all") is None


def test_extract_json_unbalanced():
    assert JSONParser.extract_json('{"sql": "SELECT 1"') is None


def test_extract_json_malformed_object():
    assert JSONParser.extract_json("{sql: SELECT 1}") is None


def test_extract_json_non_string_input():
    assert JSONParser.extract_json(None) is None
    assert JSONParser.extract_json({"already": "dict"}) is None


def test_find_object_returns_substring():
    assert JSONParser.find_object('xx {"a": {"b": 1}} yy') == '{"a": {"b": 1}}'
    assert JSONParser.find_object("no braces") is None


def test_extract_json_deeply_nested_returns_none():
    depth = 100_000
    text = '{"a": ' + "[" * depth + "]" * depth + "}"
    assert JSONParser.extract_json(text) is None
