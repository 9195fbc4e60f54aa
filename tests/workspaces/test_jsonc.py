"""Unit tests for JSON-with-comments parsing and structural edits."""

from __future__ import annotations

import pytest

from multiroot.workspaces.base import jsonc

TABS = jsonc.FormattingOptions()
SPACES = jsonc.FormattingOptions(insert_spaces=True, tab_size=2)


def _set(text: str, path: list, value: object, options: jsonc.FormattingOptions = TABS) -> str:
    return jsonc.apply_edits(text, jsonc.set_property(text, path, value, options))


def _remove(text: str, path: list, options: jsonc.FormattingOptions = TABS) -> str:
    return jsonc.apply_edits(text, jsonc.remove_property(text, path, options))


# ---------------------------------------------------------------------------
# parse
# ---------------------------------------------------------------------------


def test_parse_plain_json() -> None:
    assert jsonc.parse('{"a": [1, 2.5, -3e2], "b": {"c": null, "d": true, "e": false}}') == {
        "a": [1, 2.5, -300.0],
        "b": {"c": None, "d": True, "e": False},
    }


def test_parse_comments_and_trailing_commas() -> None:
    text = """
    /* header */
    {
        // line comment
        "a": "x // not a comment",
        "b": [1, 2,],
    }
    """
    assert jsonc.parse(text) == {"a": "x // not a comment", "b": [1, 2]}


def test_parse_string_escapes_and_bom() -> None:
    assert jsonc.parse('\ufeff{"path": "C:\\\\ws\\u00e9"}') == {"path": "C:\\wsé"}


def test_parse_empty_document() -> None:
    assert jsonc.parse("") is None
    assert jsonc.parse("  // nothing here\n") is None


@pytest.mark.parametrize(
    "text",
    ['{"a": }', '{"a" 1}', "[1 2]", '{"a": 1} 2', '"unterminated', "/* open", "{'a': 1}", "tru"],
)
def test_parse_errors(text: str) -> None:
    with pytest.raises(jsonc.JsoncSyntaxError):
        jsonc.parse(text)


def test_parse_error_offset() -> None:
    with pytest.raises(jsonc.JsoncSyntaxError) as exc_info:
        jsonc.parse('{"a": ?}')
    assert exc_info.value.offset == 6


def test_find_node_at_location() -> None:
    root = jsonc.parse_tree('{"a": [{"b": 1}, {"b": 2}]}')
    node = jsonc.find_node_at_location(root, ["a", 1, "b"])
    assert node is not None
    assert node.value == 2
    assert jsonc.find_node_at_location(root, ["a", 5]) is None
    assert jsonc.find_node_at_location(root, ["missing"]) is None


# ---------------------------------------------------------------------------
# set_property
# ---------------------------------------------------------------------------


def test_set_replaces_existing_value() -> None:
    text = '{\n\t"a": 1, // one\n\t"b": 2\n}'
    assert _set(text, ["a"], [1, 2]) == '{\n\t"a": [\n\t\t1,\n\t\t2\n\t], // one\n\t"b": 2\n}'


def test_set_appends_missing_property() -> None:
    text = '{\n  "a": 1\n}'
    assert _set(text, ["b"], True, SPACES) == '{\n  "a": 1,\n  "b": true\n}'


def test_set_into_empty_object() -> None:
    assert _set("{}", ["a"], "x") == '{\n\t"a": "x"\n}'


def test_set_nested_creates_parents() -> None:
    result = _set('{"settings": {}}', ["settings", "editor", "tabSize"], 2)
    assert jsonc.parse(result) == {"settings": {"editor": {"tabSize": 2}}}


def test_set_on_empty_document() -> None:
    assert _set("", ["folders"], []) == '{\n\t"folders": []\n}'


def test_set_uses_eol() -> None:
    options = jsonc.FormattingOptions(eol="\r\n")
    assert _set("{}", ["a"], [1]) != _set("{}", ["a"], [1], options)
    assert _set("{}", ["a"], [1], options) == '{\r\n\t"a": [\r\n\t\t1\r\n\t]\r\n}'


def test_set_on_non_object_fails() -> None:
    with pytest.raises(ValueError):
        jsonc.set_property('{"a": [1]}', ["a", "b"], 1, TABS)


# ---------------------------------------------------------------------------
# remove_property
# ---------------------------------------------------------------------------


def test_remove_middle_property() -> None:
    assert _remove('{"a": 1, "b": 2, "c": 3}', ["b"]) == '{"a": 1, "c": 3}'


def test_remove_first_property() -> None:
    assert _remove('{"a": 1, "b": 2}', ["a"]) == '{"b": 2}'


def test_remove_last_property() -> None:
    assert _remove('{\n\t"a": 1,\n\t"b": 2\n}', ["b"]) == '{\n\t"a": 1\n}'


def test_remove_only_property() -> None:
    assert _remove('{"a": 1}', ["a"]) == "{}"


def test_remove_missing_property_is_noop() -> None:
    assert jsonc.remove_property('{"a": 1}', ["b"], TABS) == []
    assert jsonc.remove_property('{"a": 1}', ["x", "y"], TABS) == []


# ---------------------------------------------------------------------------
# apply_edits
# ---------------------------------------------------------------------------


def test_apply_edits_in_any_order() -> None:
    edits = [jsonc.Edit(0, 1, "A"), jsonc.Edit(4, 1, "E")]
    assert jsonc.apply_edits("abcde", edits) == "AbcdE"
    assert jsonc.apply_edits("abcde", list(reversed(edits))) == "AbcdE"


def test_apply_edits_rejects_overlap() -> None:
    with pytest.raises(ValueError):
        jsonc.apply_edits("abcde", [jsonc.Edit(0, 3, "x"), jsonc.Edit(2, 1, "y")])
