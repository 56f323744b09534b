import json

import pytest

from orfo.spellcheck.sanitizer import (
    PARSE_ERROR,
    extract_outer_object,
    iter_outer_objects,
    parse_response,
    recover_json_object,
)

VALID = {"results": [{"word": "salam", "isCorrect": True, "suggestions": []}]}


def test_valid_json_parses_directly():
    parsed = parse_response(json.dumps(VALID))
    assert parsed.error is None
    assert [r.word for r in parsed.results] == ["salam"]


def test_code_fences_are_stripped():
    raw = '```json\n{"results": [{"word":"salam","isCorrect":true,"suggestions":[]}]}\n```'
    parsed = parse_response(raw)
    assert len(parsed.results) == 1
    assert parsed.results[0].is_correct is True


def test_plain_text_degrades():
    parsed = parse_response("not json at all")
    assert parsed.results == []
    assert parsed.error == PARSE_ERROR
    assert parsed.raw_response == "not json at all"
    dumped = parsed.model_dump(by_alias=True)
    assert dumped["rawResponse"] == "not json at all"


def test_raw_response_is_truncated():
    parsed = parse_response("x" * 1000)
    assert len(parsed.raw_response) == 500


def test_nested_object_surrounded_by_prose():
    raw = (
        'Here you go: {"results": [{"word": "a", "isCorrect": true, "suggestions": []}], '
        '"meta": {"x": {"y": 1}}} Hope this helps {not json}'
    )
    parsed = parse_response(raw)
    assert parsed.error is None
    assert len(parsed.results) == 1


def test_extract_ignores_braces_inside_strings():
    assert extract_outer_object('noise {"a": "}{"} tail }') == '{"a": "}{"}'
    assert extract_outer_object("no object here") is None


def test_trailing_commas_are_removed():
    raw = '{"results": [{"word": "a", "isCorrect": false, "suggestions": ["b",],},]}'
    parsed = parse_response(raw)
    assert parsed.error is None
    assert parsed.results[0].suggestions == ["b"]


def test_double_escaped_quotes_are_repaired():
    raw = '{\\"results\\": [{\\"word\\": \\"salam\\", \\"isCorrect\\": true, \\"suggestions\\": []}]}'
    parsed = parse_response(raw)
    assert parsed.error is None
    assert parsed.results[0].word == "salam"


def test_literal_newline_inside_string_value():
    raw = '{"results": [{"word": "sa\nlam", "isCorrect": true, "suggestions": []}]}'
    parsed = parse_response(raw)
    assert parsed.results[0].word == "sa lam"


def test_stray_quote_inside_value_is_scrubbed():
    raw = '{"results": [{"word": "sa"lam", "isCorrect": false, "suggestions": []}]}'
    parsed = parse_response(raw)
    assert parsed.error is None
    assert parsed.results[0].word == "salam"
    assert parsed.results[0].is_correct is False


def test_unusable_entries_are_dropped_and_fields_defaulted():
    raw = json.dumps(
        {
            "results": [
                {"word": "a", "isCorrect": False, "suggestions": None},
                "junk",
                {"isCorrect": True},
                {"word": "b", "start": "x", "end": "y"},
            ]
        }
    )
    parsed = parse_response(raw)
    assert [r.word for r in parsed.results] == ["a", "b"]
    assert parsed.results[0].suggestions == []
    assert parsed.results[1].is_correct is True
    assert parsed.results[1].start is None


def test_statistics_are_kept():
    raw = json.dumps({"results": [], "statistics": {"totalWords": 3}})
    assert parse_response(raw).statistics == {"totalWords": 3}


@pytest.mark.parametrize(
    "raw",
    ["", "{", "}", "{{{{", "\x00\xff�", "[1, 2]", "null", "42", '{"results": "nope"}', b"\x89PNG\r\n", None, 42],
)
def test_parse_never_raises(raw):
    parsed = parse_response(raw)
    assert isinstance(parsed.results, list)


def test_recover_json_object_for_other_payloads():
    raw = 'Sure!\n```json\n{"suggestions": [{"word": "salam", "confidence": 95}]}\n```'
    assert recover_json_object(raw) == {"suggestions": [{"word": "salam", "confidence": 95}]}
    assert recover_json_object("[1, 2, 3]") is None


def test_object_after_brace_pair_in_prose():
    raw = 'note {x}: {"results": [{"word": "qala", "isCorrect": false, "suggestions": ["qála"]}]}'
    parsed = parse_response(raw)
    assert parsed.error is None
    assert [r.word for r in parsed.results] == ["qala"]


def test_iter_outer_objects_skips_nested_objects():
    text = 'a {x} b {"c": {"d": 1}} e {'
    assert list(iter_outer_objects(text)) == ["{x}", '{"c": {"d": 1}}', "{"]


def test_bytes_reply_degrades_to_decoded_text():
    parsed = parse_response("qala emes".encode("utf-8"))
    assert parsed.error == PARSE_ERROR
    assert parsed.raw_response == "qala emes"
