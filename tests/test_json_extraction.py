"""
extract_json のテスト
"""

import pytest

from src.devjournal.exceptions import MalformedModelOutputError
from src.devjournal.json_extraction import JsonKind, extract_json


def test_extracts_object_embedded_in_prose():
    """前後に文章がある応答からオブジェクトを抽出"""
    summary = {
        "overview": "x",
        "insights": ["a", "b", "c"],
        "achievements": [],
        "technologies": [],
        "recommendations": ["r1", "r2", "r3"],
    }
    text = (
        'Here you go: {"overview":"x","insights":["a","b","c"],"achievements":[],'
        '"technologies":[],"recommendations":["r1","r2","r3"]}\nHope this helps!'
    )

    assert extract_json(text, JsonKind.OBJECT) == summary


def test_object_match_is_greedy_across_code_fence():
    """コードフェンス付きでも最初の { から最後の } までを使う"""
    text = '```json\n{\n  "overview": "nested {braces} ok",\n  "n": {"a": 1}\n}\n```'

    value = extract_json(text, "object")

    assert value == {"overview": "nested {braces} ok", "n": {"a": 1}}


def test_extracts_array():
    text = 'Sure! [{"title": "A", "content": "B"}] Done.'

    assert extract_json(text, JsonKind.ARRAY) == [{"title": "A", "content": "B"}]


@pytest.mark.parametrize(
    "text",
    [
        "I could not analyze these entries.",
        "",
        "only an opening { brace",
    ],
)
def test_reply_without_braces_is_malformed(text):
    with pytest.raises(MalformedModelOutputError):
        extract_json(text, JsonKind.OBJECT)


def test_unparseable_candidate_is_malformed():
    with pytest.raises(MalformedModelOutputError):
        extract_json("{overview: 'not json'}", JsonKind.OBJECT)


def test_two_objects_are_not_split():
    """貪欲マッチなので2つのオブジェクトは1つの不正JSONとして扱われる"""
    with pytest.raises(MalformedModelOutputError):
        extract_json('{"a": 1} and {"b": 2}', JsonKind.OBJECT)


def test_array_kind_rejects_reply_without_brackets():
    with pytest.raises(MalformedModelOutputError):
        extract_json('{"title": "A"}', JsonKind.ARRAY)
