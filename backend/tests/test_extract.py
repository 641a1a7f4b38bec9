import json

from hub.services.extract import extract_json, find_json_span
from hub.services.features import (
    ats_fallback,
    habit_fallback,
    job_fallback,
    knowledge_fallback,
    support_fallback,
)

ALL_FALLBACKS = [support_fallback, habit_fallback, knowledge_fallback, ats_fallback, job_fallback]


def test_plain_json_object():
    obj = {"score": 87, "missingKeywords": ["Kubernetes"], "nested": {"a": [1, 2]}}
    assert extract_json(json.dumps(obj), ats_fallback) == obj


def test_object_wrapped_in_prose_and_fences():
    obj = {"reply": "Hi!", "shouldEscalate": False, "sentiment": "positive"}
    text = "Sure, here you go:\n```json\n" + json.dumps(obj) + "\n```\nAnything else?"
    assert extract_json(text, support_fallback) == obj


def test_no_validation_of_shape():
    # extra and missing fields pass through untouched
    assert extract_json('{"unexpected": true}', job_fallback) == {"unexpected": True}


def test_no_braces_uses_fallback_with_raw_text():
    text = "I could not produce JSON today."
    assert extract_json(text, support_fallback) == {"reply": text, "shouldEscalate": False}
    assert extract_json(text, habit_fallback) == {"insights": [{"type": "suggestion", "message": text}]}
    assert extract_json(text, knowledge_fallback) == {"answer": text, "citations": [], "confidence": "medium"}
    assert extract_json(text, ats_fallback) == {"score": 50, "suggestions": [], "rawAnalysis": text}
    assert extract_json(text, job_fallback) == {"bullets": [], "coverLetter": text, "summary": ""}


def test_truncated_json_falls_back_without_raising():
    text = 'Result: {"score": 70, "suggestions": [ {"category": "format"'
    for fallback in ALL_FALLBACKS:
        assert extract_json(text, fallback) == fallback(text)


def test_unbalanced_span_falls_back():
    text = '{"answer": "x"} and then a stray } brace'
    # greedy span runs to the last brace and is not valid JSON
    assert find_json_span(text) == '{"answer": "x"} and then a stray }'
    assert extract_json(text, knowledge_fallback) == knowledge_fallback(text)


def test_two_objects_are_captured_as_one_span():
    text = 'first {"a": 1} second {"b": 2}'
    assert find_json_span(text) == '{"a": 1} second {"b": 2}'
    assert extract_json(text, job_fallback)["coverLetter"] == text


def test_empty_and_none_text():
    assert extract_json("", support_fallback) == {"reply": "", "shouldEscalate": False}
    assert extract_json(None, ats_fallback) == {"score": 50, "suggestions": [], "rawAnalysis": ""}


def test_deeply_nested_garbage_does_not_raise():
    text = '{"a": ' + "[" * 100000 + "]" * 100000 + "}"
    assert extract_json(text, support_fallback) == support_fallback(text)
