"""
Tests for generation.extractor: JSON recovery from model text, the raw
fallback, and weight normalization.
"""
import json

import pytest

from errors import MalformedResponse
from generation import extract_generated_text, extract_item, normalize_weight


def test_clean_json_round_trips(weapon_item):
    assert extract_item(json.dumps(weapon_item)).item == weapon_item


def test_commentary_and_code_fences_are_ignored(weapon_item):
    text = "Sure! Here you go:\n```json\n" + json.dumps(weapon_item, indent=2) + "\n```\nLet me know."
    extraction = extract_item(text)

    assert extraction.found
    assert extraction.item == weapon_item
    assert extraction.raw == text


@pytest.mark.parametrize("text", [
    "",
    "I cannot generate that item.",
    "only an opening { brace",
    "only a closing } brace",
    "} reversed {",
])
def test_no_object_falls_back_to_raw_text(text):
    extraction = extract_item(text)

    assert extraction.item is None
    assert not extraction.found
    assert extraction.raw == text


def test_unparseable_span_is_malformed():
    with pytest.raises(MalformedResponse) as exc_info:
        extract_item('Result: {"Name": "Frostbrand", "Weight": } trailing')

    assert exc_info.value.fragment == '{"Name": "Frostbrand", "Weight": }'
    assert exc_info.value.to_dict()["error"] == "MalformedResponse"


def test_span_runs_from_first_open_to_last_close():
    text = 'Note {not json} then {"Name": "x"}'
    with pytest.raises(MalformedResponse):
        extract_item(text)


@pytest.mark.parametrize("weight,expected", [
    ("1 lb.", "1 lb."),
    ("1 lbs.", "1 lb."),
    ("2 lb.", "2 lbs."),
    ("2 lbs.", "2 lbs."),
    ("1 1/2 lb.", "1 1/2 lbs."),
    ("0.5 lb.", "0.5 lbs."),
    ("10 pounds", "10 lbs."),
])
def test_weight_normalization(weight, expected):
    assert normalize_weight({"Weight": weight})["Weight"] == expected


@pytest.mark.parametrize("item", [
    {"Name": "Ring"},
    {"Weight": 3},
    {"Weight": ["1", "lb."]},
    {"Weight": "negligible"},
])
def test_weight_left_alone(item):
    before = dict(item)
    assert normalize_weight(item) == before


def test_generated_text_from_candidates():
    envelope = {"candidates": [{"content": {"parts": [{"text": "{\"a\": "}, {"text": "1}"}]}}]}
    assert extract_generated_text(envelope) == '{"a": 1}'


def test_generated_text_from_legacy_predictions():
    assert extract_generated_text({"predictions": [{"content": "hello"}]}) == "hello"


@pytest.mark.parametrize("envelope", [
    {},
    {"candidates": []},
    {"candidates": [{"finishReason": "SAFETY"}]},
    {"promptFeedback": {"blockReason": "SAFETY"}},
    ["not", "a", "dict"],
])
def test_generated_text_missing(envelope):
    assert extract_generated_text(envelope) is None
