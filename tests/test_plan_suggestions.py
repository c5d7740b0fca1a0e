# path: navigoplan-api/tests/test_plan_suggestions.py

from __future__ import annotations

from navigoplan.services.plan_suggestions import extract_json, pick_first_valid_names, sanitize_suggestion

ALLOWED = ["Aegina", "Hydra", "Poros", "Spetses"]


def test_extract_json_prefers_fenced_block():
    text = 'Sure! Here you go:\n```json\n{"vias": ["Hydra"]}\n```\nEnjoy {the trip}'
    assert extract_json(text) == '{"vias": ["Hydra"]}'


def test_extract_json_falls_back_to_braces():
    assert extract_json('Plan: {"vias": []} done') == '{"vias": []}'
    assert extract_json("no json here") == "{}"
    assert extract_json(None) == "{}"


def test_pick_first_valid_names():
    picked = pick_first_valid_names(["hydra", "Atlantis", 7, "ΠΟΡΟΣ", "Poros", "HYDRA", "Spetses"], ALLOWED, 2)
    assert picked == ["Hydra", "Poros"]


def test_region_suggestion_caps_vias():
    text = '```json\n{"vias": ["hydra", "Atlantis", "Poros", "Hydra", "Spetses"]}\n```'
    s = sanitize_suggestion(text, "Region", 3, ALLOWED)
    assert s.mode == "Region"
    assert s.vias == ["Hydra", "Poros"]
    assert s.day_stops == []


def test_custom_suggestion_is_padded_to_days():
    s = sanitize_suggestion('{"dayStops": ["Poros", "nowhere"]}', "Custom", 3, ALLOWED)
    assert s.day_stops == ["Poros", "Poros", "Poros"]


def test_custom_suggestion_accepts_snake_case_key():
    s = sanitize_suggestion('{"day_stops": ["Spetses", "Hydra"]}', "Custom", 2, ALLOWED)
    assert s.day_stops == ["Spetses", "Hydra"]


def test_garbage_answer_degrades_gracefully():
    assert sanitize_suggestion("I cannot help with that", "Region", 5, ALLOWED).vias == []
    assert sanitize_suggestion("{not: json}", "Custom", 2, ALLOWED).day_stops == ["Aegina", "Aegina"]
    assert sanitize_suggestion('["Hydra"]', "Custom", 1, []).day_stops == []
