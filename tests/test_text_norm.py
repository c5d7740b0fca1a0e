# path: navigoplan-api/tests/test_text_norm.py

from __future__ import annotations

import pytest

from navigoplan.services.text_norm import (
    clean_parenthetical,
    contains_greek,
    is_clean_paren,
    is_name_like,
    normalize,
    sanitize_name,
    strip_parentheticals,
)


def test_normalize_folds_case_and_accents():
    assert normalize("  Spétsès ") == "spetses"
    assert normalize("Spetses") == normalize("SPÉTSES")
    assert normalize("Σπέτσες") == "σπετσες"
    assert normalize(None) == ""


@pytest.mark.parametrize("raw", ["Ύδρα", "Agia Marina (Aegina)", "  Porto Chéli ", "Άγιος Νικόλαος", ""])
def test_normalize_is_idempotent(raw):
    once = normalize(raw)
    assert normalize(once) == once


def test_contains_greek():
    assert contains_greek("Αίγινα")
    assert contains_greek("Port Ἄγιος")
    assert not contains_greek("Aegina")
    assert not contains_greek("")


def test_is_name_like_accepts_place_names():
    assert is_name_like("Agia Marina (Aegina)")
    assert is_name_like("Porto-Cheli")
    assert is_name_like("Όρμος Δοκού")


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "Προσοχή: ρηχά νερά",
        "Arrival from the north is exposed to the meltemi",
        "Depth 2.5 m",
        "Port-4",
        "a b c d e f g",
        "x" * 41,
    ],
)
def test_is_name_like_rejects_notes(raw):
    assert not is_name_like(raw)


def test_clean_parenthetical_filters():
    assert is_clean_paren("Aegina")
    assert is_clean_paren("Agios Nikolaos")
    assert not is_clean_paren("fuel 24h")
    assert not is_clean_paren("crowded Saturday")
    assert not is_clean_paren("one two three four")
    assert not is_clean_paren("")
    assert clean_parenthetical("Poros (fuel) (Saronic)") == "Saronic"
    assert clean_parenthetical("Poros") is None


def test_sanitize_name_keeps_one_clean_parenthetical():
    assert sanitize_name("Agia Marina (Aegina) (crowded Sat)") == "Agia Marina (Aegina)"
    assert sanitize_name("Poros (fuel 24h)") == "Poros"
    assert sanitize_name("  Hydra   Port ") == "Hydra Port"
    assert sanitize_name(None) == ""


def test_strip_parentheticals():
    assert strip_parentheticals("Vathy (Ithaca)") == "Vathy"
    assert strip_parentheticals("Kolona Bay (Kythnos) (north)") == "Kolona Bay"
