# path: navigoplan-api/tests/conftest.py

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from navigoplan.core.config import Settings
from navigoplan.main import create_app
from navigoplan.services.name_resolver import make_resolver
from navigoplan.services.port_catalog import build_port_catalog


CANONICAL_ROWS = [
    {"id": "alimos", "name": "Alimos", "lat": 37.92, "lon": 23.70, "region": "Saronic", "category": "marina",
     "aliases": ["Άλιμος", "Alimos Marina"]},
    {"id": "aegina", "name": "Aegina", "lat": 37.75, "lon": 23.43, "region": "Saronic", "category": "harbor",
     "aliases": ["Αίγινα"]},
    {"id": "agia-marina", "name": "Agia Marina", "lat": 37.744, "lon": 23.536, "region": "Saronic",
     "category": "harbor", "aliases": ["Agia Marina (Aegina)"]},
    {"id": "poros", "name": "Poros", "lat": 37.50, "lon": 23.45, "region": "Saronic", "category": "harbor",
     "aliases": ["Πόρος", "Poros (fuel 24h)"]},
    {"id": "hydra", "name": "Hydra", "lat": 37.350, "lon": 23.465, "region": "Saronic", "category": "harbor",
     "aliases": ["Ύδρα", "Hydra (crowded Saturday)"]},
    {"id": "spetses", "name": "Spetses", "lat": 37.262, "lon": 23.159, "region": "Saronic", "category": "harbor",
     "aliases": ["Σπέτσες"]},
    {"id": "ithaca", "name": "Ithaca", "lat": 38.367, "lon": 20.719, "region": "Ionian", "category": "harbor",
     "aliases": ["Ιθάκη", "Vathy (Ithaca)"]},
    {"id": "lavrio", "name": "Lavrio", "lat": 37.713, "lon": 24.057, "region": "Cyclades", "category": "marina",
     "aliases": []},
    {"id": "syros", "name": "Syros", "lat": 37.441, "lon": 24.943, "region": "Cyclades", "category": "harbor",
     "aliases": ["Ermoupoli"]},
    {"id": "mykonos", "name": "Mykonos", "lat": 37.446, "lon": 25.327, "region": "Cyclades", "category": "marina",
     "aliases": ["Μύκονος", "Arrival from the north is exposed to the meltemi"]},
    # skipped: no latitude / unknown region
    {"id": "nowhere", "name": "Nowhere", "lat": None, "lon": 23.0, "region": "Saronic", "category": "harbor"},
    {"id": "atlantis", "name": "Atlantis", "lat": 37.0, "lon": 23.0, "region": "Atlantic", "category": "harbor"},
]

SEAGUIDE_ROWS = [
    {"id": "sg-aegina", "name": {"el": "Αίγινα", "en": "Aegina"}, "region": "Saronic Gulf",
     "crew": {"type": "harbour", "lat": 37.7466, "lon": 23.4275}, "alt_names": ["Aegina Town"]},
    {"id": "sg-dokos", "name": {"el": "Όρμος Δοκού", "en": "Dokos Bay"}, "region": "Saronic Gulf",
     "crew": {"type": "bay", "lat": 37.345, "lon": 23.338}},
    {"id": "sg-vlychada", "name": {"el": "Vlychada", "en": "Βλυχάδα"}, "region": "Κυκλάδες",
     "crew": {"type": "marina", "lat": 36.337, "lon": 25.436}},
    {"id": "sg-broken", "name": {"en": "Broken Quay"}, "region": "Cyclades", "crew": {"type": "quay", "lat": "abc", "lon": 24.1}},
    {"id": "sg-no-crew", "name": {"en": "Nowhere Bay"}, "region": "Cyclades"},
    "stray note row",
]

# canonical rows that survive plus the two sea-guide-only ports
CATALOG_SIZE = 12


def write_json(path, data):
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def source_paths(tmp_path):
    canonical = write_json(tmp_path / "ports.v1.json", CANONICAL_ROWS)
    seaguide = write_json(tmp_path / "sea_guide.json", SEAGUIDE_ROWS)
    return canonical, seaguide


@pytest.fixture
def catalog(source_paths):
    return build_port_catalog(*source_paths)


@pytest.fixture
def resolver(catalog):
    return make_resolver(catalog)


@pytest.fixture
def client(source_paths):
    canonical, seaguide = source_paths
    settings = Settings(PORTS_CANONICAL_PATH=canonical, PORTS_SEAGUIDE_PATH=seaguide, LOG_LEVEL="WARNING")
    with TestClient(create_app(settings)) as c:
        yield c
