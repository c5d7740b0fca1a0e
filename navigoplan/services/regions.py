# path: navigoplan-api/navigoplan/services/regions.py

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from navigoplan.services.text_norm import normalize


# Hand-curated cruising circuits; closed rings repeat the home port at the end.
REGION_RINGS: Dict[str, List[str]] = {
    "Saronic": ["Alimos", "Aegina", "Agistri", "Poros", "Hydra", "Spetses", "Ermioni", "Porto Cheli", "Alimos"],
    "Cyclades": [
        "Lavrio", "Kea", "Kythnos", "Syros", "Mykonos", "Paros", "Naxos",
        "Ios", "Santorini", "Milos", "Sifnos", "Serifos", "Lavrio",
    ],
    "Ionian": [
        "Corfu", "Paxos", "Antipaxos", "Lefkada", "Meganisi", "Kalamos",
        "Kastos", "Ithaca", "Kefalonia", "Zakynthos", "Lefkada",
    ],
    "Dodecanese": ["Rhodes", "Symi", "Kos", "Kalymnos", "Patmos", "Rhodes"],
    "Sporades": ["Volos", "Skiathos", "Skopelos", "Alonissos", "Volos"],
    "NorthAegean": [
        "Thessaloniki", "Nea Moudania", "Sani Marina", "Nikiti", "Vourvourou",
        "Ormos Panagias", "Ouranoupoli", "Kavala", "Thassos", "Samothraki",
        "Lemnos", "Lesvos", "Chios", "Samos", "Ikaria",
    ],
    "Crete": ["Chania", "Rethymno", "Heraklion", "Agios Nikolaos", "Chania"],
}

# Coarse region inference: substring keywords, checked in order.
REGION_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Ionian", ("lefka", "corfu", "paxos", "preveza", "zakynthos")),
    ("Saronic", ("aegina", "hydra", "poros", "spetses", "alimos")),
    ("Sporades", ("skiathos", "skopelos", "alonissos", "volos")),
    ("Dodecanese", ("rhodes", "kos", "patmos")),
    ("NorthAegean", ("lesvos", "chios", "samos", "thessaloniki")),
    ("Crete", ("chania", "heraklion", "crete")),
)
DEFAULT_REGION = "Cyclades"

REGION_ADVISORIES: Dict[str, str] = {
    "Cyclades": "Meltemi possible; prefer morning passages.",
    "Saronic": "Sheltered waters; ideal for families.",
    "Ionian": "Calm channels and green coastlines; excellent anchorages.",
    "Dodecanese": "Historic harbours; longer open-water legs.",
    "Sporades": "Marine park and pine-covered islands.",
    "NorthAegean": "Authentic harbours, Halkidiki included.",
    "Crete": "Longer legs; arrange fuel and berths ahead.",
}


def auto_pick_region(start: Optional[str], end: Optional[str]) -> str:
    s = normalize(f"{start or ''} {end or ''}")
    for region, keywords in REGION_KEYWORDS:
        if any(k in s for k in keywords):
            return region
    return DEFAULT_REGION


def resolve_region(choice: Optional[str], start: Optional[str], end: Optional[str]) -> str:
    if choice and choice != "Auto" and choice in REGION_RINGS:
        return choice
    return auto_pick_region(start, end)


def ring_for(region: Optional[str]) -> List[str]:
    return list(REGION_RINGS.get(region or "", []))
