# path: navigoplan-api/navigoplan/services/port_catalog.py

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple
import json
import logging
import re
import threading

from pydantic import ValidationError

from navigoplan.models.port_models import (
    CanonicalPortRow,
    SeaGuideName,
    SeaGuideRow,
    PortRecord,
    PORT_CATEGORIES,
    REGION_KEYS,
)
from navigoplan.services.text_norm import (
    clean_parenthetical,
    contains_greek,
    is_name_like,
    normalize,
    sanitize_name,
    strip_parentheticals,
)

log = logging.getLogger(__name__)


DEFAULT_CATEGORY = "harbor"

# Sea guide crew.type / category values -> catalog category
SEAGUIDE_CATEGORY_MAP = {
    "bay": "anchorage",
    "cove": "anchorage",
    "anchorage": "anchorage",
    "marina": "marina",
    "harbor": "harbor",
    "harbour": "harbor",
    "port": "harbor",
    "pier": "harbor",
    "quay": "harbor",
    "spot": "spot",
}

# Sea guide region labels -> region key (matched on the normalized label)
SEAGUIDE_REGION_HINTS: Tuple[Tuple[str, str], ...] = (
    ("saronic", "Saronic"),
    ("argolic", "Saronic"),
    ("σαρωνικ", "Saronic"),
    ("cyclad", "Cyclades"),
    ("κυκλαδ", "Cyclades"),
    ("ionian", "Ionian"),
    ("ιονι", "Ionian"),
    ("dodecanese", "Dodecanese"),
    ("δωδεκαν", "Dodecanese"),
    ("sporad", "Sporades"),
    ("σποραδ", "Sporades"),
    ("north aegean", "NorthAegean"),
    ("northaegean", "NorthAegean"),
    ("halkidiki", "NorthAegean"),
    ("chalkidiki", "NorthAegean"),
    ("βορειο αιγαιο", "NorthAegean"),
    ("crete", "Crete"),
    ("κρητ", "Crete"),
)

_slug_re = re.compile(r"[^a-z0-9]+")


def guess_category_from_name(name: str) -> str:
    n = normalize(name)
    if re.search(r"\bmarina\b", n):
        return "marina"
    if re.search(r"\b(cove|bay|anchorage)\b", n) or "ορμος" in n or "κολπ" in n:
        return "anchorage"
    if re.search(r"\bcanal\b", n):
        return "spot"
    return DEFAULT_CATEGORY


def region_key_from_label(label: Optional[str]) -> Optional[str]:
    if not label:
        return None
    raw = label.strip()
    if raw in REGION_KEYS:
        return raw
    n = normalize(raw)
    for hint, key in SEAGUIDE_REGION_HINTS:
        if hint in n:
            return key
    return None


def slugify(s: str) -> str:
    return _slug_re.sub("-", normalize(s)).strip("-")


def fallback_id(name: str) -> str:
    """Slug of the name; Greek-only names keep their normalized form instead."""
    return slugify(name) or "-".join(normalize(name).split())


def clean_aliases(raw: Iterable[str], exclude: Iterable[str] = ()) -> List[str]:
    """Sanitize, keep name-like strings, dedupe on the normalized key."""
    seen = {normalize(x) for x in exclude}
    out: List[str] = []
    for a in raw:
        s = sanitize_name(a)
        if not s or not is_name_like(s):
            continue
        key = normalize(s)
        if key in seen:
            continue
        seen.add(key)
        out.append(s)
    return out


# --- Adapters: raw row -> catalog record candidate ---


def valid_coords(lat: Optional[float], lon: Optional[float]) -> bool:
    return lat is not None and lon is not None and -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


def canonical_to_record(row: CanonicalPortRow) -> Optional[Dict[str, Any]]:
    name = sanitize_name(row.name)
    if not name or not valid_coords(row.lat, row.lon):
        return None
    region = region_key_from_label(row.region)
    if region is None:
        return None
    category = row.category if row.category in PORT_CATEGORIES else DEFAULT_CATEGORY
    return {
        "id": (row.id or "").strip() or fallback_id(name),
        "name": name,
        "lat": row.lat,
        "lon": row.lon,
        "region": region,
        "category": category,
        "aliases": clean_aliases(row.aliases, exclude=[name]),
        "source": "canonical",
    }


def pick_display_name(el: Optional[str], en: Optional[str]) -> Tuple[str, List[str]]:
    """Prefer the non-Greek of two bilingual names; the other one becomes an alias."""
    el = sanitize_name(el)
    en = sanitize_name(en)
    if el and en:
        if contains_greek(en) and not contains_greek(el):
            return el, [en]
        return en, [el]
    return (en or el), []


def seaguide_to_record(row: SeaGuideRow) -> Optional[Dict[str, Any]]:
    if isinstance(row.name, SeaGuideName):
        name, extra = pick_display_name(row.name.el, row.name.en)
    else:
        name, extra = sanitize_name(row.name), []
    crew = row.crew
    if not name or crew is None or not valid_coords(crew.lat, crew.lon):
        return None
    region = region_key_from_label(row.region) or region_key_from_label(row.area)
    if region is None:
        return None

    raw_cat = normalize(crew.type or row.category or "")
    category = SEAGUIDE_CATEGORY_MAP.get(raw_cat) or guess_category_from_name(name)

    return {
        "id": (row.id or "").strip() or f"sg-{fallback_id(name)}",
        "name": name,
        "lat": crew.lat,
        "lon": crew.lon,
        "region": region,
        "category": category,
        "aliases": clean_aliases([*extra, *row.aliases, *row.alt_names], exclude=[name]),
        "source": "seaguide",
    }


# --- Source loading ---


def load_json_array(path: Optional[Path]) -> List[Any]:
    """Read a JSON array; anything unreadable or not an array is an empty source."""
    if path is None:
        return []
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        log.warning("port source %s unreadable, treating as empty: %s", path, e)
        return []
    if not isinstance(data, list):
        log.warning("port source %s is not a JSON array, treating as empty", path)
        return []
    return data


def parse_rows(items: List[Any], schema):
    rows = []
    for idx, item in enumerate(items):
        if not isinstance(item, dict):
            log.debug("skipping non-object row #%d for %s", idx, schema.__name__)
            continue
        try:
            rows.append(schema.model_validate(item))
        except ValidationError as e:
            log.debug("skipping invalid %s row #%d: %s", schema.__name__, idx, e.error_count())
    return rows


# --- Catalog ---


class PortCatalog:
    """Read-only, merged port list plus its normalized lookup keys."""

    def __init__(self, records: List[PortRecord]):
        self.records: List[PortRecord] = list(records)
        self.by_id: Dict[str, PortRecord] = {r.id: r for r in self.records}
        self.by_key: Dict[str, PortRecord] = {}
        self.labels: Dict[str, str] = {}
        for r in self.records:
            for k in record_keys(r.name, r.aliases):
                self.by_key.setdefault(k, r)
            self.labels[r.id] = display_label(r)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def label_of(self, record: PortRecord) -> str:
        return self.labels.get(record.id, record.name)

    def count_by_source(self, source: str) -> int:
        return sum(1 for r in self.records if r.source == source)


def record_keys(name: str, aliases: Iterable[str]) -> List[str]:
    keys = []
    for s in [name, *aliases]:
        k = normalize(s)
        if k and k not in keys:
            keys.append(k)
    return keys


def display_label(record: PortRecord) -> str:
    """First alias with a clean place parenthetical, e.g. "Agia Marina (Aegina)"; else the name."""
    for a in record.aliases:
        if clean_parenthetical(a) and strip_parentheticals(a):
            return a
    return record.name


def merge_candidates(candidates: Iterable[Dict[str, Any]]) -> List[PortRecord]:
    rows: List[Dict[str, Any]] = []
    key_owner: Dict[str, int] = {}
    ids: set = set()

    for cand in candidates:
        keys = record_keys(cand["name"], cand["aliases"])
        hit = next((key_owner[k] for k in keys if k in key_owner), None)

        if hit is not None:
            row = rows[hit]
            incoming = [cand["name"]] if is_name_like(cand["name"]) else []
            for alias in [*incoming, *cand["aliases"]]:
                k = normalize(alias)
                if k and k not in key_owner:
                    row["aliases"].append(alias)
                    key_owner[k] = hit
            continue

        row = dict(cand, aliases=[])
        base_id, n = row["id"], 2
        while row["id"] in ids:
            row["id"] = f"{base_id}-{n}"
            n += 1
        try:
            PortRecord(**row)
        except ValidationError as e:
            # a rejected row owns no keys, so later matches start a row of their own
            log.warning("dropping port %r: %s", row.get("name"), e.error_count())
            continue

        idx = len(rows)
        key_owner[normalize(row["name"])] = idx
        for alias in cand["aliases"]:
            k = normalize(alias)
            if k in key_owner:
                continue
            row["aliases"].append(alias)
            key_owner[k] = idx

        ids.add(row["id"])
        rows.append(row)

    records = [PortRecord(**row) for row in rows]
    records.sort(key=lambda r: (normalize(r.name), r.id))
    return records


def build_port_catalog(canonical_path: Optional[Path], seaguide_path: Optional[Path]) -> PortCatalog:
    canonical_rows = parse_rows(load_json_array(canonical_path), CanonicalPortRow)
    seaguide_rows = parse_rows(load_json_array(seaguide_path), SeaGuideRow)

    candidates = [c for c in (canonical_to_record(r) for r in canonical_rows) if c]
    n_canonical = len(candidates)
    candidates += [c for c in (seaguide_to_record(r) for r in seaguide_rows) if c]

    catalog = PortCatalog(merge_candidates(candidates))
    log.info(
        "port catalog built: %d ports (%d canonical rows, %d sea guide rows, %d sea guide only)",
        len(catalog),
        n_canonical,
        len(candidates) - n_canonical,
        catalog.count_by_source("seaguide"),
    )
    return catalog


class PortCatalogCache:
    """Builds the catalog once per process; shared read-only afterwards."""

    def __init__(self, canonical_path: Optional[Path], seaguide_path: Optional[Path]):
        self.canonical_path = canonical_path
        self.seaguide_path = seaguide_path
        self._catalog: Optional[PortCatalog] = None
        self._lock = threading.Lock()

    def get(self) -> PortCatalog:
        if self._catalog is None:
            with self._lock:
                if self._catalog is None:
                    self._catalog = build_port_catalog(self.canonical_path, self.seaguide_path)
        return self._catalog

    def reset(self) -> None:
        with self._lock:
            self._catalog = None


# --- Dataset validation (ports.v1.json) ---


def validate_canonical_rows(data: Any) -> List[str]:
    if not isinstance(data, list):
        return ["root must be an array of port objects"]

    errors: List[str] = []
    ids: set = set()
    for idx, p in enumerate(data):
        if not isinstance(p, dict):
            errors.append(f"#{idx}: not an object")
            continue
        where = f"#{idx} (id={p.get('id')})"
        for f in ("id", "name", "lat", "lon", "category", "region"):
            if f not in p:
                errors.append(f'{where}: missing "{f}"')
        if p.get("id") is not None:
            if p["id"] in ids:
                errors.append(f'{where}: duplicate id "{p["id"]}"')
            ids.add(p["id"])
        lat, lon = p.get("lat"), p.get("lon")
        if isinstance(lat, bool) or not isinstance(lat, (int, float)) or not -90 <= lat <= 90:
            errors.append(f"{where}: lat must be number in [-90, 90]")
        if isinstance(lon, bool) or not isinstance(lon, (int, float)) or not -180 <= lon <= 180:
            errors.append(f"{where}: lon must be number in [-180, 180]")
        if p.get("category") not in PORT_CATEGORIES:
            errors.append(f'{where}: invalid category "{p.get("category")}"')
        if p.get("region") not in REGION_KEYS:
            errors.append(f'{where}: invalid region "{p.get("region")}"')
        if "aliases" in p and not isinstance(p["aliases"], list):
            errors.append(f"{where}: aliases must be an array")
    return errors
