# path: navigoplan-api/navigoplan/services/plan_suggestions.py

from __future__ import annotations

from typing import Any, Dict, List, Sequence
import json
import logging
import re

from navigoplan.models.itinerary_models import PlanSuggestion
from navigoplan.services.text_norm import normalize

log = logging.getLogger(__name__)

_fence_re = re.compile(r"```json\s*([\s\S]*?)```", re.IGNORECASE)


def extract_json(text: str) -> str:
    """Pull the JSON object out of a model answer (fenced block or first {...} span)."""
    m = _fence_re.search(text or "")
    if m and m.group(1).strip():
        return m.group(1).strip()
    first = (text or "").find("{")
    last = (text or "").rfind("}")
    if first >= 0 and last > first:
        return text[first:last + 1].strip()
    return "{}"


def pick_first_valid_names(candidates: Sequence[Any], allowed: Sequence[str], limit: int) -> List[str]:
    """Keep candidates that are allowed options (normalized), deduped, at most `limit`."""
    by_key: Dict[str, str] = {}
    for a in allowed:
        by_key.setdefault(normalize(a), a)

    out: List[str] = []
    seen = set()
    for c in candidates:
        if len(out) >= limit:
            break
        if not isinstance(c, str):
            continue
        key = normalize(c)
        hit = by_key.get(key)
        if hit is None or key in seen:
            continue
        seen.add(key)
        out.append(hit)
    return out


def sanitize_suggestion(text: str, mode: str, days: int, allowed: Sequence[str]) -> PlanSuggestion:
    try:
        raw = json.loads(extract_json(text))
    except ValueError:
        log.warning("plan suggestion is not valid JSON, ignoring it")
        raw = {}
    if not isinstance(raw, dict):
        raw = {}

    if mode == "Region":
        vias = raw.get("vias") if isinstance(raw.get("vias"), list) else []
        return PlanSuggestion(mode="Region", vias=pick_first_valid_names(vias, allowed, max(0, days - 1)))

    stops = raw.get("dayStops", raw.get("day_stops"))
    stops = stops if isinstance(stops, list) else []
    picked = pick_first_valid_names(stops, allowed, days)
    # Short answers are padded with the last valid stop (or the first option).
    while len(picked) < days and (picked or allowed):
        picked.append(picked[-1] if picked else allowed[0])
    return PlanSuggestion(mode="Custom", day_stops=picked[:days])
