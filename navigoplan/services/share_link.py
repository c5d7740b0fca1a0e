# path: navigoplan-api/navigoplan/services/share_link.py

"""
Planner state <-> shareable URL query.

Keys: mode, date, yt, speed, lph, ppl, dep, prefs, aud, wx, then either
start/end/days/region/vias (Region) or cstart/cdays/cstops (Custom).
List values are comma-joined with each item percent-encoded. Per-day notes
travel as base64url JSON in `notes`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, quote, unquote, urlencode
import base64
import binascii
import json
import math

from pydantic import ValidationError

from navigoplan.models.itinerary_models import MAX_DAYS, ItineraryRequest, RegionRouteRequest


DEFAULT_START = "Alimos"
DEFAULT_DAYS = 7
DEFAULT_SPEED = 20.0
DEFAULT_LPH = 180.0


class ShareLinkError(ValueError):
    pass


def encode_list(items: List[str]) -> str:
    return ",".join(quote(s, safe="") for s in items)


def decode_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [unquote(x) for x in value.split(",") if x]


def encode_notes(annotations: List[Dict[str, Any]]) -> str:
    raw = json.dumps(annotations, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_notes(value: str) -> List[Dict[str, Any]]:
    padded = value + "=" * (-len(value) % 4)
    try:
        data = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise ShareLinkError(f"notes parameter is not valid base64 JSON: {e}")
    if not isinstance(data, list):
        raise ShareLinkError("notes parameter must encode a list")
    return data


def _num(params: Dict[str, str], key: str, default: float) -> float:
    raw = params.get(key)
    if raw in (None, ""):
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ShareLinkError(f"{key} must be a number, got {raw!r}")
    if not math.isfinite(value):
        raise ShareLinkError(f"{key} must be finite, got {raw!r}")
    return value


def encode_share_query(req: ItineraryRequest) -> str:
    q: Dict[str, str] = {
        "mode": req.route.mode,
        "date": req.start_date.isoformat(),
        "yt": req.yacht.type,
        "speed": f"{req.yacht.cruise_speed_knots:g}",
    }
    if req.yacht.type == "Motor":
        q["lph"] = f"{req.yacht.liters_per_hour:g}"
        q["ppl"] = f"{req.yacht.price_per_liter:g}"
    if req.yacht.departure_time:
        q["dep"] = req.yacht.departure_time

    route = req.route
    if isinstance(route, RegionRouteRequest):
        q["start"] = route.start
        q["end"] = route.end
        q["days"] = str(route.days)
        q["region"] = route.region
        if route.vias:
            q["vias"] = encode_list(route.vias)
    else:
        q["cstart"] = route.start
        q["cdays"] = str(len(route.day_stops))
        q["cstops"] = encode_list(route.day_stops)

    if req.preferences:
        q["prefs"] = ",".join(req.preferences)
    q["aud"] = req.audience
    if req.weather_aware:
        q["wx"] = "1"
    if req.annotations:
        q["notes"] = encode_notes([a.model_dump(exclude_none=True) for a in req.annotations])
    q["autogen"] = "1"
    return urlencode(q)


def decode_share_query(query: str) -> ItineraryRequest:
    params = {k: v[-1] for k, v in parse_qs(query.lstrip("?"), keep_blank_values=True).items()}
    mode = params.get("mode") or "Region"
    yacht_type = params.get("yt") or "Motor"

    yacht: Dict[str, Any] = {
        "type": yacht_type,
        "cruise_speed_knots": _num(params, "speed", DEFAULT_SPEED),
        "liters_per_hour": _num(params, "lph", DEFAULT_LPH),
    }
    if params.get("ppl"):
        yacht["price_per_liter"] = _num(params, "ppl", 0.0)
    if params.get("dep"):
        yacht["departure_time"] = params["dep"]

    route: Dict[str, Any]
    if mode == "Region":
        start = params.get("start") or DEFAULT_START
        route = {
            "mode": "Region",
            "start": start,
            "end": params.get("end") or start,
            "days": int(_num(params, "days", DEFAULT_DAYS)),
            "region": params.get("region") or "Auto",
            "vias": decode_list(params.get("vias")),
        }
    elif mode == "Custom":
        stops = decode_list(params.get("cstops"))
        days = int(_num(params, "cdays", len(stops) or DEFAULT_DAYS))
        if not 1 <= days <= MAX_DAYS:
            raise ShareLinkError(f"cdays must be between 1 and {MAX_DAYS}")
        # Missing trailing stops stay blank so the route is rejected, not invented.
        stops = (stops + [""] * days)[:days]
        route = {"mode": "Custom", "start": params.get("cstart") or DEFAULT_START, "day_stops": stops, "days": days}
    else:
        raise ShareLinkError(f"unknown mode {mode!r}")

    payload: Dict[str, Any] = {
        "route": route,
        "yacht": yacht,
        "preferences": [p for p in (params.get("prefs") or "").split(",") if p],
        "audience": params.get("aud") or "Captain",
        "weather_aware": params.get("wx") == "1",
    }
    if params.get("date"):
        payload["start_date"] = params["date"]
    if params.get("notes"):
        payload["annotations"] = decode_notes(params["notes"])

    try:
        return ItineraryRequest.model_validate(payload)
    except ValidationError as e:
        raise ShareLinkError(f"invalid shared itinerary: {e.error_count()} problem(s)") from e
