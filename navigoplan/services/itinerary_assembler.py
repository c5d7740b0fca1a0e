# path: navigoplan-api/navigoplan/services/itinerary_assembler.py

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence
import hashlib
import json

from navigoplan.models.itinerary_models import (
    BBoxWGS84,
    DayAnnotation,
    DayCard,
    Itinerary,
    ItineraryTotals,
    UserNotes,
    Yacht,
)
from navigoplan.services.leg_estimator import DEFAULT_TIME_MARGIN, Waypoint, estimate_leg
from navigoplan.services.name_resolver import Resolver
from navigoplan.services.regions import REGION_ADVISORIES
from navigoplan.utils.geo import bbox_wgs84


LONG_LEG_NM = 35

PREFERENCE_NOTES = (
    ("nightlife", "Arrive late enough for dinner and the bars."),
    ("family", "Sandy beaches and shorter legs."),
    ("gastronomy", "Book a seaside taverna ahead."),
)

RISK_REGIONS = {
    "Cyclades": "afternoon meltemi exposure",
    "Dodecanese": "open-water crossings",
    "Crete": "long exposed coastline with few refuges",
}

VIP_NOTES = (
    "Concierge can arrange tender transfers and beach club reservations.",
    "Chef's lunch served on board at anchor.",
    "Sunset aperitif on deck before going ashore.",
)


def stable_json_sha256(obj) -> str:
    data = json.dumps(obj, separators=(",", ":"), sort_keys=True).encode("utf-8")
    return "sha256:" + hashlib.sha256(data).hexdigest()


def format_hours_hm(hours: float) -> str:
    h = int(hours)
    m = int(round((hours - h) * 60))
    if m == 60:
        h, m = h + 1, 0
    return f"{h}h {m}m"


def risk_advisory(region: Optional[str], distance_nm: Optional[int], weather_aware: bool) -> str:
    reasons = []
    if region in RISK_REGIONS:
        reasons.append(RISK_REGIONS[region])
    if distance_nm is not None and distance_nm >= LONG_LEG_NM:
        reasons.append(f"long passage of {distance_nm} NM, plan crew rotations")
    if weather_aware:
        reasons.append("check the latest forecast before departure")
    if not reasons:
        return ""
    return "Risk advisory: " + "; ".join(reasons) + "."


def day_notes(
    region: Optional[str],
    preferences: Iterable[str],
    audience: str,
    distance_nm: Optional[int],
    weather_aware: bool,
) -> str:
    prefs = set(preferences or [])
    parts = [REGION_ADVISORIES.get(region or "", "")]
    parts += [text for tag, text in PREFERENCE_NOTES if tag in prefs]
    if audience == "Captain":
        parts.append(risk_advisory(region, distance_nm, weather_aware))
    elif audience == "VIP":
        parts += list(VIP_NOTES)
    return " ".join(p for p in parts if p)


def merge_annotations(cards: List[DayCard], annotations: Iterable[DayAnnotation]) -> List[DayCard]:
    """Merge per-day notes by 1-based day; a field is replaced only when supplied."""
    for ann in annotations or []:
        if not 1 <= ann.day <= len(cards):
            continue
        card = cards[ann.day - 1]
        incoming = ann.model_dump(exclude={"day"}, exclude_none=True)
        if not incoming:
            continue
        current = card.user_notes or UserNotes()
        card.user_notes = current.model_copy(update=incoming)
    return cards


def compute_totals(cards: Sequence[DayCard]) -> ItineraryTotals:
    legs = [c.leg for c in cards if c.leg is not None]
    hours = round(sum(l.hours for l in legs), 2)
    return ItineraryTotals(
        distance_nm=sum(l.distance_nm for l in legs),
        hours=hours,
        time_label=format_hours_hm(hours),
        fuel_liters=sum(l.fuel_liters for l in legs),
        cost=sum(l.cost for l in legs),
    )


def assemble(
    stop_names: Sequence[str],
    start_date: date,
    yacht: Yacht,
    preferences: Iterable[str],
    audience: str,
    *,
    resolver: Resolver,
    mode: str = "Region",
    region: Optional[str] = None,
    weather_aware: bool = False,
    annotations: Iterable[DayAnnotation] = (),
    margin: float = DEFAULT_TIME_MARGIN,
) -> Itinerary:
    ports = [resolver(n) for n in stop_names]
    prefs = list(preferences or [])
    cards: List[DayCard] = []

    for i in range(len(stop_names) - 1):
        a, b = ports[i], ports[i + 1]
        leg = None
        # Same port twice (tail padding) or an unknown stop: layover day.
        if a is not None and b is not None and a.id != b.id:
            leg = estimate_leg(
                Waypoint(stop_names[i], a.lat, a.lon),
                Waypoint(stop_names[i + 1], b.lat, b.lon),
                yacht,
                departure=yacht.departure_time,
                region=region,
                weather_aware=weather_aware,
                margin=margin,
            )
        cards.append(
            DayCard(
                day=i + 1,
                date=start_date + timedelta(days=i),
                leg=leg,
                notes=day_notes(region, prefs, audience, leg.distance_nm if leg else None, weather_aware),
            )
        )

    merge_annotations(cards, annotations)

    known = [p for p in ports if p is not None]
    bbox = BBoxWGS84(**bbox_wgs84([(p.lon, p.lat) for p in known])) if known else None

    return Itinerary(
        mode=mode,
        region=region,
        audience=audience,
        stops=list(stop_names),
        days=cards,
        totals=compute_totals(cards),
        bbox_wgs84=bbox,
    )
