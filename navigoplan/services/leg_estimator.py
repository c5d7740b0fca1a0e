# path: navigoplan-api/navigoplan/services/leg_estimator.py

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, NamedTuple, Optional

from navigoplan.models.itinerary_models import Leg, Yacht
from navigoplan.utils.geo import bearing_deg_true, haversine_nm


DEFAULT_TIME_MARGIN = 0.15
MIN_LEG_NM = 1
DEFAULT_DEPARTURE = "09:00"

SHORT_LEG_HOURS = 2.0
MEDIUM_LEG_HOURS = 4.0

# Advisory departure windows by leg length bucket.
DEFAULT_WINDOWS: Dict[str, str] = {
    "short": "10:30-11:30",
    "medium": "09:30-11:00",
    "long": "08:00-10:00",
}
REGION_WINDOWS: Dict[str, Dict[str, str]] = {
    "Cyclades": {"short": "09:30-10:30", "medium": "08:30-10:00", "long": "07:30-09:30"},
    "Ionian": {"short": "11:00-12:00", "medium": "10:00-11:30"},
    "Dodecanese": {"long": "07:30-09:30"},
    "NorthAegean": {"long": "07:30-09:30"},
    "Crete": {"medium": "08:30-10:00", "long": "07:00-09:00"},
}
# Afternoon meltemi: leave early when weather matters.
WEATHER_AWARE_WINDOWS: Dict[str, Dict[str, str]] = {
    "Cyclades": {"short": "08:00-09:00", "medium": "07:30-08:30", "long": "06:30-08:00"},
    "Dodecanese": {"long": "07:00-08:30"},
}


class Waypoint(NamedTuple):
    name: str
    lat: float
    lon: float


def round_half_up(value, places: int = 0) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def leg_bucket(hours: float) -> str:
    if hours < SHORT_LEG_HOURS:
        return "short"
    if hours < MEDIUM_LEG_HOURS:
        return "medium"
    return "long"


def suggest_window(region: Optional[str], hours: float, weather_aware: bool = False) -> str:
    bucket = leg_bucket(hours)
    if weather_aware:
        w = WEATHER_AWARE_WINDOWS.get(region or "", {}).get(bucket)
        if w:
            return w
    return REGION_WINDOWS.get(region or "", {}).get(bucket) or DEFAULT_WINDOWS[bucket]


def parse_hhmm(value: str) -> int:
    hh, mm = value.split(":")
    return int(hh) * 60 + int(mm)


def add_hours_hhmm(departure: str, hours: float) -> str:
    """Clock arithmetic: wraps past midnight, no date rollover."""
    total = (parse_hhmm(departure) + int(round_half_up(hours * 60))) % (24 * 60)
    return f"{total // 60:02d}:{total % 60:02d}"


def leg_distance_nm(origin: Waypoint, destination: Waypoint) -> int:
    nm = haversine_nm(origin.lon, origin.lat, destination.lon, destination.lat)
    return max(MIN_LEG_NM, int(round_half_up(nm)))


def estimate_leg(
    origin: Waypoint,
    destination: Waypoint,
    yacht: Yacht,
    departure: Optional[str] = None,
    region: Optional[str] = None,
    weather_aware: bool = False,
    margin: float = DEFAULT_TIME_MARGIN,
) -> Leg:
    distance = leg_distance_nm(origin, destination)

    # >= 1 NM at <= 60 kn keeps hours at 0.02 or more
    hours = round_half_up(
        Decimal(distance) / Decimal(str(yacht.cruise_speed_knots)) * (1 + Decimal(str(margin))),
        2,
    )

    if yacht.type == "Motor":
        fuel = round_half_up(hours * Decimal(str(yacht.liters_per_hour)))
        cost = round_half_up(fuel * Decimal(str(yacht.price_per_liter)))
    else:
        fuel = cost = Decimal(0)

    dep = departure or yacht.departure_time or DEFAULT_DEPARTURE
    return Leg(
        from_=origin.name,
        to=destination.name,
        distance_nm=distance,
        hours=float(hours),
        fuel_liters=int(fuel),
        cost=int(cost),
        departure=dep,
        arrival=add_hours_hhmm(dep, float(hours)),
        window=suggest_window(region, float(hours), weather_aware),
        bearing_deg_true=bearing_deg_true(origin.lon, origin.lat, destination.lon, destination.lat),
    )
