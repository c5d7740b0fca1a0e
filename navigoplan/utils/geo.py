# path: navigoplan-api/navigoplan/utils/geo.py

from __future__ import annotations

from typing import Iterable, Tuple, Dict
import math


EARTH_RADIUS_NM = 3440.065


def bbox_wgs84(points_lonlat: Iterable[Tuple[float, float]]) -> Dict[str, float]:
    pts = list(points_lonlat)
    lons = [p[0] for p in pts]
    lats = [p[1] for p in pts]
    return {
        "min_lat": min(lats),
        "min_lon": min(lons),
        "max_lat": max(lats),
        "max_lon": max(lons),
    }


def haversine_nm(a_lon: float, a_lat: float, b_lon: float, b_lat: float) -> float:
    # Spherical earth; straight-line estimate, no coastline avoidance.
    phi1 = math.radians(a_lat)
    phi2 = math.radians(b_lat)
    dphi = math.radians(b_lat - a_lat)
    dlmb = math.radians(b_lon - a_lon)

    s = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    return 2 * EARTH_RADIUS_NM * math.asin(math.sqrt(min(1.0, s)))


def bearing_deg_true(a_lon: float, a_lat: float, b_lon: float, b_lat: float) -> float:
    # Initial bearing (forward azimuth), degrees true, [0,360)
    phi1 = math.radians(a_lat)
    phi2 = math.radians(b_lat)
    dlmb = math.radians(b_lon - a_lon)

    y = math.sin(dlmb) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlmb)
    brng = math.degrees(math.atan2(y, x))
    return (brng + 360.0) % 360.0
