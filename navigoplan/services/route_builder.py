# path: navigoplan-api/navigoplan/services/route_builder.py

from __future__ import annotations

from itertools import cycle, islice
from typing import List, Optional, Sequence
import logging

from navigoplan.models.port_models import PortRecord
from navigoplan.services.name_resolver import Resolver
from navigoplan.services.regions import ring_for
from navigoplan.services.text_norm import normalize
from navigoplan.utils.geo import haversine_nm

log = logging.getLogger(__name__)


def same_stop(a: str, b: str, resolver: Resolver) -> bool:
    """Two names are the same stop if they resolve to the same port (or normalize equal)."""
    if normalize(a) == normalize(b):
        return True
    pa, pb = resolver(a), resolver(b)
    return pa is not None and pb is not None and pa.id == pb.id


def nearest_ring_index(ring: Sequence[str], target: PortRecord, resolver: Resolver) -> int:
    best, best_d = 0, float("inf")
    for i, name in enumerate(ring):
        p = resolver(name)
        if p is None:
            continue
        d = haversine_nm(target.lon, target.lat, p.lon, p.lat)
        if d < best_d:
            best, best_d = i, d
    return best


def rotate_ring(ring: Sequence[str], target: PortRecord, resolver: Resolver) -> List[str]:
    idx = nearest_ring_index(ring, target, resolver)
    return [*ring[idx:], *ring[:idx]]


def pad_route(seq: List[str], length: int, fill: str) -> List[str]:
    out = list(seq[:length])
    while len(out) < length:
        out.append(fill)
    return out


def build_region_route(
    start: str,
    end: Optional[str],
    days: int,
    region: Optional[str],
    vias: Sequence[str],
    resolver: Resolver,
) -> List[str]:
    """
    Auto-route a trip of `days` legs around the region's ring.

    Always returns exactly days + 1 names, starting at `start` and ending at `end`
    (blank end means a round trip). `days` below 1 is treated as 1, so the
    shortest route is [start, end]; request models enforce their own minimum.
    Stop choice is a heuristic, not navigation.
    """
    days = max(int(days), 1)
    end_name = end.strip() if end and end.strip() else start
    clean_vias = [v.strip() for v in (vias or []) if v and v.strip()]
    ring = ring_for(region)
    start_port = resolver(start)

    if not ring or start_port is None:
        log.debug("degenerate route for start=%r region=%r", start, region)
        seq = [start, *clean_vias][:days]
        seq.append(end_name)
        return pad_route(seq, days + 1, end_name)

    rotated = rotate_ring(ring, start_port, resolver)
    slots = days - 1
    path = [start]

    for v in clean_vias:
        if len(path) - 1 >= slots:
            break
        if resolver(v) is None or same_stop(v, path[-1], resolver):
            continue
        path.append(v)

    # Bounded walk so an unresolvable ring can never loop forever.
    for c in islice(cycle(rotated), len(rotated) * (days + 1)):
        if len(path) - 1 >= slots:
            break
        if resolver(c) is None or same_stop(c, path[-1], resolver):
            continue
        path.append(c)

    if len(path) > 1 and same_stop(path[-1], end_name, resolver):
        before = path[-2]
        alt = next(
            (
                x for x in rotated
                if resolver(x) is not None
                and not same_stop(x, end_name, resolver)
                and not same_stop(x, before, resolver)
            ),
            None,
        )
        if alt is not None:
            path[-1] = alt

    path.append(end_name)
    return pad_route(path, days + 1, end_name)


def build_custom_route(start: str, day_stops: Sequence[str], resolver: Resolver) -> Optional[List[str]]:
    """All-or-nothing: every stop (start included) must resolve, else None."""
    seq = [(s or "").strip() for s in [start, *(day_stops or [])]]
    if len(seq) < 2:
        return None
    if any(resolver(s) is None for s in seq):
        return None
    return seq
