# path: navigoplan-api/navigoplan/services/planner.py

from __future__ import annotations

import logging

from navigoplan.models.itinerary_models import Itinerary, ItineraryRequest, RegionRouteRequest
from navigoplan.services.itinerary_assembler import assemble, stable_json_sha256
from navigoplan.services.leg_estimator import DEFAULT_DEPARTURE, DEFAULT_TIME_MARGIN
from navigoplan.services.name_resolver import make_resolver
from navigoplan.services.port_catalog import PortCatalog
from navigoplan.services.regions import resolve_region
from navigoplan.services.route_builder import build_custom_route, build_region_route, same_stop

log = logging.getLogger(__name__)


class PlanningError(ValueError):
    """Input the user has to correct (e.g. a port that is not in the catalog)."""


def plan_itinerary(
    req: ItineraryRequest,
    catalog: PortCatalog,
    margin: float = DEFAULT_TIME_MARGIN,
    default_departure: str = DEFAULT_DEPARTURE,
) -> Itinerary:
    resolver = make_resolver(catalog)
    route = req.route
    region = None

    if isinstance(route, RegionRouteRequest):
        end = route.end.strip() or route.start
        if resolver(route.start) is None:
            raise PlanningError(f"Unknown start port {route.start!r}; pick a valid port from the list.")
        if resolver(end) is None:
            raise PlanningError(f"Unknown end port {end!r}; pick a valid port from the list.")
        region = resolve_region(route.region, route.start, end)
        # Vias equal to start/end would only produce zero-length legs.
        vias = [
            v for v in route.vias
            if v.strip() and not same_stop(v, route.start, resolver) and not same_stop(v, end, resolver)
        ]
        stops = build_region_route(route.start, end, route.days, region, vias, resolver)
    else:
        if resolver(route.start) is None:
            raise PlanningError(f"Unknown start port {route.start!r}; pick a valid port from the list.")
        stops = build_custom_route(route.start, route.day_stops, resolver)
        if stops is None:
            raise PlanningError("Every day needs a valid destination; pick each stop from the list.")

    yacht = req.yacht
    if not yacht.departure_time:
        yacht = yacht.model_copy(update={"departure_time": default_departure})

    itinerary = assemble(
        stops,
        req.start_date,
        yacht,
        req.preferences,
        req.audience,
        resolver=resolver,
        mode=route.mode,
        region=region,
        weather_aware=req.weather_aware,
        annotations=req.annotations,
        margin=margin,
    )
    itinerary.request_hash = stable_json_sha256(req.model_dump(mode="json"))
    log.info(
        "itinerary %s: %s mode, %d days, %d NM",
        itinerary.request_hash[:19],
        route.mode,
        len(itinerary.days),
        itinerary.totals.distance_nm,
    )
    return itinerary
