# path: navigoplan-api/navigoplan/api/routes/itineraries.py

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from navigoplan.api.deps import get_catalog, get_settings
from navigoplan.core.config import Settings
from navigoplan.models.itinerary_models import (
    Itinerary,
    ItineraryRequest,
    PlanSuggestion,
    PlanSuggestionRequest,
    ShareLinkResponse,
)
from navigoplan.services.name_resolver import port_options
from navigoplan.services.planner import PlanningError, plan_itinerary
from navigoplan.services.plan_suggestions import sanitize_suggestion
from navigoplan.services.port_catalog import PortCatalog
from navigoplan.services.share_link import ShareLinkError, decode_share_query, encode_share_query

router = APIRouter(tags=["itineraries"])


def _plan(req: ItineraryRequest, catalog: PortCatalog, settings: Settings) -> Itinerary:
    try:
        return plan_itinerary(
            req,
            catalog,
            margin=settings.LEG_TIME_MARGIN,
            default_departure=settings.DEFAULT_DEPARTURE_TIME,
        )
    except PlanningError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/itineraries", response_model=Itinerary)
def create_itinerary(
    req: ItineraryRequest,
    catalog: PortCatalog = Depends(get_catalog),
    settings: Settings = Depends(get_settings),
) -> Itinerary:
    return _plan(req, catalog, settings)


@router.post("/itineraries/share", response_model=ShareLinkResponse)
def share_itinerary(req: ItineraryRequest) -> ShareLinkResponse:
    return ShareLinkResponse(query=encode_share_query(req))


@router.get("/itineraries/shared", response_model=Itinerary)
def shared_itinerary(
    request: Request,
    catalog: PortCatalog = Depends(get_catalog),
    settings: Settings = Depends(get_settings),
) -> Itinerary:
    try:
        req = decode_share_query(request.url.query)
    except ShareLinkError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _plan(req, catalog, settings)


@router.post("/plan/suggestions", response_model=PlanSuggestion)
def plan_suggestions(
    req: PlanSuggestionRequest,
    catalog: PortCatalog = Depends(get_catalog),
) -> PlanSuggestion:
    # The model answer is untrusted text; only catalog names survive.
    return sanitize_suggestion(req.text, req.mode, req.days, port_options(catalog))
