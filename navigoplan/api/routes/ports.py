# path: navigoplan-api/navigoplan/api/routes/ports.py

from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel

from navigoplan.api.deps import get_catalog
from navigoplan.models.port_models import PortRecord, PortResolution, RegionKey
from navigoplan.services.name_resolver import port_options, resolve
from navigoplan.services.port_catalog import PortCatalog
from navigoplan.services.regions import REGION_RINGS, auto_pick_region
from navigoplan.services.text_norm import normalize

router = APIRouter(tags=["ports"])


class RegionsResponse(BaseModel):
    rings: Dict[str, List[str]]
    auto_region: Optional[str] = None


@router.get("/ports", response_model=List[PortRecord])
def list_ports(
    response: Response,
    region: Optional[RegionKey] = None,
    q: Optional[str] = Query(default=None, max_length=80),
    catalog: PortCatalog = Depends(get_catalog),
) -> List[PortRecord]:
    ports = [p for p in catalog if region is None or p.region == region]
    key = normalize(q)
    if key:
        ports = [p for p in ports if key in normalize(p.name) or any(key in normalize(a) for a in p.aliases)]

    response.headers["x-merged-count"] = str(len(catalog))
    response.headers["x-merged-seaguide"] = str(catalog.count_by_source("seaguide"))
    return ports


@router.get("/ports/options", response_model=List[str])
def list_port_options(catalog: PortCatalog = Depends(get_catalog)) -> List[str]:
    return port_options(catalog)


@router.get("/ports/resolve", response_model=PortResolution)
def resolve_port(
    q: str = Query(min_length=1, max_length=80),
    catalog: PortCatalog = Depends(get_catalog),
) -> PortResolution:
    port = resolve(catalog, q)
    if port is None:
        raise HTTPException(status_code=404, detail=f"No port matches {q!r}; pick one from /ports/options.")
    return PortResolution(query=q, port=port, label=catalog.label_of(port))


@router.get("/regions", response_model=RegionsResponse)
def list_regions(start: Optional[str] = None, end: Optional[str] = None) -> RegionsResponse:
    auto = auto_pick_region(start, end) if (start or end) else None
    return RegionsResponse(rings=REGION_RINGS, auto_region=auto)
