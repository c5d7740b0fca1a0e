# path: navigoplan-api/navigoplan/api/routes/health.py

from __future__ import annotations

import time

from fastapi import APIRouter, Depends

from navigoplan.api.deps import get_catalog
from navigoplan.services.port_catalog import PortCatalog

router = APIRouter(tags=["health"])


@router.get("/health")
def health(catalog: PortCatalog = Depends(get_catalog)):
    return {"ok": True, "ts": time.time(), "ports": len(catalog)}
